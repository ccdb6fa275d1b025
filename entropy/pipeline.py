"""
Pure analysis pipeline: pixels and geometry in, AnalysisResult out.
"""
import logging
from typing import Optional

from core.constants import (
    DEFAULT_BLOCK_SIZE,
    DEFAULT_HIGH_ENTROPY_THRESHOLD,
    DEFAULT_MIN_PERCENTAGE,
)
from core.models import AnalysisResult, Dimensions, PixelBuffer, Point

from .aggregator import select_high_entropy
from .crop_solver import DimensionsLike, compute_crop
from .estimator import compute_entropy_grid

logger = logging.getLogger(__name__)


def run_analysis(
    buffer: PixelBuffer,
    container_size: Optional[DimensionsLike] = None,
    block_size: int = DEFAULT_BLOCK_SIZE,
    high_entropy_threshold: float = DEFAULT_HIGH_ENTROPY_THRESHOLD,
    min_percentage: float = DEFAULT_MIN_PERCENTAGE
) -> AnalysisResult:
    """
    Run estimator, aggregator and crop solver over one image.

    Args:
        buffer: Decoded image pixels
        container_size: Target container, the image size when None
        block_size: Grid block edge in pixels
        high_entropy_threshold: Fraction of blocks kept for the centroid
        min_percentage: Minimum visible percentage passed to the solver

    Returns:
        AnalysisResult. entropy_center is the geometric center of the image
        when no block carries entropy.
    """
    image_size = buffer.size
    container = Dimensions.coerce(container_size)

    blocks = compute_entropy_grid(buffer, block_size)
    top_blocks, centroid = select_high_entropy(blocks, high_entropy_threshold)

    if centroid is None:
        logger.info(
            f"No entropy in top {len(top_blocks)}/{len(blocks)} blocks, "
            f"falling back to image center"
        )
        entropy_center = Point(x=image_size.width / 2, y=image_size.height / 2)
    else:
        entropy_center = centroid

    crop = compute_crop(image_size, container, centroid, min_percentage)

    logger.debug(
        f"Analyzed {buffer.width}x{buffer.height}: {len(blocks)} blocks, "
        f"center=({entropy_center.x:.1f}, {entropy_center.y:.1f}), "
        f"position={crop.css_image.background_position}"
    )

    return AnalysisResult(
        css_image=crop.css_image,
        resized_image=crop.resized_image,
        entropy_map=top_blocks,
        entropy_center=entropy_center,
        original_size=image_size
    )

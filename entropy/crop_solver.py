"""
Cover-fit crop solver.

Given the original image size, the container size and a point of interest,
scales the image to cover the container, slides the visible window so the
point of interest is as central as possible, and reports the window both as
a CSS background-position and as a source rectangle in image pixels.

Steps:
1. scale = max(container_w / image_w, container_h / image_h)
2. offset = poi / image * scaled - container / 2, clamped to [0, scaled - container]
3. percent = offset / max_offset * 100 (50 when the axis has no freedom)
4. rectangle = offset and container mapped back through the scale

The minimum-visible percentage is validated and recorded but not enforced
beyond the cover-fit clamp.
"""
import logging
from typing import Optional, Tuple, Union

from core.constants import CENTER_PERCENT, DEFAULT_MIN_PERCENTAGE
from core.exceptions import InvalidDimensionsError
from core.models import (
    CropRect,
    CropResult,
    CssImage,
    Dimensions,
    Point,
    ResizedImage,
)
from utils.css_utils import format_background_position, round_half_up

logger = logging.getLogger(__name__)

# Offset ranges below this are float noise from an exact cover fit
_OFFSET_EPSILON = 1e-9

DimensionsLike = Union[Dimensions, dict, tuple, list]


def compute_crop(
    image_size: DimensionsLike,
    container_size: Optional[DimensionsLike],
    point_of_interest: Optional[Point],
    min_visible_percent: float = DEFAULT_MIN_PERCENTAGE
) -> CropResult:
    """
    Solve the cover-fit crop around a point of interest.

    Args:
        image_size: Original image dimensions in pixels
        container_size: Target container dimensions; the image size when None
        point_of_interest: Point in image pixels, or None to center the crop
        min_visible_percent: Minimum visible share of the image, in (0, 100]

    Returns:
        CropResult with the CSS description and the pixel-space crop

    Raises:
        InvalidDimensionsError: If any dimension is missing or not positive
    """
    image = Dimensions.coerce(image_size)
    if image is None:
        raise InvalidDimensionsError("Image dimensions are required")
    container = Dimensions.coerce(container_size) or image

    if not (0 < min_visible_percent <= 100):
        raise ValueError(
            f"min_visible_percent must be in (0, 100], got {min_visible_percent!r}"
        )

    scale = cover_scale(image, container)
    scaled_width = image.width * scale
    scaled_height = image.height * scale

    max_offset_x = _offset_range(scaled_width, container.width)
    max_offset_y = _offset_range(scaled_height, container.height)

    if point_of_interest is None:
        logger.debug("No point of interest, centering crop")
        offset_x = max_offset_x / 2
        offset_y = max_offset_y / 2
        percent_x = percent_y = CENTER_PERCENT
    else:
        offset_x = _clamp(
            (point_of_interest.x / image.width) * scaled_width - container.width / 2,
            max_offset_x
        )
        offset_y = _clamp(
            (point_of_interest.y / image.height) * scaled_height - container.height / 2,
            max_offset_y
        )
        percent_x = _offset_percent(offset_x, max_offset_x)
        percent_y = _offset_percent(offset_y, max_offset_y)

    position = _crop_rect(
        image,
        (offset_x / scaled_width) * image.width,
        (offset_y / scaled_height) * image.height,
        (container.width / scaled_width) * image.width,
        (container.height / scaled_height) * image.height
    )

    return CropResult(
        css_image=CssImage(
            background_position=format_background_position(percent_x, percent_y)
        ),
        resized_image=ResizedImage(
            width=container.width,
            height=container.height,
            position=position
        )
    )


def cover_scale(image: Dimensions, container: Dimensions) -> float:
    """Smallest scale at which the image fully covers the container."""
    return max(container.width / image.width, container.height / image.height)


def _offset_range(scaled: float, container: float) -> float:
    slack = scaled - container
    return slack if slack > _OFFSET_EPSILON else 0.0


def _clamp(offset: float, max_offset: float) -> float:
    return max(0.0, min(max_offset, offset))


def _offset_percent(offset: float, max_offset: float) -> float:
    if max_offset == 0:
        return CENTER_PERCENT
    return offset / max_offset * 100


def _crop_rect(
    image: Dimensions,
    left: float,
    top: float,
    width: float,
    height: float
) -> CropRect:
    """Round the source window to pixels and keep it inside the image."""
    image_width = int(image.width)
    image_height = int(image.height)

    rect_width, rect_left = _fit_span(round_half_up(width), round_half_up(left), image_width)
    rect_height, rect_top = _fit_span(round_half_up(height), round_half_up(top), image_height)

    return CropRect(left=rect_left, top=rect_top, width=rect_width, height=rect_height)


def _fit_span(length: int, start: int, limit: int) -> Tuple[int, int]:
    length = max(1, min(length, limit))
    start = max(0, min(start, limit - length))
    return length, start

"""
Debug overlay rendering for entropy analysis results.
"""
from typing import Sequence, Union

from PIL import Image, ImageDraw

from core.models import EntropyBlock, PixelBuffer, Point

from .image_utils import pixel_buffer_to_image

BLOCK_FILL = (255, 255, 0, 76)  # yellow, 30% opacity
CENTER_FILL = (255, 0, 0, 255)
CENTER_RADIUS = 5


def draw_entropy_overlay(
    image: Union[Image.Image, PixelBuffer],
    blocks: Sequence[EntropyBlock],
    center: Point,
    block_size: int
) -> Image.Image:
    """
    Highlight selected blocks and mark the entropy center.

    Args:
        image: Original image
        blocks: Selected high-entropy blocks
        center: Entropy center in image pixels
        block_size: Block edge length used during analysis

    Returns:
        New RGBA image with the overlay composited
    """
    if isinstance(image, PixelBuffer):
        base = pixel_buffer_to_image(image)
    else:
        base = image.convert('RGBA')

    overlay = Image.new('RGBA', base.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)

    for block in blocks:
        draw.rectangle(
            [block.x, block.y, block.x + block_size - 1, block.y + block_size - 1],
            fill=BLOCK_FILL
        )

    draw.ellipse(
        [
            center.x - CENTER_RADIUS,
            center.y - CENTER_RADIUS,
            center.x + CENTER_RADIUS,
            center.y + CENTER_RADIUS
        ],
        fill=CENTER_FILL
    )

    return Image.alpha_composite(base, overlay)

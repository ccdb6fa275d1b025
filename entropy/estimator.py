"""
Block Entropy Estimator

Tiles an image into square blocks and scores each block with the Shannon
entropy of its luminance histogram.

Details:
- Luminance: gray = round(0.299R + 0.587G + 0.114B), halves rounded up
- Histogram: 256 buckets over gray levels
- Probabilities divide by the nominal block area (block_size ** 2), so blocks
  clipped by the right/bottom edge score lower than a full block would
"""
from typing import List, Optional

import numpy as np

from core.constants import HISTOGRAM_BINS, LUMINANCE_WEIGHTS
from core.models import EntropyBlock, PixelBuffer


def luminance_plane(buffer: PixelBuffer) -> np.ndarray:
    """
    Convert an RGBA buffer to an 8-bit luminance plane.

    Args:
        buffer: Source pixels

    Returns:
        (height, width) uint8 array
    """
    pixels = buffer.as_array()
    red = pixels[..., 0].astype(np.float64)
    green = pixels[..., 1].astype(np.float64)
    blue = pixels[..., 2].astype(np.float64)

    wr, wg, wb = LUMINANCE_WEIGHTS
    gray = wr * red + wg * green + wb * blue

    return np.clip(np.floor(gray + 0.5), 0, HISTOGRAM_BINS - 1).astype(np.uint8)


def block_entropy_from_plane(
    gray: np.ndarray,
    block_x: int,
    block_y: int,
    block_size: int
) -> float:
    """
    Entropy of one block of a precomputed luminance plane.

    Pixels of the window that fall outside the plane are skipped.
    """
    window = gray[block_y:block_y + block_size, block_x:block_x + block_size]
    if window.size == 0:
        return 0.0

    counts = np.bincount(window.ravel(), minlength=HISTOGRAM_BINS)
    counts = counts[counts > 0]
    probabilities = counts / float(block_size * block_size)

    entropy = -float(np.sum(probabilities * np.log2(probabilities)))
    return entropy if entropy > 0 else 0.0


def compute_block_entropy(
    buffer: PixelBuffer,
    block_x: int,
    block_y: int,
    block_size: int,
    gray: Optional[np.ndarray] = None
) -> float:
    """
    Shannon entropy (base 2) of the block anchored at (block_x, block_y).

    Args:
        buffer: Source pixels
        block_x: Left edge of the block in pixels
        block_y: Top edge of the block in pixels
        block_size: Block edge length in pixels
        gray: Luminance plane of buffer, computed if not given

    Returns:
        Entropy in [0, MAX_ENTROPY]
    """
    validate_block_size(block_size)
    if block_x < 0 or block_y < 0:
        raise ValueError(f"Block origin must be non-negative, got ({block_x}, {block_y})")

    if gray is None:
        gray = luminance_plane(buffer)

    return block_entropy_from_plane(gray, block_x, block_y, block_size)


def compute_entropy_grid(buffer: PixelBuffer, block_size: int) -> List[EntropyBlock]:
    """
    Score every block of the grid, row-major from the top-left corner.

    Args:
        buffer: Source pixels
        block_size: Block edge length in pixels

    Returns:
        One EntropyBlock per grid cell, in scan order
    """
    validate_block_size(block_size)
    gray = luminance_plane(buffer)

    blocks = []
    for y in range(0, buffer.height, block_size):
        for x in range(0, buffer.width, block_size):
            entropy = block_entropy_from_plane(gray, x, y, block_size)
            blocks.append(EntropyBlock(x=x, y=y, entropy=entropy))

    return blocks


def validate_block_size(block_size: int) -> None:
    if not isinstance(block_size, (int, np.integer)) or isinstance(block_size, bool) or block_size <= 0:
        raise ValueError(f"block_size must be a positive integer, got {block_size!r}")

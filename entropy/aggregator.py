"""
High-entropy block selection and entropy-weighted centroid.
"""
import math
from typing import List, Optional, Sequence, Tuple

from core.models import EntropyBlock, Point


def select_high_entropy(
    blocks: Sequence[EntropyBlock],
    high_entropy_threshold: float
) -> Tuple[List[EntropyBlock], Optional[Point]]:
    """
    Keep the top fraction of blocks and locate their weighted centroid.

    Blocks are sorted by entropy, highest first; equal entropies keep scan
    order. The selection holds floor(len(blocks) * threshold) blocks.

    Args:
        blocks: Blocks in scan order
        high_entropy_threshold: Fraction in (0, 1] of blocks to keep

    Returns:
        (top_blocks, centroid). centroid is None when nothing was selected or
        the selection carries no entropy at all.
    """
    validate_threshold(high_entropy_threshold)

    ranked = sorted(blocks, key=lambda block: block.entropy, reverse=True)
    keep = int(math.floor(len(ranked) * high_entropy_threshold))
    top_blocks = ranked[:keep]

    return top_blocks, weighted_centroid(top_blocks)


def weighted_centroid(blocks: Sequence[EntropyBlock]) -> Optional[Point]:
    """Entropy-weighted mean of block origins, or None if total weight is 0."""
    total_entropy = sum(block.entropy for block in blocks)
    if total_entropy <= 0:
        return None

    center_x = sum(block.x * block.entropy for block in blocks) / total_entropy
    center_y = sum(block.y * block.entropy for block in blocks) / total_entropy

    return Point(x=center_x, y=center_y)


def validate_threshold(high_entropy_threshold: float) -> None:
    if not (0 < high_entropy_threshold <= 1):
        raise ValueError(
            f"high_entropy_threshold must be in (0, 1], got {high_entropy_threshold!r}"
        )

"""Entropy analysis package - Block entropy, centroid and cover-fit crop."""

from .estimator import (
    luminance_plane,
    compute_block_entropy,
    compute_entropy_grid,
)

from .aggregator import (
    select_high_entropy,
    weighted_centroid,
)

from .crop_solver import (
    compute_crop,
    cover_scale,
)

from .pipeline import run_analysis

__all__ = [
    # Estimator
    'luminance_plane',
    'compute_block_entropy',
    'compute_entropy_grid',

    # Aggregator
    'select_high_entropy',
    'weighted_centroid',

    # Crop solver
    'compute_crop',
    'cover_scale',

    # Pipeline
    'run_analysis',
]

"""Core package - Domain models, constants and errors."""

from .models import (
    PixelBuffer,
    Dimensions,
    Point,
    EntropyBlock,
    CropRect,
    CssImage,
    ResizedImage,
    CropResult,
    AnalysisResult
)
from .constants import (
    DEFAULT_BLOCK_SIZE,
    DEFAULT_HIGH_ENTROPY_THRESHOLD,
    DEFAULT_MIN_PERCENTAGE,
    LUMINANCE_WEIGHTS,
    HISTOGRAM_BINS,
    MAX_ENTROPY,
    FIT_MODE
)
from .exceptions import (
    EntropyCropError,
    InvalidDimensionsError,
    LoadError,
    MissingSourceError,
    PrecedenceError,
    RasterError
)

__all__ = [
    # Models
    'PixelBuffer',
    'Dimensions',
    'Point',
    'EntropyBlock',
    'CropRect',
    'CssImage',
    'ResizedImage',
    'CropResult',
    'AnalysisResult',

    # Constants
    'DEFAULT_BLOCK_SIZE',
    'DEFAULT_HIGH_ENTROPY_THRESHOLD',
    'DEFAULT_MIN_PERCENTAGE',
    'LUMINANCE_WEIGHTS',
    'HISTOGRAM_BINS',
    'MAX_ENTROPY',
    'FIT_MODE',

    # Errors
    'EntropyCropError',
    'InvalidDimensionsError',
    'LoadError',
    'MissingSourceError',
    'PrecedenceError',
    'RasterError'
]

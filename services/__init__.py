"""Services package - Analyzer orchestration, raster backends and layout probing."""

from .analyzer_service import ImageEntropyAnalyzer
from .backends import (
    LoadedImage,
    PillowBackend,
    OpenCVBackend,
    detect_backend,
    opencv_available
)
from .layout_probe import ElementHandle, StyleLayoutProbe

__all__ = [
    'ImageEntropyAnalyzer',
    'LoadedImage',
    'PillowBackend',
    'OpenCVBackend',
    'detect_backend',
    'opencv_available',
    'ElementHandle',
    'StyleLayoutProbe'
]

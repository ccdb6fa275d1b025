"""API package - Response schemas for the analysis result record."""

from .schemas import (
    AnalysisResponse,
    CssImageResponse,
    ResizedImageResponse,
    CropRectResponse,
    EntropyBlockResponse,
    PointResponse,
    DimensionsResponse
)

__all__ = [
    'AnalysisResponse',
    'CssImageResponse',
    'ResizedImageResponse',
    'CropRectResponse',
    'EntropyBlockResponse',
    'PointResponse',
    'DimensionsResponse'
]

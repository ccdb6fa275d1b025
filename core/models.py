"""
Core domain models for entropy analysis.

These are pure data structures without business logic. Every model
serializes to the camelCase shape used by the result record.
"""
import math
from dataclasses import dataclass, field
from typing import List, Optional, Union

import numpy as np

from .constants import FIT_MODE, PIXEL_CHANNELS
from .exceptions import InvalidDimensionsError


def _positive_finite(value) -> bool:
    return value is not None and math.isfinite(value) and value > 0


@dataclass(frozen=True)
class PixelBuffer:
    """RGBA pixels, row-major, top-left origin."""
    width: int
    height: int
    data: bytes = field(repr=False)

    def __post_init__(self):
        if not _positive_finite(self.width) or not _positive_finite(self.height):
            raise InvalidDimensionsError(
                f"Pixel buffer dimensions must be positive, got {self.width}x{self.height}"
            )
        expected = self.width * self.height * PIXEL_CHANNELS
        if len(self.data) != expected:
            raise ValueError(
                f"Pixel buffer holds {len(self.data)} bytes, expected {expected} "
                f"for {self.width}x{self.height} RGBA"
            )

    @property
    def size(self) -> 'Dimensions':
        return Dimensions(self.width, self.height)

    def as_array(self) -> np.ndarray:
        """Read-only (height, width, 4) uint8 view of the samples."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(
            self.height, self.width, PIXEL_CHANNELS
        )


@dataclass(frozen=True)
class Dimensions:
    """Width and height in pixels (images) or layout units (containers)."""
    width: float
    height: float

    def __post_init__(self):
        if not _positive_finite(self.width) or not _positive_finite(self.height):
            raise InvalidDimensionsError(
                f"Dimensions must be positive and finite, got {self.width}x{self.height}"
            )

    @classmethod
    def coerce(cls, value: Union['Dimensions', dict, tuple, list, None]) -> Optional['Dimensions']:
        """
        Build Dimensions from a (width, height) pair or a dict.

        Returns None when value is None.
        """
        if value is None or isinstance(value, cls):
            return value
        if isinstance(value, dict):
            try:
                return cls(value['width'], value['height'])
            except KeyError as exc:
                raise InvalidDimensionsError(f"Missing dimension key: {exc}") from exc
        if isinstance(value, (tuple, list)) and len(value) == 2:
            return cls(value[0], value[1])
        raise InvalidDimensionsError(f"Cannot interpret {value!r} as dimensions")

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {'width': self.width, 'height': self.height}


@dataclass(frozen=True)
class Point:
    """Point in original-image pixel space."""
    x: float
    y: float

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {'x': self.x, 'y': self.y}


@dataclass(frozen=True)
class EntropyBlock:
    """Top-left corner of a grid block and its luminance entropy."""
    x: int
    y: int
    entropy: float

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {'x': self.x, 'y': self.y, 'entropy': self.entropy}


@dataclass(frozen=True)
class CropRect:
    """Source sub-rectangle in original-image pixels."""
    left: int
    top: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.left + self.width

    @property
    def bottom(self) -> int:
        return self.top + self.height

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'left': self.left,
            'top': self.top,
            'width': self.width,
            'height': self.height
        }


@dataclass(frozen=True)
class CssImage:
    """CSS background description for the container."""
    background_position: str
    object_fit: str = FIT_MODE
    background_size: str = FIT_MODE

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'backgroundPosition': self.background_position,
            'objectFit': self.object_fit,
            'backgroundSize': self.background_size
        }


@dataclass(frozen=True)
class ResizedImage:
    """Destination size plus the source rectangle to extract."""
    width: float
    height: float
    position: CropRect
    fit: str = FIT_MODE

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'width': self.width,
            'height': self.height,
            'fit': self.fit,
            'position': self.position.to_dict()
        }


@dataclass(frozen=True)
class CropResult:
    """Output of the crop solver."""
    css_image: CssImage
    resized_image: ResizedImage

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'cssImage': self.css_image.to_dict(),
            'resizedImage': self.resized_image.to_dict()
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Complete result of one analyze call."""
    css_image: CssImage
    resized_image: ResizedImage
    entropy_map: List[EntropyBlock]
    entropy_center: Point
    original_size: Dimensions

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'cssImage': self.css_image.to_dict(),
            'resizedImage': self.resized_image.to_dict(),
            'entropyMap': [block.to_dict() for block in self.entropy_map],
            'entropyCenter': self.entropy_center.to_dict(),
            'originalSize': self.original_size.to_dict()
        }

"""
Unit tests for core.models module.
"""
import dataclasses
import math

import numpy as np
import pytest

from core.exceptions import InvalidDimensionsError
from core.models import (
    AnalysisResult,
    CropRect,
    CssImage,
    Dimensions,
    EntropyBlock,
    PixelBuffer,
    Point,
    ResizedImage,
)


class TestPixelBuffer:
    """Tests for PixelBuffer dataclass."""

    def test_initialization(self):
        """Test creating a buffer with matching data length."""
        buffer = PixelBuffer(width=2, height=3, data=bytes(2 * 3 * 4))

        assert buffer.width == 2
        assert buffer.height == 3
        assert buffer.size == Dimensions(2, 3)

    def test_wrong_length(self):
        """Test data length must equal width * height * 4."""
        with pytest.raises(ValueError):
            PixelBuffer(width=2, height=2, data=bytes(15))

    def test_non_positive_dimensions(self):
        """Test zero-sized buffers are rejected."""
        with pytest.raises(InvalidDimensionsError):
            PixelBuffer(width=0, height=2, data=b'')

    def test_as_array(self):
        """Test array view is (height, width, 4) in row-major order."""
        data = bytes(range(24))
        buffer = PixelBuffer(width=3, height=2, data=data)

        arr = buffer.as_array()

        assert arr.shape == (2, 3, 4)
        assert arr.dtype == np.uint8
        assert arr[1, 0].tolist() == [12, 13, 14, 15]

    def test_immutable(self):
        """Test buffers are frozen."""
        buffer = PixelBuffer(width=1, height=1, data=bytes(4))

        with pytest.raises(dataclasses.FrozenInstanceError):
            buffer.width = 2


class TestDimensions:
    """Tests for Dimensions dataclass."""

    @pytest.mark.parametrize("width, height", [(0, 1), (1, 0), (-1, 5), (5, -0.5), (None, 3)])
    def test_rejects_non_positive(self, width, height):
        """Test zero, negative or missing sizes raise InvalidDimensionsError."""
        with pytest.raises(InvalidDimensionsError):
            Dimensions(width, height)

    @pytest.mark.parametrize("width, height", [(math.nan, 1), (1, math.inf), (-math.inf, 2)])
    def test_rejects_non_finite(self, width, height):
        """Test NaN and infinite sizes raise InvalidDimensionsError."""
        with pytest.raises(InvalidDimensionsError):
            Dimensions(width, height)

    def test_invalid_dimensions_is_value_error(self):
        """Test InvalidDimensionsError can be caught as ValueError."""
        with pytest.raises(ValueError):
            Dimensions(0, 0)

    def test_coerce_tuple(self):
        assert Dimensions.coerce((800, 600)) == Dimensions(800, 600)

    def test_coerce_dict(self):
        assert Dimensions.coerce({'width': 10.5, 'height': 4}) == Dimensions(10.5, 4)

    def test_coerce_passthrough(self):
        dims = Dimensions(1, 2)
        assert Dimensions.coerce(dims) is dims
        assert Dimensions.coerce(None) is None

    def test_coerce_missing_key(self):
        with pytest.raises(InvalidDimensionsError):
            Dimensions.coerce({'width': 10})

    def test_coerce_garbage(self):
        with pytest.raises(InvalidDimensionsError):
            Dimensions.coerce("800x600")


class TestCropRect:
    """Tests for CropRect dataclass."""

    def test_edges(self):
        rect = CropRect(left=10, top=20, width=30, height=40)

        assert rect.right == 40
        assert rect.bottom == 60

    def test_to_dict(self):
        rect = CropRect(1, 2, 3, 4)

        assert rect.to_dict() == {'left': 1, 'top': 2, 'width': 3, 'height': 4}


class TestAnalysisResult:
    """Tests for AnalysisResult serialization."""

    def test_to_dict(self):
        """Test full result uses camelCase keys."""
        result = AnalysisResult(
            css_image=CssImage(background_position="25% 50%"),
            resized_image=ResizedImage(width=800, height=600, position=CropRect(0, 0, 100, 75)),
            entropy_map=[EntropyBlock(16, 32, 6.5)],
            entropy_center=Point(16.0, 32.0),
            original_size=Dimensions(100, 75)
        )

        assert result.to_dict() == {
            'cssImage': {
                'backgroundPosition': '25% 50%',
                'objectFit': 'cover',
                'backgroundSize': 'cover'
            },
            'resizedImage': {
                'width': 800,
                'height': 600,
                'fit': 'cover',
                'position': {'left': 0, 'top': 0, 'width': 100, 'height': 75}
            },
            'entropyMap': [{'x': 16, 'y': 32, 'entropy': 6.5}],
            'entropyCenter': {'x': 16.0, 'y': 32.0},
            'originalSize': {'width': 100, 'height': 75}
        }

"""
Unit tests for services.backends module.
"""
import asyncio

import numpy as np
import pytest

from core.exceptions import LoadError, RasterError
from core.models import CropRect, Dimensions
from services.backends import (
    OpenCVBackend,
    PillowBackend,
    detect_backend,
    opencv_available,
    output_pixel_size,
    validate_crop_rect,
)


def _gradient_buffer(array_buffer_factory, width=64, height=32):
    xs = np.linspace(0, 255, width, dtype=np.uint8)
    row = np.stack([xs, xs, xs], axis=1)
    return array_buffer_factory(np.repeat(row[np.newaxis, :, :], height, axis=0))


class TestValidateCropRect:
    """Tests for validate_crop_rect function."""

    def test_inside(self, buffer_factory):
        validate_crop_rect(buffer_factory(10, 10), CropRect(0, 0, 10, 10))

    @pytest.mark.parametrize("rect", [
        CropRect(-1, 0, 5, 5),
        CropRect(0, -1, 5, 5),
        CropRect(6, 0, 5, 5),
        CropRect(0, 6, 5, 5),
        CropRect(0, 0, 0, 5),
        CropRect(0, 0, 5, 0),
    ])
    def test_rejected(self, buffer_factory, rect):
        with pytest.raises(RasterError):
            validate_crop_rect(buffer_factory(10, 10), rect)


class TestOutputPixelSize:
    """Tests for output_pixel_size function."""

    def test_rounds_half_up(self):
        assert output_pixel_size(Dimensions(99.5, 20.4)) == (100, 20)

    def test_minimum_one_pixel(self):
        assert output_pixel_size(Dimensions(0.2, 0.3)) == (1, 1)


class TestPillowBackend:
    """Tests for PillowBackend class."""

    def test_load_path(self, sample_image_path):
        loaded = asyncio.run(PillowBackend().load(sample_image_path))

        assert (loaded.width, loaded.height) == (128, 128)
        assert loaded.buffer.width == 128

    def test_load_pil_image(self, detail_image, detail_buffer):
        loaded = asyncio.run(PillowBackend().load(detail_image))

        assert loaded.buffer == detail_buffer

    def test_load_buffer_passthrough(self, detail_buffer):
        loaded = asyncio.run(PillowBackend().load(detail_buffer))

        assert loaded.buffer is detail_buffer

    def test_load_failure(self, temp_dir):
        bad = temp_dir / 'bad.jpg'
        bad.write_bytes(b'garbage')

        with pytest.raises(LoadError):
            asyncio.run(PillowBackend().load(str(bad)))

    def test_extract_and_resize(self, array_buffer_factory):
        buffer = _gradient_buffer(array_buffer_factory)

        output = asyncio.run(PillowBackend().extract_and_resize(
            buffer, CropRect(32, 0, 32, 32), Dimensions(16, 8)
        ))

        assert (output.width, output.height) == (16, 8)
        # Right half of a left-to-right gradient is bright
        assert output.as_array()[..., 0].min() >= 100

    def test_extract_without_resize(self, array_buffer_factory):
        buffer = _gradient_buffer(array_buffer_factory)

        output = asyncio.run(PillowBackend().extract_and_resize(
            buffer, CropRect(0, 0, 8, 4), Dimensions(8, 4)
        ))

        assert np.array_equal(output.as_array(), buffer.as_array()[:4, :8])

    def test_rejects_bad_rect(self, buffer_factory):
        with pytest.raises(RasterError):
            asyncio.run(PillowBackend().extract_and_resize(
                buffer_factory(10, 10), CropRect(5, 5, 10, 10), Dimensions(5, 5)
            ))


class TestOpenCVBackend:
    """Tests for OpenCVBackend class."""

    @pytest.fixture(autouse=True)
    def _require_cv2(self):
        pytest.importorskip("cv2")

    def test_load_path(self, sample_image_path, detail_buffer):
        loaded = asyncio.run(OpenCVBackend().load(sample_image_path))

        assert (loaded.width, loaded.height) == (128, 128)
        assert loaded.buffer == detail_buffer

    def test_load_failure(self):
        with pytest.raises(LoadError):
            asyncio.run(OpenCVBackend().load(b'garbage'))

    def test_extract_and_resize(self, array_buffer_factory):
        buffer = _gradient_buffer(array_buffer_factory)

        output = asyncio.run(OpenCVBackend().extract_and_resize(
            buffer, CropRect(32, 0, 32, 32), Dimensions(16, 8)
        ))

        assert (output.width, output.height) == (16, 8)
        assert output.as_array()[..., 0].min() >= 100

    def test_rejects_bad_rect(self, buffer_factory):
        with pytest.raises(RasterError):
            asyncio.run(OpenCVBackend().extract_and_resize(
                buffer_factory(10, 10), CropRect(0, 0, 11, 10), Dimensions(5, 5)
            ))


class TestDetectBackend:
    """Tests for detect_backend function."""

    def test_pillow(self):
        assert detect_backend('pillow').name == 'pillow'

    def test_auto_follows_capability(self):
        expected = 'opencv' if opencv_available() else 'pillow'

        assert detect_backend('auto').name == expected

    def test_opencv_when_available(self):
        pytest.importorskip("cv2")

        assert detect_backend('OpenCV').name == 'opencv'

    def test_opencv_missing(self, monkeypatch):
        monkeypatch.setattr('services.backends.opencv_available', lambda: False)

        with pytest.raises(ValueError):
            detect_backend('opencv')
        assert detect_backend('auto').name == 'pillow'

    def test_unknown(self):
        with pytest.raises(ValueError):
            detect_backend('canvas')

    def test_timeout_forwarded(self):
        assert detect_backend('pillow', timeout=5.0).timeout == 5.0

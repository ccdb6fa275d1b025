"""
Pytest configuration and global fixtures.
"""
import sys
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.models import PixelBuffer


def make_buffer(width, height, color=(128, 128, 128, 255)) -> PixelBuffer:
    """Solid-color RGBA buffer."""
    pixels = np.empty((height, width, 4), dtype=np.uint8)
    pixels[...] = color
    return PixelBuffer(width=width, height=height, data=pixels.tobytes())


def buffer_from_array(pixels: np.ndarray) -> PixelBuffer:
    """Buffer from an (H, W, 3) or (H, W, 4) uint8 array."""
    if pixels.shape[2] == 3:
        alpha = np.full(pixels.shape[:2] + (1,), 255, dtype=np.uint8)
        pixels = np.concatenate([pixels, alpha], axis=2)
    height, width = pixels.shape[:2]
    return PixelBuffer(width=width, height=height, data=np.ascontiguousarray(pixels).tobytes())


@pytest.fixture
def temp_dir(tmp_path):
    """Provide temporary directory for test files."""
    return tmp_path


@pytest.fixture
def uniform_buffer():
    """64x64 mid-gray buffer without any detail."""
    return make_buffer(64, 64)


@pytest.fixture
def detail_pixels():
    """128x128 black image with random noise in the bottom-right quadrant."""
    rng = np.random.RandomState(0)
    pixels = np.zeros((128, 128, 3), dtype=np.uint8)
    pixels[64:, 64:] = rng.randint(0, 256, size=(64, 64, 3), dtype=np.uint8)
    return pixels


@pytest.fixture
def detail_buffer(detail_pixels):
    """PixelBuffer of detail_pixels."""
    return buffer_from_array(detail_pixels)


@pytest.fixture
def detail_image(detail_pixels):
    """PIL image of detail_pixels."""
    return Image.fromarray(detail_pixels)


@pytest.fixture
def sample_image_path(temp_dir, detail_image):
    """detail_image saved as PNG."""
    img_path = temp_dir / "detail.png"
    detail_image.save(img_path)
    return str(img_path)


@pytest.fixture
def buffer_factory():
    """Factory for solid-color buffers: buffer_factory(width, height, color)."""
    return make_buffer


@pytest.fixture
def array_buffer_factory():
    """Factory for buffers built from numpy arrays."""
    return buffer_from_array

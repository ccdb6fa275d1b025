"""
Raster backends - Pixel loading and crop materialization.

Each backend provides both halves of the capability pair:
- load(identifier): decode an image into an RGBA PixelBuffer
- extract_and_resize(buffer, crop_rect, output_dims): cut a source rectangle
  and scale it to the destination size

Two variants exist: PillowBackend (always available) and OpenCVBackend
(native cv2, used when installed). detect_backend() picks one by capability.
"""
import importlib.util
import logging
from dataclasses import dataclass
from typing import Protocol, Tuple, Union

import numpy as np
from PIL import Image

from core.constants import RASTER_BACKENDS
from core.exceptions import LoadError, RasterError
from core.models import CropRect, Dimensions, PixelBuffer
from utils.css_utils import round_half_up
from utils.image_utils import (
    ImageSource,
    decode_image,
    image_to_pixel_buffer,
    pixel_buffer_to_image,
    read_image_bytes,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedImage:
    """Decoded image as returned by a pixel source."""
    width: int
    height: int
    buffer: PixelBuffer


class RasterBackend(Protocol):
    """Pixel source and rasterizer pair."""
    name: str

    async def load(self, identifier: Union[ImageSource, PixelBuffer]) -> LoadedImage:
        ...

    async def extract_and_resize(
        self,
        buffer: PixelBuffer,
        crop_rect: CropRect,
        output_dimensions: Dimensions
    ) -> PixelBuffer:
        ...


def validate_crop_rect(buffer: PixelBuffer, crop_rect: CropRect) -> None:
    """
    Reject rectangles that are empty or leave the buffer.

    Raises:
        RasterError: If the rectangle is not fully inside the buffer
    """
    if crop_rect.width <= 0 or crop_rect.height <= 0:
        raise RasterError(f"Empty crop rectangle: {crop_rect.to_dict()}")
    if (
        crop_rect.left < 0
        or crop_rect.top < 0
        or crop_rect.right > buffer.width
        or crop_rect.bottom > buffer.height
    ):
        raise RasterError(
            f"Crop rectangle {crop_rect.to_dict()} outside "
            f"{buffer.width}x{buffer.height} image"
        )


def output_pixel_size(output_dimensions: Dimensions) -> Tuple[int, int]:
    """Destination size rounded to whole pixels, at least 1x1."""
    return (
        max(1, round_half_up(output_dimensions.width)),
        max(1, round_half_up(output_dimensions.height)),
    )


class PillowBackend:
    """In-process backend built on Pillow."""

    name = 'pillow'

    def __init__(self, timeout: float = 30.0, resample: int = Image.Resampling.LANCZOS):
        """
        Initialize Pillow backend.

        Args:
            timeout: HTTP timeout for remote images, in seconds
            resample: Pillow resampling filter for resizing
        """
        self.timeout = timeout
        self.resample = resample

    async def load(self, identifier: Union[ImageSource, PixelBuffer]) -> LoadedImage:
        if isinstance(identifier, PixelBuffer):
            buffer = identifier
        elif isinstance(identifier, Image.Image):
            buffer = image_to_pixel_buffer(identifier)
        else:
            data = await read_image_bytes(identifier, timeout=self.timeout)
            buffer = image_to_pixel_buffer(decode_image(data))

        return LoadedImage(width=buffer.width, height=buffer.height, buffer=buffer)

    async def extract_and_resize(
        self,
        buffer: PixelBuffer,
        crop_rect: CropRect,
        output_dimensions: Dimensions
    ) -> PixelBuffer:
        validate_crop_rect(buffer, crop_rect)
        size = output_pixel_size(output_dimensions)

        img = pixel_buffer_to_image(buffer)
        region = img.crop((crop_rect.left, crop_rect.top, crop_rect.right, crop_rect.bottom))
        if region.size != size:
            region = region.resize(size, self.resample)

        return image_to_pixel_buffer(region)


class OpenCVBackend:
    """Native backend built on OpenCV."""

    name = 'opencv'

    def __init__(self, timeout: float = 30.0):
        """
        Initialize OpenCV backend.

        Args:
            timeout: HTTP timeout for remote images, in seconds
        """
        import cv2

        self._cv2 = cv2
        self.timeout = timeout

    async def load(self, identifier: Union[ImageSource, PixelBuffer]) -> LoadedImage:
        cv2 = self._cv2

        if isinstance(identifier, PixelBuffer):
            buffer = identifier
        elif isinstance(identifier, Image.Image):
            buffer = image_to_pixel_buffer(identifier)
        else:
            data = await read_image_bytes(identifier, timeout=self.timeout)
            encoded = np.frombuffer(data, dtype=np.uint8)
            bgr = cv2.imdecode(encoded, cv2.IMREAD_COLOR) if encoded.size else None
            if bgr is None:
                raise LoadError("Could not decode image with OpenCV")

            rgba = cv2.cvtColor(bgr, cv2.COLOR_BGR2RGBA)
            height, width = rgba.shape[:2]
            buffer = PixelBuffer(width=width, height=height, data=rgba.tobytes())

        return LoadedImage(width=buffer.width, height=buffer.height, buffer=buffer)

    async def extract_and_resize(
        self,
        buffer: PixelBuffer,
        crop_rect: CropRect,
        output_dimensions: Dimensions
    ) -> PixelBuffer:
        cv2 = self._cv2

        validate_crop_rect(buffer, crop_rect)
        out_width, out_height = output_pixel_size(output_dimensions)

        region = buffer.as_array()[crop_rect.top:crop_rect.bottom, crop_rect.left:crop_rect.right]
        if (crop_rect.width, crop_rect.height) != (out_width, out_height):
            shrinking = out_width < crop_rect.width and out_height < crop_rect.height
            interpolation = cv2.INTER_AREA if shrinking else cv2.INTER_CUBIC
            try:
                region = cv2.resize(region, (out_width, out_height), interpolation=interpolation)
            except cv2.error as exc:
                raise RasterError(f"OpenCV resize failed: {exc}") from exc

        region = np.ascontiguousarray(region)
        return PixelBuffer(width=out_width, height=out_height, data=region.tobytes())


def opencv_available() -> bool:
    """True when the cv2 module can be imported."""
    return importlib.util.find_spec('cv2') is not None


def detect_backend(preferred: str = 'auto', timeout: float = 30.0) -> RasterBackend:
    """
    Create a raster backend.

    Args:
        preferred: 'auto', 'pillow' or 'opencv'. 'auto' uses OpenCV when it
            is installed and Pillow otherwise.
        timeout: HTTP timeout passed to the backend

    Returns:
        Backend instance

    Raises:
        ValueError: If preferred is unknown, or 'opencv' is requested but
            not installed
    """
    preferred = preferred.lower().strip()

    if preferred == 'pillow':
        return PillowBackend(timeout=timeout)
    elif preferred == 'opencv':
        if not opencv_available():
            raise ValueError("OpenCV backend requested but cv2 is not installed")
        return OpenCVBackend(timeout=timeout)
    elif preferred == 'auto':
        backend = OpenCVBackend(timeout=timeout) if opencv_available() else PillowBackend(timeout=timeout)
        logger.debug(f"Detected raster backend: {backend.name}")
        return backend
    else:
        raise ValueError(
            f"Unsupported raster backend: '{preferred}'. "
            f"Supported backends: 'auto', {', '.join(repr(name) for name in RASTER_BACKENDS)}"
        )

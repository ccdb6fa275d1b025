"""
Image utilities for entropy analysis.

Handles reading image bytes from paths and URLs, and conversion between
PIL images, pixel buffers and encoded output.
"""
import base64
import binascii
import os
from io import BytesIO
from typing import Union
from urllib.parse import unquote_to_bytes

import httpx
from PIL import Image, ImageOps

from core.constants import DEFAULT_OUTPUT_PARAMS
from core.exceptions import LoadError
from core.models import PixelBuffer

ImageSource = Union[str, bytes, os.PathLike, Image.Image]


def is_remote_url(identifier: str) -> bool:
    """True for http(s) URLs."""
    return identifier.lower().startswith(('http://', 'https://'))


def is_data_url(identifier: str) -> bool:
    """True for data: URLs."""
    return identifier.lower().startswith('data:')


def decode_data_url(data_url: str) -> bytes:
    """
    Decode the payload of a data: URL.

    Args:
        data_url: URL such as 'data:image/png;base64,iVBOR...'

    Returns:
        Raw payload bytes
    """
    header, sep, payload = data_url.partition(',')
    if not sep:
        raise LoadError("Malformed data URL: missing ','")

    if header.lower().endswith(';base64'):
        try:
            return base64.b64decode(payload, validate=False)
        except (binascii.Error, ValueError) as exc:
            raise LoadError(f"Invalid base64 payload in data URL: {exc}") from exc

    return unquote_to_bytes(payload)


async def read_image_bytes(identifier: Union[str, bytes, os.PathLike], timeout: float = 30.0) -> bytes:
    """
    Read encoded image bytes from a URL, data URL, path or raw bytes.

    Args:
        identifier: http(s) URL, data URL, filesystem path or bytes
        timeout: HTTP timeout in seconds

    Returns:
        Encoded image bytes

    Raises:
        LoadError: If the image cannot be fetched or read
    """
    if isinstance(identifier, (bytes, bytearray)):
        return bytes(identifier)

    identifier = os.fspath(identifier)

    if is_data_url(identifier):
        return decode_data_url(identifier)

    if is_remote_url(identifier):
        try:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
                response = await client.get(identifier)
                response.raise_for_status()
                return response.content
        except httpx.HTTPError as exc:
            raise LoadError(f"Could not fetch image {identifier}: {exc}") from exc

    try:
        with open(identifier, 'rb') as f:
            return f.read()
    except OSError as exc:
        raise LoadError(f"Could not read image {identifier}: {exc}") from exc


def decode_image(data: bytes) -> Image.Image:
    """
    Decode image bytes to a PIL Image with EXIF orientation applied.

    Raises:
        LoadError: If the bytes are not a decodable image
    """
    try:
        img = Image.open(BytesIO(data))
        img.load()
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError) as exc:
        raise LoadError(f"Could not decode image: {exc}") from exc

    return ImageOps.exif_transpose(img)


def image_to_pixel_buffer(img: Image.Image) -> PixelBuffer:
    """
    Convert a PIL Image to an RGBA PixelBuffer.

    Args:
        img: Image in any mode

    Returns:
        PixelBuffer with the image's width and height
    """
    if img.mode != 'RGBA':
        img = img.convert('RGBA')
    width, height = img.size
    return PixelBuffer(width=width, height=height, data=img.tobytes())


def pixel_buffer_to_image(buffer: PixelBuffer) -> Image.Image:
    """Wrap a PixelBuffer as an RGBA PIL Image."""
    return Image.frombytes('RGBA', (buffer.width, buffer.height), buffer.data)


def encode_pixel_buffer(
    buffer: PixelBuffer,
    image_format: str = DEFAULT_OUTPUT_PARAMS['format'],
    quality: int = DEFAULT_OUTPUT_PARAMS['quality']
) -> bytes:
    """
    Encode a PixelBuffer to image file bytes.

    Formats without alpha (JPEG) are flattened to RGB first.
    """
    img = pixel_buffer_to_image(buffer)
    image_format = image_format.upper()
    if image_format in ('JPEG', 'JPG'):
        image_format = 'JPEG'
        img = img.convert('RGB')

    buf = BytesIO()
    if image_format == 'JPEG':
        img.save(buf, format=image_format, quality=quality)
    else:
        img.save(buf, format=image_format)
    return buf.getvalue()


def pixel_buffer_to_data_url(
    buffer: PixelBuffer,
    image_format: str = DEFAULT_OUTPUT_PARAMS['format'],
    quality: int = DEFAULT_OUTPUT_PARAMS['quality']
) -> str:
    """
    Encode a PixelBuffer as a data: URL.

    Args:
        buffer: Pixels to encode
        image_format: PIL format name (default JPEG)
        quality: JPEG quality

    Returns:
        'data:image/<format>;base64,...'
    """
    data = encode_pixel_buffer(buffer, image_format, quality)
    subtype = 'jpeg' if image_format.upper() in ('JPEG', 'JPG') else image_format.lower()
    return f"data:image/{subtype};base64,{base64.b64encode(data).decode()}"


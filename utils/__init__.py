"""Utilities package - Helpers for image I/O, CSS parsing and debug overlays."""

from .image_utils import (
    read_image_bytes,
    decode_image,
    image_to_pixel_buffer,
    pixel_buffer_to_image,
    encode_pixel_buffer,
    pixel_buffer_to_data_url
)

from .css_utils import (
    extract_image_url,
    parse_inline_style,
    parse_css_length,
    round_half_up,
    format_js_number,
    format_background_position
)

from .overlay import draw_entropy_overlay

from .logging_config import setup_logging

__all__ = [
    # Image utils
    'read_image_bytes',
    'decode_image',
    'image_to_pixel_buffer',
    'pixel_buffer_to_image',
    'encode_pixel_buffer',
    'pixel_buffer_to_data_url',

    # CSS utils
    'extract_image_url',
    'parse_inline_style',
    'parse_css_length',
    'round_half_up',
    'format_js_number',
    'format_background_position',

    # Overlay
    'draw_entropy_overlay',

    # Logging
    'setup_logging'
]

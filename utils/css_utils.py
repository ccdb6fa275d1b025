"""
CSS helpers for the layout probe and result formatting.

Handles url(...) extraction, inline style parsing and browser-compatible
number formatting.
"""
import math
import re
from decimal import Decimal
from typing import Dict, Optional

from core.constants import CSS_URL_PATTERN

_LEADING_NUMBER = re.compile(r'^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)')


def extract_image_url(css_value: Optional[str]) -> Optional[str]:
    """
    Extract the first URL from a CSS background-image value.

    Args:
        css_value: Value such as 'url("a.jpg")', "url('a.jpg')" or 'url(a.jpg)'

    Returns:
        The URL, or None when the value holds no url(...)
    """
    if not css_value:
        return None

    match = re.search(CSS_URL_PATTERN, css_value)
    if not match:
        return None

    url = match.group(1)
    if not url or url == 'none':
        return None
    return url


def parse_inline_style(style: Optional[str]) -> Dict[str, str]:
    """
    Parse a style attribute into a property dict.

    Property names are lower-cased; the last declaration wins.
    """
    declarations = {}
    if not style:
        return declarations

    # Split on ';' outside of url(...) so data URLs survive
    for chunk in re.split(r';(?![^(]*\))', style):
        if ':' not in chunk:
            continue
        name, value = chunk.split(':', 1)
        name = name.strip().lower()
        if name:
            declarations[name] = value.strip()

    return declarations


def parse_css_length(value: Optional[str]) -> float:
    """Leading numeric part of a CSS length ('12.5px' -> 12.5); 0.0 if absent."""
    if value is None:
        return 0.0
    match = _LEADING_NUMBER.match(str(value))
    if not match:
        return 0.0
    return float(match.group(1))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity (Math.round)."""
    return int(math.floor(value + 0.5))


def format_js_number(value: float) -> str:
    """
    Format a number the way a browser stringifies it.

    Integral values drop the fractional part ('50', not '50.0'); other values
    use the shortest round-trip digits, in fixed notation for exponents in
    [-7, 21) and in 'e' notation otherwise.
    """
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    if value == 0:
        return '0'
    if float(value).is_integer() and abs(value) < 1e21:
        return str(int(value))

    text = repr(float(value))
    if 'e' not in text:
        return text

    mantissa, exponent = text.split('e')
    exponent = int(exponent)
    if -7 < exponent < 21:
        return format(Decimal(text), 'f')
    sign = '+' if exponent > 0 else '-'
    return f"{mantissa}e{sign}{abs(exponent)}"


def format_background_position(percent_x: float, percent_y: float) -> str:
    """CSS background-position from two percentages."""
    return f"{format_js_number(percent_x)}% {format_js_number(percent_y)}%"

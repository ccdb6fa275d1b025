"""
Layout probe - Resolves image source and container box for page elements.

Elements are described by ElementHandle: tag name, attributes, inline and
computed styles, and the bounding rectangle reported by the layout engine.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from core.constants import HORIZONTAL_BOX_PROPERTIES, VERTICAL_BOX_PROPERTIES
from core.models import Dimensions
from utils.css_utils import extract_image_url, parse_css_length, parse_inline_style

logger = logging.getLogger(__name__)


@dataclass
class ElementHandle:
    """Snapshot of a page element as seen by the layout engine."""
    tag_name: str
    width: Optional[float] = None
    height: Optional[float] = None
    src: Optional[str] = None
    style: Union[str, Dict[str, str], None] = None
    computed_style: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if isinstance(self.style, str) or self.style is None:
            self.style = parse_inline_style(self.style)
        else:
            self.style = {name.lower(): value for name, value in self.style.items()}
        self.computed_style = {
            name.lower(): value for name, value in self.computed_style.items()
        }

    @property
    def is_img(self) -> bool:
        return self.tag_name.lower() == 'img'


class StyleLayoutProbe:
    """Layout probe that reads ElementHandle snapshots."""

    def resolve_image_identifier(self, element: ElementHandle) -> Optional[str]:
        """
        Find the image an element displays.

        Order: computed background-image, then the src of an <img>, then the
        inline background-image.

        Returns:
            Image URL, or None when the element shows no image
        """
        url = extract_image_url(element.computed_style.get('background-image'))
        if url:
            return url

        if element.is_img and element.src:
            return element.src

        return extract_image_url(element.style.get('background-image'))

    def resolve_container_dimensions(self, element: ElementHandle) -> Optional[Dimensions]:
        """
        Container size of an element.

        Content-box elements report their bounding rectangle minus padding
        and border; other box-sizing values use the rectangle as is.

        Returns:
            Dimensions, or None when the element has no bounding rectangle
        """
        if element.width is None or element.height is None:
            return None

        width = float(element.width)
        height = float(element.height)

        box_sizing = element.computed_style.get('box-sizing', 'content-box').strip().lower()
        if box_sizing == 'content-box':
            width -= sum(
                parse_css_length(element.computed_style.get(name))
                for name in HORIZONTAL_BOX_PROPERTIES
            )
            height -= sum(
                parse_css_length(element.computed_style.get(name))
                for name in VERTICAL_BOX_PROPERTIES
            )

        logger.debug(f"Resolved <{element.tag_name}> container {width}x{height} ({box_sizing})")
        return Dimensions(width, height)

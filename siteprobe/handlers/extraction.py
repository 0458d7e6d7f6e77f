"""
Content extraction from recipe, menu and product cards.
"""

import logging
from typing import Dict, Iterable, Optional, Tuple

from ..config import Cascades, SiteConfig
from ..core.strategies import SelectorCascade
from ..models import ExtractedItem, now_stamp
from .locator import ElementLocator


def category_for(
    location: str,
    keywords: Iterable[Tuple[str, str]] = SiteConfig.CATEGORY_KEYWORDS,
    default: str = SiteConfig.DEFAULT_CATEGORY,
) -> str:
    """Category label of the first keyword contained in ``location``."""
    for keyword, label in keywords:
        if keyword in location:
            return label
    return default


class ContentExtractor:
    """Builds an ExtractedItem from one content element, field by field."""

    def __init__(
        self,
        locator: ElementLocator,
        field_cascades: Dict[str, SelectorCascade] = Cascades.FIELDS,
        link_cascade: SelectorCascade = Cascades.LINK,
        image_cascade: SelectorCascade = Cascades.IMAGE,
    ):
        self.locator = locator
        self.field_cascades = field_cascades
        self.link_cascade = link_cascade
        self.image_cascade = image_cascade
        self.logger = logging.getLogger(self.__class__.__name__)

    def extract(self, element, source_location: str, scraped_at: Optional[str] = None) -> ExtractedItem:
        """
        Read every semantic field under ``element``.

        Unresolved fields are empty strings; the caller decides with
        ``item.is_meaningful`` whether the item is kept.
        """
        values = {
            name: self.locator.extract_text(cascade, scope=element)
            for name, cascade in self.field_cascades.items()
        }
        return ExtractedItem(
            **values,
            category=category_for(source_location),
            url=self.locator.extract_attribute(self.link_cascade, "href", scope=element),
            image_url=self.locator.extract_attribute(self.image_cascade, "src", scope=element),
            source_location=source_location,
            scraped_at=scraped_at or now_stamp(),
        )

"""Cover image lookup for pages whose recipe data carries no image."""
from __future__ import annotations

import logging

from .document import ParsedDocument
from .text_utils import image_source

_LOGGER = logging.getLogger(__name__)

META_IMAGE_SELECTORS = (
    'meta[property="og:image"], meta[name="og:image"]',
    'meta[name="twitter:image"], meta[property="twitter:image"]',
)


def resolve_image(document: ParsedDocument) -> str | None:
    """Find a representative image for the whole page.

    Tries the Open Graph image, then the Twitter card image, then the first
    img element of the page.

    Args:
        document: The parsed HTML document

    Returns:
        The image URL, or None if the page has no image
    """
    for selector in META_IMAGE_SELECTORS:
        meta = document.select_one(selector)
        if meta is not None and meta.get("content"):
            _LOGGER.debug("Using image from %s", selector)
            return meta.get("content")

    return image_source(document.select_one("img"))

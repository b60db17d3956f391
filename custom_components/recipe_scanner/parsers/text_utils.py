"""Text helpers shared by the recipe parsers."""
from __future__ import annotations

import logging
import warnings
from collections.abc import Iterable

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning

from .document import Element

_LOGGER = logging.getLogger(__name__)


def normalize_text(value: str) -> str:
    """Decode HTML entities and drop markup from a JSON-LD string value.

    The value is parsed as a standalone HTML fragment and its text content is
    returned, so "Mac &amp; Cheese" becomes "Mac & Cheese". Decoding is best
    effort: on any parser failure the original value is returned.
    """
    if not value:
        return value

    try:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
            return BeautifulSoup(value, features="html.parser").get_text()
    except Exception as e:
        _LOGGER.debug("Could not decode text %r: %s", value[:50], e)
        return value


def clean_lines(values: Iterable[str]) -> list[str]:
    """Trim each value and drop the empty ones, keeping order."""
    lines = []
    for value in values:
        line = value.strip()
        if line:
            lines.append(line)
    return lines


def element_lines(elements: Iterable[Element]) -> list[str]:
    """Return the trimmed, non-empty text of each element."""
    return clean_lines(element.get_text() for element in elements)


def first_text(element: Element | None) -> str:
    """Return the trimmed text of an element, or an empty string."""
    if element is None:
        return ""
    return element.get_text().strip()


def image_source(element: Element | None) -> str | None:
    """Return the src of an img element, falling back to data-src."""
    if element is None:
        return None
    return element.get("src") or element.get("data-src") or None

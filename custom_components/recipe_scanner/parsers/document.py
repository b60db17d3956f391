"""
Parsed document interface.

The extraction engine only needs a small read-only query surface from the
parsed HTML tree. It is described here as protocols matching the subset of
the BeautifulSoup API that the parsers use, so any tree offering the same
calls (including test doubles) can be injected in place of BeautifulSoup.
"""
from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, Protocol

from bs4 import BeautifulSoup


class Element(Protocol):
    """A node of the parsed document."""

    def get_text(self) -> str:
        """Return the text content of the node and its descendants."""

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value of an attribute, or default if missing."""


class ParsedDocument(Protocol):
    """A queryable, read-only HTML document."""

    def select_one(self, selector: str) -> Element | None:
        """Return the first element matching a CSS selector."""

    def select(self, selector: str) -> Sequence[Element]:
        """Return all elements matching a CSS selector, in document order.

        Comma-joined selectors return the union of all matches.
        """


HtmlParser = Callable[[str], ParsedDocument]


def parse_html(html: str) -> ParsedDocument:
    """Parse HTML text with BeautifulSoup and the stdlib parser backend.

    Parsing never runs embedded scripts or fetches linked resources.
    """
    return BeautifulSoup(html, features="html.parser")

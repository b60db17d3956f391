"""
Base Recipe Parser.

This module defines the base interface that all recipe parsers must implement.
Parsers are evaluated in order by the extraction engine, the first one to
return a non-empty recipe wins.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from ..models.recipe import Recipe
from .document import ParsedDocument


class BaseRecipeParser(ABC):
    """Abstract base class for recipe parsers.

    All recipe parsers must implement the parse_document method to build a
    Recipe from an already parsed HTML document.

    Attributes:
        name: Extraction method reported for recipes produced by this parser
        sets_image: True if the parser resolves the cover image itself, so the
            generic image lookup is skipped for its results
        last_resort: True if the parser's result is returned, even when
            empty, once every parser has been tried
    """

    name: str = ""
    sets_image: bool = False
    last_resort: bool = False

    @abstractmethod
    def parse_document(self, document: ParsedDocument) -> Recipe | None:
        """Parse recipe information from a document.

        Args:
            document: The parsed HTML document, must not be modified

        Returns:
            A Recipe object (possibly empty), or None if the parser found
            nothing it could use
        """
        pass

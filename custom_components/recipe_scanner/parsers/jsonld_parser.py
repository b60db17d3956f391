"""
JSON-LD Recipe Parser.

This module handles parsing of structured recipe data embedded in
application/ld+json script blocks following the Schema.org Recipe format.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from typing import Any

from ..const import METHOD_JSONLD
from ..models.jsonld import JsonLdRecipe
from ..models.recipe import Recipe
from .base_parser import BaseRecipeParser
from .document import ParsedDocument
from .text_utils import clean_lines, normalize_text

_LOGGER = logging.getLogger(__name__)

JSONLD_SELECTOR = 'script[type="application/ld+json"]'


def is_recipe(item: Any) -> bool:
    """Check if a JSON-LD item represents a Recipe."""
    if not isinstance(item, dict):
        return False
    item_type = item.get('@type')
    if isinstance(item_type, str):
        return item_type == 'Recipe'
    elif isinstance(item_type, list):
        return 'Recipe' in item_type
    return False


def _candidates(value: Any) -> Iterator[Any]:
    """Flatten a decoded JSON-LD value into candidate objects.

    Arrays yield their members, objects yield themselves followed by the
    members of their @graph, if any.
    """
    if isinstance(value, list):
        for item in value:
            yield from _candidates(item)
    elif isinstance(value, dict):
        yield value
        graph = value.get('@graph')
        if isinstance(graph, list):
            yield from _candidates(graph)


class JSONLDRecipeParser(BaseRecipeParser):
    """Parses recipe data from embedded JSON-LD blocks.

    This is the highest fidelity source, no guessing from page markup is
    needed when a Schema.org Recipe object is present.
    """

    name = METHOD_JSONLD

    def find_recipe_data(self, document: ParsedDocument) -> dict[str, Any] | None:
        """Return the first Recipe object found in the document's JSON-LD.

        Blocks that fail to decode are skipped so a malformed block cannot
        hide a valid one elsewhere in the page.
        """
        json_lds = document.select(JSONLD_SELECTOR)
        _LOGGER.debug("Found %d JSON-LD scripts", len(json_lds))

        for idx, json_ld in enumerate(json_lds):
            text = json_ld.get_text()
            if not text or not text.strip():
                continue

            try:
                parsed_data = json.loads(text)
            except (ValueError, RecursionError, TypeError) as e:
                _LOGGER.debug("Failed to parse JSON-LD script %d: %s", idx, e)
                continue

            data = next(
                (item for item in _candidates(parsed_data) if is_recipe(item)), None)
            if data is not None:
                _LOGGER.debug("Found recipe data in JSON-LD script %d", idx)
                return data

        return None

    def parse_document(self, document: ParsedDocument) -> Recipe | None:
        """Build a Recipe from the first JSON-LD Recipe object.

        Args:
            document: The parsed HTML document

        Returns:
            Recipe object, or None if the page has no JSON-LD recipe
        """
        data = self.find_recipe_data(document)
        if data is None:
            return None

        ld = JsonLdRecipe.model_validate(data)

        return Recipe(
            title=normalize_text(ld.title).strip(),
            ingredients=clean_lines(
                normalize_text(line) for line in ld.ingredient_lines),
            directions=clean_lines(
                normalize_text(line) for line in ld.instruction_lines),
            image=ld.image_url,
        )

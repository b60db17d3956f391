"""
Microdata Recipe Parser.

Reads recipes marked up with itemprop attributes or the class names most
recipe themes use (recipe-title, ingredients, instructions, ...).
"""
from __future__ import annotations

import logging

from ..const import METHOD_MICRODATA
from ..models.recipe import Recipe
from .base_parser import BaseRecipeParser
from .document import Element, ParsedDocument
from .text_utils import element_lines, first_text

_LOGGER = logging.getLogger(__name__)

# Tried one by one, first match wins
TITLE_SELECTORS = (
    '[itemprop="name"]',
    '.recipe-title',
    '.entry-title',
    'h1',
)

# Evaluated as a single union, in document order
INGREDIENT_SELECTOR = (
    '[itemprop="recipeIngredient"], .ingredient, .ingredients li, .ingredients p'
)
DIRECTION_SELECTOR = (
    '[itemprop="recipeInstructions"], .instructions li, .directions li, '
    '.instructions p, .steps li'
)


def select_first(document: ParsedDocument, selectors: tuple[str, ...]) -> Element | None:
    """Return the first element matching any selector, in selector order."""
    for selector in selectors:
        element = document.select_one(selector)
        if element is not None:
            return element
    return None


class MicrodataRecipeParser(BaseRecipeParser):
    """Parses recipe data from microdata and common recipe class names.

    Always returns a Recipe, which may be empty. When every parser comes up
    empty this parser's result is what the engine returns.
    """

    name = METHOD_MICRODATA
    last_resort = True

    def parse_document(self, document: ParsedDocument) -> Recipe:
        """Build a Recipe from semantic markup.

        Args:
            document: The parsed HTML document

        Returns:
            Recipe object, empty if nothing matched
        """
        title = first_text(select_first(document, TITLE_SELECTORS))
        ingredients = element_lines(document.select(INGREDIENT_SELECTOR))
        directions = element_lines(document.select(DIRECTION_SELECTOR))

        _LOGGER.debug(
            "Microdata markup: title=%r, %d ingredients, %d directions",
            title, len(ingredients), len(directions))

        return Recipe(title=title, ingredients=ingredients, directions=directions)

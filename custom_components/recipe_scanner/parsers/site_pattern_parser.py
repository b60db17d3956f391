"""
Site Pattern Recipe Parser.

A second set of class names used by large publishing platforms
(entry-header__title, ingredients__item, recipe-directions__step, ...).
It runs only after the microdata parser found nothing and, unlike the other
parsers, picks its cover image from the recipe's own media container.
"""
from __future__ import annotations

import logging

from ..const import METHOD_SITE_PATTERN
from ..models.recipe import Recipe
from .base_parser import BaseRecipeParser
from .document import ParsedDocument
from .microdata_parser import select_first
from .text_utils import element_lines, first_text, image_source

_LOGGER = logging.getLogger(__name__)

TITLE_SELECTORS = (
    '.entry-header__title',
    '.heading__title',
    'h1',
)
INGREDIENT_SELECTOR = '.ingredient, .recipe-ingredients li, .ingredients__item'
DIRECTION_SELECTOR = '.direction, .instructions__item, .recipe-directions__step'

# Media containers in priority order
IMAGE_SELECTORS = (
    '.featured-image img',
    '.lead-media img',
    'figure img',
    '.post-media img',
    '.photo img',
    '.recipe-media img',
)


class SitePatternRecipeParser(BaseRecipeParser):
    """Parses recipe data from publishing platform class names."""

    name = METHOD_SITE_PATTERN
    sets_image = True

    def parse_document(self, document: ParsedDocument) -> Recipe | None:
        """Build a Recipe, with its cover image, from platform markup.

        Args:
            document: The parsed HTML document

        Returns:
            Recipe object, or None if nothing matched
        """
        recipe = Recipe(
            title=first_text(select_first(document, TITLE_SELECTORS)),
            ingredients=element_lines(document.select(INGREDIENT_SELECTOR)),
            directions=element_lines(document.select(DIRECTION_SELECTOR)),
        )
        if recipe.is_empty:
            _LOGGER.debug("No publishing platform markup found")
            return None

        recipe.image = image_source(select_first(document, IMAGE_SELECTORS))
        return recipe

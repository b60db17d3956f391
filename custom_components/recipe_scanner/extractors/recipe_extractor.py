"""
Recipe extraction engine.

This module turns raw HTML text into a Recipe by running an ordered chain of
recipe parsers over the parsed document. The first parser to return a
non-empty recipe wins; when every parser comes up empty the last-resort
parser's (empty) recipe is returned.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence

from ..exceptions import ExtractionError, InputError, ParseError
from ..models.recipe import Recipe
from ..parsers.base_parser import BaseRecipeParser
from ..parsers.document import HtmlParser, ParsedDocument, parse_html
from ..parsers.image_resolver import resolve_image
from ..parsers.jsonld_parser import JSONLDRecipeParser
from ..parsers.microdata_parser import MicrodataRecipeParser
from ..parsers.site_pattern_parser import SitePatternRecipeParser

_LOGGER = logging.getLogger(__name__)


def default_parsers() -> list[BaseRecipeParser]:
    """Return the parser chain in evaluation order."""
    return [
        JSONLDRecipeParser(),
        MicrodataRecipeParser(),
        SitePatternRecipeParser(),
    ]


class RecipeExtractor:
    """Extracts structured recipe data from HTML documents."""

    def __init__(
        self,
        html_parser: HtmlParser = parse_html,
        parsers: Sequence[BaseRecipeParser] | None = None,
    ) -> None:
        """Initialize the recipe extractor.

        Args:
            html_parser: Callable turning HTML text into a queryable document
            parsers: Recipe parsers in evaluation order, defaults to
                JSON-LD, microdata, then site patterns
        """
        self.html_parser = html_parser
        self.parsers = list(parsers) if parsers is not None else default_parsers()
        _LOGGER.debug("Initialized RecipeExtractor with parsers %s",
                      [parser.name for parser in self.parsers])

    def extract(self, html: str) -> Recipe:
        """Extract a recipe from HTML text.

        Args:
            html: The complete HTML markup of the page

        Returns:
            The extracted Recipe, empty if the page holds no recipe markup

        Raises:
            ExtractionError: If the input is not a string or extraction fails
        """
        recipe, _ = self.extract_with_method(html)
        return recipe

    def extract_with_method(self, html: str) -> tuple[Recipe, str]:
        """Extract a recipe and report which parser produced it.

        Returns:
            Tuple of the Recipe and the name of the parser it came from

        Raises:
            ExtractionError: If the input is not a string or extraction fails
        """
        if not isinstance(html, str):
            raise InputError(
                f"Expected HTML text, got {type(html).__name__}")

        try:
            document = self.html_parser(html)
            return self._run_parsers(document)
        except ExtractionError:
            raise
        except Exception as e:
            _LOGGER.debug("Extraction failed: %s", e, exc_info=True)
            raise ParseError(str(e) or type(e).__name__) from e

    def _run_parsers(self, document: ParsedDocument) -> tuple[Recipe, str]:
        """Run the parser chain over a document."""
        fallback: tuple[Recipe, BaseRecipeParser] | None = None

        for parser in self.parsers:
            recipe = parser.parse_document(document)
            if recipe is None:
                _LOGGER.debug("Parser %s found nothing", parser.name)
                continue

            if not recipe.is_empty:
                _LOGGER.info(
                    "Extracted recipe '%s' with %d ingredients and %d directions using %s",
                    recipe.title, len(recipe.ingredients),
                    len(recipe.directions), parser.name)
                if not parser.sets_image:
                    recipe = self._with_image(recipe, document)
                return recipe, parser.name

            _LOGGER.debug("Parser %s returned an empty recipe", parser.name)
            if parser.last_resort and fallback is None:
                fallback = (recipe, parser)

        _LOGGER.info("No recipe markup found in document")
        if fallback is None:
            return self._with_image(Recipe(), document), ""

        recipe, parser = fallback
        return self._with_image(recipe, document), parser.name

    @staticmethod
    def _with_image(recipe: Recipe, document: ParsedDocument) -> Recipe:
        """Fill in the cover image from the page if the recipe has none."""
        if recipe.image:
            return recipe
        return recipe.model_copy(update={"image": resolve_image(document)})


def extract_recipe_from_html(html: str, html_parser: HtmlParser = parse_html) -> Recipe:
    """Extract a recipe from HTML text with the default parser chain.

    Raises:
        ExtractionError: If the input is not a string or extraction fails
    """
    return RecipeExtractor(html_parser=html_parser).extract(html)

from __future__ import annotations

import unittest
from unittest import mock

from custom_components.recipe_scanner.exceptions import ExtractionError, InputError, ParseError
from custom_components.recipe_scanner.extractors.recipe_extractor import (
    RecipeExtractor,
    extract_recipe_from_html,
)
from custom_components.recipe_scanner.models.recipe import Recipe
from custom_components.recipe_scanner.parsers.base_parser import BaseRecipeParser
from custom_components.recipe_scanner.parsers.site_pattern_parser import SitePatternRecipeParser

SCENARIO_A = (
    '<html><head><script type="application/ld+json">{"@type":"Recipe","name":"Pasta",'
    '"recipeIngredient":["Flour","Water"],"recipeInstructions":"Mix and boil."}</script>'
    '<meta property="og:image" content="https://example.com/og.jpg"></head>'
    '<body><h1>Ignored heading</h1><img src="https://example.com/inline.jpg"></body></html>'
)

SCENARIO_B = (
    '<html><body><h1>Soup</h1>'
    '<ul><li class="ingredient">Water</li><li class="ingredient">Salt</li></ul>'
    '<img src="https://example.com/soup.jpg"></body></html>'
)

SCENARIO_C = (
    '<html><head><meta property="og:image" content="https://example.com/og.jpg"></head><body>'
    '<div class="entry-header__title">Stew</div>'
    '<ul><li class="recipe-ingredients">Salt</li></ul>'
    '<div class="featured-image"><img src="https://example.com/stew.jpg"></div>'
    '</body></html>'
)


class FakeElement:
    def __init__(self, text: str = "", **attrs: str) -> None:
        self.text = text
        self.attrs = attrs

    def get_text(self) -> str:
        return self.text

    def get(self, key, default=None):
        return self.attrs.get(key, default)


class FakeDocument:
    def __init__(self, first=None, every=None) -> None:
        self.first = first or {}
        self.every = every or {}

    def select_one(self, selector):
        return self.first.get(selector)

    def select(self, selector):
        return self.every.get(selector, [])


class ExplodingParser(BaseRecipeParser):
    name = "exploding"

    def parse_document(self, document):
        raise KeyError("missing field")


class RecipeExtractorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.extractor = RecipeExtractor()

    def test_scenario_a_json_ld_with_generic_image(self) -> None:
        recipe, method = self.extractor.extract_with_method(SCENARIO_A)
        self.assertEqual(method, "json-ld")
        self.assertEqual(recipe, Recipe(
            title="Pasta",
            ingredients=["Flour", "Water"],
            directions=["Mix and boil."],
            image="https://example.com/og.jpg",
        ))

    def test_json_ld_image_is_kept(self) -> None:
        html = SCENARIO_A.replace('"name":"Pasta"', '"name":"Pasta","image":"https://example.com/ld.jpg"')
        self.assertEqual(self.extractor.extract(html).image, "https://example.com/ld.jpg")

    def test_scenario_b_semantic_markup(self) -> None:
        recipe, method = self.extractor.extract_with_method(SCENARIO_B)
        self.assertEqual(method, "microdata")
        self.assertEqual(recipe.title, "Soup")
        self.assertEqual(recipe.ingredients, ["Water", "Salt"])
        self.assertEqual(recipe.directions, [])
        self.assertEqual(recipe.image, "https://example.com/soup.jpg")

    def test_scenario_c_site_pattern_skips_generic_image(self) -> None:
        recipe, method = self.extractor.extract_with_method(SCENARIO_C)
        self.assertEqual(method, "site-pattern")
        self.assertEqual(recipe.title, "Stew")
        self.assertEqual(recipe.image, "https://example.com/stew.jpg")

    def test_site_pattern_not_run_when_semantic_matches(self) -> None:
        with mock.patch.object(SitePatternRecipeParser, "parse_document") as site_pattern:
            self.extractor.extract(SCENARIO_B)
        site_pattern.assert_not_called()

    def test_scenario_d_blank_input_gives_empty_recipe(self) -> None:
        for html in ("", "   \n\t"):
            with self.subTest(html=html):
                recipe, method = self.extractor.extract_with_method(html)
                self.assertTrue(recipe.is_empty)
                self.assertEqual(recipe, Recipe())
                self.assertEqual(method, "microdata")

    def test_nothing_found_still_resolves_image(self) -> None:
        recipe = self.extractor.extract('<html><body><p>Hello</p><img src="x.jpg"></body></html>')
        self.assertTrue(recipe.is_empty)
        self.assertEqual(recipe.image, "x.jpg")

    def test_empty_json_ld_recipe_falls_through(self) -> None:
        html = ('<script type="application/ld+json">{"@type":"Recipe","image":"ld.jpg"}</script>'
                '<h1>Heading Title</h1>')
        recipe, method = self.extractor.extract_with_method(html)
        self.assertEqual(method, "microdata")
        self.assertEqual(recipe.title, "Heading Title")

    def test_idempotent(self) -> None:
        for html in (SCENARIO_A, SCENARIO_B, SCENARIO_C):
            self.assertEqual(self.extractor.extract(html), self.extractor.extract(html))

    def test_non_string_input(self) -> None:
        for value in (None, b"<h1>Soup</h1>", 42):
            with self.subTest(value=value):
                with self.assertRaises(InputError):
                    self.extractor.extract(value)

    def test_parser_failure_becomes_parse_error(self) -> None:
        def broken_parser(text):
            raise RuntimeError("parser exploded")

        extractor = RecipeExtractor(html_parser=broken_parser)
        with self.assertRaises(ParseError) as ctx:
            extractor.extract("<h1>Soup</h1>")
        self.assertIn("parser exploded", str(ctx.exception))

    def test_strategy_failure_becomes_extraction_error(self) -> None:
        extractor = RecipeExtractor(parsers=[ExplodingParser()])
        with self.assertRaises(ExtractionError):
            extractor.extract(SCENARIO_B)

    def test_injected_document(self) -> None:
        document = FakeDocument(
            first={
                "h1": FakeElement("  Fake Title "),
                "img": FakeElement(src="fake.jpg"),
            },
            every={".instructions__item": [FakeElement("Never used")]},
        )
        extractor = RecipeExtractor(html_parser=lambda text: document)
        recipe, method = extractor.extract_with_method("ignored")
        self.assertEqual(method, "microdata")
        self.assertEqual(recipe, Recipe(title="Fake Title", image="fake.jpg"))

    def test_module_level_helper(self) -> None:
        self.assertEqual(extract_recipe_from_html(SCENARIO_B).title, "Soup")


if __name__ == "__main__":
    unittest.main()

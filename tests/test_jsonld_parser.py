from __future__ import annotations

import json
import unittest

from bs4 import BeautifulSoup

from custom_components.recipe_scanner.models.jsonld import JsonLdRecipe
from custom_components.recipe_scanner.parsers.jsonld_parser import JSONLDRecipeParser, is_recipe


def ld_script(data) -> str:
    body = data if isinstance(data, str) else json.dumps(data)
    return f'<script type="application/ld+json">{body}</script>'


def parse(*blocks: str):
    html = "<html><head>" + "".join(blocks) + "</head><body></body></html>"
    return JSONLDRecipeParser().parse_document(BeautifulSoup(html, "html.parser"))


class JsonLdParserTests(unittest.TestCase):
    def test_scenario_a_basic_recipe(self) -> None:
        recipe = parse(
            '<script type="application/ld+json">{"@type":"Recipe","name":"Pasta",'
            '"recipeIngredient":["Flour","Water"],"recipeInstructions":"Mix and boil."}</script>'
        )
        self.assertEqual(recipe.title, "Pasta")
        self.assertEqual(recipe.ingredients, ["Flour", "Water"])
        self.assertEqual(recipe.directions, ["Mix and boil."])
        self.assertIsNone(recipe.image)

    def test_no_recipe_block_yields_nothing(self) -> None:
        self.assertIsNone(parse(ld_script({"@type": "WebSite", "name": "Blog"})))
        self.assertIsNone(parse())

    def test_first_recipe_wins_across_blocks(self) -> None:
        recipe = parse(
            ld_script({"@type": "Organization", "name": "Publisher"}),
            ld_script("{not valid json"),
            ld_script({"@type": "Recipe", "name": "Pasta", "recipeIngredient": ["Flour"]}),
            ld_script({"@type": "Recipe", "name": "Other", "recipeIngredient": ["Rice"]}),
        )
        self.assertEqual(recipe.title, "Pasta")
        self.assertEqual(recipe.ingredients, ["Flour"])

    def test_malformed_block_does_not_hide_sibling(self) -> None:
        for broken in (
            '{"@type": "Recipe", "name": ',
            '{"n": 1' + '0' * 5000 + '}',
            '[' * 100000,
        ):
            with self.subTest(broken=broken[:20]):
                recipe = parse(
                    ld_script(broken),
                    ld_script({"@type": "Recipe", "name": "Bread"}),
                )
                self.assertEqual(recipe.title, "Bread")

    def test_array_and_graph_are_flattened(self) -> None:
        recipe = parse(ld_script([{"@type": "Person"}, {"@type": "Recipe", "name": "Array Cake"}]))
        self.assertEqual(recipe.title, "Array Cake")

        recipe = parse(ld_script({
            "@context": "https://schema.org",
            "@graph": [{"@type": "WebPage"}, {"@type": "Recipe", "name": "Graph Pie"}],
        }))
        self.assertEqual(recipe.title, "Graph Pie")

    def test_nested_graph_members_are_flattened(self) -> None:
        recipe = parse(ld_script({
            "@graph": [
                [{"@type": "WebSite"}],
                {"@type": "WebPage", "@graph": [{"@type": "Recipe", "name": "Nested Tart"}]},
            ],
        }))
        self.assertEqual(recipe.title, "Nested Tart")


    def test_type_list_and_headline_fallback(self) -> None:
        recipe = parse(ld_script({"@type": ["NewsArticle", "Recipe"], "headline": "Soup Story"}))
        self.assertEqual(recipe.title, "Soup Story")

    def test_ingredients_field_variant(self) -> None:
        recipe = parse(ld_script({"@type": "Recipe", "name": "Tea", "ingredients": ["Leaves", "Water"]}))
        self.assertEqual(recipe.ingredients, ["Leaves", "Water"])

    def test_instruction_shapes(self) -> None:
        recipe = parse(ld_script({
            "@type": "Recipe",
            "name": "Noodles",
            "recipeInstructions": [
                {"@type": "HowToStep", "text": "Boil water."},
                "Add pasta.",
                {"@type": "HowToSection", "name": "Drain"},
                {"@type": "HowToStep", "text": ""},
                42,
            ],
        }))
        self.assertEqual(recipe.directions, ["Boil water.", "Add pasta.", "Drain"])

    def test_image_shapes(self) -> None:
        base = {"@type": "Recipe", "name": "Pie"}
        cases = [
            ("https://example.com/a.jpg", "https://example.com/a.jpg"),
            (["https://example.com/b.jpg", "https://example.com/c.jpg"], "https://example.com/b.jpg"),
            ({"@type": "ImageObject", "url": "https://example.com/d.jpg"}, "https://example.com/d.jpg"),
            ([{"@type": "ImageObject", "url": "https://example.com/e.jpg"}], "https://example.com/e.jpg"),
            ([], None),
            (12, None),
            ({"height": 300}, None),
        ]
        for image, expected in cases:
            with self.subTest(image=image):
                recipe = parse(ld_script({**base, "image": image}))
                self.assertEqual(recipe.image, expected)

    def test_entities_are_decoded_and_blank_lines_dropped(self) -> None:
        recipe = parse(ld_script({
            "@type": "Recipe",
            "name": "Mac &amp; Cheese",
            "recipeIngredient": ["1 cup M&amp;Ms", "   ", "2 &frac12; cups milk"],
            "recipeInstructions": [{"text": "Stir <strong>gently</strong>."}],
        }))
        self.assertEqual(recipe.title, "Mac & Cheese")
        self.assertEqual(recipe.ingredients, ["1 cup M&Ms", "2 ½ cups milk"])
        self.assertEqual(recipe.directions, ["Stir gently."])


class JsonLdModelTests(unittest.TestCase):
    def test_is_recipe(self) -> None:
        self.assertTrue(is_recipe({"@type": "Recipe"}))
        self.assertTrue(is_recipe({"@type": ["Thing", "Recipe"]}))
        self.assertFalse(is_recipe({"@type": "Recipes"}))
        self.assertFalse(is_recipe(["Recipe"]))
        self.assertFalse(is_recipe({}))

    def test_unknown_shapes_decode_to_absent(self) -> None:
        ld = JsonLdRecipe.model_validate({
            "name": 5,
            "recipeIngredient": "1 egg",
            "recipeInstructions": {"text": "Whisk."},
            "image": True,
        })
        self.assertEqual(ld.title, "")
        self.assertEqual(ld.ingredient_lines, ["1 egg"])
        self.assertEqual(ld.instruction_lines, ["Whisk."])
        self.assertIsNone(ld.image_url)


if __name__ == "__main__":
    unittest.main()

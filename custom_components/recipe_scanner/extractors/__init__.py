"""Extractors package."""
from .recipe_extractor import RecipeExtractor, extract_recipe_from_html
from .scraper import fetch_image_data_url, fetch_recipe_html, read_recipe_file

__all__ = [
    "RecipeExtractor",
    "extract_recipe_from_html",
    "fetch_image_data_url",
    "fetch_recipe_html",
    "read_recipe_file",
]

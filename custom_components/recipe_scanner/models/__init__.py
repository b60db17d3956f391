"""Models package."""
from .jsonld import HowToStep, ImageObject, JsonLdRecipe
from .recipe import Recipe

__all__ = ["HowToStep", "ImageObject", "JsonLdRecipe", "Recipe"]

"""
Recipe data model for the Recipe Scanner integration.

This module defines the Pydantic model used to hold recipe data extracted
from HTML documents.
"""
from __future__ import annotations

from pydantic import BaseModel, Field


class Recipe(BaseModel):
    """The top-level schema for an extracted recipe.

    Attributes:
        title: The recipe title, may be empty
        ingredients: Ingredient lines in page order
        directions: Direction steps in page order
        image: URL of the cover image, if one was found
    """

    title: str = Field(
        default="",
        description="The title of the recipe"
    )
    ingredients: list[str] = Field(
        default_factory=list,
        description="Ingredient lines, e.g. '2 cups flour', trimmed and non-empty"
    )
    directions: list[str] = Field(
        default_factory=list,
        description="Direction steps, trimmed and non-empty"
    )
    image: str | None = Field(
        default=None,
        description="URL of the cover image, e.g. 'https://example.com/pasta.jpg'"
    )

    @property
    def is_empty(self) -> bool:
        """Return True if no title, ingredient or direction was found."""
        return not self.title.strip() and not self.ingredients and not self.directions

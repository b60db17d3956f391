"""
Schema.org linked-data models.

JSON-LD recipe blocks are published with loosely typed fields: instructions
can be a string, a step object or a list mixing both, and the image can be a
URL, an ImageObject or a list of either. These models decode the raw JSON into
explicit variants so the parser only deals with known shapes. Values of any
other shape decode to None instead of failing the whole block.
"""
from __future__ import annotations

from typing import Any, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)


class HowToStep(BaseModel):
    """A structured instruction entry (HowToStep, HowToSection, ...)."""

    model_config = ConfigDict(extra="ignore")

    text: str | None = None
    name: str | None = None

    @field_validator("text", "name", mode="before")
    @classmethod
    def _only_strings(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    def resolve(self) -> str:
        """Return the step text, falling back to its name."""
        return self.text or self.name or ""


class ImageObject(BaseModel):
    """A schema.org ImageObject, only the URL is used."""

    model_config = ConfigDict(extra="ignore")

    url: str | None = None

    @field_validator("url", mode="before")
    @classmethod
    def _only_strings(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None


Instruction = Union[str, HowToStep]
ImageRef = Union[str, ImageObject]


def _keep_instances(value: Any, kinds: tuple[type, ...]) -> Any:
    """Drop list members that are not of the given JSON kinds."""
    if isinstance(value, list):
        return [item for item in value if isinstance(item, kinds)]
    return value


class JsonLdRecipe(BaseModel):
    """The subset of a schema.org Recipe object used for extraction."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str | None = None
    headline: str | None = None
    recipe_ingredient: list[str] | None = Field(
        default=None, alias="recipeIngredient")
    ingredients: list[str] | None = None
    recipe_instructions: str | HowToStep | list[Instruction] | None = Field(
        default=None, alias="recipeInstructions")
    image: str | ImageObject | list[ImageRef] | None = None

    @field_validator("recipe_ingredient", "ingredients", mode="before")
    @classmethod
    def _ingredient_lines(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return _keep_instances(value, (str,))

    @field_validator("recipe_instructions", "image", mode="before")
    @classmethod
    def _drop_unknown_members(cls, value: Any) -> Any:
        return _keep_instances(value, (str, dict))

    @field_validator("*", mode="wrap")
    @classmethod
    def _absent_on_unknown_shape(
        cls, value: Any, handler: ValidatorFunctionWrapHandler
    ) -> Any:
        try:
            return handler(value)
        except ValidationError:
            return None

    @property
    def title(self) -> str:
        """Return the recipe name, falling back to the headline."""
        return self.name or self.headline or ""

    @property
    def ingredient_lines(self) -> list[str]:
        """Return the ingredient list from either known field name."""
        if self.recipe_ingredient is not None:
            return self.recipe_ingredient
        return self.ingredients or []

    @property
    def instruction_lines(self) -> list[str]:
        """Return instruction texts, dropping empty entries."""
        instructions = self.recipe_instructions
        if instructions is None:
            return []
        if isinstance(instructions, str):
            return [instructions]
        if isinstance(instructions, HowToStep):
            instructions = [instructions]

        lines = []
        for entry in instructions:
            text = entry if isinstance(entry, str) else entry.resolve()
            if text:
                lines.append(text)
        return lines

    @property
    def image_url(self) -> str | None:
        """Return the cover image URL, or None if no usable shape was given."""
        image = self.image
        if isinstance(image, list):
            if not image:
                return None
            image = image[0]
        if isinstance(image, ImageObject):
            return image.url or None
        return image or None

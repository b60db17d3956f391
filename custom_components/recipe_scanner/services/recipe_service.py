"""
Recipe Scanning Service.

This module orchestrates loading a recipe page (from a URL or a local file),
running the extraction engine on it and exporting the result as a printable
page. All functions are blocking and meant to run in an executor.
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any
from urllib.parse import urljoin

from ..const import DEFAULT_EMBED_IMAGE, DEFAULT_TIMEOUT
from ..exceptions import FetchError
from ..extractors.recipe_extractor import RecipeExtractor
from ..extractors.scraper import (
    fetch_image_data_url,
    fetch_recipe_html,
    read_recipe_file,
)
from ..models.recipe import Recipe
from .recipe_renderer import export_filename, render_printable_html

_LOGGER = logging.getLogger(__name__)

EventCallback = Callable[[str, dict[str, Any]], None]


def _extract(
    html: str,
    source: str,
    base_url: str | None = None,
    event_callback: EventCallback | None = None,
) -> dict[str, Any] | None:
    """Run the extraction engine and build the service response.

    Returns:
        Dictionary with recipe data and extraction metadata, or None if the
        page holds no recipe
    """
    recipe, method = RecipeExtractor().extract_with_method(html)

    if recipe.is_empty:
        _LOGGER.warning("No recipe found in %s", source)
        return None

    if event_callback:
        event_callback('method_detected', {
            'extraction_method': method,
            'message': f"Recipe found using {method} markup",
        })

    if base_url and recipe.image:
        recipe.image = urljoin(base_url, recipe.image)

    _LOGGER.info(
        "Successfully extracted recipe '%s' with %d ingredients from %s",
        recipe.title,
        len(recipe.ingredients),
        source
    )

    result = recipe.model_dump()
    result['extraction_method'] = method
    result['source'] = source
    return result


def extract_recipe_from_url(
    url: str,
    proxy_url: str | None = None,
    timeout: float = DEFAULT_TIMEOUT,
    event_callback: EventCallback | None = None,
) -> dict[str, Any] | None:
    """Extract a recipe from a web page.

    Args:
        url: Recipe website URL
        proxy_url: Optional pass-through proxy prefix
        timeout: Request timeout in seconds
        event_callback: Optional callback to fire events during extraction

    Returns:
        Dictionary with recipe data and extraction metadata, or None if no
        recipe was found

    Raises:
        Exception: Re-raises exceptions for proper error handling in async context
    """
    _LOGGER.debug("Starting recipe extraction from %s", url)

    try:
        html = fetch_recipe_html(url, timeout=timeout, proxy_url=proxy_url)
        return _extract(html, url, base_url=url, event_callback=event_callback)
    except Exception as e:
        _LOGGER.error(
            "Error extracting recipe from %s: %s",
            url,
            str(e),
            exc_info=True
        )
        raise


def extract_recipe_from_file(
    path: str | Path,
    event_callback: EventCallback | None = None,
) -> dict[str, Any] | None:
    """Extract a recipe from a saved HTML page.

    Args:
        path: Path to an .html or .htm file
        event_callback: Optional callback to fire events during extraction

    Returns:
        Dictionary with recipe data and extraction metadata, or None if no
        recipe was found
    """
    _LOGGER.debug("Starting recipe extraction from file %s", path)

    try:
        html = read_recipe_file(path)
        return _extract(html, str(path), event_callback=event_callback)
    except Exception as e:
        _LOGGER.error(
            "Error extracting recipe from %s: %s",
            path,
            str(e),
            exc_info=True
        )
        raise


def export_recipe(
    recipe_data: dict[str, Any] | Recipe,
    output_dir: str | Path,
    embed_image: bool = DEFAULT_EMBED_IMAGE,
    proxy_url: str | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> dict[str, str]:
    """Write a recipe as a printable HTML page.

    When embed_image is set the cover image is downloaded and inlined so the
    page prints without network access; if that fails the remote URL is kept.

    Args:
        recipe_data: Recipe, or a recipe dict as returned by the extract services
        output_dir: Directory to write the page to, created if missing
        embed_image: Whether to inline the cover image
        proxy_url: Optional pass-through proxy prefix for the image download
        timeout: Request timeout in seconds

    Returns:
        Dictionary with the written file's path and name
    """
    recipe = (recipe_data if isinstance(recipe_data, Recipe)
              else Recipe.model_validate(recipe_data))

    image_src = None
    if embed_image and recipe.image:
        try:
            image_src = fetch_image_data_url(
                recipe.image, timeout=timeout, proxy_url=proxy_url)
        except (FetchError, ValueError) as e:
            _LOGGER.warning(
                "Could not embed image %s, keeping the link: %s", recipe.image, e)

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    filename = export_filename(recipe, extension=".html")
    path = output_dir / filename
    _LOGGER.info("Exporting recipe '%s' to %s", recipe.title, path)
    path.write_text(render_printable_html(recipe, image_src), encoding='utf-8')

    return {"path": str(path), "filename": filename}

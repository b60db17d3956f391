"""
Service Handlers.

This module contains the Home Assistant service handler functions for
recipe extraction from URLs and local files, and for recipe export.
"""
from __future__ import annotations

import logging
from typing import Any

from homeassistant.core import HomeAssistant, ServiceCall
from homeassistant.exceptions import ServiceValidationError

from ..const import (
    DOMAIN,
    CONF_EMBED_IMAGE,
    CONF_PROXY_URL,
    CONF_TIMEOUT,
    DEFAULT_EMBED_IMAGE,
    DEFAULT_TIMEOUT,
    EVENT_EXTRACTION_STARTED,
    EVENT_EXTRACTION_METHOD_DETECTED,
    EVENT_RECIPE_EXTRACTED,
    EVENT_EXTRACTION_FAILED,
    EXPORT_SUBDIR,
    DATA_URL,
    DATA_PATH,
    DATA_SOURCE,
    DATA_RECIPE,
    DATA_ERROR,
    DATA_EMBED_IMAGE,
    DATA_EXTRACTION_METHOD,
    DATA_MESSAGE,
)
from .recipe_service import (
    extract_recipe_from_file,
    extract_recipe_from_url,
    export_recipe,
)

_LOGGER = logging.getLogger(__name__)

NO_RECIPE_FOUND = "No recipe found - the page has no recognizable recipe markup"


def get_entry_config(hass: HomeAssistant) -> dict[str, Any] | None:
    """Get configuration from the first available config entry.

    Returns:
        Configuration dict or None if no entries exist
    """
    if not hass.data.get(DOMAIN):
        return None

    # Get first entry's config (services are shared across all entries)
    entry_id = next(iter(hass.data[DOMAIN]))
    return hass.data[DOMAIN][entry_id]


def _require_config(hass: HomeAssistant) -> dict[str, Any]:
    config = get_entry_config(hass)
    if not config:
        _LOGGER.error("No configuration found for Recipe Scanner")
        raise ServiceValidationError("Recipe Scanner is not configured")
    return config


async def _run_extraction(
    hass: HomeAssistant, source: str, job, *args: Any
) -> dict[str, Any]:
    """Run a blocking extraction job and fire the matching events.

    Args:
        hass: Home Assistant instance
        source: URL or file path the recipe is read from
        job: Blocking extraction function accepting an event_callback keyword
        args: Positional arguments for the job

    Returns:
        Dictionary with recipe data or error
    """
    hass.bus.async_fire(EVENT_EXTRACTION_STARTED, {DATA_SOURCE: source})

    def fire_extraction_event(event_type: str, event_data: dict):
        """Fire extraction progress events."""
        if event_type == 'method_detected':
            hass.bus.fire(
                EVENT_EXTRACTION_METHOD_DETECTED,
                {
                    DATA_SOURCE: source,
                    DATA_EXTRACTION_METHOD: event_data.get('extraction_method'),
                    DATA_MESSAGE: event_data.get('message'),
                }
            )

    try:
        # Run extraction in executor (blocking I/O)
        recipe_data = await hass.async_add_executor_job(
            lambda: job(*args, event_callback=fire_extraction_event)
        )
    except Exception as e:
        error_msg = f"Error extracting recipe: {str(e)}"
        _LOGGER.error("Recipe extraction failed for %s: %s",
                      source, error_msg, exc_info=True)
        hass.bus.async_fire(
            EVENT_EXTRACTION_FAILED,
            {
                DATA_SOURCE: source,
                DATA_ERROR: error_msg,
            }
        )
        return {"error": error_msg}

    if not recipe_data:
        _LOGGER.warning("%s: %s", NO_RECIPE_FOUND, source)
        hass.bus.async_fire(
            EVENT_EXTRACTION_FAILED,
            {
                DATA_SOURCE: source,
                DATA_ERROR: NO_RECIPE_FOUND,
            }
        )
        return {"error": NO_RECIPE_FOUND}

    hass.bus.async_fire(
        EVENT_RECIPE_EXTRACTED,
        {
            DATA_SOURCE: source,
            DATA_RECIPE: recipe_data,
        }
    )
    _LOGGER.info("Recipe extraction successful for %s", source)
    return recipe_data


async def handle_extract_recipe(hass: HomeAssistant, call: ServiceCall) -> dict[str, Any]:
    """Handle the extract recipe service call.

    Args:
        hass: Home Assistant instance
        call: Service call with url

    Returns:
        Dictionary with recipe data or error
    """
    url = call.data[DATA_URL]
    config = _require_config(hass)

    _LOGGER.info("Extracting recipe from %s", url)
    return await _run_extraction(
        hass,
        url,
        extract_recipe_from_url,
        url,
        config.get(CONF_PROXY_URL),
        config.get(CONF_TIMEOUT, DEFAULT_TIMEOUT),
    )


async def handle_extract_file(hass: HomeAssistant, call: ServiceCall) -> dict[str, Any]:
    """Handle the extract file service call.

    Args:
        hass: Home Assistant instance
        call: Service call with path

    Returns:
        Dictionary with recipe data or error
    """
    path = call.data[DATA_PATH]
    _require_config(hass)

    if not hass.config.is_allowed_path(path):
        error_msg = f"Access to {path} is not allowed"
        _LOGGER.error(error_msg)
        raise ServiceValidationError(error_msg)

    _LOGGER.info("Extracting recipe from file %s", path)
    return await _run_extraction(hass, path, extract_recipe_from_file, path)


async def handle_export_recipe(hass: HomeAssistant, call: ServiceCall) -> dict[str, Any]:
    """Handle the export recipe service call.

    Args:
        hass: Home Assistant instance
        call: Service call with recipe data and optional embed_image

    Returns:
        Dictionary with the exported file's path and name, or error
    """
    recipe_data = call.data[DATA_RECIPE]
    config = _require_config(hass)
    embed_image = call.data.get(
        DATA_EMBED_IMAGE, config.get(CONF_EMBED_IMAGE, DEFAULT_EMBED_IMAGE))
    output_dir = hass.config.path(*EXPORT_SUBDIR)

    try:
        _LOGGER.info(
            "Exporting recipe '%s' to %s",
            recipe_data.get('title', 'Unknown'),
            output_dir
        )
        return await hass.async_add_executor_job(
            export_recipe,
            recipe_data,
            output_dir,
            embed_image,
            config.get(CONF_PROXY_URL),
            config.get(CONF_TIMEOUT, DEFAULT_TIMEOUT),
        )
    except Exception as e:
        error_msg = f"Error exporting recipe: {str(e)}"
        _LOGGER.error("Failed to export recipe: %s",
                      error_msg, exc_info=True)
        return {"error": error_msg}

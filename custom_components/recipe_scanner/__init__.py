"""
Recipe Scanner Integration for Home Assistant.

This integration provides services to extract structured recipe data (title,
ingredients, directions and cover image) from recipe web pages or saved HTML
files, and to export recipes as printable pages.
"""
from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, ServiceCall, SupportsResponse
from homeassistant.helpers import config_validation as cv
from homeassistant.helpers.typing import ConfigType

from .const import (
    DOMAIN,
    CONF_PROXY_URL,
    CONF_TIMEOUT,
    CONF_EMBED_IMAGE,
    DEFAULT_TIMEOUT,
    DEFAULT_EMBED_IMAGE,
    SERVICE_EXTRACT,
    SERVICE_EXTRACT_FILE,
    SERVICE_EXPORT,
    DATA_URL,
    DATA_PATH,
    DATA_RECIPE,
    DATA_EMBED_IMAGE,
)
from .services.service_handlers import (
    handle_extract_recipe,
    handle_extract_file,
    handle_export_recipe,
)

_LOGGER = logging.getLogger(__name__)

# Config flow only - no YAML support
CONFIG_SCHEMA = cv.empty_config_schema(DOMAIN)

# Service schemas
SERVICE_EXTRACT_SCHEMA = vol.Schema(
    {
        vol.Required(DATA_URL): cv.url,
    }
)

SERVICE_EXTRACT_FILE_SCHEMA = vol.Schema(
    {
        vol.Required(DATA_PATH): cv.string,
    }
)

SERVICE_EXPORT_SCHEMA = vol.Schema(
    {
        vol.Required(DATA_RECIPE): dict,
        vol.Optional(DATA_EMBED_IMAGE): cv.boolean,
    }
)


async def async_setup(hass: HomeAssistant, config: ConfigType) -> bool:
    """Set up the Recipe Scanner integration."""
    # Initialize integration data storage
    hass.data.setdefault(DOMAIN, {})
    _LOGGER.debug("Recipe Scanner integration setup complete")
    return True


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up Recipe Scanner from a config entry."""
    _LOGGER.info("Setting up Recipe Scanner config entry")

    # Store entry configuration in hass.data
    hass.data.setdefault(DOMAIN, {})
    hass.data[DOMAIN][entry.entry_id] = {
        CONF_PROXY_URL: entry.options.get(CONF_PROXY_URL) or None,
        CONF_TIMEOUT: entry.options.get(CONF_TIMEOUT, DEFAULT_TIMEOUT),
        CONF_EMBED_IMAGE: entry.options.get(CONF_EMBED_IMAGE, DEFAULT_EMBED_IMAGE),
    }

    # Set up services only once (for the first entry)
    if len(hass.data[DOMAIN]) == 1:
        await _setup_services(hass)
        _LOGGER.info("Recipe Scanner services registered")

    # Listen for options updates
    entry.async_on_unload(entry.add_update_listener(async_reload_entry))

    _LOGGER.debug("Recipe Scanner config entry setup complete")
    return True


async def async_reload_entry(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Reload the config entry when options change."""
    await hass.config_entries.async_reload(entry.entry_id)


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    _LOGGER.info("Unloading Recipe Scanner config entry")

    # Remove entry data
    hass.data[DOMAIN].pop(entry.entry_id, None)

    # Remove services only if this is the last entry
    if not hass.data[DOMAIN]:
        hass.services.async_remove(DOMAIN, SERVICE_EXTRACT)
        hass.services.async_remove(DOMAIN, SERVICE_EXTRACT_FILE)
        hass.services.async_remove(DOMAIN, SERVICE_EXPORT)
        _LOGGER.info("Recipe Scanner services unregistered")

    return True


async def _setup_services(hass: HomeAssistant) -> None:
    """Set up the integration services."""

    async def _handle_extract_recipe(call: ServiceCall) -> dict[str, Any]:
        """Wrapper for handle_extract_recipe that injects hass."""
        return await handle_extract_recipe(hass, call)

    async def _handle_extract_file(call: ServiceCall) -> dict[str, Any]:
        """Wrapper for handle_extract_file that injects hass."""
        return await handle_extract_file(hass, call)

    async def _handle_export_recipe(call: ServiceCall) -> dict[str, Any]:
        """Wrapper for handle_export_recipe that injects hass."""
        return await handle_export_recipe(hass, call)

    # Register the services with supports_response
    hass.services.async_register(
        DOMAIN,
        SERVICE_EXTRACT,
        _handle_extract_recipe,
        schema=SERVICE_EXTRACT_SCHEMA,
        supports_response=SupportsResponse.OPTIONAL,
    )

    hass.services.async_register(
        DOMAIN,
        SERVICE_EXTRACT_FILE,
        _handle_extract_file,
        schema=SERVICE_EXTRACT_FILE_SCHEMA,
        supports_response=SupportsResponse.OPTIONAL,
    )

    hass.services.async_register(
        DOMAIN,
        SERVICE_EXPORT,
        _handle_export_recipe,
        schema=SERVICE_EXPORT_SCHEMA,
        supports_response=SupportsResponse.OPTIONAL,
    )

"""Config flow for Recipe Scanner integration."""
from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol

from homeassistant import config_entries
from homeassistant.core import callback
from homeassistant.data_entry_flow import FlowResult
from homeassistant.helpers import selector

from .const import (
    DOMAIN,
    CONF_PROXY_URL,
    CONF_TIMEOUT,
    CONF_EMBED_IMAGE,
    DEFAULT_TIMEOUT,
    DEFAULT_MIN_TIMEOUT,
    DEFAULT_MAX_TIMEOUT,
    DEFAULT_EMBED_IMAGE,
)
from .extractors.scraper import validate_url

_LOGGER = logging.getLogger(__name__)


def _clean_options(user_input: dict[str, Any]) -> dict[str, str]:
    """Normalize option values in place and return validation errors."""
    errors: dict[str, str] = {}

    # Clean up empty strings to None
    proxy_url = (user_input.get(CONF_PROXY_URL) or "").strip()
    if proxy_url:
        try:
            validate_url(proxy_url)
        except ValueError:
            errors[CONF_PROXY_URL] = "invalid_proxy_url"
    user_input[CONF_PROXY_URL] = proxy_url or None

    if CONF_TIMEOUT in user_input:
        user_input[CONF_TIMEOUT] = int(user_input[CONF_TIMEOUT])

    return errors


def _options_schema(current: dict[str, Any]) -> vol.Schema:
    """Build the options form schema with the current values as defaults."""
    return vol.Schema(
        {
            vol.Optional(
                CONF_PROXY_URL,
                description={"suggested_value": current.get(CONF_PROXY_URL)},
            ): selector.TextSelector(
                selector.TextSelectorConfig(
                    type=selector.TextSelectorType.URL,
                ),
            ),
            vol.Optional(
                CONF_TIMEOUT,
                default=current.get(CONF_TIMEOUT, DEFAULT_TIMEOUT),
            ): selector.NumberSelector(
                selector.NumberSelectorConfig(
                    min=DEFAULT_MIN_TIMEOUT,
                    max=DEFAULT_MAX_TIMEOUT,
                    step=1,
                    unit_of_measurement="s",
                    mode=selector.NumberSelectorMode.BOX,
                ),
            ),
            vol.Optional(
                CONF_EMBED_IMAGE,
                default=current.get(CONF_EMBED_IMAGE, DEFAULT_EMBED_IMAGE),
            ): selector.BooleanSelector(),
        }
    )


class RecipeScannerConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Handle a config flow for Recipe Scanner."""

    VERSION = 1

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        """Handle the initial step."""
        errors: dict[str, str] = {}

        # Check if already configured
        await self.async_set_unique_id(DOMAIN)
        self._abort_if_unique_id_configured()

        if user_input is not None:
            errors = _clean_options(user_input)

            if not errors:
                _LOGGER.info("Creating Recipe Scanner config entry")
                return self.async_create_entry(
                    title="Recipe Scanner",
                    data={},
                    options=user_input,
                )

        return self.async_show_form(
            step_id="user",
            data_schema=_options_schema(user_input or {}),
            errors=errors,
        )

    @staticmethod
    @callback
    def async_get_options_flow(
        config_entry: config_entries.ConfigEntry,
    ) -> RecipeScannerOptionsFlow:
        """Get the options flow for this handler."""
        return RecipeScannerOptionsFlow(config_entry)


class RecipeScannerOptionsFlow(config_entries.OptionsFlow):
    """Handle options flow for Recipe Scanner."""

    def __init__(self, config_entry: config_entries.ConfigEntry) -> None:
        """Initialize options flow."""
        self._entry = config_entry

    async def async_step_init(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        """Manage the options."""
        errors: dict[str, str] = {}

        if user_input is not None:
            errors = _clean_options(user_input)

            if not errors:
                _LOGGER.info("Updating Recipe Scanner options")
                return self.async_create_entry(title="", data=user_input)

        return self.async_show_form(
            step_id="init",
            data_schema=_options_schema(user_input or dict(self._entry.options)),
            errors=errors,
        )

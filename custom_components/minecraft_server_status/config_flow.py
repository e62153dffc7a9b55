# custom_components/minecraft_server_status/config_flow.py
"""Config flow for Minecraft Server Status integration."""

import logging
from typing import Any, Dict, Optional

import voluptuous as vol

from homeassistant import config_entries, exceptions
from homeassistant.core import HomeAssistant
from homeassistant.data_entry_flow import FlowResult
from homeassistant.helpers import selector
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from .api import (
    ApiResponseError,
    CannotConnectError,
    InvalidResponseError,
    McSrvStatApiClient,
)
from .const import (
    CONF_HOST,
    CONF_NAME,
    CONF_PORT,
    CONF_SERVER_TYPE,
    CONF_UPDATE_INTERVAL,
    DEFAULT_NAME,
    DEFAULT_PORT,
    DEFAULT_UPDATE_INTERVAL_MS,
    DOMAIN,
    SERVER_TYPE_BEDROCK,
    SERVER_TYPE_JAVA,
)
from .models import ServerConfig
from .utils import format_server_address

_LOGGER = logging.getLogger(__name__)

# --- Schema Definition ---
STEP_USER_DATA_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_NAME, default=DEFAULT_NAME): str,
        vol.Required(CONF_HOST): str,
        vol.Required(CONF_PORT, default=DEFAULT_PORT): vol.All(
            vol.Coerce(int), vol.Range(min=0, max=65535)
        ),
        vol.Required(CONF_SERVER_TYPE, default=SERVER_TYPE_JAVA): selector.SelectSelector(
            selector.SelectSelectorConfig(
                options=[SERVER_TYPE_JAVA, SERVER_TYPE_BEDROCK],
                mode=selector.SelectSelectorMode.DROPDOWN,
                translation_key=CONF_SERVER_TYPE,
            )
        ),
        vol.Optional(
            CONF_UPDATE_INTERVAL, default=DEFAULT_UPDATE_INTERVAL_MS
        ): vol.All(vol.Coerce(int), vol.Range(min=0)),
    }
)


# --- Custom Internal Config Flow Exceptions ---
class CannotConnect(exceptions.HomeAssistantError):
    """Custom error for connection issues."""


class InvalidResponse(exceptions.HomeAssistantError):
    """Custom error for answers the status API should never give."""


# --- Validation Function ---
async def validate_input(hass: HomeAssistant, data: Dict[str, Any]) -> Dict[str, Any]:
    """Validate the user input by querying the status API once."""
    server_config = ServerConfig.from_mapping(data)
    api_client = McSrvStatApiClient(session=async_get_clientsession(hass))
    address = format_server_address(server_config.host, server_config.port)

    _LOGGER.debug("Validating input: querying status of %s", address)
    try:
        snapshot = await api_client.async_get_status(
            server_config.host, server_config.port, server_config.server_type
        )
    except CannotConnectError as err:
        _LOGGER.warning(
            "Config flow validation: Cannot reach the status API for %s: %s",
            address,
            err,
        )
        raise CannotConnect from err
    except (ApiResponseError, InvalidResponseError) as err:
        _LOGGER.warning(
            "Config flow validation: Unusable status API answer for %s: %s",
            address,
            err,
        )
        raise InvalidResponse from err

    # An offline server is fine; it may simply be stopped right now
    return {"title": server_config.name, "online": snapshot.online}


# --- Config Flow Class ---
class ConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Handle a config flow for Minecraft Server Status."""

    VERSION = 1

    async def async_step_user(
        self, user_input: Optional[Dict[str, Any]] = None
    ) -> FlowResult:
        """Handle the initial step."""
        errors: Dict[str, str] = {}

        if user_input is not None:
            unique_id = (
                f"{user_input[CONF_SERVER_TYPE]}:"
                f"{format_server_address(user_input[CONF_HOST], user_input[CONF_PORT])}"
            ).lower()
            await self.async_set_unique_id(unique_id)
            self._abort_if_unique_id_configured()

            try:
                info = await validate_input(self.hass, user_input)
            except CannotConnect:
                errors["base"] = "cannot_connect"
            except InvalidResponse:
                errors["base"] = "invalid_response"
            except ValueError as err:
                _LOGGER.warning("Config flow received invalid server settings: %s", err)
                errors["base"] = "invalid_host"
            except Exception:  # pylint: disable=broad-except
                _LOGGER.exception("Unexpected error during config flow validation")
                errors["base"] = "unknown"
            else:
                _LOGGER.info(
                    "Creating config entry '%s' for %s (online: %s)",
                    info["title"],
                    unique_id,
                    info["online"],
                )
                return self.async_create_entry(title=info["title"], data=user_input)

        return self.async_show_form(
            step_id="user",
            data_schema=self.add_suggested_values_to_schema(
                STEP_USER_DATA_SCHEMA, user_input
            ),
            errors=errors,
        )

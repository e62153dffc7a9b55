# custom_components/minecraft_server_status/__init__.py
"""The Minecraft Server Status integration."""

import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers import device_registry as dr
from homeassistant.helpers.aiohttp_client import async_get_clientsession

from .api import McSrvStatApiClient
from .const import (
    DOMAIN,
    MANUFACTURER,
    MODEL,
    PLATFORMS,
    SOFTWARE_VERSION,
)
from .coordinator import ServerStatusCoordinator
from .models import ServerConfig

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """
    Set up a Minecraft server status accessory from a config entry.

    Builds the API client on Home Assistant's shared session, performs the
    initial lookup through the status coordinator, registers the
    device and forwards the setup to the binary sensor platform.
    """
    hass.data.setdefault(DOMAIN, {})

    try:
        server_config = ServerConfig.from_mapping(entry.data)
    except (KeyError, ValueError) as err:
        _LOGGER.error("Invalid configuration for entry %s: %s", entry.entry_id, err)
        return False

    # --- API Client Setup ---
    api_client = McSrvStatApiClient(session=async_get_clientsession(hass))

    # --- Coordinator Setup ---
    coordinator = ServerStatusCoordinator(
        hass=hass,
        api_client=api_client,
        config=server_config,
        config_entry=entry,
    )
    # A failed first lookup must not block setup; entities start unavailable
    await coordinator.async_refresh()
    if not coordinator.last_update_success:
        _LOGGER.warning(
            "Initial status lookup for '%s' failed; entities stay unavailable "
            "until the next successful poll.",
            server_config.name,
        )

    # --- Device Registration ---
    server_identifier = (DOMAIN, entry.entry_id)
    device_registry = dr.async_get(hass)
    device_registry.async_get_or_create(
        config_entry_id=entry.entry_id,
        identifiers={server_identifier},
        name=server_config.name,
        manufacturer=MANUFACTURER,
        model=MODEL,
        sw_version=SOFTWARE_VERSION,
    )

    hass.data[DOMAIN][entry.entry_id] = {
        "api": api_client,
        "coordinator": coordinator,
        "server_identifier": server_identifier,
    }

    try:
        await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    except Exception:
        await coordinator.async_shutdown()
        hass.data[DOMAIN].pop(entry.entry_id, None)
        raise

    _LOGGER.info(
        "Monitoring Minecraft server '%s' at %s every %ds",
        server_config.name,
        coordinator.server_address,
        server_config.poll_interval_seconds,
    )
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry and stop its status polling."""
    _LOGGER.info("Unloading Minecraft server status entry '%s'", entry.title)

    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)

    if unload_ok:
        entry_data = hass.data[DOMAIN].pop(entry.entry_id, None)
        if entry_data and (coordinator := entry_data.get("coordinator")):
            await coordinator.async_shutdown()
        if not hass.data[DOMAIN]:
            hass.data.pop(DOMAIN, None)

    return unload_ok

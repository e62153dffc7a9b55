# custom_components/minecraft_server_status/diagnostics.py
"""Diagnostics support for Minecraft Server Status."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, cast

from homeassistant.components.diagnostics.util import async_redact_data
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from .const import CONF_HOST, DOMAIN
from .coordinator import ServerStatusCoordinator
from .utils import fault_description, occupancy_description

_LOGGER = logging.getLogger(__name__)

# Keys to redact from the config entry's 'data' field in diagnostics
TO_REDACT_CONFIG = {
    CONF_HOST,
}


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> Dict[str, Any]:
    """Return diagnostics for a config entry."""
    _LOGGER.debug("Gathering diagnostics for config entry: %s", entry.entry_id)
    diagnostics_data: Dict[str, Any] = {
        "entry_details": {
            "title": entry.title,
            "entry_id": entry.entry_id,
            "data": async_redact_data(dict(entry.data), TO_REDACT_CONFIG),
            "source": entry.source,
            "version": entry.version,
        }
    }

    entry_specific_data = hass.data.get(DOMAIN, {}).get(entry.entry_id)
    coordinator = cast(
        Optional[ServerStatusCoordinator],
        entry_specific_data.get("coordinator") if entry_specific_data else None,
    )
    if coordinator is None:
        _LOGGER.warning(
            "No status coordinator found for diagnostics of entry %s", entry.entry_id
        )
        diagnostics_data["error"] = (
            f"Integration data missing in hass.data for entry {entry.entry_id}"
        )
        return diagnostics_data

    diagnostics_data["status_coordinator"] = {
        "name": coordinator.name,
        "api_base_url": coordinator.api.base_url,
        "server_type": coordinator.config.server_type.value,
        "configured_update_interval_ms": coordinator.config.update_interval,
        "effective_update_interval_ms": coordinator.config.poll_interval,
        "last_update_success": coordinator.last_update_success,
        "update_interval_seconds": coordinator.update_interval.total_seconds(),
        "last_exception_type": _exception_type(coordinator.last_exception),
        "listeners_count": coordinator.listener_count,
        "occupancy": {
            "state": coordinator.occupancy.value,
            "description": occupancy_description(coordinator.occupancy),
            "players_online": coordinator.players_online,
        },
        "fault": {
            "state": coordinator.fault.value,
            "description": fault_description(coordinator.fault),
        },
    }

    _LOGGER.debug("Finished gathering config entry diagnostics for: %s", entry.entry_id)
    return diagnostics_data


def _exception_type(err: Optional[BaseException]) -> Optional[str]:
    """Name of the underlying error; messages are left out as they carry the host."""
    if err is None:
        return None
    return type(err.__cause__ or err).__name__

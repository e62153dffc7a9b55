# custom_components/minecraft_server_status/coordinator.py
"""DataUpdateCoordinator for the Minecraft Server Status integration."""

import asyncio
import logging
from datetime import timedelta
from typing import Optional

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

from .api import McSrvStatApiClient, McSrvStatError
from .models import (
    FaultState,
    OccupancyState,
    ServerConfig,
    ServerStatusSnapshot,
)
from .utils import fault_description, format_server_address, occupancy_description

_LOGGER = logging.getLogger(__name__)


class ServerStatusCoordinator(DataUpdateCoordinator[Optional[ServerStatusSnapshot]]):
    """
    Polls the status API for one server and projects each result onto an
    occupancy state and a fault state.

    The projected states outlive individual snapshots: an offline server keeps
    its last known occupancy, and a failed lookup leaves both states untouched
    (entities go unavailable through last_update_success instead).
    """

    def __init__(
        self,
        hass: HomeAssistant,
        api_client: McSrvStatApiClient,
        config: ServerConfig,
        config_entry: Optional[ConfigEntry] = None,
    ) -> None:
        """Initialize the coordinator."""
        self.api = api_client
        self.config = config

        self.occupancy = OccupancyState.UNKNOWN
        self.fault = FaultState.UNKNOWN
        self.players_online: Optional[int] = None

        self._poll_lock = asyncio.Lock()

        super().__init__(
            hass,
            _LOGGER,
            config_entry=config_entry,
            name=f"Minecraft Server Status ({config.name})",
            update_interval=timedelta(milliseconds=config.poll_interval),
        )
        _LOGGER.debug(
            "Initialized ServerStatusCoordinator for '%s' with update interval %dms",
            config.name,
            config.poll_interval,
        )

    @property
    def server_address(self) -> str:
        return format_server_address(self.config.host, self.config.port)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    async def _async_update_data(self) -> Optional[ServerStatusSnapshot]:
        """Fetch the current status and update the projected states."""
        if self._poll_lock.locked():
            _LOGGER.debug(
                "Skipping poll of '%s'; the previous request is still in flight.",
                self.config.name,
            )
            return self.data

        async with self._poll_lock:
            _LOGGER.debug(
                "Updating status of Minecraft server “%s”...", self.config.name
            )
            try:
                snapshot = await self.api.async_get_status(
                    self.config.host, self.config.port, self.config.server_type
                )
            except McSrvStatError as err:
                raise UpdateFailed(
                    f"Error fetching status of {self.server_address}: "
                    f"{type(err).__name__}"
                ) from err

            self.apply_snapshot(snapshot)
            return snapshot

    @callback
    def async_update_listeners(self) -> None:
        """Update all listeners; a failing listener does not affect the others."""
        for update_callback, _ in list(self._listeners.values()):
            try:
                update_callback()
            except Exception:  # pylint: disable=broad-except
                _LOGGER.exception(
                    "Error in status listener of Minecraft server '%s'",
                    self.config.name,
                )

    def apply_snapshot(self, snapshot: ServerStatusSnapshot) -> None:
        """Project a snapshot onto the fault and occupancy states."""
        self._set_fault(snapshot.fault)
        if snapshot.online:
            # Offline servers keep their last known occupancy
            self.players_online = snapshot.players_online
            self._set_occupancy(snapshot.occupancy)

    def _set_fault(self, new_state: FaultState) -> None:
        old_state, self.fault = self.fault, new_state
        if old_state != new_state:
            _LOGGER.debug(
                "Server “%s” went from %s to %s.",
                self.config.name,
                fault_description(old_state),
                fault_description(new_state),
            )

    def _set_occupancy(self, new_state: OccupancyState) -> None:
        old_state, self.occupancy = self.occupancy, new_state
        if old_state != new_state:
            _LOGGER.debug(
                "Occupancy of “%s” changed from %s to %s.",
                self.config.name,
                occupancy_description(old_state),
                occupancy_description(new_state),
            )

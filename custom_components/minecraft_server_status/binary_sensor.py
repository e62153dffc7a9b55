# custom_components/minecraft_server_status/binary_sensor.py
"""Binary sensor platform for Minecraft Server Status."""

import logging
from typing import Any, Dict, Optional, Tuple, cast

from homeassistant.components.binary_sensor import (
    BinarySensorDeviceClass,
    BinarySensorEntity,
    BinarySensorEntityDescription,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.entity_platform import AddEntitiesCallback
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import (
    ATTR_PLAYERS_ONLINE,
    ATTR_SERVER_ADDRESS,
    ATTR_SERVER_TYPE,
    DOMAIN,
    KEY_OCCUPANCY,
    KEY_STATUS,
    MANUFACTURER,
    MODEL,
    SOFTWARE_VERSION,
)
from .coordinator import ServerStatusCoordinator
from .models import FaultState, OccupancyState
from .utils import fault_description, is_fault, occupancy_description

_LOGGER = logging.getLogger(__name__)

OCCUPANCY_DESCRIPTION = BinarySensorEntityDescription(
    key=KEY_OCCUPANCY,
    name="Occupancy",
    icon="mdi:minecraft",
    device_class=BinarySensorDeviceClass.OCCUPANCY,
)

STATUS_DESCRIPTION = BinarySensorEntityDescription(
    key=KEY_STATUS,
    name="Status",
    device_class=BinarySensorDeviceClass.PROBLEM,
)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up the occupancy and status binary sensors for a config entry."""
    _LOGGER.debug("Setting up binary_sensor platform for entry: %s", entry.entry_id)
    try:
        entry_data = hass.data[DOMAIN][entry.entry_id]
        coordinator = cast(ServerStatusCoordinator, entry_data["coordinator"])
        server_identifier = cast(Tuple[str, str], entry_data["server_identifier"])
    except KeyError as e:
        _LOGGER.error(
            "Binary sensor setup failed for entry %s: Missing expected data (Key: %s).",
            entry.entry_id,
            e,
        )
        return

    async_add_entities(
        [
            MinecraftServerOccupancySensor(
                coordinator, OCCUPANCY_DESCRIPTION, server_identifier
            ),
            MinecraftServerStatusSensor(
                coordinator, STATUS_DESCRIPTION, server_identifier
            ),
        ]
    )


class MinecraftServerBinarySensor(
    CoordinatorEntity[ServerStatusCoordinator], BinarySensorEntity
):
    """Base class for binary sensors backed by a ServerStatusCoordinator."""

    _attr_has_entity_name = True

    def __init__(
        self,
        coordinator: ServerStatusCoordinator,
        description: BinarySensorEntityDescription,
        server_identifier: Tuple[str, str],
    ) -> None:
        """Initialize the binary sensor."""
        super().__init__(coordinator)
        self.entity_description = description
        self._attr_unique_id = f"{server_identifier[1]}_{description.key}"
        self._attr_device_info = DeviceInfo(
            identifiers={server_identifier},
            name=coordinator.config.name,
            manufacturer=MANUFACTURER,
            model=MODEL,
            sw_version=SOFTWARE_VERSION,
        )


class MinecraftServerOccupancySensor(MinecraftServerBinarySensor):
    """Reports whether any players are on the server."""

    @property
    def is_on(self) -> Optional[bool]:
        state = self.coordinator.occupancy
        _LOGGER.debug(
            "Yielding server “%s” occupancy: [%s]",
            self.coordinator.config.name,
            occupancy_description(state),
        )
        if state == OccupancyState.UNKNOWN:
            return None
        return state == OccupancyState.DETECTED

    @property
    def extra_state_attributes(self) -> Dict[str, Any]:
        return {
            ATTR_PLAYERS_ONLINE: self.coordinator.players_online,
            ATTR_SERVER_ADDRESS: self.coordinator.server_address,
            ATTR_SERVER_TYPE: self.coordinator.config.server_type.value,
        }


class MinecraftServerStatusSensor(MinecraftServerBinarySensor):
    """Reports a problem while the status API says the server is offline."""

    @property
    def is_on(self) -> Optional[bool]:
        state = self.coordinator.fault
        _LOGGER.debug(
            "Yielding server “%s” status: [%s]",
            self.coordinator.config.name,
            fault_description(state),
        )
        if state == FaultState.UNKNOWN:
            return None
        return is_fault(state)

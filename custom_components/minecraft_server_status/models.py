# custom_components/minecraft_server_status/models.py
"""Data model for the Minecraft Server Status integration."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from .const import (
    CONF_HOST,
    CONF_NAME,
    CONF_PORT,
    CONF_SERVER_TYPE,
    CONF_UPDATE_INTERVAL,
    DEFAULT_NAME,
    DEFAULT_UPDATE_INTERVAL_MS,
    MIN_UPDATE_INTERVAL_MS,
    SERVER_TYPE_BEDROCK,
    SERVER_TYPE_JAVA,
)


class ServerType(str, Enum):
    """Edition of the Minecraft server being monitored."""

    JAVA = SERVER_TYPE_JAVA
    BEDROCK = SERVER_TYPE_BEDROCK


class OccupancyState(str, Enum):
    """Whether anybody is playing on the server."""

    DETECTED = "detected"
    NOT_DETECTED = "not_detected"
    UNKNOWN = "unknown"


class FaultState(str, Enum):
    """Whether the server is reachable according to the status API."""

    NO_FAULT = "no_fault"
    GENERAL_FAULT = "general_fault"
    UNKNOWN = "unknown"


def effective_update_interval(update_interval: Optional[int]) -> int:
    """Return the poll interval in milliseconds, floored at one minute."""
    if update_interval is None:
        return DEFAULT_UPDATE_INTERVAL_MS
    return max(MIN_UPDATE_INTERVAL_MS, int(update_interval))


@dataclass(frozen=True)
class ServerConfig:
    """Static configuration of one monitored server."""

    name: str
    host: str
    port: int
    server_type: ServerType = ServerType.JAVA
    update_interval: int = DEFAULT_UPDATE_INTERVAL_MS

    def __post_init__(self) -> None:
        if not self.host:
            raise ValueError("Server host must not be empty")
        if isinstance(self.port, bool) or not isinstance(self.port, int):
            raise ValueError(f"Server port must be an integer, got {self.port!r}")
        if not 0 <= self.port <= 65535:
            raise ValueError(f"Server port {self.port} is out of range (0-65535)")
        if not isinstance(self.server_type, ServerType):
            # Raises ValueError for anything other than "java" / "bedrock"
            object.__setattr__(self, "server_type", ServerType(self.server_type))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ServerConfig":
        """Build a config from config entry data."""
        port = data[CONF_PORT]
        if isinstance(port, float) and port.is_integer():
            # Number selectors in the UI hand back floats
            port = int(port)
        update_interval = data.get(CONF_UPDATE_INTERVAL)
        return cls(
            name=data.get(CONF_NAME) or DEFAULT_NAME,
            host=str(data[CONF_HOST]).strip(),
            port=port,
            server_type=ServerType(data.get(CONF_SERVER_TYPE, SERVER_TYPE_JAVA)),
            update_interval=(
                DEFAULT_UPDATE_INTERVAL_MS
                if update_interval is None
                else int(update_interval)
            ),
        )

    @property
    def poll_interval(self) -> int:
        """Effective poll interval in milliseconds."""
        return effective_update_interval(self.update_interval)

    @property
    def poll_interval_seconds(self) -> float:
        return self.poll_interval / 1000


@dataclass(frozen=True)
class ServerStatusSnapshot:
    """One decoded response of the status API."""

    online: bool
    players_online: Optional[int] = None

    @property
    def fault(self) -> FaultState:
        return FaultState.NO_FAULT if self.online else FaultState.GENERAL_FAULT

    @property
    def occupancy(self) -> Optional[OccupancyState]:
        """Occupancy implied by this snapshot, None when the server is offline."""
        if not self.online:
            return None
        if self.players_online:
            return OccupancyState.DETECTED
        return OccupancyState.NOT_DETECTED

# custom_components/minecraft_server_status/utils.py
import logging
from typing import Any, Union

from .models import FaultState, OccupancyState

_LOGGER = logging.getLogger(__name__)


def format_server_address(host: str, port: Union[int, float, str]) -> str:
    """
    Builds the "host:port" address the status API expects.
    IPv6 literals are wrapped in brackets, and a port that arrives as "25565.0"
    (number selectors hand back floats) is converted to "25565".
    """
    host_part = str(host).strip()
    if ":" in host_part and not host_part.startswith("["):
        host_part = f"[{host_part}]"

    port_part = str(port)
    try:
        port_as_float = float(port_part)
        if port_as_float == int(port_as_float):
            port_part = str(int(port_as_float))
        else:
            _LOGGER.debug(
                "Port '%s' for host '%s' has a fractional part, using it as-is.",
                port,
                host,
            )
    except ValueError:
        _LOGGER.debug(
            "Port '%s' for host '%s' is not a valid number, using it as-is.",
            port,
            host,
        )

    return f"{host_part}:{port_part}"


def occupancy_description(state: Any) -> str:
    """Returns a human-readable label for an occupancy state."""
    if state == OccupancyState.DETECTED:
        return "occupied"
    if state == OccupancyState.NOT_DETECTED:
        return "not occupied"
    return "unknown"


def fault_description(state: Any) -> str:
    """Returns a human-readable label for the server's status."""
    if state == FaultState.NO_FAULT:
        return "up"
    if state == FaultState.GENERAL_FAULT:
        return "down"
    return "unknown"


def is_fault(state: Any) -> bool:
    # Unknown is not a fault; it only means nothing has been reported yet
    return state == FaultState.GENERAL_FAULT

# custom_components/minecraft_server_status/api.py
"""API client for the Minecraft Server Status API (api.mcsrvstat.us)."""

import asyncio
import logging
from typing import Any, Dict, List, Union

import aiohttp
import async_timeout

from .const import (
    API_BASE_URL,
    API_BEDROCK_PREFIX,
    API_VERSION,
    DEFAULT_REQUEST_TIMEOUT,
    USER_AGENT,
)
from .models import ServerStatusSnapshot, ServerType
from .utils import format_server_address

_LOGGER = logging.getLogger(__name__)


class McSrvStatError(Exception):
    """Generic status API error."""


class CannotConnectError(McSrvStatError):
    """Error connecting to the status API (DNS, refused connection, timeout)."""


class ApiResponseError(McSrvStatError):
    """The status API answered with an HTTP error status."""

    def __init__(self, status: int, message: str = ""):
        super().__init__(
            f"API Error {status}: {message}" if message else f"API Error {status}"
        )
        self.status = status


class InvalidResponseError(McSrvStatError):
    """The status API answered with a body we cannot interpret."""


class McSrvStatApiClient:
    """Class to communicate with the Minecraft Server Status API."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        base_url: str = API_BASE_URL,
        api_version: str = API_VERSION,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ):
        """Initialize the API client."""
        self._session = session
        self._base_url = base_url.rstrip("/")
        self._api_version = str(api_version)
        self._request_timeout = request_timeout
        self._headers = {"Accept": "application/json", "User-Agent": USER_AGENT}

    @property
    def base_url(self) -> str:
        return self._base_url

    def build_status_path(
        self, host: str, port: Union[int, str], server_type: ServerType
    ) -> str:
        """Build the API path for a server from its dynamic segments."""
        path: List[str] = []

        if ServerType(server_type) is ServerType.BEDROCK:
            path.append(API_BEDROCK_PREFIX)

        path.append(self._api_version)
        path.append(format_server_address(host, port))

        return "/".join(path)

    async def _request(self, path: str) -> Dict[str, Any]:
        """Issue a GET request and decode the JSON object it returns."""
        url = f"{self._base_url}/{path}"
        _LOGGER.debug("Making API request to: %s", url)
        try:
            async with async_timeout.timeout(self._request_timeout):
                async with self._session.get(url, headers=self._headers) as response:
                    _LOGGER.debug(
                        "API Raw Response Status for %s: %s", path, response.status
                    )
                    if response.status >= 400:
                        resp_text = await response.text()
                        _LOGGER.debug(
                            "API request failed for %s [%s]: %s",
                            path,
                            response.status,
                            resp_text[:200],
                        )
                        raise ApiResponseError(response.status, resp_text[:200])

                    try:
                        # The API does not always send an application/json content type
                        json_response = await response.json(content_type=None)
                    except ValueError as err:
                        raise InvalidResponseError(
                            f"Response for {path} was not valid JSON: {err}"
                        ) from err

        except asyncio.TimeoutError as err:
            raise CannotConnectError(
                f"Timeout after {self._request_timeout}s requesting {url}"
            ) from err
        except aiohttp.ClientError as err:
            raise CannotConnectError(f"Connection Error: {err}") from err

        if not isinstance(json_response, dict):
            raise InvalidResponseError(
                f"Expected a JSON object for {path}, got {type(json_response).__name__}"
            )
        return json_response

    async def async_get_status(
        self, host: str, port: Union[int, str], server_type: ServerType
    ) -> ServerStatusSnapshot:
        """Query the status API for a server and decode the result."""
        path = self.build_status_path(host, port, server_type)
        return parse_status_response(await self._request(path))


def parse_status_response(data: Dict[str, Any]) -> ServerStatusSnapshot:
    """Decode the fields we use from a status API response."""
    online = data.get("online")
    if not isinstance(online, bool):
        raise InvalidResponseError(f"Missing or non-boolean 'online' field: {online!r}")

    if not online:
        return ServerStatusSnapshot(online=False)

    players = data.get("players")
    players_online = players.get("online") if isinstance(players, dict) else None
    if (
        isinstance(players_online, bool)
        or not isinstance(players_online, int)
        or players_online < 0
    ):
        raise InvalidResponseError(
            f"Online server reported an invalid player count: {players!r}"
        )

    return ServerStatusSnapshot(online=True, players_online=players_online)

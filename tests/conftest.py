"""Pytest fixtures for Minecraft Server Status tests."""

from typing import Any, List, Optional

import pytest

from custom_components.minecraft_server_status.const import (
    CONF_HOST,
    CONF_NAME,
    CONF_PORT,
    CONF_SERVER_TYPE,
    CONF_UPDATE_INTERVAL,
)
from custom_components.minecraft_server_status.models import ServerConfig, ServerType

USER_INPUT = {
    CONF_NAME: "Survival",
    CONF_HOST: "mc.example.com",
    CONF_PORT: 25565,
    CONF_SERVER_TYPE: "java",
    CONF_UPDATE_INTERVAL: 60000,
}


class FakeResponse:
    """Stand-in for an aiohttp response used as an async context manager."""

    def __init__(
        self,
        status: int = 200,
        payload: Any = None,
        text: str = "",
        json_error: Optional[Exception] = None,
    ):
        self.status = status
        self._payload = payload
        self._text = text
        self._json_error = json_error

    async def json(self, content_type: Optional[str] = "application/json") -> Any:
        if self._json_error is not None:
            raise self._json_error
        return self._payload

    async def text(self) -> str:
        return self._text

    async def __aenter__(self) -> "FakeResponse":
        return self

    async def __aexit__(self, *exc_info) -> bool:
        return False


class FakeSession:
    """Records GET requests and replays queued responses or exceptions."""

    def __init__(self, *responses: Any):
        self._responses: List[Any] = list(responses)
        self.requests: List[tuple] = []

    def get(self, url: str, **kwargs: Any) -> FakeResponse:
        self.requests.append((url, kwargs))
        item = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(item, BaseException):
            raise item
        return item


class StubApiClient:
    """API client double that returns queued snapshots or raises queued errors."""

    base_url = "https://api.mcsrvstat.us"

    def __init__(self, *results: Any):
        self._results: List[Any] = list(results)
        self.calls = 0
        self.gate = None

    def queue(self, *results: Any) -> None:
        self._results = list(results)

    async def async_get_status(self, host, port, server_type):
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        result = self._results.pop(0) if len(self._results) > 1 else self._results[0]
        if isinstance(result, BaseException):
            raise result
        return result


@pytest.fixture
def server_config() -> ServerConfig:
    return ServerConfig(
        name="Survival",
        host="mc.example.com",
        port=25565,
        server_type=ServerType.JAVA,
        update_interval=60000,
    )

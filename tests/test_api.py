"""Unit tests for the mcsrvstat.us API client."""

import asyncio
import json

import aiohttp
import pytest

from custom_components.minecraft_server_status.api import (
    ApiResponseError,
    CannotConnectError,
    InvalidResponseError,
    McSrvStatApiClient,
    parse_status_response,
)
from custom_components.minecraft_server_status.const import USER_AGENT
from custom_components.minecraft_server_status.models import (
    ServerStatusSnapshot,
    ServerType,
)

from .conftest import FakeResponse, FakeSession


def _client(*responses) -> McSrvStatApiClient:
    return McSrvStatApiClient(session=FakeSession(*responses))


class TestBuildStatusPath:
    def test_java(self):
        client = _client(FakeResponse())
        path = client.build_status_path("mc.example.com", 25565, ServerType.JAVA)
        assert path == "3/mc.example.com:25565"

    def test_bedrock_is_prefixed(self):
        client = _client(FakeResponse())
        path = client.build_status_path("mc.example.com", 25565, ServerType.BEDROCK)
        assert path == "bedrock/3/mc.example.com:25565"

    def test_accepts_plain_strings(self):
        client = _client(FakeResponse())
        assert client.build_status_path("h", 1, "bedrock") == "bedrock/3/h:1"

    def test_ipv6_host(self):
        client = _client(FakeResponse())
        assert client.build_status_path("::1", 25565, "java") == "3/[::1]:25565"


class TestGetStatus:
    async def test_online_server(self):
        session = FakeSession(
            FakeResponse(payload={"online": True, "players": {"online": 3, "max": 20}})
        )
        client = McSrvStatApiClient(session=session)

        snapshot = await client.async_get_status("mc.example.com", 25565, ServerType.JAVA)

        assert snapshot == ServerStatusSnapshot(online=True, players_online=3)
        url, kwargs = session.requests[0]
        assert url == "https://api.mcsrvstat.us/3/mc.example.com:25565"
        assert kwargs["headers"]["User-Agent"] == USER_AGENT

    async def test_offline_server(self):
        session = FakeSession(FakeResponse(payload={"online": False}))
        client = McSrvStatApiClient(session=session)

        snapshot = await client.async_get_status("mc.example.com", 19132, "bedrock")

        assert snapshot == ServerStatusSnapshot(online=False)
        assert session.requests[0][0] == (
            "https://api.mcsrvstat.us/bedrock/3/mc.example.com:19132"
        )

    async def test_custom_base_url(self):
        session = FakeSession(FakeResponse(payload={"online": False}))
        client = McSrvStatApiClient(session=session, base_url="http://localhost:8080/")

        await client.async_get_status("h", 1, "java")

        assert session.requests[0][0] == "http://localhost:8080/3/h:1"

    async def test_http_error_raises(self):
        client = _client(FakeResponse(status=500, text="Internal Server Error"))
        with pytest.raises(ApiResponseError) as exc_info:
            await client.async_get_status("h", 1, "java")
        assert exc_info.value.status == 500

    async def test_connection_error_raises(self):
        client = _client(aiohttp.ClientConnectionError("refused"))
        with pytest.raises(CannotConnectError):
            await client.async_get_status("h", 1, "java")

    async def test_timeout_raises(self):
        client = _client(asyncio.TimeoutError())
        with pytest.raises(CannotConnectError):
            await client.async_get_status("h", 1, "java")

    async def test_malformed_json_raises(self):
        client = _client(
            FakeResponse(json_error=json.JSONDecodeError("Expecting value", "<html>", 0))
        )
        with pytest.raises(InvalidResponseError):
            await client.async_get_status("h", 1, "java")

    async def test_non_object_json_raises(self):
        client = _client(FakeResponse(payload=["online"]))
        with pytest.raises(InvalidResponseError):
            await client.async_get_status("h", 1, "java")


class TestParseStatusResponse:
    def test_zero_players(self):
        snapshot = parse_status_response({"online": True, "players": {"online": 0}})
        assert snapshot.players_online == 0

    def test_offline_ignores_players(self):
        snapshot = parse_status_response({"online": False, "players": {"online": 4}})
        assert snapshot == ServerStatusSnapshot(online=False)

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"online": "yes"},
            {"online": True},
            {"online": True, "players": {}},
            {"online": True, "players": {"online": -1}},
            {"online": True, "players": {"online": "3"}},
            {"online": True, "players": 3},
        ],
    )
    def test_invalid_payloads_raise(self, payload):
        with pytest.raises(InvalidResponseError):
            parse_status_response(payload)

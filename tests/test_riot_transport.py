"""Unit tests for the Riot HTTP transport and status mapping."""

import asyncio
import logging

import aiohttp
import pytest

from helpers import FakeResponse, FakeSession
from utils.riot_credentials import CredentialStore
from utils.riot_errors import (
    APIUnavailableError,
    ErrorKind,
    PlayerNotFoundError,
    RateLimitError,
    TransportError,
    UnauthenticatedError,
    error_for_status,
)
from utils.riot_transport import RiotTransport

URL = "https://na1.api.riotgames.com/lol/summoner/v4/summoners/by-puuid/abc"


@pytest.mark.parametrize(
    "status,kind",
    [
        (400, ErrorKind.INVALID_REQUEST),
        (401, ErrorKind.UNAUTHENTICATED),
        (403, ErrorKind.FORBIDDEN),
        (404, ErrorKind.NOT_FOUND),
        (429, ErrorKind.RATE_LIMITED),
        (500, ErrorKind.UPSTREAM_INTERNAL),
        (503, ErrorKind.UPSTREAM_UNAVAILABLE),
        (418, ErrorKind.UNKNOWN),
    ],
)
def test_error_for_status_maps_kind(status, kind):
    error = error_for_status(status)

    assert error.kind is kind
    assert error.http_status == status
    assert isinstance(error, TransportError)


def test_error_for_status_messages():
    assert error_for_status(404).message == "Not Found - Player not found"
    assert error_for_status(418).message == "API Error 418"
    assert error_for_status(403, "Forbidden by policy").message == "Forbidden by policy"


class TestRiotTransport:
    @pytest.mark.asyncio
    async def test_missing_key_fails_before_network(self, empty_credentials):
        session = FakeSession()
        transport = RiotTransport(empty_credentials, session=session)

        with pytest.raises(UnauthenticatedError) as exc_info:
            await transport.execute(URL)

        assert exc_info.value.kind is ErrorKind.UNAUTHENTICATED
        assert exc_info.value.http_status is None
        assert session.calls == []

    @pytest.mark.asyncio
    async def test_success_returns_json_and_sends_token(self, credentials):
        session = FakeSession(FakeResponse(200, {"id": "summ-1"}))
        transport = RiotTransport(credentials, session=session)

        body = await transport.execute(URL, {"params": {"count": 1}})

        assert body == {"id": "summ-1"}
        call = session.calls[0]
        assert call["url"] == URL
        assert call["headers"]["X-Riot-Token"] == "RGAPI-test-key"
        assert call["params"] == {"count": 1}

    @pytest.mark.asyncio
    async def test_key_change_is_picked_up_on_next_call(self):
        store = CredentialStore("old-key")
        session = FakeSession(FakeResponse(200, {}), FakeResponse(200, {}))
        transport = RiotTransport(store, session=session)

        await transport.execute(URL)
        store.set("new-key")
        await transport.execute(URL)

        assert [c["headers"]["X-Riot-Token"] for c in session.calls] == [
            "old-key",
            "new-key",
        ]

    @pytest.mark.asyncio
    async def test_server_message_preferred(self, credentials):
        body = {"status": {"message": "Data not found - summoner", "status_code": 404}}
        session = FakeSession(FakeResponse(404, body))
        transport = RiotTransport(credentials, session=session)

        with pytest.raises(PlayerNotFoundError) as exc_info:
            await transport.execute(URL)

        assert exc_info.value.message == "Data not found - summoner"
        assert exc_info.value.http_status == 404

    @pytest.mark.asyncio
    async def test_canned_message_when_body_is_not_json(self, credentials):
        session = FakeSession(FakeResponse(503))
        transport = RiotTransport(credentials, session=session)

        with pytest.raises(APIUnavailableError) as exc_info:
            await transport.execute(URL)

        assert exc_info.value.kind is ErrorKind.UPSTREAM_UNAVAILABLE
        assert exc_info.value.message == "Service Unavailable - Riot API maintenance"

    @pytest.mark.asyncio
    async def test_rate_limited_reads_retry_after(self, credentials, caplog):
        session = FakeSession(FakeResponse(429, {}, headers={"Retry-After": "7"}))
        transport = RiotTransport(credentials, session=session)

        with caplog.at_level(logging.ERROR, logger="RiotTransport"):
            with pytest.raises(RateLimitError) as exc_info:
                await transport.execute(URL)

        assert exc_info.value.retry_after == 7.0
        assert exc_info.value.kind is ErrorKind.RATE_LIMITED
        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "Upstream rate limit" in errors[0].getMessage()
        assert "retry after 7.0s" in errors[0].getMessage()

    @pytest.mark.asyncio
    async def test_unknown_status_keeps_code(self, credentials):
        session = FakeSession(FakeResponse(502, {"message": "Bad gateway"}))
        transport = RiotTransport(credentials, session=session)

        with pytest.raises(TransportError) as exc_info:
            await transport.execute(URL)

        assert exc_info.value.kind is ErrorKind.UNKNOWN
        assert exc_info.value.http_status == 502
        assert exc_info.value.message == "Bad gateway"

    @pytest.mark.asyncio
    async def test_network_error_maps_to_unavailable(self, credentials):
        session = FakeSession(aiohttp.ClientConnectionError("connection reset"))
        transport = RiotTransport(credentials, session=session)

        with pytest.raises(APIUnavailableError) as exc_info:
            await transport.execute(URL)

        assert exc_info.value.http_status is None

    @pytest.mark.asyncio
    async def test_timeout_maps_to_unavailable(self, credentials):
        session = FakeSession(asyncio.TimeoutError())
        transport = RiotTransport(credentials, session=session)

        with pytest.raises(APIUnavailableError, match="timed out"):
            await transport.execute(URL)

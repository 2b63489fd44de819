"""Unit tests for the simulated ranked data client."""

import random

import pytest

from constants.league_config import DIVISION_ORDER, LEAGUE_CONFIG
from utils.league_models import TrackedPlayer
from utils.mock_riot_client import MockRiotApiClient
from utils.riot_errors import ErrorKind, InvalidRequestError, InvalidRiotIdError

MOCK_TIERS = set(LEAGUE_CONFIG["mock"]["tiers"])


@pytest.fixture
def client(no_sleep):
    return MockRiotApiClient(rng=random.Random(42), sleep=no_sleep)


@pytest.mark.asyncio
async def test_ranked_info_has_valid_shape(client, no_sleep):
    info = await client.get_ranked_info("SomeOne#EUW", "euw1")

    assert no_sleep.calls == [0.5]
    assert info.riot_id == "SomeOne#EUW"
    assert info.summoner_name == "SomeOne"
    assert info.puuid == "puuid_someone"
    assert info.summoner_id == "summoner_someone"
    assert info.tier in MOCK_TIERS
    assert info.rank in DIVISION_ORDER
    assert 0 <= info.league_points <= 100
    assert 30 <= info.summoner_level <= 200
    assert info.last_updated


@pytest.mark.asyncio
async def test_seeded_player_keeps_its_tier(client):
    info = await client.get_ranked_info("Player1#NA1", "na1")

    assert (info.tier, info.rank) == ("GOLD", "IV")
    assert info.wins >= 25
    assert info.losses >= 18


@pytest.mark.asyncio
async def test_seed_data_is_not_shared_between_clients(no_sleep):
    first = MockRiotApiClient(rng=random.Random(1), sleep=no_sleep)
    second = MockRiotApiClient(rng=random.Random(1), sleep=no_sleep)

    first.mock_data["player0"]["wins"] = 999

    assert second.mock_data["player0"]["wins"] == 12
    assert LEAGUE_CONFIG["mock"]["seed_players"][0]["wins"] == 12


@pytest.mark.asyncio
async def test_record_drifts_within_bounds(client):
    previous = await client.get_ranked_info("Drifter#NA1", "na1")

    for _ in range(50):
        current = await client.get_ranked_info("drifter#NA1", "na1")
        assert previous.wins <= current.wins <= previous.wins + 2
        assert previous.losses <= current.losses <= previous.losses + 1
        assert 0 <= current.league_points <= 100
        assert current.tier == previous.tier
        previous = current


@pytest.mark.asyncio
async def test_lookup_is_keyed_case_insensitively(client):
    await client.get_ranked_info("CaseTest#NA1", "na1")
    await client.get_ranked_info("casetest#NA1", "na1")

    assert "casetest" in client.mock_data
    assert "CaseTest" not in client.mock_data


@pytest.mark.asyncio
async def test_invalid_riot_id_is_rejected(client):
    with pytest.raises(InvalidRiotIdError):
        await client.get_ranked_info("no-separator", "na1")


@pytest.mark.asyncio
async def test_in_game_uses_its_own_latency(client, no_sleep):
    player = TrackedPlayer("Someone", "NA1", "na1")

    results = [await client.is_in_game(player) for _ in range(200)]

    assert set(no_sleep.calls) == {0.2}
    assert all(isinstance(r, bool) for r in results)
    # roughly one in ten checks reports a live game
    assert 0 < sum(results) < 60


def test_key_handling_is_inert(client):
    client.set_api_key("anything")

    assert client.has_api_key() is True
    assert client.get_api_key() == "mock_api_key"


@pytest.mark.asyncio
async def test_unknown_region_is_rejected_like_the_real_client(client):
    with pytest.raises(InvalidRequestError) as exc_info:
        await client.get_ranked_info("a#b", "zz9")

    assert exc_info.value.kind is ErrorKind.INVALID_REQUEST
    assert "a" not in client.mock_data


@pytest.mark.asyncio
async def test_in_game_check_rejects_unknown_region(client):
    with pytest.raises(InvalidRequestError):
        await client.is_in_game(TrackedPlayer("Someone", "NA1", "zz9"))


@pytest.mark.asyncio
async def test_update_player_does_not_cache_synthetic_summoner_id(client):
    player = TrackedPlayer("Someone", "NA1", "na1", summoner_id="stale")

    await client.update_player(player)

    assert player.tier in MOCK_TIERS
    assert player.summoner_id is None

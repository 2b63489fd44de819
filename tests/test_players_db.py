"""Tests for the tracked player and settings tables against in-memory SQLite."""

from pathlib import Path

import aiosqlite
import pytest
import pytest_asyncio

from database import DatabaseManager
from utils.league_models import TrackedPlayer

SCHEMA = Path(__file__).parent.parent / "database" / "schema.sql"


@pytest_asyncio.fixture
async def database():
    connection = await aiosqlite.connect(":memory:")
    await connection.executescript(SCHEMA.read_text(encoding="utf-8"))
    manager = DatabaseManager(connection=connection)
    yield manager
    await manager.close()


def gold_player(**overrides):
    data = dict(
        name="Foo",
        tag="EUW",
        region="euw1",
        tier="GOLD",
        division="II",
        lp=55,
        wins=30,
        losses=25,
        summoner_id="summ-1",
        summoner_level=321,
        hot_streak=True,
        last_updated="2024-05-01T10:00:00+00:00",
    )
    data.update(overrides)
    return TrackedPlayer(**data)


async def load_players(database):
    return {p.riot_id: p for p in await database.players_db.get_all_players()}


class TestPlayersDatabase:
    @pytest.mark.asyncio
    async def test_save_and_load(self, database):
        await database.players_db.save_player(gold_player())

        loaded = await load_players(database)

        assert loaded == {"Foo#EUW": gold_player()}
        assert loaded["Foo#EUW"].hot_streak is True
        assert loaded["Foo#EUW"].veteran is False

    @pytest.mark.asyncio
    async def test_display_casing_survives_reload(self, database):
        await database.players_db.save_player(TrackedPlayer("Hide on bush", "KR1", "kr"))

        (player,) = await database.players_db.get_all_players()

        assert player.riot_id == "Hide on bush#KR1"

    @pytest.mark.asyncio
    async def test_empty_table(self, database):
        assert await database.players_db.get_all_players() == []

    @pytest.mark.asyncio
    async def test_save_updates_existing_row_case_insensitively(self, database):
        await database.players_db.save_player(gold_player())
        await database.players_db.save_player(gold_player(name="FOO", lp=80, wins=31))

        loaded = await database.players_db.get_all_players()

        assert len(loaded) == 1
        assert loaded[0].lp == 80
        assert loaded[0].wins == 31
        assert loaded[0].riot_id == "FOO#EUW"

    @pytest.mark.asyncio
    async def test_unranked_player_round_trip(self, database):
        await database.players_db.save_player(TrackedPlayer("New", "NA1", "na1"))

        loaded = (await load_players(database))["New#NA1"]

        assert loaded.tier is None
        assert loaded.division is None
        assert loaded.last_updated is None

    @pytest.mark.asyncio
    async def test_missing_tag_rejected(self, database):
        with pytest.raises(ValueError):
            await database.players_db.save_player(TrackedPlayer("Foo", "", "na1"))

    @pytest.mark.asyncio
    async def test_batch_save_and_list(self, database):
        players = [
            gold_player(name="b"),
            gold_player(name="A", tier="SILVER"),
            gold_player(name="c", tier=None, division=None, lp=0),
        ]

        await database.players_db.batch_save_players(players)
        loaded = await database.players_db.get_all_players()

        assert [p.name for p in loaded] == ["A", "b", "c"]
        assert loaded[0].tier == "SILVER"

    @pytest.mark.asyncio
    async def test_delete_ignores_case(self, database):
        await database.players_db.save_player(gold_player())

        assert await database.players_db.delete_player("foo", "euw") is True
        assert await database.players_db.delete_player("Foo", "EUW") is False
        assert await database.players_db.get_all_players() == []


class TestSettingsDatabase:
    @pytest.mark.asyncio
    async def test_api_key_round_trip(self, database):
        assert await database.settings_db.get_riot_api_key() is None

        await database.settings_db.save_riot_api_key("RGAPI-1")
        await database.settings_db.save_riot_api_key("RGAPI-2")

        assert await database.settings_db.get_riot_api_key() == "RGAPI-2"

    @pytest.mark.asyncio
    async def test_empty_key_removes_setting(self, database):
        await database.settings_db.save_riot_api_key("RGAPI-1")

        await database.settings_db.save_riot_api_key(None)

        assert await database.settings_db.get_riot_api_key() is None

from __future__ import annotations

from typing import List, Tuple

import aiosqlite
from logger import setup_logger
from utils.database_errors import db_error_handler
from utils.league_models import TrackedPlayer

logger = setup_logger("PlayersDatabaseManager")

# Riot IDs keep their display casing; lookups go through the lowercased keys
PLAYER_COLUMNS = (
    "name",
    "tag",
    "region",
    "tier",
    "division",
    "lp",
    "wins",
    "losses",
    "summoner_id",
    "summoner_level",
    "veteran",
    "inactive",
    "fresh_blood",
    "hot_streak",
    "last_updated",
)
KEY_COLUMNS = ("name_key", "tag_key")

UPSERT_PLAYER = f"""
    INSERT INTO league_players ({", ".join(KEY_COLUMNS + PLAYER_COLUMNS)})
    VALUES ({", ".join("?" for _ in KEY_COLUMNS + PLAYER_COLUMNS)})
    ON CONFLICT(name_key, tag_key) DO UPDATE SET
        {", ".join(f"{col} = excluded.{col}" for col in PLAYER_COLUMNS)}
"""


def player_key(name: str, tag: str) -> Tuple[str, str]:
    return name.lower(), tag.lower()


def _player_params(player: TrackedPlayer) -> tuple:
    data = player.to_dict()
    for flag in ("veteran", "inactive", "fresh_blood", "hot_streak"):
        data[flag] = int(bool(data[flag]))
    return player_key(player.name, player.tag) + tuple(
        data[col] for col in PLAYER_COLUMNS
    )


class PlayersDatabaseManager:
    def __init__(self, connection: aiosqlite.Connection, db_manager):
        self.connection = connection
        self.db_manager = db_manager

    @db_error_handler
    async def get_all_players(self) -> List[TrackedPlayer]:
        """Get every tracked player."""
        async with self.connection.execute(
            f"SELECT {', '.join(PLAYER_COLUMNS)} FROM league_players "
            "ORDER BY name_key, tag_key"
        ) as cursor:
            rows = await cursor.fetchall()
            columns = [col[0] for col in cursor.description]
            return [TrackedPlayer.from_row(dict(zip(columns, row))) for row in rows]

    @db_error_handler
    async def save_player(self, player: TrackedPlayer) -> None:
        """Insert or update a tracked player."""
        if not player.name or not player.tag:
            raise ValueError("Both name and tag are required.")

        async with self.db_manager.transaction():
            await self.connection.execute(UPSERT_PLAYER, _player_params(player))

    @db_error_handler
    async def batch_save_players(self, players: List[TrackedPlayer]) -> None:
        """Insert or update several players in one transaction."""
        if not players:
            return

        async with self.db_manager.transaction():
            await self.connection.executemany(
                UPSERT_PLAYER, [_player_params(p) for p in players]
            )

    @db_error_handler
    async def delete_player(self, name: str, tag: str) -> bool:
        """Delete a specific player from the database."""
        name_key, tag_key = player_key(name, tag)

        async with self.db_manager.transaction():
            cursor = await self.connection.execute(
                "DELETE FROM league_players WHERE name_key = ? AND tag_key = ?",
                (name_key, tag_key),
            )
            return cursor.rowcount > 0

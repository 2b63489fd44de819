from typing import Optional

import aiosqlite
from logger import setup_logger
from utils.database_errors import db_error_handler

logger = setup_logger("SettingsDatabaseManager")

RIOT_API_KEY_SETTING = "riot_api_key"


class SettingsDatabaseManager:
    def __init__(self, connection: aiosqlite.Connection, db_manager):
        self.connection = connection
        self.db_manager = db_manager

    @db_error_handler
    async def get_setting(self, key: str) -> Optional[str]:
        async with self.connection.execute(
            "SELECT value FROM bot_settings WHERE key = ?", (key,)
        ) as cursor:
            row = await cursor.fetchone()
            return row[0] if row else None

    @db_error_handler
    async def set_setting(self, key: str, value: Optional[str]) -> None:
        async with self.db_manager.transaction():
            await self.connection.execute(
                """
                INSERT INTO bot_settings (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (key, value),
            )

    @db_error_handler
    async def delete_setting(self, key: str) -> bool:
        async with self.db_manager.transaction():
            cursor = await self.connection.execute(
                "DELETE FROM bot_settings WHERE key = ?", (key,)
            )
            return cursor.rowcount > 0

    async def get_riot_api_key(self) -> Optional[str]:
        return await self.get_setting(RIOT_API_KEY_SETTING)

    async def save_riot_api_key(self, api_key: Optional[str]) -> None:
        if api_key:
            await self.set_setting(RIOT_API_KEY_SETTING, api_key)
        else:
            await self.delete_setting(RIOT_API_KEY_SETTING)
            logger.info("Removed stored Riot API key")

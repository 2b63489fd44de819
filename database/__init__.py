from contextlib import asynccontextmanager

import aiosqlite
from logger import setup_logger

from .players_db import PlayersDatabaseManager
from .settings_db import SettingsDatabaseManager

logger = setup_logger("DatabaseManagerBase")


class DatabaseManager:
    def __init__(self, *, connection: aiosqlite.Connection) -> None:
        self.connection = connection
        self.connection.row_factory = aiosqlite.Row

        # League Database
        self.players_db = PlayersDatabaseManager(connection, self)

        # Bot Settings Database
        self.settings_db = SettingsDatabaseManager(connection, self)

    @asynccontextmanager
    async def transaction(self):
        """Commit on success, roll back on any error."""
        try:
            yield self.connection
            await self.connection.commit()
        except Exception:
            await self.connection.rollback()
            raise

    async def close(self) -> None:
        await self.connection.close()

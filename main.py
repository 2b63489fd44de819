import os
from datetime import datetime
from pathlib import Path

import aiosqlite
import discord
from discord.ext import commands
from dotenv import load_dotenv

from database import DatabaseManager
from logger import setup_logger
from utils.league_player_cache import LeaguePlayerCache
from utils.riot_api_client import RiotApiClient
from utils.riot_api_manager import RiotApiManager
from utils.riot_credentials import CredentialStore

load_dotenv()

logger = setup_logger("Rankbot")

BASE_DIR = Path(__file__).resolve().parent
DATABASE_DIR = BASE_DIR / "database"
DATABASE_PATH = DATABASE_DIR / "database.db"
DEV_GUILD_ID = int(os.getenv("DEV_GUILD_ID") or 0)


class RankBot(commands.Bot):
    def __init__(self):
        super().__init__(
            command_prefix="`",
            intents=discord.Intents.default(),
            help_command=None,
        )
        self.logger = logger
        self.database = None
        self.start_time = datetime.now()
        self.league_players = LeaguePlayerCache()
        self.league_api = RiotApiManager(
            real_client=RiotApiClient(credentials=CredentialStore.from_env())
        )

    async def init_db(self) -> None:
        schema = (DATABASE_DIR / "schema.sql").read_text(encoding="utf-8")
        async with aiosqlite.connect(DATABASE_PATH) as db:
            await db.executescript(schema)
            await db.commit()

    async def load_cogs(self) -> None:
        """Load every cog module under cogs/, logging one line per package."""
        extensions = sorted(
            ".".join(path.with_suffix("").relative_to(BASE_DIR).parts)
            for path in (BASE_DIR / "cogs").rglob("*.py")
            if not path.name.startswith("_")
        )

        loaded_packages = set()
        failed = []
        for extension in extensions:
            try:
                await self.load_extension(extension)
            except commands.ExtensionError as e:
                failed.append(extension)
                self.logger.error(f"Failed to load extension {extension}: {e}")
                continue
            package = extension.rsplit(".", 1)[0]
            if package not in loaded_packages:
                loaded_packages.add(package)
                self.logger.info(f"Loaded {package} cog.")

        if failed:
            self.logger.error(f"{len(failed)} cog(s) failed to load: {', '.join(failed)}")

    async def sync_commands(self) -> None:
        """Sync slash commands to the dev guild when set, globally otherwise."""
        if DEV_GUILD_ID:
            guild = discord.Object(id=DEV_GUILD_ID)
            self.tree.copy_global_to(guild=guild)
            synced = await self.tree.sync(guild=guild)
            self.logger.info(f"Synced {len(synced)} commands to guild {DEV_GUILD_ID}")
        else:
            synced = await self.tree.sync()
            self.logger.info(f"Synced {len(synced)} commands globally")

    async def load_tracked_players(self) -> None:
        players = await self.database.players_db.get_all_players()
        await self.league_players.batch_set(players)
        self.logger.info(f"Loaded {len(players)} tracked League players from DB.")

    async def restore_api_key(self) -> None:
        """Use the stored key when the environment does not provide one."""
        if self.league_api.real_client.has_api_key():
            return
        stored_key = await self.database.settings_db.get_riot_api_key()
        if stored_key:
            self.league_api.set_api_key(stored_key)
            self.logger.info("Restored Riot API key from database")

    async def setup_hook(self) -> None:
        await self.init_db()
        self.database = DatabaseManager(connection=await aiosqlite.connect(DATABASE_PATH))
        await self.restore_api_key()
        await self.load_tracked_players()
        await self.load_cogs()
        await self.sync_commands()

    async def on_ready(self) -> None:
        mode = "mock" if self.league_api.is_using_mock_api() else "real"
        self.logger.info(
            f"Logged in as {self.user} (ID: {self.user.id}) at "
            f"{datetime.now():%Y-%m-%d %H:%M:%S}, "
            f"ping {round(self.latency * 1000)} ms, Riot API mode: {mode}"
        )
        activity = discord.Game(name="Ranked Solo/Duo")
        await self.change_presence(status=discord.Status.online, activity=activity)

    async def close(self) -> None:
        await self.league_api.close()
        if self.database:
            await self.database.close()
        await super().close()


if __name__ == "__main__":
    try:
        RankBot().run(os.getenv("TOKEN"))
    except discord.LoginFailure:
        logger.error("Invalid token provided. Please check your .env file.")

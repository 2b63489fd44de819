import discord
from constants.league_config import LEAGUE_CONFIG
from discord import app_commands
from discord.ext import commands
from logger import setup_logger
from utils.embed_builders import build_ranked_embed
from utils.league_helpers import region_autocomplete, riot_id_autocomplete
from utils.league_models import parse_riot_id
from utils.riot_errors import ErrorKind, RiotAPIError

logger = setup_logger("LeagueLookup")

DEFAULT_REGION = LEAGUE_CONFIG["defaults"]["region"]


class LeagueLookup(commands.Cog):
    """One-off ranked lookups that do not touch the tracked player list."""

    def __init__(self, bot):
        self.bot = bot
        self.api = bot.league_api

    @app_commands.command(
        name="lol-rank", description="Look up a player's solo queue rank."
    )
    @app_commands.describe(
        riot_id="Riot ID in name#tag form", region="Platform region (e.g. na1)"
    )
    @app_commands.autocomplete(riot_id=riot_id_autocomplete, region=region_autocomplete)
    async def lol_rank(
        self,
        interaction: discord.Interaction,
        riot_id: str,
        region: str = DEFAULT_REGION,
    ):
        await interaction.response.defer(thinking=True)

        try:
            info = await self.api.get_ranked_info(riot_id.strip(), region.lower())
        except RiotAPIError as e:
            if e.kind is ErrorKind.NOT_FOUND:
                return await interaction.followup.send(
                    f"❌ `{riot_id}` was not found in {region.upper()}."
                )
            logger.warning(f"Lookup failed for {riot_id} ({e.kind.value}): {e}")
            return await interaction.followup.send(f"❌ {e.message}")

        embed = build_ranked_embed(info, region, self.api.is_using_mock_api())
        await interaction.followup.send(embed=embed)

    @app_commands.command(
        name="lol-ingame", description="Check whether a tracked player is in a game."
    )
    @app_commands.describe(riot_id="Tracked Riot ID in name#tag form")
    @app_commands.autocomplete(riot_id=riot_id_autocomplete)
    async def lol_ingame(self, interaction: discord.Interaction, riot_id: str):
        await interaction.response.defer(thinking=True)

        try:
            parsed = parse_riot_id(riot_id)
        except RiotAPIError as e:
            return await interaction.followup.send(f"❌ {e.message}", ephemeral=True)

        player = await self.bot.league_players.get(parsed.game_name, parsed.tag_line)
        if player is None:
            return await interaction.followup.send(
                f"⚠️ `{riot_id}` is not tracked. Use `/lol-track` first.",
                ephemeral=True,
            )

        try:
            in_game = await self.api.is_in_game(player)
        except RiotAPIError as e:
            logger.warning(f"In-game check failed for {riot_id}: {e}")
            return await interaction.followup.send(f"❌ {e.message}")

        if in_game:
            await interaction.followup.send(f"🎮 **{player.riot_id}** is in a game right now.")
        else:
            await interaction.followup.send(f"💤 **{player.riot_id}** is not in a game.")


async def setup(bot):
    await bot.add_cog(LeagueLookup(bot))

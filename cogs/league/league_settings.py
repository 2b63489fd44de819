import discord
from discord import app_commands
from discord.ext import commands
from logger import setup_logger
from utils.checks import is_owner_check
from utils.embed_builders import build_api_status_embed
from utils.riot_errors import ConfigurationError

logger = setup_logger("LeagueSettings")


class LeagueSettings(commands.Cog):
    """Riot API key and real/mock mode management."""

    def __init__(self, bot):
        self.bot = bot
        self.api = bot.league_api

    @app_commands.command(
        name="lol-apikey", description="Set or clear the Riot API key (owner only)."
    )
    @app_commands.describe(api_key="Riot API key, leave empty to clear it")
    @app_commands.check(is_owner_check)
    async def lol_apikey(self, interaction: discord.Interaction, api_key: str = ""):
        await interaction.response.defer(ephemeral=True)

        api_key = api_key.strip()
        try:
            await self.bot.database.settings_db.save_riot_api_key(api_key or None)
        except Exception as e:
            logger.error(f"Error saving Riot API key: {e}", exc_info=True)
            return await interaction.followup.send(
                "❌ Could not save the API key.", ephemeral=True
            )

        self.api.set_api_key(api_key or None)

        if self.api.is_using_mock_api():
            await interaction.followup.send(
                "🧪 API key cleared. Using simulated data.", ephemeral=True
            )
        else:
            await interaction.followup.send(
                "✅ API key saved. Using the Riot API.", ephemeral=True
            )

    @app_commands.command(
        name="lol-mode", description="Switch between real and simulated data."
    )
    @app_commands.describe(mode="real or mock")
    @app_commands.choices(
        mode=[
            app_commands.Choice(name="Real Riot API", value="real"),
            app_commands.Choice(name="Simulated data", value="mock"),
        ]
    )
    @app_commands.check(is_owner_check)
    async def lol_mode(self, interaction: discord.Interaction, mode: str):
        if mode == "mock":
            self.api.use_mock()
            return await interaction.response.send_message(
                "🧪 Using simulated data.", ephemeral=True
            )

        try:
            self.api.use_real()
        except ConfigurationError as e:
            return await interaction.response.send_message(
                f"❌ {e.message}. Set one with `/lol-apikey`.", ephemeral=True
            )
        await interaction.response.send_message("✅ Using the Riot API.", ephemeral=True)

    @app_commands.command(
        name="lol-api-status", description="Show Riot API mode and request queue stats."
    )
    async def lol_api_status(self, interaction: discord.Interaction):
        stats = self.api.get_stats()
        stats["tracked_players"] = await self.bot.league_players.size()
        embed = build_api_status_embed(stats)
        await interaction.response.send_message(embed=embed, ephemeral=True)

    async def cog_app_command_error(
        self, interaction: discord.Interaction, error: app_commands.AppCommandError
    ):
        if isinstance(error, app_commands.CheckFailure):
            message = "⛔ You are not allowed to use this command."
        else:
            logger.error(f"Error in settings command: {error}", exc_info=True)
            message = "❌ Something went wrong."

        if interaction.response.is_done():
            await interaction.followup.send(message, ephemeral=True)
        else:
            await interaction.response.send_message(message, ephemeral=True)


async def setup(bot):
    await bot.add_cog(LeagueSettings(bot))

from typing import List, Optional

import discord
from constants.league_config import LEAGUE_CONFIG
from discord import app_commands
from discord.ext import commands, tasks
from logger import setup_logger
from utils.checks import is_tracker_admin_check
from utils.embed_builders import build_player_line, build_player_summary
from utils.league_helpers import (
    build_leaderboard,
    region_autocomplete,
    riot_id_autocomplete,
    should_update_player,
)
from utils.league_models import TrackedPlayer, parse_riot_id
from utils.riot_api_client import platform_host
from utils.riot_errors import ErrorKind, RiotAPIError

logger = setup_logger("LeagueTracker")

TRACKER_CONFIG = LEAGUE_CONFIG["tracker"]
DEFAULT_REGION = LEAGUE_CONFIG["defaults"]["region"]


async def refresh_players(api, players: List[TrackedPlayer], force: bool = False):
    """
    Update every player through the API manager.

    Requests are serialized by the scheduler, so players are simply awaited
    one after another. A failed player is logged and skipped.

    Returns:
        Tuple of (updated players, list of (player, error) failures)
    """
    updated = []
    failures = []

    for player in players:
        if not force and not should_update_player(
            player.last_updated, hours=TRACKER_CONFIG["stale_after_hours"]
        ):
            continue
        try:
            await api.update_player(player)
            updated.append(player)
        except RiotAPIError as e:
            if e.kind is ErrorKind.RATE_LIMITED:
                logger.error(f"Upstream rate limit while updating {player.riot_id}")
            failures.append((player, e))

    return updated, failures


class LeagueTracker(commands.Cog):
    """Tracked players, periodic refresh and the leaderboard."""

    def __init__(self, bot):
        self.bot = bot
        self.api = bot.league_api
        self.periodic_update_task.start()

    def cog_unload(self):
        self.periodic_update_task.cancel()

    @tasks.loop(hours=TRACKER_CONFIG["update_interval_hours"])
    async def periodic_update_task(self):
        """Refresh all stale players."""
        try:
            await self.run_update()
        except Exception as e:
            logger.error(f"❌ Error in ranked update: {e}", exc_info=True)

    @periodic_update_task.before_loop
    async def before_periodic_update(self):
        await self.bot.wait_until_ready()
        logger.info("Ranked update task started")

    async def run_update(self, force: bool = False):
        all_players = await self.bot.league_players.get_all()
        players = list(all_players.values())
        if not players:
            logger.info("No players to update")
            return [], []

        logger.info(f"🔄 Updating {len(players)} players (force={force})")
        updated, failures = await refresh_players(self.api, players, force=force)

        if updated:
            await self.bot.database.players_db.batch_save_players(updated)

        for player, error in failures:
            logger.warning(f"Failed to update {player.riot_id}: {error}")

        logger.info(
            f"✅ Ranked update complete - Updated: {len(updated)}, Failed: {len(failures)}"
        )
        return updated, failures

    @app_commands.command(name="lol-track", description="Start tracking a player.")
    @app_commands.describe(
        riot_id="Riot ID in name#tag form", region="Platform region (e.g. na1)"
    )
    @app_commands.autocomplete(region=region_autocomplete)
    async def lol_track(
        self,
        interaction: discord.Interaction,
        riot_id: str,
        region: str = DEFAULT_REGION,
    ):
        await interaction.response.defer(thinking=True)

        region = region.strip().lower()
        try:
            parsed = parse_riot_id(riot_id)
            platform_host(region)
        except RiotAPIError as e:
            return await interaction.followup.send(f"❌ {e.message}", ephemeral=True)

        if await self.bot.league_players.get(parsed.game_name, parsed.tag_line):
            return await interaction.followup.send(
                f"⚠️ `{parsed}` is already tracked.", ephemeral=True
            )

        player = TrackedPlayer(parsed.game_name, parsed.tag_line, region)
        try:
            await self.api.update_player(player)
        except RiotAPIError as e:
            return await interaction.followup.send(
                f"❌ Could not add `{parsed}`: {e.message}"
            )

        await self.bot.database.players_db.save_player(player)
        await self.bot.league_players.set(player)
        await interaction.followup.send(
            f"✅ Now tracking **{player.riot_id}**.\n{build_player_summary(player)}"
        )

    @app_commands.command(name="lol-untrack", description="Stop tracking a player.")
    @app_commands.describe(riot_id="Tracked Riot ID in name#tag form")
    @app_commands.autocomplete(riot_id=riot_id_autocomplete)
    @app_commands.check(is_tracker_admin_check)
    async def lol_untrack(self, interaction: discord.Interaction, riot_id: str):
        await interaction.response.defer(thinking=True)

        try:
            parsed = parse_riot_id(riot_id)
        except RiotAPIError as e:
            return await interaction.followup.send(f"❌ {e.message}", ephemeral=True)

        try:
            deleted = await self.bot.database.players_db.delete_player(
                parsed.game_name, parsed.tag_line
            )
            await self.bot.league_players.delete(parsed.game_name, parsed.tag_line)
        except Exception as e:
            logger.error(f"Error removing player {parsed}: {e}", exc_info=True)
            return await interaction.followup.send(
                f"❌ An error occurred while removing `{parsed}`.", ephemeral=True
            )

        if deleted:
            await interaction.followup.send(f"✅ Stopped tracking `{parsed}`.")
        else:
            await interaction.followup.send(f"⚠️ `{parsed}` was not tracked.")

    @app_commands.command(
        name="lol-update", description="Refresh ranked data for tracked players."
    )
    @app_commands.describe(riot_id="Only refresh this player (optional)")
    @app_commands.autocomplete(riot_id=riot_id_autocomplete)
    async def lol_update(
        self, interaction: discord.Interaction, riot_id: Optional[str] = None
    ):
        await interaction.response.defer(thinking=True)

        if riot_id is None:
            updated, failures = await self.run_update(force=True)
            if not updated and not failures:
                return await interaction.followup.send("No players to update.")
            if failures:
                failed = ", ".join(f"`{p.riot_id}`" for p, _ in failures)
                return await interaction.followup.send(
                    f"⚠️ {len(updated)} players updated, {len(failures)} failed: {failed}"
                )
            return await interaction.followup.send(
                f"✅ All {len(updated)} players updated successfully!"
            )

        try:
            parsed = parse_riot_id(riot_id)
        except RiotAPIError as e:
            return await interaction.followup.send(f"❌ {e.message}", ephemeral=True)

        player = await self.bot.league_players.get(parsed.game_name, parsed.tag_line)
        if player is None:
            return await interaction.followup.send(
                f"⚠️ `{parsed}` is not tracked.", ephemeral=True
            )

        try:
            await self.api.update_player(player)
        except RiotAPIError as e:
            return await interaction.followup.send(
                f"❌ Failed to update `{player.riot_id}`: {e.message}"
            )

        await self.bot.database.players_db.save_player(player)
        await interaction.followup.send(
            f"✅ {build_player_summary(player)}"
        )

    @app_commands.command(
        name="lol-leaderboard", description="View the tracked players leaderboard."
    )
    async def lol_leaderboard(self, interaction: discord.Interaction):
        await interaction.response.defer()

        all_players = await self.bot.league_players.get_all()
        leaderboard_data = build_leaderboard(all_players.values())

        view = LeagueLeaderboardView(
            leaderboard_data,
            interaction,
            timeout=LEAGUE_CONFIG["ui_timeouts"]["leaderboard_view"],
        )
        await interaction.followup.send(embed=view.generate_embed(), view=view)


class LeagueLeaderboardView(discord.ui.View):
    """View for paginated leaderboard display."""

    def __init__(
        self,
        data: List[TrackedPlayer],
        interaction: Optional[discord.Interaction] = None,
        timeout: float = 300,
    ):
        super().__init__(timeout=timeout)
        self.data = data
        self.interaction = interaction
        self.page = 0
        self.entries_per_page = TRACKER_CONFIG["leaderboard_entries_per_page"]
        self.max_page = (len(data) - 1) // self.entries_per_page if data else 0
        self._update_buttons()

    def _update_buttons(self):
        self.prev_button.disabled = self.page == 0
        self.next_button.disabled = self.page >= self.max_page

    async def on_timeout(self):
        for item in self.children:
            item.disabled = True
        if self.interaction:
            try:
                await self.interaction.edit_original_response(view=self)
            except discord.HTTPException:
                pass

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if self.interaction is None:
            return True
        return interaction.user == self.interaction.user

    def generate_embed(self) -> discord.Embed:
        start = self.page * self.entries_per_page
        end = start + self.entries_per_page

        leaderboard_str = "\n".join(
            build_player_line(i, p)
            for i, p in enumerate(self.data[start:end], start=start + 1)
        )

        embed = discord.Embed(
            title=f"🏆 Solo Queue Leaderboard (Page {self.page + 1}/{self.max_page + 1})",
            description=leaderboard_str or "No data available.",
            color=discord.Color.gold(),
        )
        embed.set_footer(text=f"Total Players: {len(self.data)}")
        return embed

    @discord.ui.button(label="⬅️ Previous", style=discord.ButtonStyle.blurple)
    async def prev_button(
        self, interaction: discord.Interaction, button: discord.ui.Button
    ):
        self.page = max(self.page - 1, 0)
        self._update_buttons()
        await interaction.response.edit_message(embed=self.generate_embed(), view=self)

    @discord.ui.button(label="➡️ Next", style=discord.ButtonStyle.blurple)
    async def next_button(
        self, interaction: discord.Interaction, button: discord.ui.Button
    ):
        self.page = min(self.page + 1, self.max_page)
        self._update_buttons()
        await interaction.response.edit_message(embed=self.generate_embed(), view=self)


async def setup(bot):
    await bot.add_cog(LeagueTracker(bot))

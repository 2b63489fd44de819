from typing import Dict

import discord
from utils.league_helpers import format_rank, format_win_rate
from utils.league_models import RankedInfo, TrackedPlayer

TIER_COLORS = {
    "IRON": discord.Color.dark_grey(),
    "BRONZE": discord.Color.dark_orange(),
    "SILVER": discord.Color.light_grey(),
    "GOLD": discord.Color.gold(),
    "PLATINUM": discord.Color.teal(),
    "DIAMOND": discord.Color.blue(),
    "MASTER": discord.Color.purple(),
    "GRANDMASTER": discord.Color.red(),
    "CHALLENGER": discord.Color.from_rgb(240, 230, 140),
}


def _flags(veteran: bool, inactive: bool, fresh_blood: bool, hot_streak: bool) -> str:
    flags = []
    if hot_streak:
        flags.append("🔥 Hot streak")
    if veteran:
        flags.append("🎖️ Veteran")
    if fresh_blood:
        flags.append("🌱 Fresh blood")
    if inactive:
        flags.append("💤 Inactive")
    return ", ".join(flags) or "None"


def build_ranked_embed(info: RankedInfo, region: str, simulated: bool) -> discord.Embed:
    """
    Build a solo queue summary embed for one lookup.

    Args:
        info: Ranked info returned by the API manager
        region: Platform region the lookup used
        simulated: Whether the data came from the mock client

    Returns:
        discord.Embed with rank, record and flags
    """
    embed = discord.Embed(
        title=f"{info.riot_id} ({region.upper()})",
        description=format_rank(info.tier, info.rank, info.league_points),
        color=TIER_COLORS.get(info.tier, discord.Color.blue()),
    )
    embed.add_field(name="Level", value=str(info.summoner_level), inline=True)
    embed.add_field(
        name="Record",
        value=f"{info.wins}W / {info.losses}L ({format_win_rate(info.wins, info.losses)})",
        inline=True,
    )
    embed.add_field(
        name="Flags",
        value=_flags(info.veteran, info.inactive, info.fresh_blood, info.hot_streak),
        inline=False,
    )
    footer = f"Last updated {info.last_updated}"
    if simulated:
        footer += " • Simulated data (no Riot API key set)"
    embed.set_footer(text=footer)
    return embed


def build_player_summary(player: TrackedPlayer) -> str:
    return (
        f"**{player.riot_id}** - "
        f"{format_rank(player.tier, player.division, player.lp)} - "
        f"{format_win_rate(player.wins, player.losses)} WR"
    )


def build_player_line(index: int, player: TrackedPlayer) -> str:
    return f"{index}. {build_player_summary(player)}"


def build_api_status_embed(stats: Dict) -> discord.Embed:
    embed = discord.Embed(
        title="Riot API Status",
        description=f"Mode: **{stats['mode']}**",
        color=discord.Color.green() if stats["mode"] == "real" else discord.Color.orange(),
    )
    embed.add_field(name="Scheduler", value=stats["state"], inline=True)
    embed.add_field(name="Queued", value=str(stats["queue_size"]), inline=True)
    if "tracked_players" in stats:
        embed.add_field(
            name="Tracked", value=str(stats["tracked_players"]), inline=True
        )
    embed.add_field(
        name="Window",
        value=(
            f"{stats['requests_this_second']}/{stats['per_second_limit']} per second\n"
            f"{stats['requests_this_minute']}/{stats['per_minute_limit']} per minute"
        ),
        inline=False,
    )
    embed.add_field(
        name="Requests",
        value=(
            f"Dispatched: {stats['dispatched']}\n"
            f"Succeeded: {stats['succeeded']}\n"
            f"Failed: {stats['failed']}"
        ),
        inline=False,
    )
    return embed

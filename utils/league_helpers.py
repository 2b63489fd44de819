from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

import discord
from constants.league_config import APEX_TIERS, DIVISION_ORDER, REGIONAL_ROUTING, TIER_ORDER
from discord.app_commands import Choice
from logger import setup_logger
from utils.league_models import TrackedPlayer

logger = setup_logger("LeagueHelpers")


def calculate_rank_score(tier: Optional[str], division: Optional[str], lp: int) -> int:
    """
    Numeric rank for sorting: tier * 1000 + division * 100 + LP.
    Apex tiers have no division.
    """
    tier = (tier or "").upper()
    tier_value = TIER_ORDER.get(tier, 1)
    division_value = DIVISION_ORDER.get((division or "").upper(), 1)
    lp_value = max(0, min(100, lp or 0))

    if tier in APEX_TIERS:
        return tier_value * 1000 + lp_value
    return tier_value * 1000 + division_value * 100 + lp_value


def calculate_player_score(player: TrackedPlayer) -> int:
    """Rank score plus bonuses for a win rate above 60% and for games played."""
    score = calculate_rank_score(player.tier, player.division, player.lp)
    total_games = player.wins + player.losses
    win_rate = player.wins / total_games if total_games else 0

    if win_rate > 0.6:
        score += (win_rate - 0.6) * 500

    score += min(total_games * 2, 200)
    return round(score)


def format_rank(tier: Optional[str], division: Optional[str], lp: int) -> str:
    if not tier:
        return "Unranked"
    tier = tier.upper()
    if tier in APEX_TIERS or not division:
        return f"{tier.title()} {lp} LP"
    return f"{tier.title()} {division} {lp} LP"


def format_win_rate(wins: int, losses: int) -> str:
    total = wins + losses
    if total == 0:
        return "0%"
    return f"{round(wins / total * 100)}%"


def should_update_player(last_updated_str: Optional[str], hours: float = 1) -> bool:
    """
    Check if a player's ranked data needs refreshing.

    Args:
        last_updated_str: ISO 8601 datetime string
        hours: Update threshold in hours

    Returns:
        bool: True if player needs updating
    """
    if not last_updated_str:
        return True

    try:
        last_updated = datetime.fromisoformat(last_updated_str.replace("Z", "+00:00"))
        if last_updated.tzinfo is None:
            last_updated = last_updated.replace(tzinfo=timezone.utc)

        now = datetime.now(timezone.utc)
        return now - last_updated >= timedelta(hours=hours)
    except ValueError as e:
        logger.warning(f"Error parsing update timestamp: {e}")
        return True


def build_leaderboard(players: Iterable[TrackedPlayer]) -> List[TrackedPlayer]:
    """Ranked players sorted best first (rank score, then player score)."""
    ranked = [p for p in players if p.tier]
    ranked.sort(
        key=lambda p: (
            calculate_rank_score(p.tier, p.division, p.lp),
            calculate_player_score(p),
        ),
        reverse=True,
    )
    return ranked


async def region_autocomplete(interaction: discord.Interaction, current: str):
    """Autocomplete for platform regions."""
    return [
        Choice(name=region, value=region)
        for region in REGIONAL_ROUTING
        if region.startswith(current.lower())
    ][:25]


async def riot_id_autocomplete(interaction: discord.Interaction, current: str):
    """Autocomplete for tracked Riot IDs from the player cache."""
    bot = interaction.client

    if not hasattr(bot, "league_players"):
        return []

    try:
        all_players = await bot.league_players.get_all()
        riot_ids = sorted(
            player.riot_id
            for player in all_players.values()
            if player.riot_id.lower().startswith(current.lower())
        )
        return [Choice(name=r, value=r) for r in riot_ids[:25]]
    except Exception as e:
        logger.warning(f"Error in riot_id_autocomplete: {e}")
        return []

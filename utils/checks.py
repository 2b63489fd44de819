import os

import discord
from logger import setup_logger

logger = setup_logger("ChecksHandler")


OWNER_ID = int(os.getenv("OWNER_ID") or 0)


def _is_bot_owner(interaction: discord.Interaction) -> bool:
    return interaction.user.id in (interaction.client.owner_id, OWNER_ID)


def is_owner_check(interaction: discord.Interaction) -> bool:
    """Riot API key and mode changes are restricted to the bot owner."""
    try:
        return _is_bot_owner(interaction)
    except AttributeError as e:
        logger.error(f"Error in is_owner_check: {e}", exc_info=True)
        return False


def is_tracker_admin_check(interaction: discord.Interaction) -> bool:
    """Owner, or a member allowed to manage the guild, may untrack players."""
    try:
        if _is_bot_owner(interaction):
            return True
        if interaction.guild is None:
            return False
        return interaction.permissions.manage_guild
    except AttributeError as e:
        logger.error(f"Error in is_tracker_admin_check: {e}", exc_info=True)
        return False

"""
discord_utils.py
================

Low-level Discord helpers used by the moderation components. Functions here
are stateless and never raise on recoverable Discord API errors.
"""

from typing import Union

import discord

from denycord.datatypes.discord_datatypes import UserID
from denycord.util.logger import get_logger

logger = get_logger("discord_utils")


def bot_user_id(bot: discord.Client) -> UserID | None:
    """Return the connected bot's own user ID, or None before login completes."""
    user = getattr(bot, "user", None)
    if user is None:
        return None
    return UserID.from_user(user)


def is_own_message(message: discord.Message, bot: discord.Client) -> bool:
    """
    Check if a message was written by the bot itself.

    Args:
        message (discord.Message): The message to check.
        bot (discord.Client): The running bot.

    Returns:
        bool: True if the author is the bot's own user.
    """
    own_id = bot_user_id(bot)
    return own_id is not None and own_id == message.author.id


async def safe_delete_message(message: Union[discord.Message, discord.PartialMessage]) -> bool:
    """
    Attempt to delete a Discord message, logging recoverable errors.

    Args:
        message (discord.Message | discord.PartialMessage): The message to delete.

    Returns:
        bool: True if deletion succeeded, False otherwise.
    """
    try:
        await message.delete()
        return True
    except discord.NotFound:
        logger.warning("[DISCORD UTILS] Message %s was already deleted", message.id)
    except discord.Forbidden:
        logger.error("[DISCORD UTILS] No permission to delete message %s", message.id)
    except discord.HTTPException as exc:
        logger.error("[DISCORD UTILS] Failed to delete denied message %s: %s", message.id, exc)
    return False

"""Event listener Cog for Denycord.

Handles bot lifecycle events. Message handling lives in the MessageListenerCog.
"""

import discord
from discord.ext import commands

from denycord.denylist.denylist_store import DenylistStore
from denycord.util.logger import get_logger

logger = get_logger("events_listener_cog")


class EventsListenerCog(commands.Cog):
    """Cog containing bot lifecycle handlers."""

    def __init__(self, discord_bot_instance, store: DenylistStore):
        self.bot = discord_bot_instance
        self.store = store
        logger.info("[EVENTS LISTENER] Events listener cog loaded")

    @commands.Cog.listener(name='on_ready')
    async def on_ready(self):
        """Log the connected identity and advertise the active rule count."""
        if self.bot.user:
            logger.info(f"Bot connected as {self.bot.user} (ID: {self.bot.user.id})")
            await self._update_presence()
        else:
            logger.warning("Bot partially connected, but user information not yet available.")

        logger.info("--==--==--==--==--==--==--==--==--==--==--==--==--==--==--==--==--")

    async def _update_presence(self) -> None:
        rule_count = len(self.store)
        if rule_count:
            status = discord.Status.online
            activity_name = f"for {rule_count} denied patterns"
        else:
            status = discord.Status.idle
            activity_name = "an empty denylist"

        await self.bot.change_presence(
            status=status,
            activity=discord.Activity(
                type=discord.ActivityType.watching,
                name=activity_name,
            )
        )


def setup(discord_bot_instance, store: DenylistStore) -> EventsListenerCog:
    """Register the EventsListenerCog with the bot."""
    cog = EventsListenerCog(discord_bot_instance, store)
    discord_bot_instance.add_cog(cog)
    return cog

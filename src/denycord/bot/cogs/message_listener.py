"""Message listener Cog for Denycord.

Runs every new message through the denylist and deletes the ones that match.
"""

from typing import Sequence

import discord
from discord.ext import commands

from denycord.datatypes.moderation_datatypes import InboundMessage
from denycord.denylist.denylist_store import DenylistStore
from denycord.denylist.exemptions import Exemption
from denycord.denylist.message_evaluator import evaluate_message
from denycord.denylist.moderation_action import apply_moderation_action
from denycord.util import discord_utils
from denycord.util.logger import get_logger

logger = get_logger("message_listener_cog")


class MessageListenerCog(commands.Cog):
    """Cog that enforces the denylist on message creation."""

    def __init__(self, discord_bot_instance, store: DenylistStore, exemptions: Sequence[Exemption] = ()):
        """
        Initialize the message listener cog.

        Parameters
        ----------
        discord_bot_instance:
            The Discord bot instance to attach this cog to.
        store:
            Shared denylist store, reloaded by the file watcher.
        exemptions:
            Exceptions applied after a rule matches.
        """
        self.bot = discord_bot_instance
        self.store = store
        self.exemptions = tuple(exemptions)
        logger.info("[MESSAGE LISTENER] Message listener cog loaded with %d exemptions", len(self.exemptions))

    @commands.Cog.listener(name='on_message')
    async def on_message(self, message: discord.Message):
        """Evaluate a new message against the denylist and delete it on a match."""
        if discord_utils.is_own_message(message, self.bot):
            return

        inbound = InboundMessage.from_discord(message)
        decision = evaluate_message(
            inbound,
            self.store.snapshot(),
            self.exemptions,
            discord_utils.bot_user_id(self.bot),
        )
        if decision is None:
            return

        await apply_moderation_action(decision, message)


def setup(discord_bot_instance, store: DenylistStore, exemptions: Sequence[Exemption] = ()) -> MessageListenerCog:
    """
    Register the MessageListenerCog with the bot.

    Parameters
    ----------
    discord_bot_instance:
        The Discord bot instance to add this cog to.
    store:
        Shared denylist store.
    exemptions:
        Exceptions applied after a rule matches.
    """
    cog = MessageListenerCog(discord_bot_instance, store, exemptions)
    discord_bot_instance.add_cog(cog)
    return cog

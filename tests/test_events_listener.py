from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from denycord.bot.cogs import events_listener
from denycord.denylist.denylist_store import DenylistStore


@pytest.mark.asyncio
async def test_on_ready_sets_presence_with_rule_count(write_denylist):
    store = DenylistStore()
    store.reload(write_denylist("spam", "eggs"))
    bot = SimpleNamespace(user=SimpleNamespace(id=1), change_presence=AsyncMock())
    cog = events_listener.EventsListenerCog(bot, store)

    await cog.on_ready()

    kwargs = bot.change_presence.await_args.kwargs
    assert kwargs["status"] == discord.Status.online
    assert "2" in kwargs["activity"].name


@pytest.mark.asyncio
async def test_on_ready_idle_when_denylist_empty():
    bot = SimpleNamespace(user=SimpleNamespace(id=1), change_presence=AsyncMock())
    cog = events_listener.EventsListenerCog(bot, DenylistStore())

    await cog.on_ready()

    assert bot.change_presence.await_args.kwargs["status"] == discord.Status.idle


@pytest.mark.asyncio
async def test_on_ready_without_user_skips_presence():
    bot = SimpleNamespace(user=None, change_presence=AsyncMock())
    cog = events_listener.EventsListenerCog(bot, DenylistStore())

    await cog.on_ready()

    bot.change_presence.assert_not_awaited()


def test_setup_registers_cog():
    bot = SimpleNamespace(add_cog=MagicMock())

    cog = events_listener.setup(bot, DenylistStore())

    bot.add_cog.assert_called_once_with(cog)

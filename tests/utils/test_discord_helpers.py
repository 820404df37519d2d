from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from denycord.util import discord_utils


def test_bot_user_id_none_before_login():
    assert discord_utils.bot_user_id(SimpleNamespace(user=None)) is None  # type: ignore


def test_is_own_message():
    bot = SimpleNamespace(user=SimpleNamespace(id=42))
    own = SimpleNamespace(author=SimpleNamespace(id=42))
    other = SimpleNamespace(author=SimpleNamespace(id=7))

    assert discord_utils.is_own_message(own, bot)  # type: ignore
    assert not discord_utils.is_own_message(other, bot)  # type: ignore
    assert not discord_utils.is_own_message(own, SimpleNamespace(user=None))  # type: ignore


class TestSafeDeleteMessage:
    @pytest.mark.asyncio
    async def test_success(self):
        message = MagicMock(id=1)
        message.delete = AsyncMock()

        assert await discord_utils.safe_delete_message(message) is True

    @pytest.mark.asyncio
    async def test_not_found(self):
        message = MagicMock(id=1)
        message.delete = AsyncMock(side_effect=discord.NotFound(MagicMock(), "Not found"))

        assert await discord_utils.safe_delete_message(message) is False

    @pytest.mark.asyncio
    async def test_forbidden(self):
        message = MagicMock(id=1)
        message.delete = AsyncMock(side_effect=discord.Forbidden(MagicMock(), "Forbidden"))

        assert await discord_utils.safe_delete_message(message) is False

    @pytest.mark.asyncio
    async def test_http_error(self):
        message = MagicMock(id=1)
        message.delete = AsyncMock(side_effect=discord.HTTPException(MagicMock(), "Server error"))

        assert await discord_utils.safe_delete_message(message) is False

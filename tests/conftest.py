"""
Pytest configuration and fixtures for Denycord tests.
"""

import logging
import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

# Add src directory to path so imports work
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from denycord.datatypes.discord_datatypes import ChannelID, MessageID, UserID  # noqa: E402
from denycord.datatypes.moderation_datatypes import InboundMessage  # noqa: E402

# Snowflake whose timestamp is 2020-01-01T00:00:00Z
AUTHOR_ID = 661720242585600000
BOT_ID = 900000000000000000
GENERAL_CHANNEL_ID = 200000000000000000


@pytest.fixture
def make_inbound():
    def _make(content: str, channel_id: int = GENERAL_CHANNEL_ID, author_id: int = AUTHOR_ID, username: str = "spammer"):
        return InboundMessage(
            message_id=MessageID(300000000000000000),
            author_id=UserID(author_id),
            username=username,
            channel_id=ChannelID(channel_id),
            content=content,
        )
    return _make


@pytest.fixture
def make_discord_message():
    """Build a duck-typed discord.Message with an AsyncMock ``delete``."""
    def _make(content: str, channel_id: int = GENERAL_CHANNEL_ID, author_id: int = AUTHOR_ID, username: str = "spammer"):
        return SimpleNamespace(
            id=300000000000000000,
            content=content,
            author=SimpleNamespace(id=author_id, name=username),
            channel=SimpleNamespace(id=channel_id),
            delete=AsyncMock(),
        )
    return _make


@pytest.fixture
def write_denylist(tmp_path):
    path = tmp_path / "denylist.txt"

    def _write(*lines: str) -> Path:
        path.write_text("\n".join(lines), encoding="utf-8")
        return path
    return _write


@pytest.fixture(autouse=True)
def propagate_denycord_logs(monkeypatch):
    """Let caplog see records from loggers built by ``setup_logger``, which do not propagate."""
    from denycord.util.logger import PromptToolkitHandler

    for logger in list(logging.Logger.manager.loggerDict.values()):
        if isinstance(logger, logging.Logger) and any(isinstance(h, PromptToolkitHandler) for h in logger.handlers):
            monkeypatch.setattr(logger, "propagate", True)

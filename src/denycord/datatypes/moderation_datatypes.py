"""
Data types flowing through the denylist moderation pipeline.

- `Rule`: a compiled case-insensitive pattern plus the line it came from.
- `InboundMessage`: read-only view of one Discord message.
- `ModerationDecision`: the evaluator's verdict for a message.
- `AuditRecord`: the structured entry logged after a deletion.
"""

from __future__ import annotations

import datetime
import re
from dataclasses import dataclass
from typing import Any, Dict

import discord

from denycord.datatypes.discord_datatypes import ChannelID, MessageID, UserID


@dataclass(frozen=True, slots=True)
class Rule:
    """A single denylist rule.

    Attributes:
        pattern (re.Pattern[str]): Compiled pattern, always case-insensitive.
        source (str): The line of the denylist file the pattern was built from.
    """

    pattern: re.Pattern[str]
    source: str

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


@dataclass(frozen=True, slots=True)
class InboundMessage:
    """Normalized view of a Discord message for evaluation.

    Attributes:
        message_id (MessageID): ID of the message.
        author_id (UserID): ID of the author; its snowflake carries the account creation time.
        username (str): Author's username at the time the message was sent.
        channel_id (ChannelID): ID of the channel the message was posted in.
        content (str): Raw text content.
    """

    message_id: MessageID
    author_id: UserID
    username: str
    channel_id: ChannelID
    content: str

    @classmethod
    def from_discord(cls, message: discord.Message) -> "InboundMessage":
        return cls(
            message_id=MessageID.from_message(message),
            author_id=UserID.from_user(message.author),
            username=message.author.name,
            channel_id=ChannelID.from_channel(message.channel),
            content=message.content or "",
        )

    def account_created_at(self) -> datetime.datetime:
        """Decode the author's account creation time.

        Raises:
            ValueError: If the author ID does not decode to a timestamp.
        """
        return self.author_id.created_at()


@dataclass(frozen=True, slots=True)
class ModerationDecision:
    """Verdict that a message must be deleted because of ``rule``."""

    message: InboundMessage
    rule: Rule


@dataclass(frozen=True, slots=True)
class AuditRecord:
    """Structured log entry emitted after a successful deletion.

    ``account_age`` is None when the author's snowflake could not be decoded.
    """

    username: str
    user_id: UserID
    content: str
    account_age: datetime.timedelta | None
    matched_pattern: str

    def to_log_fields(self) -> Dict[str, Any]:
        """Return the record keyed the way it appears in the audit log."""
        return {
            "username": self.username,
            "id": str(self.user_id),
            "content": self.content,
            "accountAge": str(self.account_age) if self.account_age is not None else None,
            "matchedPattern": self.matched_pattern,
        }

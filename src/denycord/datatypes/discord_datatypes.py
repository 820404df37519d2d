"""
Type-safe wrappers for Discord identifiers.

Discord snowflakes are 64-bit integers that also encode their creation time.
The wrappers here keep IDs in one consistent shape across the bot and expose
the timestamp decoding used for account-age reporting.
"""

from __future__ import annotations

import datetime
from typing import Union

import discord


class Snowflake:
    """
    Base wrapper for a Discord snowflake ID.

    The value is stored as a string for parity with Discord's JSON payloads and
    compared by value against other wrappers of the same type, plain strings and
    plain ints.

    Example:
        >>> cid = ChannelID(123456789012345678)
        >>> cid.to_int()
        123456789012345678
        >>> cid == "123456789012345678"
        True
    """

    __slots__ = ("_value",)

    def __init__(self, value: Union[str, int, "Snowflake"]) -> None:
        """
        Args:
            value: The snowflake as a string, int, or wrapper of the same type.

        Raises:
            ValueError: If the value is not an integer snowflake.
        """
        if isinstance(value, type(self)):
            self._value = value._value
        elif isinstance(value, bool):
            raise ValueError(f"Cannot create {type(self).__name__} from bool: {value}")
        elif isinstance(value, int):
            self._value = str(value)
        elif isinstance(value, str):
            self._value = str(int(value.strip()))
        else:
            raise ValueError(f"Cannot create {type(self).__name__} from {type(value).__name__}: {value}")

    def to_int(self) -> int:
        """Convert to an integer for Discord API calls."""
        return int(self._value)

    def created_at(self) -> datetime.datetime:
        """
        Decode the creation time embedded in the snowflake.

        Returns:
            datetime.datetime: Timezone-aware UTC creation time.

        Raises:
            ValueError: If the snowflake does not carry a representable timestamp.
        """
        try:
            return discord.utils.snowflake_time(self.to_int())
        except (OverflowError, OSError) as exc:
            raise ValueError(f"Snowflake {self._value} has no valid timestamp") from exc

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, type(self)):
            return self._value == other._value
        if isinstance(other, str):
            return self._value == other
        if isinstance(other, int) and not isinstance(other, bool):
            return self._value == str(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)


class UserID(Snowflake):
    """Discord user snowflake. The timestamp is the account creation time."""

    __slots__ = ()

    @classmethod
    def from_user(cls, member: Union[discord.Member, discord.User]) -> "UserID":
        return cls(member.id)


class ChannelID(Snowflake):
    """Discord channel snowflake."""

    __slots__ = ()

    @classmethod
    def from_channel(cls, channel: discord.abc.Snowflake) -> "ChannelID":
        return cls(channel.id)


class MessageID(Snowflake):
    """Discord message snowflake."""

    __slots__ = ()

    @classmethod
    def from_message(cls, message: discord.Message) -> "MessageID":
        return cls(message.id)

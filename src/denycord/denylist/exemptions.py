"""
Declarative exemptions applied after a denylist rule matches.

An :class:`Exemption` is a named predicate over the matched rule's source
text, the channel the message was posted in and the message text. When the
predicate returns True the match is let through and evaluation moves on to
the next rule.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Mapping

from denycord.datatypes.discord_datatypes import ChannelID
from denycord.util.logger import get_logger

logger = get_logger("exemptions")

DEFAULT_GREETING_KEYWORD = "gm"
DEFAULT_WALLET_ADDRESS_PATTERN = r"0x[a-fA-F0-9]{40}"

ExemptionPredicate = Callable[[str, ChannelID, str], bool]


@dataclass(frozen=True, slots=True)
class Exemption:
    """A named exception to denylist enforcement.

    Attributes:
        name (str): Label used in debug logs when the exemption fires.
        applies (ExemptionPredicate): ``(rule_source, channel_id, content) -> bool``.
    """

    name: str
    applies: ExemptionPredicate


def channel_keyword_exemption(keyword: str, channel_id: ChannelID) -> Exemption:
    """
    Allow rules mentioning ``keyword`` to be broken in one channel.

    Used for greetings that are spam everywhere except a designated social channel.
    """
    def applies(rule_source: str, message_channel: ChannelID, content: str) -> bool:
        return keyword in rule_source and message_channel == channel_id

    return Exemption(name=f"keyword {keyword!r} in channel {channel_id}", applies=applies)


def wallet_address_exemption(allowed_channel_ids: Iterable[ChannelID], pattern: str = DEFAULT_WALLET_ADDRESS_PATTERN) -> Exemption:
    """
    Never delete messages carrying a wallet address outside the faucet channels.

    Inside the allowed channels the exemption does not apply and the message is
    handled by the denylist like any other.
    """
    address = re.compile(pattern)
    allowed = frozenset(allowed_channel_ids)

    def applies(rule_source: str, message_channel: ChannelID, content: str) -> bool:
        return address.search(content) is not None and message_channel not in allowed

    return Exemption(name="wallet address outside faucet channels", applies=applies)


def build_exemptions(settings: Mapping[str, Any] | None) -> List[Exemption]:
    """
    Build the exemption list from the ``exemptions`` section of the app config.

    Expected shape::

        channel_keyword:
          keyword: gm
          channel_id: 123
        wallet_address:
          pattern: "0x[a-fA-F0-9]{40}"
          allowed_channel_ids: [456, 789]

    A channel-keyword entry without ``channel_id`` is skipped. The wallet-address
    exemption is only built when the section is present.
    """
    exemptions: List[Exemption] = []
    if not isinstance(settings, Mapping):
        return exemptions

    keyword_settings = settings.get("channel_keyword")
    if isinstance(keyword_settings, Mapping):
        channel_id = keyword_settings.get("channel_id")
        if channel_id is None:
            logger.warning("[EXEMPTIONS] channel_keyword exemption has no channel_id; skipping")
        else:
            keyword = str(keyword_settings.get("keyword") or DEFAULT_GREETING_KEYWORD)
            exemptions.append(channel_keyword_exemption(keyword, ChannelID(channel_id)))

    wallet_settings = settings.get("wallet_address")
    if isinstance(wallet_settings, Mapping):
        allowed = [ChannelID(cid) for cid in wallet_settings.get("allowed_channel_ids") or []]
        pattern = str(wallet_settings.get("pattern") or DEFAULT_WALLET_ADDRESS_PATTERN)
        exemptions.append(wallet_address_exemption(allowed, pattern))

    logger.debug("[EXEMPTIONS] Loaded %d exemptions", len(exemptions))
    return exemptions

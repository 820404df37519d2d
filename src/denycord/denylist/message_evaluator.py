"""Decide whether an inbound message breaks the denylist."""

from __future__ import annotations

from typing import Optional, Sequence

from denycord.datatypes.discord_datatypes import UserID
from denycord.datatypes.moderation_datatypes import InboundMessage, ModerationDecision, Rule
from denycord.denylist.exemptions import Exemption
from denycord.util.logger import get_logger

logger = get_logger("message_evaluator")


def evaluate_message(
    message: InboundMessage,
    rules: Sequence[Rule],
    exemptions: Sequence[Exemption] = (),
    bot_user_id: Optional[UserID] = None,
) -> Optional[ModerationDecision]:
    """
    Return a deletion decision for ``message``, or None if it may stay.

    Messages written by the bot itself are never evaluated. Otherwise rules are
    tried in order; a matching rule is skipped when any exemption applies to it,
    and the first matching rule with no applicable exemption decides.

    Args:
        message: The message to evaluate.
        rules: A denylist snapshot.
        exemptions: Exceptions to check for every match.
        bot_user_id: The bot's own user ID.

    Returns:
        Optional[ModerationDecision]: The decision citing the deciding rule.
    """
    if bot_user_id is not None and message.author_id == bot_user_id:
        return None

    for rule in rules:
        if not rule.matches(message.content):
            continue

        exempted_by = next(
            (e for e in exemptions if e.applies(rule.source, message.channel_id, message.content)),
            None,
        )
        if exempted_by is not None:
            logger.debug(
                "[MESSAGE EVALUATOR] Message %s matched %r but is exempt (%s)",
                message.message_id,
                rule.source,
                exempted_by.name,
            )
            continue

        return ModerationDecision(message=message, rule=rule)

    return None

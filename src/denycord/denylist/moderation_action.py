"""
Carry out a deletion decision and write the audit record.
"""

from __future__ import annotations

import datetime
from typing import Optional, Union

import discord

from denycord.datatypes.moderation_datatypes import AuditRecord, ModerationDecision
from denycord.util import discord_utils
from denycord.util.logger import get_logger

logger = get_logger("moderation_action")
audit_logger = get_logger("audit")


def compute_account_age(decision: ModerationDecision, now: Optional[datetime.datetime] = None) -> Optional[datetime.timedelta]:
    """
    Age of the author's account at ``now`` (defaults to the current UTC time).

    Returns None, after logging, when the author ID cannot be decoded.
    """
    now = now or datetime.datetime.now(datetime.timezone.utc)
    try:
        return now - decision.message.account_created_at()
    except (ValueError, TypeError) as exc:
        logger.error(
            "[MODERATION ACTION] Could not determine account timestamp for user %s: %s",
            decision.message.author_id,
            exc,
        )
        return None


def build_audit_record(decision: ModerationDecision, now: Optional[datetime.datetime] = None) -> AuditRecord:
    message = decision.message
    return AuditRecord(
        username=message.username,
        user_id=message.author_id,
        content=message.content,
        account_age=compute_account_age(decision, now),
        matched_pattern=decision.rule.source,
    )


def emit_audit_record(record: AuditRecord) -> None:
    """Log ``record`` as a structured ``Message deleted`` entry."""
    fields = record.to_log_fields()
    audit_logger.info(
        "Message deleted | %s",
        " ".join(f"{key}={value!r}" for key, value in fields.items()),
        extra={"audit": fields},
    )


async def apply_moderation_action(
    decision: ModerationDecision,
    target: Union[discord.Message, discord.PartialMessage],
    now: Optional[datetime.datetime] = None,
) -> Optional[AuditRecord]:
    """
    Delete ``target`` and, if that worked, emit the audit record for ``decision``.

    Deletion failures are logged by :func:`discord_utils.safe_delete_message` and
    never raised.

    Args:
        decision: The evaluator's decision for the message.
        target: The Discord message to delete.
        now: Reference time for the account age, mainly for tests.

    Returns:
        Optional[AuditRecord]: The emitted record, or None if deletion failed.
    """
    if not await discord_utils.safe_delete_message(target):
        return None

    record = build_audit_record(decision, now)
    emit_audit_record(record)
    return record

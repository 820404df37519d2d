import datetime
import logging
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from denycord.datatypes.moderation_datatypes import ModerationDecision
from denycord.denylist import moderation_action
from denycord.denylist.pattern_compiler import compile_rule

NOW = datetime.datetime(2021, 1, 1, tzinfo=datetime.timezone.utc)


@pytest.fixture
def decision(make_inbound):
    return ModerationDecision(message=make_inbound("FREE NITRO here"), rule=compile_rule("free nitro"))


def test_compute_account_age_from_snowflake(decision):
    age = moderation_action.compute_account_age(decision, NOW)

    assert age == datetime.timedelta(days=366)


def test_compute_account_age_returns_none_on_decode_error(decision, monkeypatch, caplog):
    def broken_created_at(self):
        raise ValueError("bad snowflake")

    monkeypatch.setattr(type(decision.message.author_id), "created_at", broken_created_at)

    with caplog.at_level(logging.ERROR, logger="moderation_action"):
        assert moderation_action.compute_account_age(decision, NOW) is None
    assert any("Could not determine account timestamp" in r.getMessage() for r in caplog.records)


def test_build_audit_record_fields(decision):
    record = moderation_action.build_audit_record(decision, NOW)

    assert record.to_log_fields() == {
        "username": "spammer",
        "id": str(decision.message.author_id),
        "content": "FREE NITRO here",
        "accountAge": "366 days, 0:00:00",
        "matchedPattern": "free nitro",
    }


@pytest.mark.asyncio
async def test_apply_moderation_action_deletes_and_audits(decision, make_discord_message, caplog):
    target = make_discord_message("FREE NITRO here")

    with caplog.at_level(logging.INFO, logger="audit"):
        record = await moderation_action.apply_moderation_action(decision, target, NOW)

    target.delete.assert_awaited_once()
    assert record is not None
    assert record.matched_pattern == "free nitro"
    audit = [r for r in caplog.records if r.name == "audit"]
    assert len(audit) == 1
    assert audit[0].getMessage().startswith("Message deleted")
    assert audit[0].audit["matchedPattern"] == "free nitro"


@pytest.mark.asyncio
async def test_apply_moderation_action_audits_without_age(decision, make_discord_message, monkeypatch, caplog):
    monkeypatch.setattr(moderation_action, "compute_account_age", lambda decision, now=None: None)
    target = make_discord_message("FREE NITRO here")

    with caplog.at_level(logging.INFO, logger="audit"):
        record = await moderation_action.apply_moderation_action(decision, target, NOW)

    assert record is not None
    assert record.account_age is None
    assert any(r.name == "audit" and r.audit["accountAge"] is None for r in caplog.records)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error",
    [
        discord.Forbidden(MagicMock(), "Forbidden"),
        discord.NotFound(MagicMock(), "Not found"),
        discord.HTTPException(MagicMock(), "Server error"),
    ],
)
async def test_apply_moderation_action_swallows_delete_errors(decision, make_discord_message, error):
    target = make_discord_message("FREE NITRO here")
    target.delete = AsyncMock(side_effect=error)

    assert await moderation_action.apply_moderation_action(decision, target, NOW) is None

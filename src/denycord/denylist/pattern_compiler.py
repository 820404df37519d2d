"""Compile denylist file contents into case-insensitive rules."""

from __future__ import annotations

import re
from typing import Tuple, Union

from denycord.datatypes.moderation_datatypes import Rule
from denycord.util.logger import get_logger

logger = get_logger("pattern_compiler")


def compile_rule(source: str) -> Rule:
    """Compile a single denylist line.

    Raises:
        re.error: If ``source`` is not a valid regular expression.
    """
    return Rule(pattern=re.compile(source, re.IGNORECASE), source=source)


def compile_rules(content: Union[bytes, str]) -> Tuple[Rule, ...]:
    """
    Turn the raw contents of a denylist file into an ordered tuple of rules.

    Each non-empty line becomes one rule. Lines that are not valid patterns are
    logged and skipped, so one bad line never discards the rest of the file.

    Args:
        content: File contents, UTF-8 bytes or already decoded text.

    Returns:
        Tuple[Rule, ...]: Rules in file order, possibly empty.
    """
    if isinstance(content, bytes):
        content = content.decode("utf-8")

    rules = []
    for line in content.split("\n"):
        line = line.rstrip("\r")
        if not line:
            continue
        try:
            rules.append(compile_rule(line))
        except re.error as exc:
            logger.error("[PATTERN COMPILER] Failed to parse pattern %r: %s", line, exc)
    return tuple(rules)

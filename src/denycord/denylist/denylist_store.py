"""
Process-wide holder of the active denylist.

The store owns a single reference to an immutable tuple of rules. Reloads
build a complete new tuple and publish it with one assignment, so readers
calling :meth:`DenylistStore.snapshot` always get either the old or the new
generation in full. Reloads themselves are serialized by ``lock``.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Tuple, Union

from denycord.datatypes.moderation_datatypes import Rule
from denycord.denylist.pattern_compiler import compile_rules
from denycord.util.logger import get_logger

logger = get_logger("denylist_store")

Denylist = Tuple[Rule, ...]


class DenylistStore:
    """
    Shared container for the active denylist.

    Attributes:
        lock (threading.Lock): Serializes reloads. Held by the file watcher around
            every reload triggered by a change notification.
        generation (int): Number of successful swaps since creation.
    """

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self._rules: Denylist = ()
        self.generation: int = 0

    def __len__(self) -> int:
        return len(self._rules)

    def snapshot(self) -> Denylist:
        """Return the denylist published by the latest successful reload."""
        return self._rules

    def reload(self, path: Union[str, Path]) -> bool:
        """
        Re-read ``path`` and publish its rules if there is at least one.

        Unreadable files, empty files and files where every line fails to compile
        leave the current denylist untouched, so a bad write never switches
        moderation off. The caller is responsible for holding :attr:`lock` when
        reloads can race.

        Args:
            path: Location of the denylist file.

        Returns:
            bool: True if a new denylist was published.
        """
        path = Path(path)
        try:
            content = path.read_bytes()
            rules = compile_rules(content)
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("[DENYLIST STORE] Failed to read denylist %s: %s", path, exc)
            return False

        if not rules:
            logger.error(
                "[DENYLIST STORE] Denylist %s produced no valid rules; keeping %d active rules",
                path,
                len(self._rules),
            )
            return False

        self._rules = rules
        self.generation += 1
        logger.info("[DENYLIST STORE] Updated deny list: %d rules (generation %d)", len(rules), self.generation)
        return True

    def locked_reload(self, path: Union[str, Path]) -> bool:
        """Reload while holding :attr:`lock`."""
        with self.lock:
            return self.reload(path)

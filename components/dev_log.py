"""components/dev_log.py — What the simulation did, and when.

Guard transitions, captures, climbs and harvest outcomes are recorded
here with their game-clock time.  The F1 overlay in the play scene
prints the tail, which is usually enough to see why a chase started.

Entries are plain dicts: ``{"t", "cat", "msg", "details"}``.
"""

from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field


@dataclass
class DevLog:
    max_entries: int = 200
    entries: deque = field(default_factory=deque, init=False)

    def __post_init__(self):
        self.entries = deque(maxlen=self.max_entries)

    def record(self, cat: str, msg: str, *, t: float = 0.0,
               details: dict | None = None) -> None:
        self.entries.append({"t": t, "cat": cat, "msg": msg, "details": details})

    def recent(self, n: int = 20) -> list[dict]:
        """Newest *n* entries, oldest first."""
        return list(self.entries)[-n:]

"""core/events.py — Simulation → presentation notifications.

The simulation never calls into the HUD or the scene stack.  It queues
small dataclass events on ``ctx.bus`` and ``Simulation.tick`` drains
them once, at the end of the tick:

    ctx.bus.emit(ScoreChanged(score=200, coins=20))
    sim.subscribe("RunEnded", self._on_run_ended)

Handlers are keyed by the event's class name.  A handler may emit more
events; they are delivered in the same drain, after the ones already
queued.
"""

from __future__ import annotations
from collections import Counter, defaultdict, deque
from dataclasses import dataclass
from typing import Callable
import traceback


# ── Events ───────────────────────────────────────────────────────────

@dataclass
class ScoreChanged:
    """A harvest credited score and coins (running totals)."""
    score: int = 0
    coins: int = 0


@dataclass
class HealthChanged:
    health: int = 0


@dataclass
class SuspicionChanged:
    suspicion: float = 0.0


@dataclass
class GuardStateChanged:
    """The guard's AI state machine moved between states."""
    old: str = ""
    new: str = ""


@dataclass
class PlayerCaught:
    """The guard caught the player but the run continues."""
    health: int = 0


@dataclass
class RunEnded:
    """Health reached zero; the run is over."""
    score: int = 0
    coins: int = 0


@dataclass
class HarvestFinished:
    """The harvest mini-game resolved (``multiplier`` is 0 on a miss)."""
    tree_id: int = -1
    success: bool = False
    multiplier: int = 0


# ── Bus ──────────────────────────────────────────────────────────────

MAX_EVENTS_PER_DRAIN = 10_000


class EventBus:
    """FIFO queue plus per-type subscriber lists.  Owned by ``SimContext``."""

    def __init__(self):
        self._pending: deque = deque()
        self._handlers: dict[str, list[Callable]] = defaultdict(list)
        self._delivered: Counter = Counter()

    def emit(self, event) -> None:
        self._pending.append(event)

    def subscribe(self, event_type: str, handler: Callable) -> None:
        self._handlers[event_type].append(handler)

    def drain(self) -> int:
        """Deliver everything queued, including follow-ups.  Returns the count.

        A handler that raises is logged and skipped; the remaining
        handlers and events still run.
        """
        n = 0
        while self._pending and n < MAX_EVENTS_PER_DRAIN:
            event = self._pending.popleft()
            kind = type(event).__name__
            self._delivered[kind] += 1
            n += 1
            for handler in self._handlers.get(kind, ()):
                try:
                    handler(event)
                except Exception as exc:
                    print(f"[EVENT] {kind} handler {getattr(handler, '__name__', handler)} failed: {exc}")
                    traceback.print_exc()
        if self._pending:
            print(f"[EVENT] drain stopped after {n} events, {len(self._pending)} left queued")
        return n

    def clear(self) -> None:
        self._pending.clear()

    def stats(self) -> dict[str, int]:
        """Events delivered so far, by type."""
        return dict(self._delivered)

    def pending_count(self) -> int:
        return len(self._pending)

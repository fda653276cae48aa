"""components.resources — Run-level singletons (not per-actor)."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class GameClock:
    """Monotonic game time — accumulated fixed steps since ``start()``.

    Single source of truth for absolute deadlines (injury recovery).
    """
    time: float = 0.0
    ticks: int = 0


@dataclass
class RunStats:
    """Score and resource meters for the current run."""
    score: int = 0
    coins: int = 0
    health: int = 3
    suspicion: float = 0.0     # 0–100, clamped on every write
    level: int = 1
    game_over: bool = False


@dataclass
class InputState:
    """The boolean intent vector the simulation consumes.

    Origin-agnostic: keyboard and touch buttons both just flip flags.
    """
    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False
    jump: bool = False
    action: bool = False


@dataclass
class Camera:
    x: float = 0.0

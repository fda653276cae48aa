"""components.actors — The player and the guard.

All coordinates are screen-space pixels of the top-left corner; ``y``
grows downwards.  Velocities are pixels per tick.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class PlayerState(Enum):
    IDLE = "IDLE"
    RUNNING = "RUNNING"
    CLIMBING = "CLIMBING"
    HIDING_TREE = "HIDING_TREE"    # tucked into the fronds at the top
    HIDING_BUSH = "HIDING_BUSH"
    HARVESTING = "HARVESTING"
    JUMPING = "JUMPING"
    INJURED = "INJURED"


# States that keep the player attached to a trunk (``climbing_tree_id`` set).
TREE_BOUND_STATES = frozenset({
    PlayerState.CLIMBING, PlayerState.HIDING_TREE, PlayerState.HARVESTING,
})

# States that force invisibility regardless of flashlight geometry.
CONCEALED_STATES = frozenset({
    PlayerState.HIDING_TREE, PlayerState.HIDING_BUSH,
})


class GuardState(Enum):
    PATROLLING = "PATROLLING"
    SCANNING = "SCANNING"          # stopped, sweeping the flashlight
    ALERT = "ALERT"                # heard a noise, looking at it
    CHASING = "CHASING"


@dataclass
class Player:
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    width: float = 30.0
    height: float = 50.0
    state: PlayerState = PlayerState.IDLE
    facing_right: bool = True
    climbing_tree_id: int | None = None
    injury_timer: float = 0.0      # GameClock time at which injury ends

    @property
    def cx(self) -> float:
        return self.x + self.width / 2

    @property
    def cy(self) -> float:
        return self.y + self.height / 2

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass
class Guard:
    """The patrolling guard.

    ``view_angle`` is re-derived from ``facing_right`` every tick
    (0 = right, π = left); nothing else should write it.
    ``scan_timer`` counts ticks down in SCANNING and ALERT.
    """
    x: float = 0.0
    y: float = 0.0
    width: float = 40.0
    height: float = 60.0
    state: GuardState = GuardState.PATROLLING
    facing_right: bool = False
    scan_timer: int = 0
    patrol_start: float = 300.0
    patrol_end: float = 700.0
    view_angle: float = 0.0

    @property
    def cx(self) -> float:
        return self.x + self.width / 2

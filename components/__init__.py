"""components — Simulation data records, organised by domain.

Submodules
----------
actors      Player, Guard, PlayerState, GuardState
scenery     Tree, Bush
resources   GameClock, RunStats, InputState, Camera
dev_log     DevLog

All public names are re-exported here so callers can simply do
``from components import Player``.
"""

# ── Actors ───────────────────────────────────────────────────────────
from components.actors import (
    Player, Guard, PlayerState, GuardState,
    TREE_BOUND_STATES, CONCEALED_STATES,
)

# ── Scenery ──────────────────────────────────────────────────────────
from components.scenery import Tree, Bush

# ── Run resources ────────────────────────────────────────────────────
from components.resources import GameClock, RunStats, InputState, Camera

# ── Diagnostics ──────────────────────────────────────────────────────
from components.dev_log import DevLog

__all__ = [
    # actors
    "Player", "Guard", "PlayerState", "GuardState",
    "TREE_BOUND_STATES", "CONCEALED_STATES",
    # scenery
    "Tree", "Bush",
    # resources
    "GameClock", "RunStats", "InputState", "Camera",
    # diagnostics
    "DevLog",
]

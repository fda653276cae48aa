"""simulation/context.py — The single owner of all mutable run state.

Every update function takes a ``SimContext`` and mutates only it; there
are no module-level game globals.  ``new_context()`` is the level-init
boundary; dropping the context is the teardown.

Trees are addressed by integer id (their index in ``ctx.trees``).  The
player and the mini-game hold ids, never Tree objects.
"""

from __future__ import annotations
import random
from dataclasses import dataclass, field

from components import (
    Player, Guard, Tree, Bush, GameClock, RunStats, Camera, DevLog,
)
from core.events import EventBus
from core.tuning import get as _tun
from logic.particles import ParticleManager
from logic.harvest import HarvestMiniGame
from simulation.level import make_player, make_guard, make_trees, make_bushes


@dataclass
class SimContext:
    player: Player
    guard: Guard
    trees: list[Tree]
    bushes: list[Bush]
    particles: ParticleManager
    stats: RunStats = field(default_factory=RunStats)
    clock: GameClock = field(default_factory=GameClock)
    bus: EventBus = field(default_factory=EventBus)
    log: DevLog = field(default_factory=DevLog)
    harvest: HarvestMiniGame = field(default_factory=HarvestMiniGame)
    camera: Camera = field(default_factory=Camera)
    rng: random.Random = field(default_factory=random.Random)
    player_visible: bool = False       # last detection result

    def tree(self, tree_id: int | None) -> Tree | None:
        """Resolve a tree id, or None for an unknown/absent id."""
        if tree_id is None or not 0 <= tree_id < len(self.trees):
            return None
        return self.trees[tree_id]


def new_context(seed: int | None = None) -> SimContext:
    """Build a fresh level: full health, zero suspicion, every tree fruited."""
    rng = random.Random(seed)
    return SimContext(
        player=make_player(),
        guard=make_guard(),
        trees=make_trees(rng),
        bushes=make_bushes(),
        particles=ParticleManager(rng=rng),
        stats=RunStats(health=int(_tun("run", "health", 3))),
        rng=rng,
    )

"""logic/harvest.py — The harvest mini-game.

A timing skill check: a cursor sweeps back and forth across a 0–100
bar and the player confirms when it is inside the green zone.

    game = HarvestMiniGame()
    game.start(tree_id, difficulty, on_success, on_fail)
    game.update()            # once per tick while active
    game.confirm()           # exactly one callback fires, game goes idle

Zones (defaults):
    [70, 90]   perfect  → on_success(2)
    [60, 100]  okay     → on_success(1)
    elsewhere  miss     → on_fail()

``begin_harvest()`` wires the game to the simulation: success strips
the tree and credits score/coins, failure is a noise that jumps the
suspicion meter and puts the guard on ALERT.
"""

from __future__ import annotations
from functools import partial
from typing import TYPE_CHECKING, Callable

from components import PlayerState, GuardState, Tree
from core.constants import FRUIT
from core.events import ScoreChanged, HarvestFinished
from core.tuning import get as _tun
from logic.detection import set_suspicion
from logic.guard import set_guard_state

if TYPE_CHECKING:
    from simulation.context import SimContext


class HarvestMiniGame:
    """Oscillating-cursor skill check.  Owns its cursor state exclusively."""

    def __init__(self):
        self.active = False
        self.cursor = 0.0
        self.direction = 1
        self.difficulty = 1.0
        self.tree_id: int | None = None
        self._on_success: Callable[[int], None] | None = None
        self._on_fail: Callable[[], None] | None = None

    def start(self, tree_id: int, difficulty: float,
              on_success: Callable[[int], None],
              on_fail: Callable[[], None]) -> None:
        self.active = True
        self.cursor = 0.0
        self.direction = 1
        self.difficulty = difficulty
        self.tree_id = tree_id
        self._on_success = on_success
        self._on_fail = on_fail

    def set_difficulty(self, difficulty: float) -> None:
        self.difficulty = difficulty

    def update(self) -> None:
        """Advance the cursor one tick, bouncing off 0 and 100."""
        if not self.active:
            return
        speed = float(_tun("harvest", "cursor_speed", 1.5))
        nxt = self.cursor + speed * self.difficulty * self.direction
        if nxt >= 100.0:
            nxt = 100.0
            self.direction = -1
        elif nxt <= 0.0:
            nxt = 0.0
            self.direction = 1
        self.cursor = nxt

    def confirm(self) -> int | None:
        """Lock in the cursor.  Returns the multiplier (0 on a miss).

        No-op returning None when no game is running.
        """
        if not self.active:
            return None
        on_success, on_fail = self._on_success, self._on_fail
        self.cancel()
        multiplier = judge(self.cursor)
        if multiplier:
            on_success(multiplier)
        else:
            on_fail()
        return multiplier

    def cancel(self) -> None:
        """Stop without firing either callback (run torn down, capture)."""
        self.active = False
        self._on_success = None
        self._on_fail = None


def judge(cursor: float) -> int:
    """Yield multiplier for a cursor position: 2 perfect, 1 okay, 0 miss."""
    start = float(_tun("harvest", "target_start", 70.0))
    end = float(_tun("harvest", "target_end", 90.0))
    tol = float(_tun("harvest", "tolerance", 10.0))
    if start <= cursor <= end:
        return int(_tun("harvest", "perfect_multiplier", 2))
    if start - tol <= cursor <= end + tol:
        return int(_tun("harvest", "okay_multiplier", 1))
    return 0


def difficulty_for(suspicion: float) -> float:
    """1.0 when unsuspected, 2.0 at a full meter."""
    return 1.0 + suspicion / 100.0


# ── Simulation wiring ────────────────────────────────────────────────

def begin_harvest(ctx: "SimContext", tree: Tree) -> bool:
    """Start the mini-game on *tree*.  False if it cannot start."""
    if ctx.harvest.active or not tree.has_fruit:
        return False
    ctx.player.state = PlayerState.HARVESTING
    ctx.harvest.start(
        tree.id,
        difficulty_for(ctx.stats.suspicion),
        partial(_harvest_succeeded, ctx, tree.id),
        partial(_harvest_failed, ctx, tree.id),
    )
    ctx.log.record("harvest", f"started on tree {tree.id}", t=ctx.clock.time)
    return True


def update_harvest(ctx: "SimContext") -> None:
    """Per-tick cursor step; difficulty tracks the live suspicion."""
    if not ctx.harvest.active:
        return
    ctx.harvest.set_difficulty(difficulty_for(ctx.stats.suspicion))
    ctx.harvest.update()


def _harvest_succeeded(ctx: "SimContext", tree_id: int, multiplier: int) -> None:
    tree = ctx.tree(tree_id)
    if tree is not None and tree.has_fruit:
        tree.has_fruit = False
        s = ctx.stats
        s.score += int(_tun("harvest", "points", 100)) * multiplier
        s.coins += int(_tun("harvest", "coins", 10)) * multiplier
        ctx.bus.emit(ScoreChanged(score=s.score, coins=s.coins))
        ctx.particles.emit_burst(tree.cx, tree.top + 40, count=15, color=FRUIT)
        print(f"[HARVEST] tree {tree_id} x{multiplier} → score={s.score} coins={s.coins}")
    ctx.log.record("harvest", f"tree {tree_id} success x{multiplier}", t=ctx.clock.time)
    ctx.bus.emit(HarvestFinished(tree_id=tree_id, success=True, multiplier=multiplier))
    _back_to_climbing(ctx)


def _harvest_failed(ctx: "SimContext", tree_id: int) -> None:
    tree = ctx.tree(tree_id)
    g = ctx.guard
    if tree is not None:
        g.facing_right = tree.cx > g.cx
    set_guard_state(ctx, GuardState.ALERT, int(_tun("guard", "alert_ticks", 90)))
    set_suspicion(ctx, ctx.stats.suspicion + float(_tun("harvest", "fail_penalty", 50.0)))
    ctx.log.record("harvest", f"tree {tree_id} missed, noise", t=ctx.clock.time)
    ctx.bus.emit(HarvestFinished(tree_id=tree_id, success=False, multiplier=0))
    _back_to_climbing(ctx)


def _back_to_climbing(ctx: "SimContext") -> None:
    p = ctx.player
    if p.state is PlayerState.HARVESTING:
        p.state = PlayerState.CLIMBING

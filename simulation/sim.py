"""simulation/sim.py — Fixed-step simulation driver.

Owns one ``SimContext`` at a time and advances it a tick at a time.
The host loop (the play scene, or a test) calls::

    sim = Simulation()
    sim.subscribe("RunEnded", on_run_ended)
    sim.start()
    snap = sim.tick(InputState(right=True))
    sim.confirm_harvest()          # discrete "CUT!" press

Tick order: player → guard (may resolve a capture) → detection and
suspicion → harvest cursor → particles → camera → event drain.  The
guard acts on the suspicion left by the *previous* tick's detection.
"""

from __future__ import annotations
from typing import Callable

from components import InputState
from core.constants import FIREFLY, SCREEN_HEIGHT, SCREEN_WIDTH, SIM_DT
from core.tuning import get as _tun
from logic.detection import is_player_visible, update_suspicion
from logic.geometry import clamp
from logic.guard import update_guard
from logic.harvest import update_harvest
from logic.player import update_player
from simulation.context import SimContext, new_context
from simulation.level import world_width
from simulation.snapshot import Snapshot, take_snapshot


class Simulation:
    """Lifecycle + tick scheduler around a ``SimContext``."""

    def __init__(self, seed: int | None = None, *, ambient: bool = True):
        self._seed = seed
        self._ambient = ambient
        self._subs: list[tuple[str, Callable]] = []
        self.ctx: SimContext = new_context(seed)
        self._runs = 0

    # ── Lifecycle ────────────────────────────────────────────────────

    def subscribe(self, event_type: str, handler: Callable) -> None:
        """Register a handler that survives ``start()`` rebuilding the bus."""
        self._subs.append((event_type, handler))
        self.ctx.bus.subscribe(event_type, handler)

    def start(self) -> Snapshot:
        """Tear down any current run and begin a fresh one."""
        self.ctx.harvest.cancel()
        self.ctx = new_context(self._seed)
        for event_type, handler in self._subs:
            self.ctx.bus.subscribe(event_type, handler)
        self._runs += 1
        print(f"[RUN] Run {self._runs} started "
              f"(health={self.ctx.stats.health}, trees={len(self.ctx.trees)})")
        return take_snapshot(self.ctx)

    @property
    def game_over(self) -> bool:
        return self.ctx.stats.game_over

    # ── Per tick ─────────────────────────────────────────────────────

    def tick(self, keys: InputState) -> Snapshot:
        """Advance one fixed step.  A finished run is frozen."""
        ctx = self.ctx
        if ctx.stats.game_over:
            return take_snapshot(ctx)

        ctx.clock.time += SIM_DT
        ctx.clock.ticks += 1

        update_player(ctx, keys)
        update_guard(ctx)

        if not ctx.stats.game_over:
            ctx.player_visible = is_player_visible(ctx)
            update_suspicion(ctx, ctx.player_visible)
            update_harvest(ctx)

        if self._ambient:
            _spawn_fireflies(ctx)
        ctx.particles.update()
        _follow_camera(ctx)

        ctx.bus.drain()
        return take_snapshot(ctx)

    def confirm_harvest(self) -> int | None:
        """Player pressed "CUT!".  Returns the multiplier, or None if idle."""
        if self.ctx.stats.game_over:
            return None
        result = self.ctx.harvest.confirm()
        self.ctx.bus.drain()
        return result

    def snapshot(self) -> Snapshot:
        return take_snapshot(self.ctx)


# ── Effects / view ───────────────────────────────────────────────────

def _spawn_fireflies(ctx: SimContext) -> None:
    rng = ctx.rng
    if rng.random() < float(_tun("particles", "firefly_chance", 0.05)):
        x = ctx.camera.x + rng.random() * SCREEN_WIDTH
        y = rng.random() * SCREEN_HEIGHT
        ctx.particles.emit_burst(x, y, count=1, color=FIREFLY)


def _follow_camera(ctx: SimContext) -> None:
    span = max(0.0, world_width() - SCREEN_WIDTH)
    ctx.camera.x = clamp(ctx.player.cx - SCREEN_WIDTH / 2, 0.0, span)

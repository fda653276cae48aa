"""logic/detection.py — Flashlight visibility, suspicion and capture.

Per tick:

1. ``is_player_visible`` — is the player's centre inside the guard's
   flashlight cone, after concealment overrides?
2. ``update_suspicion`` — fill the meter while seen, drain it while not;
   a full meter starts a chase.

``resolve_capture`` is called by the guard AI when it catches the
player: lose one health, then either soft-reset the level or end the
run.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from components import GuardState, PlayerState, CONCEALED_STATES
from core.constants import CAPTURE_FLASH
from core.events import HealthChanged, SuspicionChanged, PlayerCaught, RunEnded
from core.tuning import get as _tun
from logic.geometry import clamp, distance, in_cone
from logic.guard import set_guard_state
from simulation.level import make_player, make_guard

if TYPE_CHECKING:
    from simulation.context import SimContext


# ── Visibility ───────────────────────────────────────────────────────

def flashlight_origin(ctx: "SimContext") -> tuple[float, float]:
    """Cone apex: the guard's eyes."""
    g = ctx.guard
    return g.cx, g.y + float(_tun("flashlight", "eye_height", 15.0))


def is_player_visible(ctx: "SimContext") -> bool:
    p = ctx.player
    g = ctx.guard
    if p.state in CONCEALED_STATES:
        return False

    ox, oy = flashlight_origin(ctx)
    length = float(_tun("flashlight", "length", 200.0))
    half = float(_tun("flashlight", "angle_width", 0.7853981633974483)) / 2
    if not in_cone(ox, oy, g.view_angle, length, half, p.cx, p.cy):
        return False

    # Up a trunk: hidden when high above the guard, hard to make out when far
    if p.state is PlayerState.CLIMBING:
        if p.y < g.y - float(_tun("flashlight", "climb_height_cutoff", 100.0)):
            return False
        if distance(ox, oy, p.cx, p.cy) > float(_tun("flashlight", "climb_range", 150.0)):
            return False
    return True


# ── Suspicion meter ──────────────────────────────────────────────────

def max_suspicion() -> float:
    return float(_tun("suspicion", "max", 100.0))


def set_suspicion(ctx: "SimContext", value: float) -> float:
    """Write the clamped meter; emits ``SuspicionChanged`` on change."""
    s = ctx.stats
    value = clamp(value, 0.0, max_suspicion())
    if value != s.suspicion:
        s.suspicion = value
        ctx.bus.emit(SuspicionChanged(suspicion=value))
    return value


def update_suspicion(ctx: "SimContext", visible: bool) -> None:
    s = ctx.stats
    if visible:
        set_suspicion(ctx, s.suspicion + float(_tun("suspicion", "gain", 1.5)))
        if s.suspicion >= max_suspicion() and ctx.guard.state is not GuardState.CHASING:
            print(f"[GUARD] Spotted the player at x={ctx.player.x:.0f}, giving chase")
            set_guard_state(ctx, GuardState.CHASING)
    else:
        set_suspicion(ctx, s.suspicion - float(_tun("suspicion", "decay", 0.2)))


# ── Capture ──────────────────────────────────────────────────────────

def resolve_capture(ctx: "SimContext") -> None:
    """The guard caught the player."""
    s = ctx.stats
    if s.game_over:
        return
    s.health = max(0, s.health - 1)
    ctx.bus.emit(HealthChanged(health=s.health))
    ctx.harvest.cancel()
    ctx.log.record("capture", f"caught, health={s.health}", t=ctx.clock.time)

    if s.health <= 0:
        s.game_over = True
        print(f"[CAPTURE] Out of health, run over: score={s.score} coins={s.coins}")
        ctx.bus.emit(RunEnded(score=s.score, coins=s.coins))
        return

    print(f"[CAPTURE] Caught, {s.health} health left, resetting positions")
    _soft_reset(ctx)
    ctx.particles.emit_burst(ctx.player.x, ctx.player.y, count=20, color=CAPTURE_FLASH)
    ctx.bus.emit(PlayerCaught(health=s.health))


def _soft_reset(ctx: "SimContext") -> None:
    """Player and guard back to spawn, guard calm, meter empty."""
    ctx.player = make_player()
    ctx.player.state = PlayerState.IDLE
    fresh = make_guard()
    g = ctx.guard
    g.x, g.y = fresh.x, fresh.y
    g.facing_right = fresh.facing_right
    g.view_angle = fresh.view_angle
    set_guard_state(ctx, GuardState.PATROLLING, 0)
    set_suspicion(ctx, 0.0)

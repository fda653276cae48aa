"""logic/guard.py — Guard AI state machine.

    PATROLLING ──(reach bound)──▶ SCANNING ──(timer out)──▶ PATROLLING
        │                            ▲
        │ suspicion hits 100         │ suspicion < 10
        ▼                            │
     CHASING ────────────────────────┘ ──(catch)──▶ capture resolution

    ALERT (failed harvest noise) ──(timer out)──▶ SCANNING

Detection (``logic.detection``) is the only thing that starts a chase;
this module only decides how each state moves and when it ends.
"""

from __future__ import annotations
import math
from typing import TYPE_CHECKING

from components import GuardState, PlayerState
from core.events import GuardStateChanged
from core.tuning import get as _tun
from logic.geometry import facing_to_angle

if TYPE_CHECKING:
    from simulation.context import SimContext


def set_guard_state(ctx: "SimContext", new: GuardState,
                    timer: int | None = None) -> None:
    """Switch the guard to *new*, optionally arming ``scan_timer``."""
    g = ctx.guard
    if timer is not None:
        g.scan_timer = timer
    if g.state is new:
        return
    old = g.state
    g.state = new
    ctx.log.record("guard", f"{old.value} → {new.value}", t=ctx.clock.time,
                   details={"x": round(g.x, 1), "suspicion": round(ctx.stats.suspicion, 1)})
    ctx.bus.emit(GuardStateChanged(old=old.value, new=new.value))


def update_guard(ctx: "SimContext") -> None:
    """Advance the guard one tick."""
    g = ctx.guard
    if g.state is GuardState.PATROLLING:
        _patrol(ctx)
    elif g.state is GuardState.SCANNING:
        _scan(ctx)
    elif g.state is GuardState.ALERT:
        _alert(ctx)
    elif g.state is GuardState.CHASING:
        _chase(ctx)
    g.view_angle = facing_to_angle(g.facing_right)


# ── States ───────────────────────────────────────────────────────────

def _patrol(ctx: "SimContext") -> None:
    g = ctx.guard
    speed = float(_tun("guard", "speed", 1.5))
    scan_ticks = int(_tun("guard", "scan_ticks", 120))
    if g.facing_right:
        g.x += speed
        if g.x >= g.patrol_end:
            set_guard_state(ctx, GuardState.SCANNING, scan_ticks)
    else:
        g.x -= speed
        if g.x <= g.patrol_start:
            set_guard_state(ctx, GuardState.SCANNING, scan_ticks)


def _scan(ctx: "SimContext") -> None:
    g = ctx.guard
    g.scan_timer -= 1
    if g.scan_timer % int(_tun("guard", "sweep_ticks", 60)) == 0:
        g.facing_right = not g.facing_right
    if g.scan_timer <= 0:
        # Head back into the patrol segment, away from the bound just reached
        g.facing_right = g.x <= g.patrol_start
        set_guard_state(ctx, GuardState.PATROLLING)


def _alert(ctx: "SimContext") -> None:
    g = ctx.guard
    g.scan_timer -= 1
    if g.scan_timer <= 0:
        set_guard_state(ctx, GuardState.SCANNING, int(_tun("guard", "scan_ticks", 120)))


def _chase(ctx: "SimContext") -> None:
    g = ctx.guard
    p = ctx.player
    dx = p.x - g.x
    g.facing_right = dx > 0

    if abs(dx) > float(_tun("guard", "close_distance", 10.0)):
        g.x += math.copysign(float(_tun("guard", "chase_speed", 2.5)), dx)

    # Climbing players are out of reach
    if (abs(dx) < float(_tun("guard", "catch_dx", 30.0))
            and abs(p.y - g.y) < float(_tun("guard", "catch_dy", 50.0))
            and p.state is not PlayerState.CLIMBING):
        from logic.detection import resolve_capture
        resolve_capture(ctx)
        return

    if ctx.stats.suspicion < float(_tun("guard", "give_up_suspicion", 10.0)):
        set_guard_state(ctx, GuardState.SCANNING, int(_tun("guard", "give_up_ticks", 60)))

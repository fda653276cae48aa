"""test_stealth.py — Flashlight geometry, suspicion meter and guard AI.

Everything here drives the logic functions directly on a fresh
``SimContext``, no pygame and no Simulation wrapper.

Run:  python test_stealth.py      (or: pytest test_stealth.py)
"""
from __future__ import annotations
import math, re, sys, tempfile, traceback
from pathlib import Path

# ── Bootstrap ────────────────────────────────────────────────────────
from core.tuning import load as _load_tuning
_load_tuning()

from components import GuardState, PlayerState
from logic.geometry import (
    distance, facing_to_angle, in_cone, normalize_angle, spans_overlap, clamp,
)
from logic.detection import (
    is_player_visible, set_suspicion, update_suspicion, resolve_capture,
)
from logic.guard import set_guard_state, update_guard
from simulation.context import new_context


# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")

def fail(label: str, detail: str = ""):
    global _failed
    _failed += 1
    msg = f"  [FAIL] {label}"
    if detail:
        msg += f" ({detail})"
    print(msg)

def check(cond: bool, label: str, detail: str = ""):
    if cond:
        ok(label)
    else:
        fail(label, detail)
    assert cond, f"{label} {detail}".strip()


def _place_player(ctx, cx: float, cy: float, state=PlayerState.IDLE):
    """Put the player's centre at (cx, cy)."""
    p = ctx.player
    p.x = cx - p.width / 2
    p.y = cy - p.height / 2
    p.vx = p.vy = 0.0
    p.state = state


# ═══════════════════════════════════════════════════════════════════════
#  1. GEOMETRY
# ═══════════════════════════════════════════════════════════════════════

def test_geometry():
    print("\n=== 1. Geometry ===")
    check(distance(0, 0, 3, 4) == 5.0, "1a: 3-4-5 distance")
    check(facing_to_angle(True) == 0.0, "1b: facing right is angle 0")
    check(facing_to_angle(False) == math.pi, "1c: facing left is angle pi")

    check(abs(normalize_angle(2.5 * math.pi) - 0.5 * math.pi) < 1e-9,
          "1d: 2.5pi wraps to 0.5pi")
    check(abs(normalize_angle(-1.5 * math.pi) - 0.5 * math.pi) < 1e-9,
          "1e: -1.5pi wraps to 0.5pi")
    check(normalize_angle(-math.pi) == math.pi, "1f: -pi maps to +pi")

    half = math.pi / 8
    check(in_cone(0, 0, 0.0, 200, half, 100, 0), "1g: point dead ahead is inside")
    check(not in_cone(0, 0, 0.0, 200, half, 200, 0), "1h: range bound is strict")
    check(not in_cone(0, 0, 0.0, 200, half, -100, 0), "1i: point behind is outside")
    check(in_cone(0, 0, math.pi, 200, half, -100, 10),
          "1j: left-facing cone wraps across +-pi")
    edge = (100 * math.cos(half), 100 * math.sin(half))
    check(not in_cone(0, 0, 0.0, 200, half, edge[0] + 1e-6, edge[1] + 1e-3),
          "1k: just past the half-angle is outside")

    check(spans_overlap(0, 30, 20, 80), "1l: spans overlap")
    check(not spans_overlap(0, 30, 30, 80), "1m: touching spans do not overlap")
    check(clamp(150, 0, 100) == 100 and clamp(-1, 0, 100) == 0, "1n: clamp")


# ═══════════════════════════════════════════════════════════════════════
#  2. VISIBILITY
# ═══════════════════════════════════════════════════════════════════════

def test_visibility():
    print("\n=== 2. Visibility ===")
    ctx = new_context(1)
    g = ctx.guard
    eye_x, eye_y = g.cx, g.y + 15

    _place_player(ctx, eye_x - 50, eye_y)
    check(is_player_visible(ctx), "2a: standing 50px in front of the lamp is seen")

    _place_player(ctx, eye_x - 50, eye_y, PlayerState.HIDING_BUSH)
    check(not is_player_visible(ctx), "2b: bush hiding beats the cone")

    _place_player(ctx, eye_x - 50, eye_y, PlayerState.HIDING_TREE)
    check(not is_player_visible(ctx), "2c: canopy hiding beats the cone")

    _place_player(ctx, eye_x + 50, eye_y)
    check(not is_player_visible(ctx), "2d: behind the guard is not seen")

    g.view_angle = facing_to_angle(True)
    check(is_player_visible(ctx), "2e: turning around sees the player")

    g.view_angle = facing_to_angle(False)
    _place_player(ctx, eye_x - 250, eye_y)
    check(not is_player_visible(ctx), "2f: beyond beam length is not seen")

    _place_player(ctx, eye_x - 160, eye_y, PlayerState.CLIMBING)
    check(not is_player_visible(ctx), "2g: climber past climb range is not seen")
    _place_player(ctx, eye_x - 160, eye_y, PlayerState.IDLE)
    check(is_player_visible(ctx), "2h: same spot on the ground is seen")
    _place_player(ctx, eye_x - 120, eye_y, PlayerState.CLIMBING)
    check(is_player_visible(ctx), "2i: climber within climb range is seen")

    # Widen the beam so only the height rule can hide a climber up and to the side
    src = (Path(__file__).resolve().parent / "data" / "tuning.toml").read_text()
    wide = re.sub(r"(?m)^angle_width = .*$", "angle_width = 3.0", src)
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "tuning.toml"
        path.write_text(wide)
        try:
            _load_tuning(path)
            ctx = new_context(1)
            g = ctx.guard
            half_h = ctx.player.height / 2

            _place_player(ctx, g.cx - 60, g.y - 130 + half_h, PlayerState.IDLE)
            check(is_player_visible(ctx), "2j: wide beam reaches high and to the side")
            _place_player(ctx, g.cx - 60, g.y - 130 + half_h, PlayerState.CLIMBING)
            check(not is_player_visible(ctx),
                  "2k: climber more than 100px above the guard is not seen")
            _place_player(ctx, g.cx - 60, g.y - 90 + half_h, PlayerState.CLIMBING)
            check(is_player_visible(ctx), "2l: climber less than 100px up is seen")
        finally:
            _load_tuning()


# ═══════════════════════════════════════════════════════════════════════
#  3. SUSPICION
# ═══════════════════════════════════════════════════════════════════════

def test_suspicion():
    print("\n=== 3. Suspicion meter ===")
    ctx = new_context(1)
    seen = []
    ctx.bus.subscribe("SuspicionChanged", seen.append)

    check(set_suspicion(ctx, 150.0) == 100.0, "3a: clamps to 100")
    check(set_suspicion(ctx, -20.0) == 0.0, "3b: clamps to 0")

    update_suspicion(ctx, True)
    check(ctx.stats.suspicion == 1.5, "3c: +1.5 per visible tick",
          f"got {ctx.stats.suspicion}")
    set_suspicion(ctx, 50.0)
    update_suspicion(ctx, False)
    check(abs(ctx.stats.suspicion - 49.8) < 1e-9, "3d: -0.2 per hidden tick",
          f"got {ctx.stats.suspicion}")

    set_suspicion(ctx, 0.0)
    update_suspicion(ctx, False)
    check(ctx.stats.suspicion == 0.0, "3e: decay floors at 0")

    ctx.bus.drain()
    check(len(seen) == 6, "3f: one SuspicionChanged per actual change",
          f"got {len(seen)}")

    set_suspicion(ctx, 99.0)
    check(ctx.guard.state is GuardState.PATROLLING, "3g: guard calm at 99")
    update_suspicion(ctx, True)
    check(ctx.stats.suspicion == 100.0, "3h: meter tops out at 100")
    check(ctx.guard.state is GuardState.CHASING, "3i: full meter starts a chase")


# ═══════════════════════════════════════════════════════════════════════
#  4. GUARD STATE MACHINE
# ═══════════════════════════════════════════════════════════════════════

def test_guard_patrol_scan():
    print("\n=== 4. Patrol / scan ===")
    ctx = new_context(1)
    g = ctx.guard
    check(g.state is GuardState.PATROLLING and not g.facing_right,
          "4a: guard spawns patrolling left")

    x0 = g.x
    update_guard(ctx)
    check(g.x == x0 - 1.5, "4b: patrol walks 1.5px per tick")

    g.x = g.patrol_start + 1.0
    update_guard(ctx)
    check(g.state is GuardState.SCANNING and g.scan_timer == 120,
          "4c: reaching patrol_start starts a 120-tick scan")
    check(g.view_angle == math.pi, "4d: still looking left")

    for _ in range(60):
        update_guard(ctx)
    check(g.facing_right and g.view_angle == 0.0,
          "4e: flashlight swept right after 60 ticks")
    for _ in range(59):
        update_guard(ctx)
    check(g.state is GuardState.SCANNING, "4f: still scanning at tick 119")
    update_guard(ctx)
    check(g.state is GuardState.PATROLLING, "4g: back to patrol at tick 120")
    check(g.facing_right, "4h: heads back right, into the segment")

    g.x = g.patrol_end - 1.0
    update_guard(ctx)
    check(g.state is GuardState.SCANNING, "4i: patrol_end also starts a scan")


def test_guard_alert():
    print("\n=== 5. Alert ===")
    ctx = new_context(1)
    g = ctx.guard
    set_guard_state(ctx, GuardState.ALERT, 90)
    x0 = g.x
    for _ in range(89):
        update_guard(ctx)
    check(g.state is GuardState.ALERT and g.x == x0,
          "5a: alerted guard holds still for 89 ticks")
    update_guard(ctx)
    check(g.state is GuardState.SCANNING and g.scan_timer == 120,
          "5b: alert decays into a full scan")


def test_guard_chase():
    print("\n=== 6. Chase ===")
    ctx = new_context(1)
    g = ctx.guard
    set_guard_state(ctx, GuardState.CHASING)
    set_suspicion(ctx, 60.0)

    x0 = g.x
    update_guard(ctx)
    check(g.x == x0 - 2.5 and not g.facing_right,
          "6a: chases toward the player at 2.5px per tick")

    set_suspicion(ctx, 9.0)
    update_guard(ctx)
    check(g.state is GuardState.SCANNING and g.scan_timer == 60,
          "6b: meter under 10 gives up into a short scan")

    # Climbing players are out of reach
    ctx = new_context(1)
    g = ctx.guard
    set_guard_state(ctx, GuardState.CHASING)
    set_suspicion(ctx, 100.0)
    ctx.player.x = g.x - 10
    ctx.player.state = PlayerState.CLIMBING
    update_guard(ctx)
    check(ctx.stats.health == 3, "6c: cannot catch a climber")

    ctx.player.state = PlayerState.IDLE
    ctx.player.x = g.x - 10
    update_guard(ctx)
    check(ctx.stats.health == 2, "6d: adjacent grounded player is caught")
    check(g.state is GuardState.PATROLLING and g.x == 600.0,
          "6e: guard sent back to spawn patrolling")
    check(ctx.player.x == 50.0 and ctx.player.state is PlayerState.IDLE,
          "6f: player sent back to spawn")
    check(ctx.stats.suspicion == 0.0, "6g: meter emptied after capture")


def test_guard_events():
    print("\n=== 7. Guard events ===")
    ctx = new_context(1)
    changes = []
    ctx.bus.subscribe("GuardStateChanged", lambda ev: changes.append((ev.old, ev.new)))
    set_guard_state(ctx, GuardState.SCANNING, 120)
    set_guard_state(ctx, GuardState.SCANNING, 50)
    ctx.bus.drain()
    check(changes == [("PATROLLING", "SCANNING")],
          "7a: one event per real transition", str(changes))
    check(ctx.guard.scan_timer == 50, "7b: re-entering a state re-arms its timer")
    check(any(e["cat"] == "guard" for e in ctx.log.entries),
          "7c: transition recorded in the dev log")


def test_capture_terminal():
    print("\n=== 8. Capture exhaustion ===")
    ctx = new_context(1)
    ended = []
    ctx.bus.subscribe("RunEnded", ended.append)
    ctx.stats.score = 300
    ctx.stats.coins = 30
    for _ in range(3):
        resolve_capture(ctx)
    ctx.bus.drain()
    check(ctx.stats.health == 0 and ctx.stats.game_over, "8a: three captures end the run")
    check(len(ended) == 1 and ended[0].score == 300 and ended[0].coins == 30,
          "8b: RunEnded carries the final score")
    resolve_capture(ctx)
    check(ctx.stats.health == 0, "8c: health never goes negative")


# ═══════════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sections = [
        ("Geometry", test_geometry),
        ("Visibility", test_visibility),
        ("Suspicion", test_suspicion),
        ("Patrol / scan", test_guard_patrol_scan),
        ("Alert", test_guard_alert),
        ("Chase", test_guard_chase),
        ("Guard events", test_guard_events),
        ("Capture exhaustion", test_capture_terminal),
    ]

    for name, fn in sections:
        try:
            fn()
        except AssertionError:
            pass
        except Exception:
            _failed += 1
            print(f"\n  [CRASH] {name}: unhandled exception:")
            traceback.print_exc()

    total = _passed + _failed
    print(f"\n{'=' * 60}")
    print(f"  Stealth Tests: {_passed} passed, {_failed} failed  (total {total})")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)

"""test_player.py — Player controller: ground, trunk, canopy and bushes.

Drives ``update_player`` tick by tick with hand-built intent vectors.

Run:  python test_player.py      (or: pytest test_player.py)
"""
from __future__ import annotations
import sys, traceback

# ── Bootstrap ────────────────────────────────────────────────────────
from core.tuning import load as _load_tuning
_load_tuning()

from components import InputState, PlayerState
from logic.detection import is_player_visible
from logic.player import update_player, is_grounded
from simulation.context import new_context
from simulation.level import ground_y


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


NONE = InputState()

def _ticks(ctx, keys: InputState, n: int = 1):
    for _ in range(n):
        update_player(ctx, keys)


def _under_tree(ctx, tree_id: int = 0):
    """Stand the player centred on a trunk."""
    tree = ctx.trees[tree_id]
    p = ctx.player
    p.x = tree.cx - p.width / 2
    return tree


# ═══════════════════════════════════════════════════════════════════════
#  1. GROUND
# ═══════════════════════════════════════════════════════════════════════

def test_ground_movement():
    print("\n=== 1. Ground movement ===")
    ctx = new_context(1)
    p = ctx.player
    check(is_grounded(p) and p.bottom == ground_y(), "1a: spawns standing on the floor")

    _ticks(ctx, InputState(right=True))
    check(p.x == 54.0 and p.state is PlayerState.RUNNING and p.facing_right,
          "1b: right runs 4px per tick", f"x={p.x} state={p.state}")

    _ticks(ctx, NONE)
    check(p.state is PlayerState.IDLE, "1c: releasing input goes idle")
    check(abs(p.x - (54.0 + 3.2)) < 1e-9, "1d: friction carries 0.8 of the speed",
          f"x={p.x}")

    _ticks(ctx, InputState(left=True))
    check(not p.facing_right and p.vx == -4.0, "1e: left flips facing")

    p.x = 1.0
    _ticks(ctx, InputState(left=True), 3)
    check(p.x == 0.0, "1f: world clamps at the left edge")

    p.x = 1400 - p.width - 1
    _ticks(ctx, InputState(right=True), 3)
    check(p.x == 1400 - p.width, "1g: world clamps at the right edge", f"x={p.x}")


def test_jump():
    print("\n=== 2. Jump ===")
    ctx = new_context(1)
    p = ctx.player
    _ticks(ctx, InputState(jump=True))
    check(p.state is PlayerState.JUMPING and p.vy < 0, "2a: jump leaves the ground",
          f"vy={p.vy}")
    check(p.bottom < ground_y(), "2b: rising after one tick")

    _ticks(ctx, InputState(jump=True))
    check(p.vy > -12.0 + 0.6, "2c: no double jump in the air", f"vy={p.vy}")

    _ticks(ctx, NONE, 60)
    check(p.state is PlayerState.IDLE and p.bottom == ground_y(),
          "2d: lands back on the floor idle")


# ═══════════════════════════════════════════════════════════════════════
#  2. TRUNK
# ═══════════════════════════════════════════════════════════════════════

def test_climb_and_dismount():
    print("\n=== 3. Climb / dismount ===")
    ctx = new_context(1)
    p = ctx.player
    p.x = 20.0
    _ticks(ctx, InputState(up=True))
    check(p.state is PlayerState.IDLE and p.climbing_tree_id is None,
          "3a: up with no trunk in reach is a no-op")

    tree = _under_tree(ctx, 0)
    _ticks(ctx, InputState(up=True))
    check(p.state is PlayerState.CLIMBING and p.climbing_tree_id == tree.id,
          "3b: up next to a trunk grabs it")
    check(p.y == ground_y() - p.height - 2.0, "3c: first climb step is 2px",
          f"y={p.y}")

    _ticks(ctx, InputState(up=True), 300)
    check(p.y == tree.top + 40.0, "3d: climbing stops under the canopy",
          f"y={p.y} top={tree.top}")

    _ticks(ctx, NONE, 30)
    check(p.state is PlayerState.CLIMBING and p.y == tree.top + 40.0,
          "3e: clinging without input, no sliding")

    _ticks(ctx, InputState(left=True))
    check(p.state is PlayerState.CLIMBING and p.x == tree.cx - p.width / 2,
          "3f: sideways input does not leave the trunk")

    _ticks(ctx, InputState(down=True), 300)
    check(p.state is PlayerState.IDLE and p.climbing_tree_id is None,
          "3g: climbing down to the floor dismounts")
    check(p.bottom == ground_y(), "3h: dismounted on the floor")
    dismounts = [e for e in ctx.log.entries if e["msg"].startswith("dismounted")]
    check(len(dismounts) == 1, "3i: dismount happens exactly once",
          f"{len(dismounts)} dismounts")


def test_emergency_drop():
    print("\n=== 4. Emergency drop ===")
    ctx = new_context(1)
    p = ctx.player
    _under_tree(ctx, 1)
    _ticks(ctx, InputState(up=True), 50)
    check(p.state is PlayerState.CLIMBING, "4a: climbing tree 1")

    ctx.clock.time = 10.0
    n_particles = ctx.particles.count
    _ticks(ctx, InputState(down=True, jump=True))
    check(p.state is PlayerState.INJURED and p.climbing_tree_id is None,
          "4b: down+jump lets go, injured")
    check(p.injury_timer == 14.0, "4c: recovery scheduled 4s out",
          f"timer={p.injury_timer}")
    check(ctx.particles.count >= n_particles + 10, "4d: pain burst emitted")

    _ticks(ctx, NONE, 60)
    check(p.bottom == ground_y() and p.state is PlayerState.INJURED,
          "4e: falls to the floor, still injured")

    _ticks(ctx, InputState(right=True))
    check(p.vx == 2.0, "4f: limps at half speed", f"vx={p.vx}")

    ctx.clock.time = 14.0
    _ticks(ctx, NONE)
    check(p.state is PlayerState.INJURED, "4g: not yet recovered at the deadline")
    ctx.clock.time = 14.0 + 1 / 60
    _ticks(ctx, NONE)
    check(p.state is PlayerState.IDLE, "4h: recovered one tick after the deadline")


def test_injury_interrupted():
    print("\n=== 4b. Injury cut short ===")
    ctx = new_context(1)
    p = ctx.player
    p.state = PlayerState.INJURED
    p.injury_timer = 100.0

    _ticks(ctx, InputState(jump=True))
    check(p.state is PlayerState.JUMPING, "4b-a: an injured player can still hop")
    check(abs(p.vy - (-6.0 + 0.6)) < 1e-9, "4b-b: the hop is half height", f"vy={p.vy}")
    check(p.injury_timer == 100.0, "4b-c: the deadline is left untouched")

    _ticks(ctx, NONE, 60)
    _ticks(ctx, InputState(right=True))
    check(p.state is PlayerState.RUNNING and p.vx == 4.0,
          "4b-d: landing from the hop ends the limp early")

    ctx = new_context(1)
    p = ctx.player
    p.x = ctx.bushes[0].x + 20
    p.state = PlayerState.INJURED
    p.injury_timer = 100.0
    _ticks(ctx, InputState(down=True))
    check(p.state is PlayerState.HIDING_BUSH, "4b-e: an injured player can crouch in a bush")
    _ticks(ctx, NONE)
    check(p.state is PlayerState.IDLE, "4b-f: standing up again is uninjured")


# ═══════════════════════════════════════════════════════════════════════
#  3. CANOPY
# ═══════════════════════════════════════════════════════════════════════

def test_canopy_actions():
    print("\n=== 5. Canopy ===")
    ctx = new_context(1)
    p = ctx.player
    tree = _under_tree(ctx, 0)
    _ticks(ctx, InputState(up=True), 300)

    _ticks(ctx, InputState(action=True))
    check(p.state is PlayerState.HARVESTING and ctx.harvest.active,
          "5a: action in a fruited canopy starts the harvest")
    check(ctx.harvest.tree_id == tree.id, "5b: mini-game bound to this tree")

    y0 = p.y
    _ticks(ctx, InputState(down=True, left=True), 5)
    check(p.state is PlayerState.HARVESTING and p.y == y0,
          "5c: pinned in place while harvesting")
    ctx.harvest.cancel()

    # Bare tree: hide instead
    ctx = new_context(1)
    p = ctx.player
    tree = _under_tree(ctx, 0)
    tree.has_fruit = False
    _ticks(ctx, InputState(up=True), 300)
    _ticks(ctx, InputState(action=True))
    check(p.state is PlayerState.HIDING_TREE and not ctx.harvest.active,
          "5d: action in a bare canopy hides")
    check(not is_player_visible(ctx), "5e: hidden in the fronds")

    _ticks(ctx, NONE, 30)
    check(p.state is PlayerState.HIDING_TREE and p.y == tree.top + 40.0,
          "5f: stays hidden and in place without input")
    _ticks(ctx, InputState(down=True))
    check(p.state is PlayerState.CLIMBING, "5g: any direction leaves the hiding spot")

    # Action low on the trunk does nothing
    ctx = new_context(1)
    p = ctx.player
    _under_tree(ctx, 0)
    _ticks(ctx, InputState(up=True), 10)
    _ticks(ctx, InputState(action=True))
    check(p.state is PlayerState.CLIMBING and not ctx.harvest.active,
          "5h: action out of canopy reach is ignored")


# ═══════════════════════════════════════════════════════════════════════
#  4. BUSHES
# ═══════════════════════════════════════════════════════════════════════

def test_bush_hiding():
    print("\n=== 6. Bush hiding ===")
    ctx = new_context(1)
    p = ctx.player
    bush = ctx.bushes[0]

    _ticks(ctx, InputState(down=True))
    check(p.state is PlayerState.IDLE, "6a: crouching in the open hides nothing")

    p.x = bush.x + 20
    _ticks(ctx, InputState(down=True))
    check(p.state is PlayerState.HIDING_BUSH, "6b: down inside a bush hides")
    _ticks(ctx, InputState(down=True), 20)
    check(p.state is PlayerState.HIDING_BUSH, "6c: stays hidden while down is held")

    _ticks(ctx, NONE)
    check(p.state is PlayerState.IDLE, "6d: releasing down stands up")

    _ticks(ctx, InputState(down=True))
    _ticks(ctx, InputState(down=True, right=True))
    check(p.state is not PlayerState.HIDING_BUSH, "6e: moving leaves the bush")

    p.x = bush.x + 20
    p.y -= 100
    p.vy = 0.0
    _ticks(ctx, InputState(down=True))
    check(p.state is not PlayerState.HIDING_BUSH, "6f: cannot hide while airborne")


# ═══════════════════════════════════════════════════════════════════════
#  MAIN
# ═══════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    sections = [
        ("Ground movement", test_ground_movement),
        ("Jump", test_jump),
        ("Climb / dismount", test_climb_and_dismount),
        ("Emergency drop", test_emergency_drop),
        ("Injury cut short", test_injury_interrupted),
        ("Canopy", test_canopy_actions),
        ("Bush hiding", test_bush_hiding),
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
    print(f"  Player Tests: {_passed} passed, {_failed} failed  (total {total})")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)

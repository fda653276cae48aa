"""logic/player.py — Player controller.

Turns the boolean intent vector into movement and state changes:

    ground   run / jump / fall under gravity, friction when idle
    trunk    climb up and down, dismount at the floor, emergency drop
    canopy   harvest a fruited tree, or hide in a bare one
    bush     crouch (hold down) to hide, any movement leaves

Failed preconditions (no trunk in reach, bare tree, no bush) are silent
no-ops.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from components import InputState, PlayerState, TREE_BOUND_STATES
from core.constants import DUST, PAIN
from core.tuning import get as _tun
from logic.geometry import clamp, spans_overlap
from logic.harvest import begin_harvest
from simulation.level import ground_y, world_width

if TYPE_CHECKING:
    from components import Player
    from simulation.context import SimContext


def update_player(ctx: "SimContext", keys: InputState) -> None:
    """Advance the player one tick."""
    p = ctx.player

    if p.state is PlayerState.INJURED and ctx.clock.time > p.injury_timer:
        p.state = PlayerState.IDLE
        ctx.log.record("player", "recovered from injury", t=ctx.clock.time)

    if p.state not in TREE_BOUND_STATES:
        _ground_movement(ctx, keys)

    if keys.up and p.climbing_tree_id is None:
        _try_grab_trunk(ctx)

    if p.state is PlayerState.CLIMBING:
        _climb(ctx, keys)
    elif p.state is PlayerState.HIDING_TREE:
        if keys.up or keys.down or keys.left or keys.right:
            p.state = PlayerState.CLIMBING

    _bush_hiding(ctx, keys)


def is_grounded(p: "Player") -> bool:
    margin = float(_tun("player", "jump_margin", 10.0))
    return abs(p.vy) < 0.1 and p.bottom >= ground_y() - margin


# ── Ground ───────────────────────────────────────────────────────────

def _ground_movement(ctx: "SimContext", keys: InputState) -> None:
    p = ctx.player
    mult = float(_tun("player", "injured_speed_mult", 0.5)) if p.state is PlayerState.INJURED else 1.0
    speed = float(_tun("player", "speed", 4.0))

    if keys.left:
        p.vx = -speed * mult
        p.facing_right = False
    elif keys.right:
        p.vx = speed * mult
        p.facing_right = True
    else:
        p.vx *= float(_tun("player", "friction", 0.8))

    # Jump is judged on the resting velocity, before this tick's gravity
    if keys.jump and is_grounded(p):
        p.vy = float(_tun("player", "jump_force", -12.0)) * mult
        p.state = PlayerState.JUMPING
        ctx.particles.emit_burst(p.cx, p.bottom, count=5, color=DUST)

    p.vy += float(_tun("player", "gravity", 0.6))
    p.x += p.vx
    p.y += p.vy

    floor = ground_y()
    if p.bottom > floor:
        p.y = floor - p.height
        p.vy = 0.0
        if p.state is PlayerState.JUMPING:
            p.state = PlayerState.IDLE

    p.x = clamp(p.x, 0.0, world_width() - p.width)

    moving = keys.left or keys.right
    if p.state is PlayerState.IDLE and moving and is_grounded(p):
        p.state = PlayerState.RUNNING
    elif p.state is PlayerState.RUNNING and not moving:
        p.state = PlayerState.IDLE


# ── Trunk ────────────────────────────────────────────────────────────

def _try_grab_trunk(ctx: "SimContext") -> None:
    p = ctx.player
    reach = float(_tun("player", "climb_reach", 30.0))
    for tree in ctx.trees:
        if abs(tree.cx - p.cx) < reach:
            p.climbing_tree_id = tree.id
            p.state = PlayerState.CLIMBING
            p.x = tree.cx - p.width / 2
            p.vx = 0.0
            ctx.log.record("player", f"grabbed tree {tree.id}", t=ctx.clock.time)
            return


def _climb(ctx: "SimContext", keys: InputState) -> None:
    p = ctx.player
    tree = ctx.tree(p.climbing_tree_id)
    if tree is None:
        p.climbing_tree_id = None
        p.state = PlayerState.IDLE
        return

    if keys.down and keys.jump:
        _emergency_drop(ctx)
        return

    p.vy = 0.0
    climb = float(_tun("player", "climb_speed", 2.0))
    if keys.up:
        p.y -= climb
    if keys.down:
        p.y += climb

    ceiling = tree.top + float(_tun("player", "canopy_ceiling", 40.0))
    if p.y < ceiling:
        p.y = ceiling

    floor_y = ground_y() - p.height
    if p.y > floor_y:
        p.y = floor_y
        p.state = PlayerState.IDLE
        p.climbing_tree_id = None
        ctx.log.record("player", f"dismounted tree {tree.id}", t=ctx.clock.time)
        return

    if p.y <= tree.top + float(_tun("player", "canopy_reach", 60.0)) and keys.action:
        if tree.has_fruit:
            begin_harvest(ctx, tree)
        else:
            p.state = PlayerState.HIDING_TREE


def _emergency_drop(ctx: "SimContext") -> None:
    """Let go of the trunk: fast, noisy landing and a limp."""
    p = ctx.player
    p.state = PlayerState.INJURED
    p.climbing_tree_id = None
    p.vy = float(_tun("player", "drop_speed", 5.0))
    p.injury_timer = ctx.clock.time + float(_tun("player", "injury_duration", 4.0))
    ctx.particles.emit_burst(p.x, p.y, count=10, color=PAIN)
    ctx.log.record("player", "emergency drop", t=ctx.clock.time,
                   details={"until": round(p.injury_timer, 2)})


# ── Bushes ───────────────────────────────────────────────────────────

def _bush_hiding(ctx: "SimContext", keys: InputState) -> None:
    p = ctx.player
    if p.state is PlayerState.HIDING_BUSH:
        if keys.left or keys.right or keys.up or not keys.down:
            p.state = PlayerState.IDLE
        return

    if (keys.down and not keys.left and not keys.right
            and p.climbing_tree_id is None and is_grounded(p)):
        tol = float(_tun("player", "bush_tolerance", 20.0))
        for bush in ctx.bushes:
            if (spans_overlap(p.x, p.width, bush.x, bush.width)
                    and abs(p.bottom - (bush.y + bush.height)) < tol):
                p.state = PlayerState.HIDING_BUSH
                return

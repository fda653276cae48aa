"""simulation/snapshot.py — Read-only views of a simulation tick.

Renderers and the HUD only ever see these frozen records, so they
cannot mutate the simulation by accident.  ``take_snapshot()`` copies
out of the live ``SimContext``.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from components import PlayerState, GuardState

if TYPE_CHECKING:
    from simulation.context import SimContext


@dataclass(frozen=True)
class PlayerView:
    x: float
    y: float
    width: float
    height: float
    state: PlayerState
    facing_right: bool
    climbing_tree_id: int | None


@dataclass(frozen=True)
class GuardView:
    x: float
    y: float
    width: float
    height: float
    state: GuardState
    facing_right: bool
    view_angle: float


@dataclass(frozen=True)
class TreeView:
    id: int
    x: float
    y: float
    width: float
    height: float
    has_fruit: bool
    fruit_value: int


@dataclass(frozen=True)
class BushView:
    id: int
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class ParticleView:
    x: float
    y: float
    life: float
    max_life: float
    color: tuple[int, int, int]
    size: float


@dataclass(frozen=True)
class HarvestView:
    active: bool
    cursor: float
    tree_id: int | None


@dataclass(frozen=True)
class Snapshot:
    tick: int
    time: float
    player: PlayerView
    guard: GuardView
    trees: tuple[TreeView, ...]
    bushes: tuple[BushView, ...]
    particles: tuple[ParticleView, ...]
    harvest: HarvestView
    suspicion: float
    health: int
    score: int
    coins: int
    level: int
    player_visible: bool
    camera_x: float
    game_over: bool


def take_snapshot(ctx: "SimContext") -> Snapshot:
    p, g, s = ctx.player, ctx.guard, ctx.stats
    return Snapshot(
        tick=ctx.clock.ticks,
        time=ctx.clock.time,
        player=PlayerView(p.x, p.y, p.width, p.height, p.state,
                          p.facing_right, p.climbing_tree_id),
        guard=GuardView(g.x, g.y, g.width, g.height, g.state,
                        g.facing_right, g.view_angle),
        trees=tuple(TreeView(t.id, t.x, t.y, t.width, t.height,
                             t.has_fruit, t.fruit_value) for t in ctx.trees),
        bushes=tuple(BushView(b.id, b.x, b.y, b.width, b.height)
                     for b in ctx.bushes),
        particles=tuple(ParticleView(q.x, q.y, q.life, q.max_life, q.color, q.size)
                        for q in ctx.particles.particles),
        harvest=HarvestView(ctx.harvest.active, ctx.harvest.cursor,
                            ctx.harvest.tree_id if ctx.harvest.active else None),
        suspicion=s.suspicion,
        health=s.health,
        score=s.score,
        coins=s.coins,
        level=s.level,
        player_visible=ctx.player_visible,
        camera_x=ctx.camera.x,
        game_over=s.game_over,
    )

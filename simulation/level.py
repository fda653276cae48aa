"""simulation/level.py — The one fixed level layout.

Five fruit trees and four bushes in a row, the player spawning on the
far left and the guard patrolling the middle stretch.  Positions come
from ``data/tuning.toml``; only ``fruit_value`` is random.
"""

from __future__ import annotations
import random

from components import Player, Guard, Tree, Bush
from core.constants import SCREEN_HEIGHT
from core.tuning import get as _tun
from logic.geometry import facing_to_angle


def screen_height() -> float:
    return float(SCREEN_HEIGHT)


def ground_y() -> float:
    """The floor line every grounded bottom edge rests on."""
    return screen_height() - float(_tun("world", "ground_margin", 10))


def world_width() -> float:
    return float(_tun("world", "width", 1400))


def make_player() -> Player:
    h = float(_tun("player", "height", 50))
    return Player(
        x=float(_tun("player", "spawn_x", 50.0)),
        y=ground_y() - h,
        width=float(_tun("player", "width", 30)),
        height=h,
    )


def make_guard() -> Guard:
    return Guard(
        x=float(_tun("guard", "spawn_x", 600.0)),
        y=screen_height() - float(_tun("guard", "ground_offset", 90)),
        width=float(_tun("guard", "width", 40)),
        height=float(_tun("guard", "height", 60)),
        facing_right=False,
        view_angle=facing_to_angle(False),
        patrol_start=float(_tun("guard", "patrol_start", 300.0)),
        patrol_end=float(_tun("guard", "patrol_end", 700.0)),
    )


def make_trees(rng: random.Random) -> list[Tree]:
    count = int(_tun("trees", "count", 5))
    first = float(_tun("trees", "first_x", 200.0))
    spacing = float(_tun("trees", "spacing", 250.0))
    base = screen_height() - float(_tun("trees", "base_offset", 60))
    return [
        Tree(
            id=i,
            x=first + i * spacing,
            y=base,
            width=float(_tun("trees", "width", 40)),
            height=float(_tun("trees", "height", 350)),
            has_fruit=True,
            fruit_value=rng.randint(1, 3),
        )
        for i in range(count)
    ]


def make_bushes() -> list[Bush]:
    count = int(_tun("bushes", "count", 4))
    first = float(_tun("bushes", "first_x", 320.0))
    spacing = float(_tun("bushes", "spacing", 300.0))
    h = float(_tun("bushes", "height", 50))
    return [
        Bush(id=i, x=first + i * spacing, y=screen_height() - h,
             width=float(_tun("bushes", "width", 80)), height=h)
        for i in range(count)
    ]

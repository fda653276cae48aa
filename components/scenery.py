"""components.scenery — Static level geometry: fruit trees and bushes."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Tree:
    """A climbable fruit tree.

    ``y`` is the trunk base; the trunk spans ``y - height`` .. ``y``.
    ``has_fruit`` goes True → False once, on a successful harvest.
    ``fruit_value`` (1–3) is how many bunches hang in the canopy.
    """
    id: int
    x: float
    y: float
    width: float = 40.0
    height: float = 350.0
    has_fruit: bool = True
    fruit_value: int = 1

    @property
    def cx(self) -> float:
        return self.x + self.width / 2

    @property
    def top(self) -> float:
        return self.y - self.height


@dataclass(frozen=True)
class Bush:
    id: int
    x: float
    y: float
    width: float = 80.0
    height: float = 50.0

"""logic/geometry.py — Distance, angle and cone helpers.

Pure functions, no simulation state.  Angles are radians in screen
space (y down), so π/2 points *down*.
"""

from __future__ import annotations
import math

from core.constants import ANGLE_LEFT, ANGLE_RIGHT


def distance(ax: float, ay: float, bx: float, by: float) -> float:
    """Euclidean distance between two points."""
    return math.hypot(bx - ax, by - ay)


def bearing(ax: float, ay: float, bx: float, by: float) -> float:
    """Angle of the ray from (ax, ay) to (bx, by)."""
    return math.atan2(by - ay, bx - ax)


def normalize_angle(a: float) -> float:
    """Wrap *a* into the half-open interval (−π, π]."""
    a = math.fmod(a, 2 * math.pi)
    if a <= -math.pi:
        a += 2 * math.pi
    elif a > math.pi:
        a -= 2 * math.pi
    return a


def facing_to_angle(facing_right: bool) -> float:
    """right → 0, left → π."""
    return ANGLE_RIGHT if facing_right else ANGLE_LEFT


def in_cone(ox: float, oy: float, face_angle: float,
            max_range: float, half_angle: float,
            tx: float, ty: float) -> bool:
    """Return True if point (tx, ty) lies inside the cone.

    The cone starts at (ox, oy), points along *face_angle* and is
    bounded by *max_range*.  Both bounds are strict.
    """
    if distance(ox, oy, tx, ty) >= max_range:
        return False
    diff = normalize_angle(bearing(ox, oy, tx, ty) - face_angle)
    return abs(diff) < half_angle


def spans_overlap(a0: float, a_len: float, b0: float, b_len: float) -> bool:
    """True if [a0, a0+a_len) and [b0, b0+b_len) overlap on one axis."""
    return a0 + a_len > b0 and a0 < b0 + b_len


def clamp(v: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, v))

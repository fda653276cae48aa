"""logic/particles.py — Short-lived visual bursts.

Jump dust, pain sparks, fruit pops, the capture flash and ambient
fireflies are all the same thing: a handful of coloured dots scattered
from a point that fade out after a few dozen ticks.  They never touch
gameplay state.

    ctx.particles.emit_burst(p.cx, p.bottom, count=5, color=DUST)
    ctx.particles.update()      # once per simulation tick

Drawing lives in ``scenes.draw.draw_particles``.
"""

from __future__ import annotations
import random
from dataclasses import dataclass
from core.tuning import get as _tun


@dataclass(slots=True)
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    life: float                 # ticks left
    max_life: float
    color: tuple[int, int, int]
    size: float


class ParticleManager:
    """Every live particle of one simulation context.

    The pool is capped (``particles.max_particles``); a burst that
    overflows it evicts the oldest particles.  Randomness comes from the
    context's seeded rng so replays stay deterministic.
    """

    def __init__(self, max_particles: int | None = None,
                 rng: random.Random | None = None):
        if max_particles is None:
            max_particles = int(_tun("particles", "max_particles", 512))
        self.max_particles = max_particles
        self.particles: list[Particle] = []
        self._rng = rng or random.Random()

    @property
    def count(self) -> int:
        return len(self.particles)

    def emit_burst(self, x: float, y: float, count: int = 8,
                   color: tuple[int, int, int] = (255, 255, 255)):
        rng = self._rng
        speed = float(_tun("particles", "speed", 2.0))
        life = float(_tun("particles", "life", 30.0))
        life_jitter = float(_tun("particles", "life_jitter", 20.0))
        size = float(_tun("particles", "size", 2.0))
        size_jitter = float(_tun("particles", "size_jitter", 3.0))

        for _ in range(count):
            ttl = life + rng.random() * life_jitter
            self.particles.append(Particle(
                x, y,
                rng.uniform(-speed, speed), rng.uniform(-speed, speed),
                ttl, ttl, color,
                size + rng.random() * size_jitter,
            ))
        # Over the cap the oldest dots go first, so a fresh burst always shows
        overflow = len(self.particles) - self.max_particles
        if overflow > 0:
            del self.particles[:overflow]

    def update(self):
        for p in self.particles:
            p.x += p.vx
            p.y += p.vy
            p.life -= 1
        self.particles = [p for p in self.particles if p.life > 0]

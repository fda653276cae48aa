"""core/constants.py — Shared constants used across the codebase.

Centralises the numbers that are *not* gameplay tuning: the design
resolution, the fixed simulation step and the render palette.  Gameplay
values (speeds, ranges, timers) live in ``data/tuning.toml``.

Unit System
-----------
The simulation works directly in screen-space pixels of the 800×600
design resolution, with y growing downwards.

    Distance / position     px
    Speed                   px/tick
    Timers (AI)             ticks
    Deadlines (injury)      s       (GameClock time)
    Angles                  rad     (0 = right, π = left)

One tick is ``SIM_DT`` seconds of game clock regardless of the display
frame rate; the play scene runs a fixed-step accumulator.
"""

import math

# ── Design resolution ───────────────────────────────────────────────
SCREEN_WIDTH = 800
SCREEN_HEIGHT = 600

# ── Simulation step ─────────────────────────────────────────────────
TICK_RATE = 60
SIM_DT: float = 1.0 / TICK_RATE
MAX_TICKS_PER_FRAME = 5          # spiral-of-death guard for slow frames

# ── Facing ──────────────────────────────────────────────────────────
ANGLE_RIGHT = 0.0
ANGLE_LEFT = math.pi

# ── Palette (RGB) ───────────────────────────────────────────────────
SKY_TOP = (2, 6, 23)
SKY_BOTTOM = (30, 41, 59)
MOON = (254, 243, 199)
GROUND = (6, 78, 59)
TRUNK = (63, 46, 24)
TRUNK_RING = (40, 28, 13)
FRONDS = (22, 101, 52)
FRUIT = (220, 38, 38)
BUSH = (20, 83, 45)
GUARD_BODY = (30, 41, 59)
FLASHLIGHT = (255, 255, 200)
NINJA = (0, 0, 0)
HEADBAND = (239, 68, 68)

DUST = (139, 69, 19)
PAIN = (255, 0, 0)
CAPTURE_FLASH = (255, 255, 255)
FIREFLY = (251, 191, 36)

SUSPICION_LOW = (59, 130, 246)
SUSPICION_MID = (234, 179, 8)
SUSPICION_HIGH = (220, 38, 38)

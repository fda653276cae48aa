"""scenes/draw.py — Plantation renderer.

Draws a ``Snapshot`` onto the virtual surface.  World-space objects are
shifted by the camera; the sky, moon and vignette stay fixed to the
screen.  Nothing here touches the simulation.
"""

from __future__ import annotations
import math
import pygame

from components import GuardState, PlayerState, CONCEALED_STATES
from core.app import App
from core.constants import (
    SCREEN_WIDTH, SCREEN_HEIGHT,
    SKY_TOP, SKY_BOTTOM, MOON, GROUND, TRUNK, TRUNK_RING, FRONDS, FRUIT,
    BUSH, GUARD_BODY, FLASHLIGHT, NINJA, HEADBAND,
    SUSPICION_LOW, SUSPICION_MID, SUSPICION_HIGH,
)
from core.tuning import get as _tun
from simulation.snapshot import Snapshot, GuardView, PlayerView, TreeView


# Cached full-screen layers (built once per process)
_SKY: pygame.Surface | None = None
_VIGNETTE: pygame.Surface | None = None


def draw_world(surface: pygame.Surface, app: App, snap: Snapshot):
    """Full scene: background, scenery, actors, particles, night overlay."""
    ox = -int(snap.camera_x)
    draw_background(surface, ox)
    for tree in snap.trees:
        draw_tree(surface, tree, ox)
    for bush in snap.bushes:
        rect = pygame.Rect(int(bush.x) + ox, int(bush.y), int(bush.width), int(bush.height))
        pygame.draw.ellipse(surface, BUSH, rect)
    draw_guard(surface, app, snap.guard, ox)
    draw_player(surface, snap.player, ox)
    draw_particles(surface, snap, ox)
    draw_vignette(surface)


# ── Background ───────────────────────────────────────────────────────

def draw_background(surface: pygame.Surface, ox: int):
    global _SKY
    if _SKY is None:
        _SKY = _vertical_gradient(SCREEN_WIDTH, SCREEN_HEIGHT, SKY_TOP, SKY_BOTTOM)
    surface.blit(_SKY, (0, 0))

    # Moon sits on the far horizon; a slight parallax keeps it alive
    mx = 700 + ox // 10
    glow = pygame.Surface((160, 160), pygame.SRCALPHA)
    pygame.draw.circle(glow, (*MOON, 26), (80, 80), 80)
    surface.blit(glow, (mx - 80, 0))
    pygame.draw.circle(surface, MOON, (mx, 80), 40)

    margin = int(_tun("world", "ground_margin", 10))
    strip = 2 * margin
    pygame.draw.rect(surface, GROUND, (0, SCREEN_HEIGHT - strip, SCREEN_WIDTH, strip))


def _vertical_gradient(w: int, h: int, top: tuple, bottom: tuple) -> pygame.Surface:
    surf = pygame.Surface((w, h))
    for y in range(h):
        t = y / max(1, h - 1)
        color = tuple(int(a + (b - a) * t) for a, b in zip(top, bottom))
        pygame.draw.line(surf, color, (0, y), (w, y))
    return surf


# ── Scenery ──────────────────────────────────────────────────────────

def draw_tree(surface: pygame.Surface, t: TreeView, ox: int):
    x, base, w, h = int(t.x) + ox, int(t.y), int(t.width), int(t.height)
    top = base - h
    if x + w + 60 < 0 or x - 60 > SCREEN_WIDTH:
        return
    pygame.draw.rect(surface, TRUNK, (x, top, w, h))
    for i in range(0, h, 40):
        pygame.draw.rect(surface, TRUNK_RING, (x, base - i, w, 4))

    fronds = [(x + w // 2, top + 20), (x - 60, top - 20), (x + w + 60, top - 20)]
    pygame.draw.polygon(surface, FRONDS, fronds)

    if t.has_fruit:
        # One bunch per point of fruit value
        bunches = [(10, 30), (30, 30), (20, 45)][:max(1, t.fruit_value)]
        for bx, by in bunches:
            pygame.draw.circle(surface, FRUIT, (x + bx, top + by), 8)


# ── Actors ───────────────────────────────────────────────────────────

def draw_cone_alpha(surface: pygame.Surface, color: tuple,
                    cx: int, cy: int, radius: int,
                    face_angle: float, half_fov: float,
                    steps: int = 24):
    """Semi-transparent filled wedge."""
    if radius < 2:
        return
    r, g, b = color[:3]
    a = color[3] if len(color) > 3 else 40
    pts = [(cx, cy)]
    for i in range(steps + 1):
        ang = face_angle - half_fov + (2 * half_fov) * i / steps
        pts.append((cx + int(math.cos(ang) * radius),
                    cy + int(math.sin(ang) * radius)))
    xs = [p[0] for p in pts]
    ys = [p[1] for p in pts]
    min_x, min_y = min(xs), min(ys)
    w = max(xs) - min_x + 2
    h = max(ys) - min_y + 2
    s = pygame.Surface((w, h), pygame.SRCALPHA)
    local_pts = [(px - min_x + 1, py - min_y + 1) for px, py in pts]
    pygame.draw.polygon(s, (r, g, b, a), local_pts)
    surface.blit(s, (min_x - 1, min_y - 1))


def draw_flashlight(surface: pygame.Surface, g: GuardView, ox: int):
    """Beam fading out with distance: nested wedges, brightest near the lamp."""
    length = int(_tun("flashlight", "length", 200.0))
    half = float(_tun("flashlight", "angle_width", math.pi / 4)) / 2
    cx = int(g.x + g.width / 2) + ox
    cy = int(g.y + float(_tun("flashlight", "eye_height", 15.0)))
    bands = 5
    for i in range(bands):
        radius = length * (bands - i) // bands
        draw_cone_alpha(surface, (*FLASHLIGHT, 30), cx, cy, radius, g.view_angle, half)


def draw_guard(surface: pygame.Surface, app: App, g: GuardView, ox: int):
    draw_flashlight(surface, g, ox)
    x, y, w, h = int(g.x) + ox, int(g.y), int(g.width), int(g.height)
    pygame.draw.rect(surface, GUARD_BODY, (x, y, w, h))
    pygame.draw.rect(surface, (0, 0, 0), (x, y, w, 10))
    if g.state in (GuardState.CHASING, GuardState.ALERT):
        app.draw_text(surface, "!", x + 15, y - 28, (255, 0, 0), app.font_lg)
    elif g.state is GuardState.SCANNING:
        app.draw_text(surface, "?", x + 15, y - 28, (255, 255, 0), app.font_lg)


def draw_player(surface: pygame.Surface, p: PlayerView, ox: int):
    x, y, w, h = int(p.x) + ox, int(p.y), int(p.width), int(p.height)
    if p.state in CONCEALED_STATES:
        shadow = pygame.Surface((30, 10), pygame.SRCALPHA)
        pygame.draw.ellipse(shadow, (0, 0, 0, 128), shadow.get_rect())
        surface.blit(shadow, (x + w // 2 - 15, y + h - 5))
        return
    body = NINJA
    if p.state is PlayerState.INJURED:
        # Limping: blink every few frames
        body = (60, 0, 0) if (pygame.time.get_ticks() // 150) % 2 else NINJA
    pygame.draw.rect(surface, body, (x, y, w, h))
    band_x = x + w - 10 if p.facing_right else x
    pygame.draw.rect(surface, HEADBAND, (band_x, y + 10, 10, 4))


# ── Effects ──────────────────────────────────────────────────────────

def draw_particles(surface: pygame.Surface, snap: Snapshot, ox: int):
    for q in snap.particles:
        sx = int(q.x) + ox
        sy = int(q.y)
        t = max(0.0, min(1.0, q.life / q.max_life)) if q.max_life > 0 else 1.0
        alpha = int(255 * t)
        r, g, b = q.color
        radius = max(1, int(q.size))
        if alpha >= 250:
            pygame.draw.circle(surface, (r, g, b), (sx, sy), radius)
        else:
            d = radius * 2 + 2
            dot = pygame.Surface((d, d), pygame.SRCALPHA)
            pygame.draw.circle(dot, (r, g, b, alpha), (d // 2, d // 2), radius)
            surface.blit(dot, (sx - d // 2, sy - d // 2))


def draw_vignette(surface: pygame.Surface):
    global _VIGNETTE
    if _VIGNETTE is None:
        _VIGNETTE = _build_vignette(SCREEN_WIDTH, SCREEN_HEIGHT)
    surface.blit(_VIGNETTE, (0, 0))


def _build_vignette(w: int, h: int) -> pygame.Surface:
    """Radial darkening from 20 % at r=200 to 80 % at r=600."""
    surf = pygame.Surface((w, h), pygame.SRCALPHA)
    surf.fill((0, 0, 0, 204))
    cx, cy = w // 2, h // 2
    # draw.circle writes alpha straight through, so paint outside-in
    for r in range(600, 199, -8):
        t = (r - 200) / 400
        alpha = int(51 + (204 - 51) * t)
        pygame.draw.circle(surf, (0, 0, 0, alpha), (cx, cy), r)
    return surf


# ── HUD ──────────────────────────────────────────────────────────────

def suspicion_color(suspicion: float) -> tuple[int, int, int]:
    if suspicion > 80:
        return SUSPICION_HIGH
    if suspicion > 40:
        return SUSPICION_MID
    return SUSPICION_LOW


def draw_hud(surface: pygame.Surface, app: App, snap: Snapshot):
    injured = snap.player.state is PlayerState.INJURED
    heart = (239, 68, 68) if injured else (220, 38, 38)
    app.draw_text_bg(surface, f"HP {snap.health}", 16, 16, heart, font=app.font_lg, pad=6)
    app.draw_text_bg(surface, f"$ {snap.coins}", 100, 16, (234, 179, 8), font=app.font_lg, pad=6)
    app.draw_text_bg(surface, f"SCORE {snap.score}", 190, 16, (255, 255, 255), font=app.font_lg, pad=6)

    bar_w, bar_x, bar_y = 192, SCREEN_WIDTH - 208, 32
    label = (239, 68, 68) if snap.suspicion > 80 else (148, 163, 184)
    app.draw_text(surface, "SUSPICION", bar_x, bar_y - 16, label, app.font_sm)
    pygame.draw.rect(surface, (30, 41, 59), (bar_x, bar_y, bar_w, 12), border_radius=6)
    fill = int(bar_w * max(0.0, min(100.0, snap.suspicion)) / 100)
    if fill > 0:
        pygame.draw.rect(surface, suspicion_color(snap.suspicion),
                         (bar_x, bar_y, fill, 12), border_radius=6)
    pygame.draw.rect(surface, (71, 85, 105), (bar_x, bar_y, bar_w, 12), 1, border_radius=6)


def harvest_panel_rects() -> tuple[pygame.Rect, pygame.Rect, pygame.Rect]:
    """(panel, bar, CUT! button) rectangles of the mini-game overlay."""
    panel = pygame.Rect(SCREEN_WIDTH // 2 - 128, SCREEN_HEIGHT // 4, 256, 120)
    bar = pygame.Rect(panel.x + 16, panel.y + 34, panel.w - 32, 24)
    button = pygame.Rect(panel.x + 16, panel.y + 68, panel.w - 32, 32)
    return panel, bar, button


def draw_harvest(surface: pygame.Surface, app: App, snap: Snapshot):
    if not snap.harvest.active:
        return
    panel, bar, button = harvest_panel_rects()
    bg = pygame.Surface(panel.size, pygame.SRCALPHA)
    bg.fill((15, 23, 42, 230))
    surface.blit(bg, panel.topleft)
    pygame.draw.rect(surface, (202, 138, 4), panel, 2, border_radius=8)
    app.draw_text_centered(surface, "HARVEST NOW!", panel.y + 10, (250, 204, 21), app.font)

    pygame.draw.rect(surface, (55, 65, 81), bar, border_radius=12)
    start = float(_tun("harvest", "target_start", 70.0))
    end = float(_tun("harvest", "target_end", 90.0))
    zone = pygame.Rect(bar.x + int(bar.w * start / 100), bar.y,
                       int(bar.w * (end - start) / 100), bar.h)
    pygame.draw.rect(surface, (34, 197, 94), zone)
    cx = bar.x + int(bar.w * snap.harvest.cursor / 100)
    pygame.draw.rect(surface, (255, 255, 255), (cx - 2, bar.y, 4, bar.h))
    pygame.draw.rect(surface, (107, 114, 128), bar, 1, border_radius=12)

    pygame.draw.rect(surface, (202, 138, 4), button, border_radius=4)
    app.draw_text_centered(surface, "CUT!", button.y + 7, (0, 0, 0), app.font_lg)
    app.draw_text_centered(surface, "Tap when in green", panel.bottom + 4,
                           (156, 163, 175), app.font_sm)


# ── Debug overlay (F1) ───────────────────────────────────────────────

def draw_debug_overlay(surface: pygame.Surface, app: App, snap: Snapshot,
                       entries: list[dict]):
    """Left panel with live numbers, DevLog tail underneath."""
    panel_bg = pygame.Surface((300, 440), pygame.SRCALPHA)
    panel_bg.fill((0, 0, 0, 160))
    surface.blit(panel_bg, (2, 60))

    p, g = snap.player, snap.guard
    lines = [
        (f"FPS: {int(app.clock.get_fps())}  tick: {snap.tick}", (0, 255, 0)),
        (f"GameClock: {snap.time:.2f}s  cam: {snap.camera_x:.0f}", (0, 255, 0)),
        (f"Player: ({p.x:.0f}, {p.y:.0f}) {p.state.value}", (0, 255, 0)),
        (f"  tree: {p.climbing_tree_id}  visible: {snap.player_visible}", (0, 255, 0)),
        (f"Guard: ({g.x:.0f}) {g.state.value}", (200, 200, 100)),
        (f"Suspicion: {snap.suspicion:.1f}  particles: {len(snap.particles)}", (200, 200, 100)),
    ]
    y = 66
    for text, color in lines:
        app.draw_text(surface, text, 8, y, color, app.font_sm)
        y += 14

    y += 6
    app.draw_text(surface, "-- dev log --", 8, y, (140, 140, 140), app.font_sm)
    y += 14
    cat_colors = {"guard": (180, 220, 255), "capture": (255, 90, 90),
                  "harvest": (250, 204, 21), "player": (200, 200, 200)}
    for e in entries:
        color = cat_colors.get(e["cat"], (200, 200, 200))
        app.draw_text(surface, f"{e['t']:6.2f} [{e['cat']}] {e['msg']}"[:46],
                      8, y, color, app.font_sm)
        y += 13

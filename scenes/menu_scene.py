"""scenes/menu_scene.py — Title screen.

Enter / Space / click on START MISSION begins a run.  Escape quits.
"""

from __future__ import annotations
import pygame
from core.scene import Scene
from core.app import App
from scenes.draw import draw_background, draw_vignette


_CONTROLS = [
    ("WASD / Arrows", "Move, climb"),
    ("SHIFT / E",     "Action / hide in canopy"),
    ("SPACE",         "Jump"),
    ("DOWN (bush)",   "Crouch and hide"),
    ("DOWN + SPACE",  "Emergency drop"),
]


class MenuScene(Scene):
    """START MISSION and a controls cheat-sheet over the night sky."""

    def __init__(self):
        self._start_rect = pygame.Rect(0, 0, 280, 56)
        self._start_rect.center = (400, 300)

    def handle_event(self, event: pygame.event.Event, app: App):
        if event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_RETURN, pygame.K_SPACE):
                self._start(app)
            elif event.key == pygame.K_ESCAPE:
                app.quit()
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and not getattr(event, "touch", False):
            if self._start_rect.collidepoint(event.pos):
                self._start(app)
        elif event.type == pygame.FINGERDOWN:
            if self._start_rect.collidepoint(event.pos):
                self._start(app)

    def _start(self, app: App):
        from scenes.play_scene import PlayScene
        app.replace_scene(PlayScene())

    def draw(self, surface: pygame.Surface, app: App):
        draw_background(surface, 0)
        draw_vignette(surface)
        shade = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 150))
        surface.blit(shade, (0, 0))

        app.draw_text_centered(surface, "STEALTH HARVEST", 140, (16, 185, 129), app.font_xl)
        app.draw_text_centered(surface, "Infiltrate the plantation. Climb trees. Harvest fruit.",
                               210, (148, 163, 184))
        app.draw_text_centered(surface, "Avoid the guard's flashlight at all costs.",
                               230, (148, 163, 184))

        hover = self._start_rect.collidepoint(app.mouse_pos())
        color = (16, 185, 129) if hover else (5, 150, 105)
        pygame.draw.rect(surface, color, self._start_rect, border_radius=28)
        app.draw_text_centered(surface, "START MISSION", self._start_rect.y + 17,
                               (255, 255, 255), app.font_lg)

        y = 380
        for keys, desc in _CONTROLS:
            app.draw_text(surface, keys, 240, y, (203, 213, 225), app.font)
            app.draw_text(surface, desc, 400, y, (100, 116, 139), app.font)
            y += 20

        app.draw_text_centered(surface,
                               "Pro Tip: Hiding behind tree fronds makes you invisible to flashlights.",
                               560, (71, 85, 105), app.font_sm)

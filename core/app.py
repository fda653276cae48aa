"""
core/app.py — Pygame application shell

Owns the window, the frame loop and the scene stack.  Screens are
Scenes; the menu pushes the plantation, which swaps itself for the
game-over card, which swaps back:

    app = App()
    app.push_scene(MenuScene())
    app.run()

Everything is drawn onto a fixed 800×600 virtual surface and scaled to
the window, so scenes and the renderer only ever think in design pixels.
Mouse and finger events reach scenes with ``event.pos`` already in those
design pixels.
"""

from __future__ import annotations
import pygame
from core.constants import SCREEN_HEIGHT, SCREEN_WIDTH
from core.scene import Scene


_POINTER_EVENTS = (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP,
                   pygame.MOUSEMOTION, pygame.FINGERDOWN,
                   pygame.FINGERUP, pygame.FINGERMOTION)
_FINGER_EVENTS = (pygame.FINGERDOWN, pygame.FINGERUP, pygame.FINGERMOTION)


class App:
    def __init__(self, title: str = "Stealth Harvest",
                 width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT):
        pygame.init()
        self.virtual_size = (width, height)
        self._windowed_size = (width, height)
        self._canvas = pygame.Surface(self.virtual_size)
        self.screen = pygame.display.set_mode(self._windowed_size, pygame.RESIZABLE)
        pygame.display.set_caption(title)
        self.clock = pygame.time.Clock()
        self.fps = 60
        self.dt = 0.0
        self.running = True
        self.fullscreen = False

        self._scenes: list[Scene] = []

        self.font = pygame.font.SysFont("monospace", 14)
        self.font_sm = pygame.font.SysFont("monospace", 11)
        self.font_lg = pygame.font.SysFont("monospace", 18, bold=True)
        self.font_xl = pygame.font.SysFont("monospace", 48, bold=True)

    # ── Scene stack ──────────────────────────────────────────────────

    @property
    def scene(self) -> Scene | None:
        return self._scenes[-1] if self._scenes else None

    def push_scene(self, scene: Scene):
        if self.scene:
            self.scene.on_exit(self)
        self._scenes.append(scene)
        scene.on_enter(self)

    def replace_scene(self, scene: Scene):
        """Swap the top scene; whatever is beneath stays buried."""
        if self._scenes:
            self._scenes.pop().on_exit(self)
        self._scenes.append(scene)
        scene.on_enter(self)

    # ── Window ↔ design pixels ───────────────────────────────────────

    def mouse_pos(self) -> tuple[int, int]:
        return self._to_virtual(pygame.mouse.get_pos())

    def _to_virtual(self, pos) -> tuple[int, int]:
        (sw, sh), (vw, vh) = self.screen.get_size(), self.virtual_size
        return int(pos[0] * vw / sw), int(pos[1] * vh / sh)

    def _pointer_event(self, event: pygame.event.Event) -> pygame.event.Event:
        # Finger coordinates are normalised 0..1 over the window
        attrs = dict(event.dict)
        if event.type in _FINGER_EVENTS:
            vw, vh = self.virtual_size
            attrs["pos"] = (int(event.x * vw), int(event.y * vh))
        elif "pos" in attrs:
            attrs["pos"] = self._to_virtual(event.pos)
        else:
            return event
        return pygame.event.Event(event.type, **attrs)

    # ── Frame loop ───────────────────────────────────────────────────

    def run(self):
        while self.running and self.scene:
            self.dt = self.clock.tick(self.fps) / 1000.0
            for event in pygame.event.get():
                self._dispatch(event)
            # A scene may swap itself out mid-frame
            if self.scene:
                self.scene.update(self.dt, self)
            if self.scene:
                self.scene.draw(self._canvas, self)
            self._present()
        pygame.quit()

    def _dispatch(self, event: pygame.event.Event):
        if event.type == pygame.QUIT:
            self.quit()
        elif event.type == pygame.KEYDOWN and event.key == pygame.K_F11:
            self.toggle_fullscreen()
        elif event.type == pygame.VIDEORESIZE:
            if not self.fullscreen:
                self._windowed_size = (event.w, event.h)
                self.screen = pygame.display.set_mode(self._windowed_size,
                                                      pygame.RESIZABLE)
        elif self.scene:
            if event.type in _POINTER_EVENTS:
                event = self._pointer_event(event)
            self.scene.handle_event(event, self)

    def _present(self):
        pygame.transform.scale(self._canvas, self.screen.get_size(), self.screen)
        pygame.display.flip()

    def quit(self):
        self.running = False

    def toggle_fullscreen(self):
        self.fullscreen = not self.fullscreen
        if self.fullscreen:
            self.screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        else:
            self.screen = pygame.display.set_mode(self._windowed_size,
                                                  pygame.RESIZABLE)

    # ── Text ─────────────────────────────────────────────────────────

    def _blit_text(self, surface, text, pos, color, font, bg=None, pad=0):
        img = (font or self.font).render(text, True, color)
        x, y = pos
        if x is None:
            x = (surface.get_width() - img.get_width()) // 2
        if bg is not None:
            box = pygame.Surface((img.get_width() + pad * 2,
                                  img.get_height() + pad * 2), pygame.SRCALPHA)
            box.fill(bg)
            surface.blit(box, (x - pad, y - pad))
        return surface.blit(img, (x, y))

    def draw_text(self, surface: pygame.Surface, text: str, x: int, y: int,
                  color=(255, 255, 255), font=None):
        """Returns the blitted rect so callers can stack lines."""
        return self._blit_text(surface, text, (x, y), color, font)

    def draw_text_centered(self, surface: pygame.Surface, text: str, y: int,
                           color=(255, 255, 255), font=None):
        return self._blit_text(surface, text, (None, y), color, font)

    def draw_text_bg(self, surface: pygame.Surface, text: str, x: int, y: int,
                     color=(255, 255, 255), bg=(0, 0, 0, 160), font=None,
                     pad: int = 2):
        """Text on a translucent box, for labels over the busy world."""
        return self._blit_text(surface, text, (x, y), color, font, bg, pad)

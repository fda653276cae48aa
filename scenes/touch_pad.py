"""scenes/touch_pad.py — On-screen buttons for touch / mouse play.

A D-pad in the bottom-left corner and ACT / JUMP in the bottom-right.
Pressing a button holds its intent on the ``InputManager`` until the
same pointer lifts, so a finger can slide off without sticking keys.
"""

from __future__ import annotations
import pygame

from core.app import App
from core.constants import SCREEN_HEIGHT, SCREEN_WIDTH
from logic.input_manager import InputManager


_SIZE = 48
_GAP = 8

# (intent, label, column, row) on a 3x2 grid anchored bottom-left
_DPAD = [
    ("up",    "^", 1, 0),
    ("left",  "<", 0, 1),
    ("down",  "v", 1, 1),
    ("right", ">", 2, 1),
]
_ACTIONS = [
    ("action", "ACT", 0),
    ("jump",   "JMP", 1),
]


def _layout() -> list[tuple[str, str, pygame.Rect]]:
    buttons = []
    ox = 16
    oy = SCREEN_HEIGHT - 16 - 2 * _SIZE - _GAP
    for intent, label, col, row in _DPAD:
        rect = pygame.Rect(ox + col * (_SIZE + _GAP), oy + row * (_SIZE + _GAP), _SIZE, _SIZE)
        buttons.append((intent, label, rect))
    ax = SCREEN_WIDTH - 16 - 2 * (_SIZE + 16) - _GAP
    for intent, label, i in _ACTIONS:
        rect = pygame.Rect(ax + i * (_SIZE + 16 + _GAP), SCREEN_HEIGHT - 16 - _SIZE - 16,
                           _SIZE + 16, _SIZE + 16)
        buttons.append((intent, label, rect))
    return buttons


class TouchPad:
    """Maps pointer presses on the on-screen buttons to held intents."""

    def __init__(self, input_mgr: InputManager):
        self.input = input_mgr
        self.buttons = _layout()
        self.visible = True
        # pointer id ("mouse" or finger id) → intent it is holding
        self._holds: dict[object, str] = {}

    def hit(self, pos: tuple[int, int]) -> str | None:
        for intent, _, rect in self.buttons:
            if rect.collidepoint(pos):
                return intent
        return None

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Returns True when the event pressed or released a button."""
        if not self.visible:
            return False
        # SDL mirrors touches as mouse events; the finger events win
        if getattr(event, "touch", False):
            return False

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            return self._press("mouse", event.pos)
        if event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            return self._release("mouse")
        if event.type == pygame.FINGERDOWN:
            return self._press(event.finger_id, event.pos)
        if event.type == pygame.FINGERUP:
            return self._release(event.finger_id)
        return False

    def release_all(self):
        self._holds.clear()
        self.input.release_all_touch()

    def _press(self, pointer, pos) -> bool:
        intent = self.hit(pos)
        if intent is None:
            return False
        self._holds[pointer] = intent
        self.input.set_touch(intent, True)
        return True

    def _release(self, pointer) -> bool:
        intent = self._holds.pop(pointer, None)
        if intent is None:
            return False
        if intent not in self._holds.values():
            self.input.set_touch(intent, False)
        return True

    def draw(self, surface: pygame.Surface, app: App):
        if not self.visible:
            return
        for intent, label, rect in self.buttons:
            held = self.input.held(intent)
            disc = pygame.Surface(rect.size, pygame.SRCALPHA)
            fill = (100, 116, 139, 200) if held else (51, 65, 85, 150)
            pygame.draw.ellipse(disc, fill, disc.get_rect())
            surface.blit(disc, rect.topleft)
            img = app.font.render(label, True, (255, 255, 255))
            surface.blit(img, img.get_rect(center=rect.center))

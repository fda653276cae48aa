"""logic/input_manager.py — Intent-based input layer.

Sits between raw pygame events and the simulation.  The scene feeds in
raw events; the manager maps them to *intents*.  The simulation only
ever sees the ``InputState`` built by ``intents()``; it never learns
whether a flag came from the keyboard or an on-screen touch button.

Usage (in the play scene):

    self.input = InputManager()
    # handle_event, per pygame event:
    self.input.feed(event)
    # update, once per frame:
    self.input.end_frame()          # captures held-key state

    if self.input.just("confirm"):  # discrete press
        ...
    keys = self.input.intents()     # → InputState for Simulation.tick
    self.input.begin_frame()        # clears this frame's presses
"""

from __future__ import annotations
from enum import Enum, auto
import pygame

from components import InputState


# ── Input contexts ──────────────────────────────────────────────────

class InputContext(Enum):
    """Which bind table is live.  The play scene flips it when the harvest overlay opens."""
    GAMEPLAY = auto()   # running around the plantation
    HARVEST = auto()    # mini-game overlay is up


# Intents that make up the simulation's boolean input vector
MOVE_INTENTS = ("left", "right", "up", "down", "jump", "action")


# ── Default key bindings ────────────────────────────────────────────

_GAMEPLAY_BINDS: dict[str, list[int]] = {
    # Held
    "left":     [pygame.K_LEFT, pygame.K_a],
    "right":    [pygame.K_RIGHT, pygame.K_d],
    "up":       [pygame.K_UP, pygame.K_w],
    "down":     [pygame.K_DOWN, pygame.K_s],
    "jump":     [pygame.K_SPACE],
    "action":   [pygame.K_LSHIFT, pygame.K_e],
    # Discrete
    "pause":          [pygame.K_ESCAPE],
    "toggle_debug":   [pygame.K_F1],
    "reload_tuning":  [pygame.K_F5],
}

_HARVEST_BINDS: dict[str, list[int]] = {
    "confirm":  [pygame.K_SPACE, pygame.K_RETURN, pygame.K_e, pygame.K_LSHIFT],
    "left":     [pygame.K_LEFT, pygame.K_a],
    "right":    [pygame.K_RIGHT, pygame.K_d],
    "up":       [pygame.K_UP, pygame.K_w],
    "down":     [pygame.K_DOWN, pygame.K_s],
    "toggle_debug":   [pygame.K_F1],
    "pause":          [pygame.K_ESCAPE],
    "reload_tuning":  [pygame.K_F5],
}

_BINDS_BY_CONTEXT = {
    InputContext.GAMEPLAY: _GAMEPLAY_BINDS,
    InputContext.HARVEST: _HARVEST_BINDS,
}


# ── InputManager ────────────────────────────────────────────────────

class InputManager:
    """Context-aware input mapper.

    ``feed(event)`` for each pygame event, ``end_frame()`` once all
    events are in, ``begin_frame()`` after the frame's intents have
    been consumed.

    Touch buttons call ``set_touch(intent, pressed)``; a touched intent
    counts as held until released, exactly like a key.
    """

    def __init__(self):
        self.context: InputContext = InputContext.GAMEPLAY
        # Rising edges since begin_frame
        self._pressed: set[str] = set()
        # Intents currently held on the keyboard
        self._held: set[str] = set()
        # Intents currently held via touch buttons
        self._touch: set[str] = set()

    # ── frame lifecycle ─────────────────────────────────────────

    def begin_frame(self):
        self._pressed.clear()

    def feed(self, event: pygame.event.Event):
        """Key-down events become this frame's presses for the live context."""
        if event.type == pygame.KEYDOWN:
            for intent, keys in self._active_binds().items():
                if event.key in keys:
                    self._pressed.add(intent)

    def end_frame(self):
        """Read the keyboard once all of the frame's events are in."""
        self._held.clear()
        keys = pygame.key.get_pressed()
        for intent, key_list in self._active_binds().items():
            if any(keys[k] for k in key_list):
                self._held.add(intent)

    # ── touch ───────────────────────────────────────────────────

    def set_touch(self, intent: str, pressed: bool):
        if pressed:
            if intent not in self._touch:
                self._pressed.add(intent)
            self._touch.add(intent)
        else:
            self._touch.discard(intent)

    def release_all_touch(self):
        self._touch.clear()

    def trigger(self, intent: str):
        """Fire a one-frame intent from a UI element (e.g. a tapped button)."""
        self._pressed.add(intent)

    # ── queries ─────────────────────────────────────────────────

    def just(self, intent: str) -> bool:
        """Pressed this frame (key-down, touch-down or UI trigger)."""
        return intent in self._pressed

    def held(self, intent: str) -> bool:
        """True if the intent is continuously held (key or touch)."""
        return intent in self._held or intent in self._touch

    def intents(self) -> InputState:
        """The boolean intent vector for ``Simulation.tick``."""
        return InputState(**{name: self.held(name) for name in MOVE_INTENTS})

    # ── internal ────────────────────────────────────────────────

    def _active_binds(self) -> dict[str, list[int]]:
        return _BINDS_BY_CONTEXT.get(self.context, {})

"""
core/scene.py — Scene base class

A Scene is one screen of the game: the title menu, the plantation run,
the game-over card.  ``App`` calls the hooks below on whichever scene
is on top of its stack; the defaults do nothing, so a screen only
overrides what it needs.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pygame
    from core.app import App


class Scene:
    def on_enter(self, app: App):
        """Became the top scene."""

    def on_exit(self, app: App):
        """Replaced or covered; release anything held (touch buttons, timers)."""

    def handle_event(self, event: pygame.event.Event, app: App):
        """Pointer events arrive with ``event.pos`` in design pixels."""

    def update(self, dt: float, app: App):
        """``dt`` is wall-clock seconds since the previous frame."""

    def draw(self, surface: pygame.Surface, app: App):
        """Paint the whole 800×600 virtual surface."""

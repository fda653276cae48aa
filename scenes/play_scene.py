"""scenes/play_scene.py — The plantation at night.

Wraps one ``Simulation`` run.  Each frame:

    handle_event   raw events → InputManager / TouchPad
    update         fixed-step accumulator → sim.tick(intents) × n
    draw           latest Snapshot → renderer, HUD, overlays

Keys beyond movement:
    F1   toggle debug overlay (live numbers + DevLog tail)
    F5   reload data/tuning.toml
    Esc  pause / resume
"""

from __future__ import annotations
import pygame

from core import tuning
from core.app import App
from core.constants import MAX_TICKS_PER_FRAME, SIM_DT, CAPTURE_FLASH
from core.scene import Scene
from logic.input_manager import InputManager, InputContext
from scenes.draw import (
    draw_world, draw_hud, draw_harvest, draw_debug_overlay, harvest_panel_rects,
)
from scenes.touch_pad import TouchPad
from simulation.sim import Simulation
from simulation.snapshot import Snapshot


_BANNER_TIME = 1.6       # seconds a banner stays on screen
_FLASH_TIME = 0.35


class PlayScene(Scene):
    def __init__(self, seed: int | None = None):
        self.sim = Simulation(seed)
        self.input = InputManager()
        self.touch = TouchPad(self.input)
        self.snap: Snapshot | None = None

        self.paused = False
        self.show_debug = False
        self._acc = 0.0
        self._ended: tuple[int, int] | None = None

        self._banner = ""
        self._banner_color = (255, 255, 255)
        self._banner_timer = 0.0
        self._flash_timer = 0.0

        self.sim.subscribe("RunEnded", self._on_run_ended)
        self.sim.subscribe("PlayerCaught", self._on_caught)
        self.sim.subscribe("HarvestFinished", self._on_harvest)

    # ── lifecycle ────────────────────────────────────────────────────

    def on_enter(self, app: App):
        if self.snap is None:
            self.snap = self.sim.start()

    def on_exit(self, app: App):
        self.touch.release_all()

    # ── event hooks (run inside bus.drain) ───────────────────────────

    def _on_run_ended(self, ev):
        self._ended = (ev.score, ev.coins)

    def _on_caught(self, ev):
        self._flash_timer = _FLASH_TIME
        lives = "life" if ev.health == 1 else "lives"
        self._show_banner(f"CAUGHT! {ev.health} {lives} left", (239, 68, 68))

    def _on_harvest(self, ev):
        if not ev.success:
            self._show_banner("SNAP! The guard heard that", (234, 179, 8))
        elif ev.multiplier >= 2:
            self._show_banner(f"PERFECT CUT  x{ev.multiplier}", (34, 197, 94))
        else:
            self._show_banner(f"Harvested  x{ev.multiplier}", (187, 247, 208))

    def _show_banner(self, text: str, color: tuple):
        self._banner = text
        self._banner_color = color
        self._banner_timer = _BANNER_TIME

    # ── event handler ────────────────────────────────────────────────

    def handle_event(self, event: pygame.event.Event, app: App):
        self._sync_context()
        self.input.feed(event)

        if self.snap is not None and self.snap.harvest.active and self._clicked(event):
            panel, _, _ = harvest_panel_rects()
            if panel.collidepoint(event.pos):
                self.input.trigger("confirm")
                return

        self.touch.handle_event(event)

    @staticmethod
    def _clicked(event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEBUTTONDOWN:
            return event.button == 1 and not getattr(event, "touch", False)
        return event.type == pygame.FINGERDOWN

    def _sync_context(self):
        if self.snap is not None and self.snap.harvest.active:
            self.input.context = InputContext.HARVEST
        else:
            self.input.context = InputContext.GAMEPLAY

    # ── update ───────────────────────────────────────────────────────

    def update(self, dt: float, app: App):
        self._sync_context()
        self.input.end_frame()

        if self.input.just("toggle_debug"):
            self.show_debug = not self.show_debug
        if self.input.just("reload_tuning"):
            tuning.reload()
        if self.input.just("pause"):
            self.paused = not self.paused
            self.touch.release_all()

        if not self.paused:
            if self.input.just("confirm"):
                self.sim.confirm_harvest()
                self.snap = self.sim.snapshot()
            self._step(dt)

        # The pad hides behind the mini-game; drop anything it was holding
        harvesting = self.snap is not None and self.snap.harvest.active
        if harvesting and self.touch.visible:
            self.touch.release_all()
        self.touch.visible = not harvesting

        self.input.begin_frame()
        self._banner_timer = max(0.0, self._banner_timer - dt)
        self._flash_timer = max(0.0, self._flash_timer - dt)

        if self._ended is not None:
            from scenes.game_over_scene import GameOverScene
            score, coins = self._ended
            print(f"[RUN] Game over: score={score} coins={coins}")
            app.replace_scene(GameOverScene(score, coins))

    def _step(self, dt: float):
        """Run as many fixed ticks as the frame time covers."""
        self._acc += dt
        keys = self.input.intents()
        steps = 0
        while self._acc >= SIM_DT and steps < MAX_TICKS_PER_FRAME:
            self.snap = self.sim.tick(keys)
            self._acc -= SIM_DT
            steps += 1
            if self.sim.game_over:
                break
        if steps == MAX_TICKS_PER_FRAME:
            self._acc = 0.0

    # ── draw ─────────────────────────────────────────────────────────

    def draw(self, surface: pygame.Surface, app: App):
        snap = self.snap or self.sim.snapshot()
        draw_world(surface, app, snap)

        if self._flash_timer > 0:
            flash = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
            flash.fill((*CAPTURE_FLASH, int(160 * self._flash_timer / _FLASH_TIME)))
            surface.blit(flash, (0, 0))

        draw_hud(surface, app, snap)
        self.touch.draw(surface, app)
        draw_harvest(surface, app, snap)

        if self._banner_timer > 0:
            app.draw_text_centered(surface, self._banner, 90, self._banner_color, app.font_lg)

        if self.paused:
            shade = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
            shade.fill((0, 0, 0, 140))
            surface.blit(shade, (0, 0))
            app.draw_text_centered(surface, "PAUSED", 260, (255, 255, 255), app.font_xl)
            app.draw_text_centered(surface, "Esc = resume", 320, (148, 163, 184))

        if self.show_debug:
            draw_debug_overlay(surface, app, snap, self.sim.ctx.log.recent(24))

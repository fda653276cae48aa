"""scenes/game_over_scene.py — "CAUGHT!" card shown when health runs out."""

from __future__ import annotations
import pygame
from core.scene import Scene
from core.app import App


class GameOverScene(Scene):
    """Final score and coins, RETRY, and a shop slot that is not open yet."""

    def __init__(self, score: int, coins: int):
        self.score = score
        self.coins = coins
        self.selected = 0                       # 0 = retry, 1 = shop
        self._retry_rect = pygame.Rect(220, 420, 160, 48)
        self._shop_rect = pygame.Rect(400, 420, 220, 48)

    def handle_event(self, event: pygame.event.Event, app: App):
        if event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_LEFT, pygame.K_a, pygame.K_RIGHT, pygame.K_d):
                self.selected = 1 - self.selected
            elif event.key in (pygame.K_RETURN, pygame.K_SPACE):
                if self.selected == 0:
                    self._retry(app)
            elif event.key == pygame.K_ESCAPE:
                from scenes.menu_scene import MenuScene
                app.replace_scene(MenuScene())
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1 and not getattr(event, "touch", False):
            if self._retry_rect.collidepoint(event.pos):
                self._retry(app)
        elif event.type == pygame.FINGERDOWN:
            if self._retry_rect.collidepoint(event.pos):
                self._retry(app)

    def _retry(self, app: App):
        from scenes.play_scene import PlayScene
        app.replace_scene(PlayScene())

    def draw(self, surface: pygame.Surface, app: App):
        surface.fill((69, 10, 10))
        sw, sh = surface.get_size()
        pygame.draw.rect(surface, (220, 38, 38), (0, 0, sw, sh), 4)

        app.draw_text_centered(surface, "CAUGHT!", 120, (239, 68, 68), app.font_xl)

        card = pygame.Rect(sw // 2 - 128, 200, 256, 170)
        bg = pygame.Surface(card.size, pygame.SRCALPHA)
        bg.fill((15, 23, 42, 130))
        surface.blit(bg, card.topleft)
        pygame.draw.rect(surface, (51, 65, 85), card, 1)
        app.draw_text_centered(surface, "TOTAL SCORE", card.y + 16, (148, 163, 184), app.font_sm)
        app.draw_text_centered(surface, str(self.score), card.y + 40, (255, 255, 255), app.font_xl)
        pygame.draw.line(surface, (51, 65, 85), (card.x + 16, card.y + 120),
                         (card.right - 16, card.y + 120))
        app.draw_text(surface, "Coins Earned", card.x + 16, card.y + 132, (250, 204, 21))
        coins = app.font.render(str(self.coins), True, (250, 204, 21))
        surface.blit(coins, (card.right - 16 - coins.get_width(), card.y + 132))

        retry_sel = self.selected == 0
        pygame.draw.rect(surface, (255, 255, 255) if retry_sel else (200, 200, 200),
                         self._retry_rect, border_radius=4)
        app.draw_text(surface, "RETRY", self._retry_rect.x + 52, self._retry_rect.y + 14,
                      (127, 29, 29), app.font_lg)

        # Shop is a placeholder; drawn dimmed and never activates
        shop = pygame.Surface(self._shop_rect.size, pygame.SRCALPHA)
        shop.fill((30, 41, 59, 128))
        surface.blit(shop, self._shop_rect.topleft)
        if not retry_sel:
            pygame.draw.rect(surface, (100, 116, 139), self._shop_rect, 1, border_radius=4)
        app.draw_text(surface, "SHOP (coming soon)", self._shop_rect.x + 18,
                      self._shop_rect.y + 15, (120, 120, 130), app.font)

        app.draw_text_centered(surface, "Enter = select   Esc = title", sh - 30,
                               (180, 120, 120), app.font_sm)

"""Title screen: fading logo over a drifting strip of colony map."""

from __future__ import annotations

import random

import pygame

from ..constants import (
    AMBER,
    CYAN,
    DEPOSIT_GREEN,
    GAME_SUBTITLE,
    GAME_TITLE,
    GAME_VERSION,
    GROUND_DIM,
    LIGHT_GREY,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    TILE_COLORS,
)
from ..models.grid import Grid
from ..models.save import has_save
from ..states import GameState

STRIP_TILE = 16
STRIP_ROWS = 6
STRIP_SPEED = 12.0  # pixels per second


class TitleScreen:
    """Logo, subtitle and a Continue / New Game / Quit menu."""

    def __init__(self) -> None:
        self.font_logo = pygame.font.Font(None, 96)
        self.font_sub = pygame.font.Font(None, 40)
        self.font_menu = pygame.font.Font(None, 36)
        self.font_small = pygame.font.Font(None, 22)

        self.fade = 0.0  # 0..2: logo, then subtitle and menu
        self.next_state: GameState | None = None
        self.load_save = False
        self.quit_requested = False

        self.options = ["New Game", "Quit"]
        if has_save():
            self.options.insert(0, "Continue")
        self.selected = 0

        self._strip = self._make_strip()
        self._scroll = 0.0

    def _make_strip(self) -> Grid:
        """A small random base layout for the backdrop."""
        cols = SCREEN_WIDTH // STRIP_TILE + 1
        strip = Grid(cols, STRIP_ROWS, seed=random.getrandbits(32), deposit_chance=0.08)
        glyphs = [g for g in TILE_COLORS if g != "C"]
        for x in range(0, cols, 3):
            if random.random() < 0.5:
                strip.set(x, random.randrange(STRIP_ROWS), random.choice(glyphs))
        return strip

    @property
    def menu_ready(self) -> bool:
        return self.fade >= 2.0

    def handle_events(self, event: pygame.event.Event) -> None:
        if event.type != pygame.KEYDOWN:
            return
        if not self.menu_ready:
            self.fade = 2.0
            return

        if event.key in (pygame.K_UP, pygame.K_w):
            self.selected = (self.selected - 1) % len(self.options)
        elif event.key in (pygame.K_DOWN, pygame.K_s):
            self.selected = (self.selected + 1) % len(self.options)
        elif event.key in (pygame.K_RETURN, pygame.K_SPACE):
            choice = self.options[self.selected]
            if choice == "Quit":
                self.quit_requested = True
            else:
                self.load_save = choice == "Continue"
                self.next_state = GameState.PLAYING

    def update(self, dt: float) -> None:
        self.fade = min(2.0, self.fade + dt * 0.8)
        self._scroll = (self._scroll + STRIP_SPEED * dt) % (self._strip.width * STRIP_TILE)

    def draw(self, surface: pygame.Surface) -> None:
        self._draw_strip(surface, SCREEN_HEIGHT - STRIP_ROWS * STRIP_TILE - 40)

        logo_alpha = int(255 * min(1.0, self.fade))
        self._centered(surface, self.font_logo, GAME_TITLE, AMBER, SCREEN_HEIGHT // 4, logo_alpha)

        sub_alpha = int(255 * max(0.0, self.fade - 1.0))
        self._centered(surface, self.font_sub, GAME_SUBTITLE, CYAN, SCREEN_HEIGHT // 4 + 70, sub_alpha)

        if self.menu_ready:
            top = SCREEN_HEIGHT // 2 - 10
            for i, label in enumerate(self.options):
                active = i == self.selected
                text = f"▸ {label}" if active else label
                self._centered(surface, self.font_menu, text, AMBER if active else LIGHT_GREY, top + i * 44)

        ver = self.font_small.render(f"v{GAME_VERSION}", True, LIGHT_GREY)
        ver.set_alpha(120)
        surface.blit(ver, (SCREEN_WIDTH - ver.get_width() - 10, SCREEN_HEIGHT - 24))

    def _centered(
        self,
        surface: pygame.Surface,
        font: pygame.font.Font,
        text: str,
        color: tuple[int, int, int],
        y: int,
        alpha: int = 255,
    ) -> None:
        surf = font.render(text, True, color)
        surf.set_alpha(alpha)
        surface.blit(surf, surf.get_rect(center=(SCREEN_WIDTH // 2, y)))

    def _draw_strip(self, surface: pygame.Surface, top: int) -> None:
        offset = int(self._scroll) // STRIP_TILE
        shift = int(self._scroll) % STRIP_TILE
        for row in range(STRIP_ROWS):
            for col in range(self._strip.width):
                glyph = self._strip.get_wrapped(col + offset, row)
                rect = pygame.Rect(col * STRIP_TILE - shift, top + row * STRIP_TILE, STRIP_TILE - 1, STRIP_TILE - 1)
                color = TILE_COLORS.get(glyph)
                if color:
                    pygame.draw.rect(surface, color, rect)
                elif self._strip.deposit_wrapped(col + offset, row):
                    pygame.draw.rect(surface, DEPOSIT_GREEN, rect)
                else:
                    pygame.draw.rect(surface, GROUND_DIM, rect, 1)

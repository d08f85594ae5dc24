"""Kerbal Outpost: main game module (state router)."""

from __future__ import annotations

import logging
import sys
import time

import pygame

from . import config
from .constants import AMBER, CYAN, DARK_GREY, FPS, LIGHT_GREY, SCREEN_HEIGHT, SCREEN_WIDTH, TITLE
from .models.commands import CommandResult
from .models.save import load_game, save_game
from .models.session import ColonySession
from .screens.colony_view import ColonyViewScreen
from .screens.research import ResearchScreen
from .screens.title import TitleScreen
from .states import GameState
from .ui.hud import HUD

PAUSE_ITEMS = ("Resume", "Save Game", "Return to Title")


class Game:
    """Core game class: routes state to screen objects."""

    def __init__(self, seed: int | None = None, deposit_chance: float | None = None) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption(TITLE)
        self.clock = pygame.time.Clock()
        self.running = True
        self.state = GameState.TITLE

        self.seed = seed
        self.deposit_chance = deposit_chance

        # Shared components
        self.hud = HUD()

        # Game data (created when leaving the title screen)
        self.session: ColonySession | None = None

        # Screens
        self.title_screen = TitleScreen()
        self.colony_view: ColonyViewScreen | None = None
        self.research_screen: ResearchScreen | None = None

        # Pause overlay
        self._pause_selected = 0
        self._pause_message = ""
        self._font_pause = pygame.font.Font(None, 40)
        self._font_pause_item = pygame.font.Font(None, 32)

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(self) -> None:
        while self.running:
            dt = self.clock.tick(FPS) / 1000.0
            self._handle_events()
            self._update(dt)
            self._draw()

        pygame.quit()
        sys.exit()

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                return

            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                self._handle_escape()
                continue

            # Route to active screen
            if self.state == GameState.TITLE:
                self.title_screen.handle_events(event)
            elif self.state == GameState.PLAYING and self.colony_view:
                self.colony_view.handle_events(event)
            elif self.state == GameState.RESEARCH and self.research_screen:
                self.research_screen.handle_events(event)
            elif self.state == GameState.PAUSED:
                self._handle_pause_event(event)

    def _handle_escape(self) -> None:
        """Back out of the current screen, or quit from title."""
        if self.state == GameState.TITLE:
            self.running = False
        elif self.state == GameState.PLAYING:
            if self.colony_view and self.colony_view.cancel_selection():
                return
            self._pause_selected = 0
            self._pause_message = ""
            self.state = GameState.PAUSED
        elif self.state == GameState.RESEARCH:
            self.research_screen = None
            self.state = GameState.PLAYING
        elif self.state == GameState.PAUSED:
            self._resume()

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------

    def _start_session(self, load: bool) -> None:
        session = load_game() if load else None
        if load and session is None:
            logging.warning("Game: no usable save, starting a new colony")
        if session is None:
            session = ColonySession(seed=self.seed, deposit_chance=self.deposit_chance)
            logging.info(f"Game: new colony on seed {session.grid.seed}")
        self.session = session
        self.colony_view = ColonyViewScreen(session)
        self.research_screen = None
        self.state = GameState.PLAYING

    def _reset(self) -> None:
        """Throw the session away and go back to the title screen."""
        self.session = None
        self.colony_view = None
        self.research_screen = None
        self.title_screen = TitleScreen()
        self.state = GameState.TITLE

    def _resume(self) -> None:
        if self.session:
            # Time spent paused is not simulated.
            self.session.colony.last_update_time = time.time()
        self.state = GameState.PLAYING

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def _update(self, dt: float) -> None:
        if self.state == GameState.TITLE:
            self.title_screen.update(dt)
            if self.title_screen.quit_requested:
                self.running = False
            elif self.title_screen.next_state:
                self.title_screen.next_state = None
                self._start_session(self.title_screen.load_save)

        elif self.state == GameState.PLAYING and self.colony_view and self.session:
            self.colony_view.update(dt)
            self.session.step(time.time(), dt)
            self._apply_commands(self.colony_view)
            if self.colony_view.next_state == GameState.RESEARCH:
                self.research_screen = ResearchScreen(self.session)
                self.state = GameState.RESEARCH
            self.colony_view.next_state = None

        elif self.state == GameState.RESEARCH and self.research_screen and self.session:
            self.research_screen.update(dt)
            self.session.step(time.time(), dt)
            self._apply_commands(self.research_screen)
            if self.research_screen.next_state:
                self.research_screen = None
                self.state = GameState.PLAYING

    def _apply_commands(self, screen: ColonyViewScreen | ResearchScreen) -> None:
        """Hand the screen's queued commands to the session, after the tick."""
        commands, screen.commands = screen.commands, []
        for command in commands:
            result: CommandResult = self.session.apply(command)
            if not result.ok:
                logging.debug(f"Game: {command!r} rejected: {result.message}")
            screen.show_result(result)

    # ------------------------------------------------------------------
    # Pause menu
    # ------------------------------------------------------------------

    def _handle_pause_event(self, event: pygame.event.Event) -> None:
        if event.type != pygame.KEYDOWN:
            return
        if event.key in (pygame.K_UP, pygame.K_w):
            self._pause_selected = (self._pause_selected - 1) % len(PAUSE_ITEMS)
        elif event.key in (pygame.K_DOWN, pygame.K_s):
            self._pause_selected = (self._pause_selected + 1) % len(PAUSE_ITEMS)
        elif event.key in (pygame.K_RETURN, pygame.K_SPACE):
            choice = PAUSE_ITEMS[self._pause_selected]
            if choice == "Resume":
                self._resume()
            elif choice == "Save Game" and self.session:
                try:
                    save_game(self.session)
                    self._pause_message = "Game saved"
                except OSError as e:
                    logging.error(f"Game: save failed: {e}")
                    self._pause_message = "Save failed"
            elif choice == "Return to Title":
                self._reset()

    # ------------------------------------------------------------------
    # Draw
    # ------------------------------------------------------------------

    def _draw(self) -> None:
        self.screen.fill(DARK_GREY)

        if self.state == GameState.TITLE:
            self.title_screen.draw(self.screen)
        elif self.colony_view and self.session:
            self.colony_view.draw(self.screen)
            self.hud.draw(self.screen, self.session, self.colony_view.selected)
            if self.state == GameState.RESEARCH and self.research_screen:
                self.research_screen.draw(self.screen)
            elif self.state == GameState.PAUSED:
                self._draw_pause_overlay()

        pygame.display.flip()

    def _draw_pause_overlay(self) -> None:
        overlay = pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT), pygame.SRCALPHA)
        overlay.fill((5, 5, 15, 200))
        self.screen.blit(overlay, (0, 0))

        title = self._font_pause.render("P A U S E D", True, CYAN)
        self.screen.blit(title, title.get_rect(center=(SCREEN_WIDTH // 2, SCREEN_HEIGHT // 3)))

        for i, label in enumerate(PAUSE_ITEMS):
            is_sel = i == self._pause_selected
            prefix = "▸ " if is_sel else "  "
            surf = self._font_pause_item.render(f"{prefix}{label}", True, AMBER if is_sel else LIGHT_GREY)
            self.screen.blit(surf, surf.get_rect(center=(SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2 + i * 42)))

        if self._pause_message:
            msg = self._font_pause_item.render(self._pause_message, True, LIGHT_GREY)
            self.screen.blit(msg, msg.get_rect(center=(SCREEN_WIDTH // 2, SCREEN_HEIGHT // 2 + 160)))


def main() -> None:
    """Entry point for the outpost command."""
    config.configure_logging()
    game = Game(seed=config.WORLD_SEED, deposit_chance=config.WORLD_DEPOSIT_CHANCE)
    game.run()


if __name__ == "__main__":
    main()

"""Research screen: the tech tree by tier."""

from __future__ import annotations

import pygame

from ..constants import (
    AMBER,
    CYAN,
    DARK_GREY,
    HULL_GREEN,
    LIGHT_GREY,
    PANEL_BG,
    PANEL_BORDER,
    RED_ALERT,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    WHITE,
)
from ..models.commands import Command, CommandResult, ResearchTech
from ..models.resources import ResourceType
from ..models.session import ColonySession
from ..models.tech import Technology
from ..states import GameState


class ResearchScreen:
    """Tech list with prerequisites. Enter researches the highlighted tech."""

    def __init__(self, session: ColonySession) -> None:
        self.session = session
        self.font_title = pygame.font.Font(None, 44)
        self.font_tier = pygame.font.Font(None, 28)
        self.font_item = pygame.font.Font(None, 24)
        self.font_desc = pygame.font.Font(None, 22)

        self.commands: list[Command] = []
        self.next_state: GameState | None = None

        tiers = session.colony.tech_graph.techs_by_tier()
        self._tiers = tiers
        self._techs: list[Technology] = [t for tier in sorted(tiers) for t in tiers[tier]]
        self.selected = 0
        self._status = ""
        self._status_ok = True

    def handle_events(self, event: pygame.event.Event) -> None:
        if event.type != pygame.KEYDOWN:
            return
        if event.key in (pygame.K_UP, pygame.K_w):
            self.selected = (self.selected - 1) % len(self._techs)
        elif event.key in (pygame.K_DOWN, pygame.K_s):
            self.selected = (self.selected + 1) % len(self._techs)
        elif event.key in (pygame.K_RETURN, pygame.K_SPACE):
            self.commands.append(ResearchTech(self._techs[self.selected].id))
        elif event.key == pygame.K_t:
            self.next_state = GameState.PLAYING

    def show_result(self, result: CommandResult) -> None:
        self._status = result.message
        self._status_ok = result.ok

    def update(self, dt: float) -> None:
        pass

    def _tech_color(self, tech: Technology) -> tuple[int, int, int]:
        colony = self.session.colony
        if tech.id in colony.unlocked_techs:
            return HULL_GREEN
        if tech.id not in colony.available_for_research():
            return DARK_GREY
        if colony.resources[ResourceType.SCIENCE] >= tech.cost:
            return AMBER
        return LIGHT_GREY

    def draw(self, surface: pygame.Surface) -> None:
        overlay = pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT), pygame.SRCALPHA)
        overlay.fill(PANEL_BG)
        surface.blit(overlay, (0, 0))

        panel = pygame.Rect(120, 40, SCREEN_WIDTH - 240, SCREEN_HEIGHT - 80)
        pygame.draw.rect(surface, (10, 14, 20), panel)
        pygame.draw.rect(surface, PANEL_BORDER, panel, 2)

        science = self.session.colony.resources[ResourceType.SCIENCE]
        title = self.font_title.render("RESEARCH", True, CYAN)
        surface.blit(title, (panel.x + 20, panel.y + 15))
        sci = self.font_item.render(f"Science: {science:.1f}", True, WHITE)
        surface.blit(sci, (panel.right - sci.get_width() - 20, panel.y + 25))

        y = panel.y + 70
        index = 0
        for tier in sorted(self._tiers):
            surface.blit(self.font_tier.render(f"Tier {tier}", True, LIGHT_GREY), (panel.x + 20, y))
            y += 26
            for tech in self._tiers[tier]:
                is_sel = index == self.selected
                prefix = "▸ " if is_sel else "  "
                mark = "✓ " if tech.id in self.session.colony.unlocked_techs else ""
                label = f"{prefix}{mark}{tech.id}  ({tech.cost:g} science)"
                surface.blit(self.font_item.render(label, True, self._tech_color(tech)), (panel.x + 30, y))
                if tech.prerequisites:
                    req = self.font_desc.render(
                        "needs " + ", ".join(tech.prerequisites), True, DARK_GREY if not is_sel else LIGHT_GREY,
                    )
                    surface.blit(req, (panel.x + 420, y + 2))
                y += 22
                index += 1
            y += 6

        # Selected tech details
        tech = self._techs[self.selected]
        unlocks = ", ".join(mt.value for mt in tech.unlocks) or "nothing new to build"
        desc = self.font_desc.render(f"{tech.description}  Unlocks: {unlocks}", True, WHITE)
        surface.blit(desc, (panel.x + 20, panel.bottom - 60))

        if self._status:
            color = HULL_GREEN if self._status_ok else RED_ALERT
            surface.blit(self.font_item.render(self._status, True, color), (panel.x + 20, panel.bottom - 34))

        hint = self.font_desc.render("ENTER research    T / ESC back", True, LIGHT_GREY)
        surface.blit(hint, (panel.right - hint.get_width() - 20, panel.bottom - 30))

"""HUD sidebar: colony status, module counts and the build list."""

from __future__ import annotations

import pygame

from ..constants import (
    AMBER,
    CYAN,
    LIGHT_GREY,
    PANEL_BG,
    PANEL_BORDER,
    RED_ALERT,
    SCREEN_HEIGHT,
    SIDEBAR_WIDTH,
    TERMINAL_GREEN,
    WHITE,
)
from ..models.modules import MODULE_ORDER, ModuleType
from ..models.resources import ResourceType, format_cost
from ..models.session import ColonySession


def buildable_modules(session: ColonySession) -> list[ModuleType]:
    """Unlocked modules in menu order (the command center is never rebuilt)."""
    return [
        mt for mt in MODULE_ORDER
        if mt != ModuleType.COMMAND_CENTER and session.colony.is_unlocked(mt)
    ]


class HUD:
    """Left-hand panel drawn over the colony view."""

    def __init__(self) -> None:
        self.font = pygame.font.Font(None, 24)
        self.font_small = pygame.font.Font(None, 19)
        self.line = 20

    def draw(
        self,
        surface: pygame.Surface,
        session: ColonySession,
        selected: ModuleType | None = None,
    ) -> None:
        panel = pygame.Surface((SIDEBAR_WIDTH, SCREEN_HEIGHT), pygame.SRCALPHA)
        panel.fill(PANEL_BG)
        surface.blit(panel, (0, 0))
        pygame.draw.line(surface, PANEL_BORDER, (SIDEBAR_WIDTH, 0), (SIDEBAR_WIDTH, SCREEN_HEIGHT))

        y = self._draw_status(surface, session, 12)
        y = self._draw_modules(surface, session, y + 10)
        self._draw_build_list(surface, session, selected, y + 10)

    def _draw_status(self, surface: pygame.Surface, session: ColonySession, y: int) -> int:
        colony = session.colony
        res = colony.resources
        rates = colony.rates()

        self._text(surface, "Colony Status", TERMINAL_GREEN, 15, y, self.font)
        y += 26
        power_color = RED_ALERT if rates.power_factor < 1.0 else WHITE
        rows = [
            (f"Power: {int(res[ResourceType.POWER])} ({rates.net_power:+.1f}/s)", power_color),
            (f"Snacks: {int(res[ResourceType.SNACKS])}", WHITE),
            (f"Materials: {res[ResourceType.BUILDING_MATERIALS]:.1f}", WHITE),
            (f"Science: {int(res[ResourceType.SCIENCE])}", CYAN),
            (f"Kerbals: {colony.kerbals:.1f} / {colony.kerbal_capacity:g}", WHITE),
            (f"Mode: {colony.mode.value}", LIGHT_GREY),
        ]
        if session.away_from_base:
            rows.append((f"Oxygen: {session.oxygen:.0f}s", RED_ALERT))
        for text, color in rows:
            self._text(surface, text, color, 15, y)
            y += self.line
        return y

    def _draw_modules(self, surface: pygame.Surface, session: ColonySession, y: int) -> int:
        self._text(surface, "Modules", TERMINAL_GREEN, 15, y, self.font)
        y += 26
        built = [(mt, n) for mt, n in session.colony.modules.items() if n > 0]
        for mt, n in built:
            label = f"{mt.value}: {n}"
            if mt == ModuleType.MINING_RIG:
                label += f" ({session.active_mining_rigs()} on deposits)"
            self._text(surface, label, LIGHT_GREY, 15, y)
            y += self.line
        return y

    def _draw_build_list(
        self,
        surface: pygame.Surface,
        session: ColonySession,
        selected: ModuleType | None,
        y: int,
    ) -> None:
        self._text(surface, "Build (1-9, 0)", TERMINAL_GREEN, 15, y, self.font)
        y += 26
        colony = session.colony
        for i, mt in enumerate(buildable_modules(session)[:10]):
            cost = colony.get_module_cost(mt)
            affordable = colony.can_afford(cost)
            key = (i + 1) % 10
            color = AMBER if mt == selected else (TERMINAL_GREEN if affordable else RED_ALERT)
            prefix = "▸" if mt == selected else " "
            self._text(surface, f"{prefix}{key} {mt.value}", color, 15, y)
            self._text(surface, format_cost(cost), LIGHT_GREY, 40, y + 16, self.font_small)
            y += 36

    def _text(
        self,
        surface: pygame.Surface,
        text: str,
        color: tuple[int, int, int],
        x: int,
        y: int,
        font: pygame.font.Font | None = None,
    ) -> None:
        surf = (font or self.font_small).render(text, True, color)
        surface.blit(surf, (x, y))

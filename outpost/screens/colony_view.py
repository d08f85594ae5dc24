"""Colony view: the wrapping surface map, the avatar and build placement."""

from __future__ import annotations

import pygame

from ..constants import (
    AMBER,
    BACKGROUND,
    BASE_TILE_SIZE,
    BLACK,
    CYAN,
    DEPOSIT_GREEN,
    GROUND_DIM,
    HULL_GREEN,
    LIGHT_GREY,
    MAX_ZOOM,
    MIN_ZOOM,
    MOVE_REPEAT_SECONDS,
    RED_ALERT,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    TILE_COLORS,
    WHITE,
    ZOOM_STEP,
)
from ..models.colony import ColonyMode
from ..models.commands import Command, CommandResult, MoveAvatar, PlaceModule, SetMode
from ..models.modules import ModuleType, module_for_glyph
from ..models.session import ColonySession
from ..states import GameState
from ..ui.hud import buildable_modules

_MOVE_KEYS: dict[int, tuple[int, int]] = {
    pygame.K_w: (0, -1),
    pygame.K_UP: (0, -1),
    pygame.K_s: (0, 1),
    pygame.K_DOWN: (0, 1),
    pygame.K_a: (-1, 0),
    pygame.K_LEFT: (-1, 0),
    pygame.K_d: (1, 0),
    pygame.K_RIGHT: (1, 0),
}

_NUMBER_KEYS = (
    pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_4, pygame.K_5,
    pygame.K_6, pygame.K_7, pygame.K_8, pygame.K_9, pygame.K_0,
)

MESSAGE_SECONDS = 2.5


class ColonyViewScreen:
    """Main play screen. Input becomes commands; the game loop applies them."""

    def __init__(self, session: ColonySession) -> None:
        self.session = session
        self.font_tile = pygame.font.Font(None, 22)
        self.font_info = pygame.font.Font(None, 24)
        self.font_hint = pygame.font.Font(None, 22)

        self.commands: list[Command] = []
        self.next_state: GameState | None = None

        self.selected: ModuleType | None = None
        self.hovered: tuple[int, int] | None = None

        self.zoom = 1.0
        self._apply_zoom()

        # Held-key movement
        self._keys_held: set[int] = set()
        self._move_timer = 0.0

        # Feedback line
        self._message = ""
        self._message_ok = True
        self._message_timer = 0.0

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def handle_events(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN:
            if event.key in _MOVE_KEYS:
                self._keys_held.add(event.key)
                self._move_timer = 0.0  # step on the first press
            elif event.key in _NUMBER_KEYS:
                self._select_slot(_NUMBER_KEYS.index(event.key))
            elif event.key == pygame.K_TAB:
                self._cycle_selection()
            elif event.key == pygame.K_m:
                self._toggle_mode()
            elif event.key == pygame.K_t:
                self.next_state = GameState.RESEARCH
        elif event.type == pygame.KEYUP:
            self._keys_held.discard(event.key)
        elif event.type == pygame.MOUSEWHEEL:
            step = ZOOM_STEP if event.y > 0 else -ZOOM_STEP
            self.zoom = max(MIN_ZOOM, min(MAX_ZOOM, round(self.zoom + step, 2)))
            self._apply_zoom()
        elif event.type == pygame.MOUSEBUTTONDOWN:
            if event.button == 1:
                self._handle_click(event.pos)
            elif event.button == 3:
                self.selected = None

    def cancel_selection(self) -> bool:
        """Drop the current build choice. Returns False if nothing was selected."""
        if self.selected is None:
            return False
        self.selected = None
        return True

    def _select_slot(self, index: int) -> None:
        options = buildable_modules(self.session)
        if index < len(options):
            self.selected = options[index]

    def _cycle_selection(self) -> None:
        options = buildable_modules(self.session)
        if not options:
            return
        if self.selected in options:
            self.selected = options[(options.index(self.selected) + 1) % len(options)]
        else:
            self.selected = options[0]

    def _toggle_mode(self) -> None:
        mode = self.session.colony.mode
        new_mode = ColonyMode.ORBITAL if mode == ColonyMode.GROUND else ColonyMode.GROUND
        self.commands.append(SetMode(new_mode))

    def _handle_click(self, pos: tuple[int, int]) -> None:
        if self.selected is None:
            return
        tile = self._tile_at(*pos)
        if tile is not None:
            self.commands.append(PlaceModule(tile[0], tile[1], self.selected))

    def _tile_at(self, px: int, py: int) -> tuple[int, int] | None:
        s = self.session
        return s.grid.hit_test(px, py, s.avatar_x, s.avatar_y, SCREEN_WIDTH, SCREEN_HEIGHT)

    def _apply_zoom(self) -> None:
        size = max(4, int(BASE_TILE_SIZE * self.zoom))
        self.session.grid.cell_w = size
        self.session.grid.cell_h = size

    # ------------------------------------------------------------------
    # Feedback
    # ------------------------------------------------------------------

    def show_result(self, result: CommandResult) -> None:
        if not result.message:
            return
        self._message = result.message
        self._message_ok = result.ok
        self._message_timer = MESSAGE_SECONDS

    # ------------------------------------------------------------------
    # Update / draw
    # ------------------------------------------------------------------

    def update(self, dt: float) -> None:
        self._move_timer -= dt
        if self._move_timer <= 0 and self._keys_held:
            dx = dy = 0
            for key in self._keys_held:
                kx, ky = _MOVE_KEYS.get(key, (0, 0))
                dx, dy = dx + kx, dy + ky
            dx, dy = max(-1, min(1, dx)), max(-1, min(1, dy))
            if dx or dy:
                self.commands.append(MoveAvatar(dx, dy))
            self._move_timer = MOVE_REPEAT_SECONDS

        if self._message_timer > 0:
            self._message_timer -= dt

        self.hovered = self._tile_at(*pygame.mouse.get_pos())

    def draw(self, surface: pygame.Surface) -> None:
        surface.fill(BACKGROUND)
        s = self.session
        grid = s.grid
        tiles_w, tiles_h = grid.viewport_tiles(SCREEN_WIDTH, SCREEN_HEIGHT)
        start_x, start_y = grid.viewport_origin(s.avatar_x, s.avatar_y, SCREEN_WIDTH, SCREEN_HEIGHT)
        cw, ch = grid.cell_w, grid.cell_h
        show_glyphs = cw >= 14

        for ly in range(tiles_h):
            for lx in range(tiles_w):
                wx, wy = start_x + lx, start_y + ly
                glyph = grid.get_wrapped(wx, wy)
                rect = pygame.Rect(grid.origin_x + lx * cw, grid.origin_y + ly * ch, cw - 1, ch - 1)

                color = TILE_COLORS.get(glyph)
                if color is not None:
                    pygame.draw.rect(surface, color, rect)
                    if show_glyphs:
                        self._blit_centered(surface, glyph, BLACK, rect)
                elif grid.deposit_wrapped(wx, wy):
                    pygame.draw.rect(surface, DEPOSIT_GREEN, rect)
                else:
                    pygame.draw.rect(surface, GROUND_DIM, rect, 1)

        # Build ghost under the cursor
        if self.selected is not None and self.hovered is not None:
            self._draw_ghost(surface, start_x, start_y)

        # Avatar
        ax = grid.origin_x + (s.avatar_x - start_x) * cw
        ay = grid.origin_y + (s.avatar_y - start_y) * ch
        avatar_rect = pygame.Rect(ax, ay, cw - 1, ch - 1)
        pygame.draw.rect(surface, BACKGROUND, avatar_rect)
        self._blit_centered(surface, "@", RED_ALERT if s.away_from_base else WHITE, avatar_rect)

        if s.colony.mode == ColonyMode.ORBITAL:
            label = self.font_info.render("ORBITAL MODE: solar +40%, mining offline", True, CYAN)
            surface.blit(label, (grid.origin_x, SCREEN_HEIGHT - 50))

        self._draw_hover_info(surface)
        self._draw_message(surface)
        self._draw_hints(surface)

    def hover_label(self) -> str:
        """Describe the tile under the cursor: module name or terrain."""
        if self.hovered is None:
            return ""
        grid = self.session.grid
        x, y = self.hovered
        module_type = module_for_glyph(grid.get_wrapped(x, y))
        if module_type is not None:
            return f"({x}, {y}) {module_type.value}"
        return f"({x}, {y}) {'Deposit' if grid.deposit_wrapped(x, y) else 'Ground'}"

    def _draw_hover_info(self, surface: pygame.Surface) -> None:
        label = self.hover_label()
        if label:
            text = self.font_hint.render(label, True, LIGHT_GREY)
            surface.blit(text, (SCREEN_WIDTH - text.get_width() - 20, SCREEN_HEIGHT - 50))

    def _draw_ghost(self, surface: pygame.Surface, start_x: int, start_y: int) -> None:
        grid = self.session.grid
        hx, hy = self.hovered
        # Map the wrapped tile back into viewport space
        lx = (hx - start_x) % grid.width
        ly = (hy - start_y) % grid.height
        rect = pygame.Rect(
            grid.origin_x + lx * grid.cell_w, grid.origin_y + ly * grid.cell_h,
            grid.cell_w - 1, grid.cell_h - 1,
        )
        valid = self.session.is_valid_placement(hx, hy, self.selected)
        pygame.draw.rect(surface, HULL_GREEN if valid else RED_ALERT, rect, 2)

    def _blit_centered(
        self, surface: pygame.Surface, text: str, color: tuple[int, int, int], rect: pygame.Rect,
    ) -> None:
        surf = self.font_tile.render(text, True, color)
        surface.blit(surf, surf.get_rect(center=rect.center))

    def _draw_message(self, surface: pygame.Surface) -> None:
        if self._message_timer <= 0:
            return
        color = HULL_GREEN if self._message_ok else RED_ALERT
        msg = self.font_info.render(self._message, True, color)
        x = self.session.grid.origin_x + (SCREEN_WIDTH - self.session.grid.origin_x - msg.get_width()) // 2
        surface.blit(msg, (x, 28))

    def _draw_hints(self, surface: pygame.Surface) -> None:
        selected = f"Building: {self.selected.value}" if self.selected else "Nothing selected"
        hint = self.font_hint.render(
            f"{selected}    WASD move   1-0/TAB pick   Click build   M mode   T research   ESC menu",
            True, AMBER if self.selected else LIGHT_GREY,
        )
        surface.blit(hint, (self.session.grid.origin_x, SCREEN_HEIGHT - 25))

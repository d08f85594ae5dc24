"""Toroidal tile map for Kerbal Outpost.

The world wraps on both axes. Deposits are generated once per session from a
seed with a 32-bit linear congruential generator, so the same seed always
yields the same layout.
"""

from __future__ import annotations

import math
import time

from ..constants import BASE_TILE_SIZE, DEPOSIT_CHANCE, SIDEBAR_WIDTH
from .modules import CONNECTOR_GLYPHS

EMPTY = "."
DEPOSIT = "^"

_LCG_MULTIPLIER = 1103515245
_LCG_INCREMENT = 12345
_LCG_MASK = 0xFFFFFFFF

_NEIGHBOR_OFFSETS = ((1, 0), (-1, 0), (0, 1), (0, -1))


def lcg_stream(seed: int):
    """Yield floats in [0, 1] from the classic 32-bit LCG."""
    rnd = seed & _LCG_MASK
    while True:
        rnd = (_LCG_MULTIPLIER * rnd + _LCG_INCREMENT) & _LCG_MASK
        yield rnd / _LCG_MASK


def wrapped_axis_distance(a: int, b: int, size: int) -> int:
    d = abs(a - b) % size
    return min(d, size - d)


class Grid:
    """Fixed-size wrapping grid of tile glyphs plus a deposit layer."""

    def __init__(
        self,
        width: int,
        height: int,
        seed: int | None = None,
        deposit_chance: float = DEPOSIT_CHANCE,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("grid dimensions must be positive")
        self.width = width
        self.height = height
        self.deposit_chance = deposit_chance
        self.tiles: list[list[str]] = [[EMPTY] * width for _ in range(height)]
        self.deposits: list[list[bool]] = [[False] * width for _ in range(height)]
        self.seed = 0

        # Rendering params (kept in sync by the colony view)
        self.cell_w = BASE_TILE_SIZE
        self.cell_h = BASE_TILE_SIZE
        self.origin_x = SIDEBAR_WIDTH + 20
        self.origin_y = 20

        self.generate(int(time.time() * 1000) if seed is None else seed)

    def generate(self, seed: int) -> None:
        """Refill the map with deposits from ``seed``; clears all buildings."""
        self.seed = seed
        rand = lcg_stream(seed)
        for y in range(self.height):
            for x in range(self.width):
                has_deposit = next(rand) < self.deposit_chance
                self.deposits[y][x] = has_deposit
                self.tiles[y][x] = DEPOSIT if has_deposit else EMPTY

    # ------------------------------------------------------------------
    # Coordinates
    # ------------------------------------------------------------------

    def wrap(self, x: int, y: int) -> tuple[int, int]:
        return x % self.width, y % self.height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def distance(self, ax: int, ay: int, bx: int, by: int) -> int:
        """Chebyshev distance with wrap-around on both axes."""
        dx = wrapped_axis_distance(ax, bx, self.width)
        dy = wrapped_axis_distance(ay, by, self.height)
        return max(dx, dy)

    def neighbors(self, x: int, y: int) -> list[tuple[int, int]]:
        """The four orthogonal neighbours, wrapped."""
        return [self.wrap(x + dx, y + dy) for dx, dy in _NEIGHBOR_OFFSETS]

    # ------------------------------------------------------------------
    # Tiles
    # ------------------------------------------------------------------

    def get(self, x: int, y: int) -> str | None:
        """Tile at (x, y), or None when outside the map."""
        if not self.in_bounds(x, y):
            return None
        return self.tiles[y][x]

    def get_wrapped(self, x: int, y: int) -> str:
        wx, wy = self.wrap(x, y)
        return self.tiles[wy][wx]

    def deposit_wrapped(self, x: int, y: int) -> bool:
        wx, wy = self.wrap(x, y)
        return self.deposits[wy][wx]

    def set(self, x: int, y: int, glyph: str) -> None:
        wx, wy = self.wrap(x, y)
        self.tiles[wy][wx] = glyph

    def is_empty(self, x: int, y: int) -> bool:
        return self.get_wrapped(x, y) in (EMPTY, DEPOSIT)

    def is_connector(self, x: int, y: int) -> bool:
        return self.get_wrapped(x, y) in CONNECTOR_GLYPHS

    def has_connector_neighbor(self, x: int, y: int) -> bool:
        return any(self.is_connector(nx, ny) for nx, ny in self.neighbors(x, y))

    # ------------------------------------------------------------------
    # Screen mapping
    # ------------------------------------------------------------------

    def viewport_tiles(self, canvas_w: int, canvas_h: int) -> tuple[int, int]:
        available_w = canvas_w - self.origin_x - 20
        available_h = canvas_h - self.origin_y - 20
        return available_w // self.cell_w, available_h // self.cell_h

    def viewport_origin(
        self, camera_x: float, camera_y: float, canvas_w: int, canvas_h: int,
    ) -> tuple[int, int]:
        """World coordinates (unwrapped) of the top-left visible tile."""
        tiles_w, tiles_h = self.viewport_tiles(canvas_w, canvas_h)
        return math.floor(camera_x - tiles_w / 2), math.floor(camera_y - tiles_h / 2)

    def hit_test(
        self,
        px: float,
        py: float,
        camera_x: float | None = None,
        camera_y: float | None = None,
        canvas_w: int | None = None,
        canvas_h: int | None = None,
    ) -> tuple[int, int] | None:
        """Map a pixel to a tile, or None when it misses the map."""
        local_x = int((px - self.origin_x) // self.cell_w)
        local_y = int((py - self.origin_y) // self.cell_h)

        if None in (camera_x, camera_y, canvas_w, canvas_h):
            if self.in_bounds(local_x, local_y):
                return local_x, local_y
            return None

        tiles_w, tiles_h = self.viewport_tiles(canvas_w, canvas_h)
        if not (0 <= local_x < tiles_w and 0 <= local_y < tiles_h):
            return None
        start_x, start_y = self.viewport_origin(camera_x, camera_y, canvas_w, canvas_h)
        return self.wrap(start_x + local_x, start_y + local_y)

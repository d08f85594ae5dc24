"""One play session: colony, world grid, avatar and build rules.

A fresh ``ColonySession`` is created for every new game; returning to the
title screen throws the old one away.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from ..constants import (
    DEPOSIT_CHANCE,
    GRID_HEIGHT,
    GRID_WIDTH,
    OXYGEN_RANGE,
    OXYGEN_SECONDS,
    PLACEMENT_RANGE,
)
from .colony import Colony
from .commands import (
    Command,
    CommandResult,
    MoveAvatar,
    PlaceModule,
    ResearchTech,
    SetMode,
)
from .grid import Grid
from .modules import ModuleType, spec_for
from .resources import format_cost
from .tech import ResearchResult


class PlacementProblem(enum.Enum):
    """First rule a placement breaks, in evaluation order."""

    OCCUPIED = "Tile is occupied"
    OUT_OF_RANGE = "Too far from your kerbal"
    UNAFFORDABLE = "Not enough resources"
    NEEDS_DEPOSIT = "Must be built on a resource deposit"
    NOT_CONNECTED = "Must touch the base network"


_RESEARCH_MESSAGES: dict[ResearchResult, str] = {
    ResearchResult.OK: "Research complete",
    ResearchResult.UNKNOWN: "No such technology",
    ResearchResult.ALREADY_RESEARCHED: "Already researched",
    ResearchResult.MISSING_PREREQUISITE: "Prerequisites not researched",
    ResearchResult.INSUFFICIENT_SCIENCE: "Not enough science",
}


@dataclass(frozen=True)
class Placement:
    """A built module on the map."""

    x: int
    y: int
    module_type: ModuleType


class ColonySession:
    """Game controller state: everything a running game mutates."""

    def __init__(
        self,
        seed: int | None = None,
        width: int = GRID_WIDTH,
        height: int = GRID_HEIGHT,
        deposit_chance: float | None = None,
        now: float | None = None,
    ) -> None:
        self.colony = Colony(now=now)
        self.grid = Grid(
            width, height, seed,
            DEPOSIT_CHANCE if deposit_chance is None else deposit_chance,
        )

        # Command center at the map centre
        self.command_center = (self.grid.width // 2, self.grid.height // 2)
        self.grid.set(*self.command_center, spec_for(ModuleType.COMMAND_CENTER).glyph)

        # Avatar starts next to it
        self.avatar_x = self.command_center[0] + 1
        self.avatar_y = self.command_center[1]

        self.placements: list[Placement] = []

        # Oxygen
        self.oxygen = OXYGEN_SECONDS
        self.away_from_base = False

    # ------------------------------------------------------------------
    # Build rules
    # ------------------------------------------------------------------

    def placement_problem(self, x: int, y: int, module_type: ModuleType) -> PlacementProblem | None:
        """Return the first rule (x, y) breaks for ``module_type``, or None."""
        if not self.grid.is_empty(x, y):
            return PlacementProblem.OCCUPIED

        if self.grid.distance(x, y, self.avatar_x, self.avatar_y) > PLACEMENT_RANGE:
            return PlacementProblem.OUT_OF_RANGE

        spec = spec_for(module_type)
        if not self.colony.can_afford(spec.cost):
            return PlacementProblem.UNAFFORDABLE

        if spec.mining and not self.grid.deposit_wrapped(x, y):
            return PlacementProblem.NEEDS_DEPOSIT

        if spec.needs_connection and not self.grid.has_connector_neighbor(x, y):
            return PlacementProblem.NOT_CONNECTED

        return None

    def is_valid_placement(self, x: int, y: int, module_type: ModuleType) -> bool:
        return self.placement_problem(x, y, module_type) is None

    def place_module(self, x: int, y: int, module_type: ModuleType) -> CommandResult:
        """Validate, pay for, build and draw a module at (x, y)."""
        spec = spec_for(module_type)
        if not self.colony.is_unlocked(module_type):
            return CommandResult(False, f"{spec.name} is not researched yet")

        problem = self.placement_problem(x, y, module_type)
        if problem is not None:
            return CommandResult(False, problem.value)

        if not self.colony.spend(spec.cost):
            return CommandResult(False, PlacementProblem.UNAFFORDABLE.value)
        self.colony.build_module(module_type)

        wx, wy = self.grid.wrap(x, y)
        self.grid.set(wx, wy, spec.glyph)
        self.placements.append(Placement(wx, wy, module_type))
        logging.info(f"Session: built {spec.name} at ({wx}, {wy}) for {format_cost(spec.cost)}")
        return CommandResult(True, f"Built {spec.name}")

    def research(self, tech_id: str) -> CommandResult:
        result = self.colony.research(tech_id)
        return CommandResult(result is ResearchResult.OK, _RESEARCH_MESSAGES[result])

    def active_mining_rigs(self) -> int:
        """Mining modules actually sitting on a deposit (display only)."""
        return sum(
            1
            for p in self.placements
            if spec_for(p.module_type).mining and self.grid.deposits[p.y][p.x]
        )

    # ------------------------------------------------------------------
    # Avatar
    # ------------------------------------------------------------------

    def move_avatar(self, dx: int, dy: int) -> None:
        self.avatar_x, self.avatar_y = self.grid.wrap(self.avatar_x + dx, self.avatar_y + dy)

    def distance_from_base(self) -> int:
        cx, cy = self.command_center
        return self.grid.distance(self.avatar_x, self.avatar_y, cx, cy)

    def update_oxygen(self, dt: float) -> None:
        self.away_from_base = self.distance_from_base() > OXYGEN_RANGE
        if not self.away_from_base:
            self.oxygen = OXYGEN_SECONDS
            return
        self.oxygen -= dt
        if self.oxygen <= 0:
            # No suffocation yet; the tank simply refills.
            logging.debug("Session: oxygen ran out, refilling")
            self.oxygen = OXYGEN_SECONDS

    # ------------------------------------------------------------------
    # Frame driver
    # ------------------------------------------------------------------

    def step(self, now: float | None = None, dt: float = 0.0) -> None:
        """Run the colony tick, then per-frame avatar upkeep."""
        self.colony.update(now)
        self.update_oxygen(dt)

    def apply(self, command: Command) -> CommandResult:
        if isinstance(command, PlaceModule):
            return self.place_module(command.x, command.y, command.module_type)
        if isinstance(command, ResearchTech):
            return self.research(command.tech_id)
        if isinstance(command, MoveAvatar):
            self.move_avatar(command.dx, command.dy)
            return CommandResult(True)
        if isinstance(command, SetMode):
            self.colony.set_mode(command.mode)
            return CommandResult(True, f"Mode: {command.mode.value}")
        raise TypeError(f"Unknown command: {command!r}")

    # ------------------------------------------------------------------
    # Restore helpers (used by save loading)
    # ------------------------------------------------------------------

    def restore_placements(self, placements: list[Placement]) -> None:
        """Redraw saved buildings onto a freshly generated map.

        Colony counts come from the colony record, so nothing is re-paid.
        """
        for p in placements:
            wx, wy = self.grid.wrap(p.x, p.y)
            self.grid.set(wx, wy, spec_for(p.module_type).glyph)
            self.placements.append(Placement(wx, wy, p.module_type))

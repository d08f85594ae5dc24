"""Player commands produced by screens and applied by the game loop.

Screens never touch the colony directly; they queue one of these and the
driver hands it to ``ColonySession.apply`` after the frame's simulation tick.
"""

from __future__ import annotations

from dataclasses import dataclass

from .colony import ColonyMode
from .modules import ModuleType


@dataclass(frozen=True)
class PlaceModule:
    x: int
    y: int
    module_type: ModuleType


@dataclass(frozen=True)
class ResearchTech:
    tech_id: str


@dataclass(frozen=True)
class MoveAvatar:
    dx: int
    dy: int


@dataclass(frozen=True)
class SetMode:
    mode: ColonyMode


Command = PlaceModule | ResearchTech | MoveAvatar | SetMode


@dataclass(frozen=True)
class CommandResult:
    """What happened to a command, for on-screen feedback."""

    ok: bool
    message: str = ""

"""Technology tree for Kerbal Outpost.

Research is paid in Science. Each tech can be researched once, only after all
of its prerequisites, and adds its modules to the colony's build list.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from .modules import ModuleType
from .resources import ResourceType

if TYPE_CHECKING:
    from .colony import Colony


class ResearchResult(enum.Enum):
    """Outcome of a research attempt, checked in declaration order."""

    OK = "ok"
    UNKNOWN = "unknown_tech"
    ALREADY_RESEARCHED = "already_researched"
    MISSING_PREREQUISITE = "missing_prerequisite"
    INSUFFICIENT_SCIENCE = "insufficient_science"


@dataclass(frozen=True)
class Technology:
    """A researchable upgrade."""

    id: str
    cost: float
    tier: int
    prerequisites: tuple[str, ...] = ()
    unlocks: tuple[ModuleType, ...] = ()
    description: str = ""


_TECH_LIST: list[Technology] = [
    # Tier 1
    Technology(
        "Comms", 200, 1, (), (ModuleType.COMMS_RELAY,),
        "Long-range antennas keep the outpost talking to home.",
    ),
    Technology(
        "Advanced Power", 400, 1, (), (ModuleType.SOLAR_ARRAY,),
        "Better panels, better wiring, fewer brownouts.",
    ),
    Technology(
        "ISRU", 500, 1, (), (ModuleType.MINING_RIG,),
        "In-situ resource utilisation: dig up what you need.",
    ),
    # Tier 2
    Technology(
        "Orbital Assembly", 800, 2, ("Comms",), (ModuleType.ORBITAL_ASSEMBLY,),
        "Bolt large structures together in microgravity.",
    ),
    Technology(
        "Advanced Habitats", 900, 2, ("Comms",), (ModuleType.ADVANCED_HABITAT,),
        "Inflatable modules with room for a dozen more kerbals.",
    ),
    Technology(
        "Fusion Power", 1200, 2, ("Advanced Power",), (ModuleType.FUSION_REACTOR,),
        "A small star in a box. Mind the box.",
    ),
    # Tier 3
    Technology(
        "Quantum Computing", 1500, 3, ("Comms", "Advanced Power"), (ModuleType.QUANTUM_LAB,),
        "Research that is and isn't happening at the same time.",
    ),
    Technology(
        "Plasma Extraction", 1400, 3, ("ISRU", "Fusion Power"), (ModuleType.PLASMA_EXTRACTOR,),
        "Melt the deposit, keep the good bits.",
    ),
    Technology(
        "Deflector Shields", 1600, 3, ("Fusion Power", "Orbital Assembly"),
        (ModuleType.SHIELD_GENERATOR,),
        "Keeps micrometeorites and curious kerbals out.",
    ),
    # Tier 4
    Technology(
        "Nanofabrication", 2000, 4, ("Quantum Computing", "Plasma Extraction"),
        (ModuleType.NANO_FACTORY,),
        "Building materials, assembled one atom at a time.",
    ),
    Technology(
        "Teleportation", 2500, 4, ("Quantum Computing", "Deflector Shields"),
        (ModuleType.TELEPORT_HUB,),
        "Nobody has volunteered to go first.",
    ),
    # Tier 5
    Technology(
        "Arc Reactor", 3000, 5, ("Fusion Power", "Nanofabrication"), (ModuleType.ARC_REACTOR,),
        "Enough power for the whole outpost and then some.",
    ),
]

TECHS: MappingProxyType[str, Technology] = MappingProxyType({t.id: t for t in _TECH_LIST})


class TechGraph:
    """Eligibility and unlock rules over an immutable tech table."""

    def __init__(self, techs: MappingProxyType[str, Technology] = TECHS) -> None:
        self.techs = techs

    def get(self, tech_id: str) -> Technology | None:
        return self.techs.get(tech_id)

    def research_blocker(
        self, tech_id: str, unlocked: Iterable[str], science: float,
    ) -> ResearchResult:
        """Return why ``tech_id`` cannot be researched, or OK."""
        tech = self.techs.get(tech_id)
        if tech is None:
            return ResearchResult.UNKNOWN
        done = set(unlocked)
        if tech_id in done:
            return ResearchResult.ALREADY_RESEARCHED
        if not all(p in done for p in tech.prerequisites):
            return ResearchResult.MISSING_PREREQUISITE
        if science < tech.cost:
            return ResearchResult.INSUFFICIENT_SCIENCE
        return ResearchResult.OK

    def can_research(self, tech_id: str, unlocked: Iterable[str], science: float) -> bool:
        return self.research_blocker(tech_id, unlocked, science) is ResearchResult.OK

    def unlock(self, tech_id: str, colony: Colony) -> bool:
        return self.research(tech_id, colony) is ResearchResult.OK

    def research(self, tech_id: str, colony: Colony) -> ResearchResult:
        """Research ``tech_id`` for ``colony``; no side effect unless OK."""
        science = colony.resources.get(ResourceType.SCIENCE)
        result = self.research_blocker(tech_id, colony.unlocked_techs, science)
        if result is not ResearchResult.OK:
            return result

        tech = self.techs[tech_id]
        if not colony.resources.remove(ResourceType.SCIENCE, tech.cost):
            return ResearchResult.INSUFFICIENT_SCIENCE
        colony.unlocked_techs.add(tech_id)
        colony.unlocked.update(tech.unlocks)
        return ResearchResult.OK

    def available_for_research(self, unlocked: Iterable[str]) -> list[str]:
        """Techs not yet researched whose prerequisites are all met."""
        done = set(unlocked)
        return [
            tech.id
            for tech in self.techs.values()
            if tech.id not in done and all(p in done for p in tech.prerequisites)
        ]

    def techs_by_tier(self) -> dict[int, list[Technology]]:
        tiers: dict[int, list[Technology]] = {}
        for tech in sorted(self.techs.values(), key=lambda t: (t.tier, t.cost)):
            tiers.setdefault(tech.tier, []).append(tech)
        return tiers


def _validate_techs() -> None:
    for tech in _TECH_LIST:
        if tech.cost <= 0:
            raise ValueError(f"{tech.id}: cost must be > 0")
        for prereq in tech.prerequisites:
            parent = TECHS.get(prereq)
            if parent is None:
                raise ValueError(f"{tech.id}: unknown prerequisite {prereq!r}")
            if parent.tier >= tech.tier:
                raise ValueError(f"{tech.id}: prerequisite {prereq!r} must be a lower tier")


_validate_techs()

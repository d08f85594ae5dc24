"""Buildable module definitions for Kerbal Outpost.

Pure data: one immutable ``ModuleSpec`` per ``ModuleType``. Rates are units
per second before environment modifiers.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from types import MappingProxyType

from .resources import ResourceMap, ResourceType


class ModuleType(enum.Enum):
    """Every module the colony can own."""

    COMMAND_CENTER = "Command Center"
    HABITATION = "Habitation"
    GREENHOUSE = "Greenhouse"
    SCIENCE_LAB = "Science Lab"
    SOLAR_ARRAY = "Solar Array"
    MINING_RIG = "Mining Rig"
    COMMS_RELAY = "Comms Relay"
    ORBITAL_ASSEMBLY = "Orbital Assembly"

    # Advanced (tech tree)
    ADVANCED_HABITAT = "Advanced Habitat"
    FUSION_REACTOR = "Fusion Reactor"
    QUANTUM_LAB = "Quantum Lab"
    PLASMA_EXTRACTOR = "Plasma Extractor"
    SHIELD_GENERATOR = "Shield Generator"
    TELEPORT_HUB = "Teleport Hub"
    NANO_FACTORY = "Nano Factory"
    ARC_REACTOR = "Arc Reactor"


@dataclass(frozen=True)
class ModuleSpec:
    """
    Static profile of a module type.

    Notes:
    - solar: power_gen is scaled by the environment's solar factor and the
      module may be placed without touching the base network.
    - mining: must sit on a deposit, yields nothing in orbit, also exempt
      from the network rule.
    - connector: its tile extends the base network for neighbours.
    """

    name: str
    glyph: str
    cost: ResourceMap
    power_gen: float = 0.0
    power_use: float = 0.0
    snacks_gen: float = 0.0
    materials_gen: float = 0.0
    science_gen: float = 0.0
    kerbal_capacity: float = 0.0
    solar: bool = False
    mining: bool = False
    connector: bool = False

    @property
    def needs_connection(self) -> bool:
        return not (self.solar or self.mining)


def _cost(**amounts: float) -> ResourceMap:
    keys = {
        "materials": ResourceType.BUILDING_MATERIALS,
        "power": ResourceType.POWER,
        "science": ResourceType.SCIENCE,
        "snacks": ResourceType.SNACKS,
    }
    return MappingProxyType({keys[k]: float(v) for k, v in amounts.items()})


_SPECS: dict[ModuleType, ModuleSpec] = {
    ModuleType.COMMAND_CENTER: ModuleSpec(
        name="Command Center", glyph="C", cost=_cost(),
        power_gen=10.0, connector=True,
    ),
    ModuleType.HABITATION: ModuleSpec(
        name="Habitation", glyph="H", cost=_cost(materials=100, power=50),
        power_use=2.0, kerbal_capacity=5.0, connector=True,
    ),
    ModuleType.GREENHOUSE: ModuleSpec(
        name="Greenhouse", glyph="G", cost=_cost(materials=150, power=100),
        power_use=4.0, snacks_gen=2.0, connector=True,
    ),
    ModuleType.SCIENCE_LAB: ModuleSpec(
        name="Science Lab", glyph="L", cost=_cost(materials=200, power=150),
        power_use=5.0, science_gen=1.0, connector=True,
    ),
    ModuleType.SOLAR_ARRAY: ModuleSpec(
        name="Solar Array", glyph="S", cost=_cost(materials=120),
        power_gen=15.0, solar=True,
    ),
    ModuleType.MINING_RIG: ModuleSpec(
        name="Mining Rig", glyph="M", cost=_cost(materials=250, power=100),
        power_use=6.0, materials_gen=2.0, mining=True,
    ),
    ModuleType.COMMS_RELAY: ModuleSpec(
        name="Comms Relay", glyph="A", cost=_cost(materials=80, power=30),
        power_use=1.0, connector=True,
    ),
    ModuleType.ORBITAL_ASSEMBLY: ModuleSpec(
        name="Orbital Assembly", glyph="O", cost=_cost(materials=400, power=250),
        power_use=8.0, connector=True,
    ),
    # --- Advanced ---
    ModuleType.ADVANCED_HABITAT: ModuleSpec(
        name="Advanced Habitat", glyph="B", cost=_cost(materials=300, power=150),
        power_use=3.0, kerbal_capacity=12.0, connector=True,
    ),
    ModuleType.FUSION_REACTOR: ModuleSpec(
        name="Fusion Reactor", glyph="F", cost=_cost(materials=500, science=100),
        power_gen=40.0,
    ),
    ModuleType.QUANTUM_LAB: ModuleSpec(
        name="Quantum Lab", glyph="Q", cost=_cost(materials=400, power=300),
        power_use=10.0, science_gen=4.0,
    ),
    ModuleType.PLASMA_EXTRACTOR: ModuleSpec(
        name="Plasma Extractor", glyph="P", cost=_cost(materials=500, power=250),
        power_use=12.0, materials_gen=6.0, mining=True,
    ),
    ModuleType.SHIELD_GENERATOR: ModuleSpec(
        name="Shield Generator", glyph="D", cost=_cost(materials=450, power=300),
        power_use=15.0,
    ),
    ModuleType.TELEPORT_HUB: ModuleSpec(
        name="Teleport Hub", glyph="T", cost=_cost(materials=800, power=500),
        power_use=20.0,
    ),
    ModuleType.NANO_FACTORY: ModuleSpec(
        name="Nano Factory", glyph="N", cost=_cost(materials=700, power=400),
        power_use=14.0, materials_gen=4.0,
    ),
    ModuleType.ARC_REACTOR: ModuleSpec(
        name="Arc Reactor", glyph="R", cost=_cost(materials=1000, science=200),
        power_gen=80.0,
    ),
}

MODULE_SPECS: MappingProxyType[ModuleType, ModuleSpec] = MappingProxyType(_SPECS)

# Aggregation order for the simulation tick.
MODULE_ORDER: tuple[ModuleType, ...] = tuple(ModuleType)

STARTING_UNLOCKS: frozenset[ModuleType] = frozenset({
    ModuleType.HABITATION,
    ModuleType.GREENHOUSE,
    ModuleType.SOLAR_ARRAY,
    ModuleType.SCIENCE_LAB,
    ModuleType.MINING_RIG,
})

_BY_GLYPH: dict[str, ModuleType] = {spec.glyph: mt for mt, spec in _SPECS.items()}

CONNECTOR_GLYPHS: frozenset[str] = frozenset(
    spec.glyph for spec in _SPECS.values() if spec.connector
)

HABITATION_MODULES: tuple[ModuleType, ...] = tuple(
    mt for mt in MODULE_ORDER if _SPECS[mt].kerbal_capacity > 0
)


def spec_for(module_type: ModuleType) -> ModuleSpec:
    return MODULE_SPECS[module_type]


def module_for_glyph(glyph: str) -> ModuleType | None:
    return _BY_GLYPH.get(glyph)


# ----------------------------
# Validation (fail loudly)
# ----------------------------

def _validate_modules() -> None:
    missing = set(ModuleType) - set(_SPECS)
    if missing:
        raise ValueError(f"Module types without a definition: {sorted(m.value for m in missing)}")

    glyphs: set[str] = set()
    for mt, spec in _SPECS.items():
        if len(spec.glyph) != 1 or spec.glyph in (".", "^", " "):
            raise ValueError(f"{mt.value}: glyph must be a single non-terrain character")
        if spec.glyph in glyphs:
            raise ValueError(f"{mt.value}: duplicate glyph {spec.glyph!r}")
        glyphs.add(spec.glyph)

        rates = (
            spec.power_gen, spec.power_use, spec.snacks_gen,
            spec.materials_gen, spec.science_gen, spec.kerbal_capacity,
        )
        if any(rate < 0 for rate in rates):
            raise ValueError(f"{mt.value}: rates must be >= 0")
        for resource, amount in spec.cost.items():
            if amount <= 0:
                raise ValueError(f"{mt.value}: cost {resource.value} must be > 0")
        if spec.solar and spec.mining:
            raise ValueError(f"{mt.value}: cannot be both solar and mining")


_validate_modules()

"""Colony simulation for Kerbal Outpost.

The colony owns the resource ledger, built module counts, the research state
and the kerbal population, and advances them once per frame in ``update``.
"""

from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass

from ..constants import MAX_TICK_SECONDS
from .modules import (
    HABITATION_MODULES,
    MODULE_ORDER,
    STARTING_UNLOCKS,
    ModuleType,
    spec_for,
)
from .resources import ResourceLedger, ResourceMap, ResourceType
from .tech import ResearchResult, TechGraph

BASE_KERBAL_CAPACITY = 5.0
STARTING_KERBALS = 3.0
SNACKS_PER_KERBAL = 0.05      # per second
STARVATION_RATE = 0.01        # kerbals lost per second while out of snacks
GROWTH_RATE = 0.005           # kerbals gained per second when fed and housed
GROWTH_SNACK_THRESHOLD = 50.0
GROWTH_HEADROOM = 0.05

_STARTING_RESOURCES: dict[ResourceType, float] = {
    ResourceType.POWER: 100.0,
    ResourceType.SNACKS: 100.0,
    ResourceType.BUILDING_MATERIALS: 500.0,
    ResourceType.SCIENCE: 0.0,
}


class ColonyMode(enum.Enum):
    """Where the colony is built; changes solar and mining yield."""

    GROUND = "Ground"
    ORBITAL = "Orbital"


_SOLAR_FACTOR: dict[ColonyMode, float] = {
    ColonyMode.GROUND: 1.0,
    ColonyMode.ORBITAL: 1.4,
}


@dataclass(frozen=True)
class ProductionRates:
    """Per-second totals for one simulation step."""

    power_gen: float = 0.0
    power_use: float = 0.0
    snacks_gen: float = 0.0
    snacks_use: float = 0.0
    materials_gen: float = 0.0
    science_gen: float = 0.0

    @property
    def power_factor(self) -> float:
        """Brownout multiplier for snack and science output (0.0–1.0)."""
        if self.power_use == 0 or self.power_gen >= self.power_use:
            return 1.0
        return max(0.0, self.power_gen / self.power_use)

    @property
    def net_power(self) -> float:
        return self.power_gen - self.power_use


class Colony:
    """The player's outpost: resources, modules, research and crew."""

    def __init__(self, tech_graph: TechGraph | None = None, now: float | None = None) -> None:
        self.tech_graph = tech_graph or TechGraph()
        self.resources = ResourceLedger(_STARTING_RESOURCES)
        self.modules: dict[ModuleType, int] = {mt: 0 for mt in MODULE_ORDER}
        self.modules[ModuleType.COMMAND_CENTER] = 1

        self.kerbals: float = STARTING_KERBALS
        self.kerbal_capacity: float = BASE_KERBAL_CAPACITY

        self.mode = ColonyMode.GROUND
        self.unlocked: set[ModuleType] = set(STARTING_UNLOCKS)
        self.unlocked_techs: set[str] = set()

        self.last_update_time: float = time.time() if now is None else now
        self.recompute_kerbal_capacity()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def count(self, module_type: ModuleType) -> int:
        return self.modules.get(module_type, 0)

    def is_unlocked(self, module_type: ModuleType) -> bool:
        return module_type == ModuleType.COMMAND_CENTER or module_type in self.unlocked

    def get_module_cost(self, module_type: ModuleType) -> ResourceMap:
        return spec_for(module_type).cost

    def can_afford(self, cost: ResourceMap) -> bool:
        return self.resources.can_afford(cost)

    @property
    def solar_factor(self) -> float:
        return _SOLAR_FACTOR[self.mode]

    @property
    def mining_enabled(self) -> bool:
        return self.mode == ColonyMode.GROUND

    def rates(self) -> ProductionRates:
        """Aggregate production and consumption for the current state."""
        power_gen = power_use = snacks_gen = materials_gen = science_gen = 0.0
        for module_type in MODULE_ORDER:
            n = self.count(module_type)
            if n <= 0:
                continue
            spec = spec_for(module_type)

            pg = spec.power_gen
            if spec.solar:
                pg *= self.solar_factor
            power_gen += pg * n
            power_use += spec.power_use * n

            if spec.mining:
                # Counts every built rig, placed on a deposit or not.
                if self.mining_enabled:
                    materials_gen += spec.materials_gen * n
            else:
                snacks_gen += spec.snacks_gen * n
                materials_gen += spec.materials_gen * n
                science_gen += spec.science_gen * n

        return ProductionRates(
            power_gen=power_gen,
            power_use=power_use,
            snacks_gen=snacks_gen,
            snacks_use=self.kerbals * SNACKS_PER_KERBAL,
            materials_gen=materials_gen,
            science_gen=science_gen,
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def set_mode(self, mode: ColonyMode) -> None:
        self.mode = mode

    def add_resource(self, resource: ResourceType, amount: float) -> None:
        self.resources.add(resource, amount)

    def remove_resource(self, resource: ResourceType, amount: float) -> bool:
        return self.resources.remove(resource, amount)

    def spend(self, cost: ResourceMap) -> bool:
        """Atomically verify and deduct ``cost``."""
        return self.resources.spend(cost)

    def build_module(self, module_type: ModuleType) -> bool:
        """Add one built module. Spending is the caller's job.

        Returns False (and changes nothing) for a locked module type.
        """
        if not self.is_unlocked(module_type):
            return False
        self.modules[module_type] = self.count(module_type) + 1
        self.recompute_kerbal_capacity()
        return True

    def recompute_kerbal_capacity(self) -> None:
        capacity = BASE_KERBAL_CAPACITY
        for module_type in HABITATION_MODULES:
            capacity += self.count(module_type) * spec_for(module_type).kerbal_capacity
        self.kerbal_capacity = capacity
        if self.kerbals > self.kerbal_capacity:
            self.kerbals = self.kerbal_capacity

    def unlock_tech(self, tech_id: str) -> bool:
        return self.research(tech_id) is ResearchResult.OK

    def research(self, tech_id: str) -> ResearchResult:
        result = self.tech_graph.research(tech_id, self)
        if result is ResearchResult.OK:
            logging.info(f"Colony: researched {tech_id}")
        return result

    def available_for_research(self) -> list[str]:
        return self.tech_graph.available_for_research(self.unlocked_techs)

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def update(self, now: float | None = None) -> float:
        """Advance by wall-clock time since the last update.

        The step is clamped to ``MAX_TICK_SECONDS`` so a suspended window
        does not fast-forward the colony. Returns the simulated delta.
        """
        if now is None:
            now = time.time()
        delta = min(MAX_TICK_SECONDS, max(0.0, now - self.last_update_time))
        self.advance(delta)
        self.last_update_time = now
        return delta

    def advance(self, delta: float) -> None:
        """Apply one simulation step of exactly ``delta`` seconds."""
        rates = self.rates()
        factor = rates.power_factor

        self.resources.add(ResourceType.POWER, rates.net_power * delta)
        self.resources.add(
            ResourceType.SNACKS, (rates.snacks_gen - rates.snacks_use) * factor * delta,
        )
        # Materials are not throttled by brownouts.
        self.resources.add(ResourceType.BUILDING_MATERIALS, rates.materials_gen * delta)
        self.resources.add(ResourceType.SCIENCE, rates.science_gen * factor * delta)

        # A deficit is already paid for by the brownout factor.
        if self.resources.get(ResourceType.POWER) < 0:
            self.resources.set(ResourceType.POWER, 0.0)

        snacks = self.resources.get(ResourceType.SNACKS)
        if snacks < 0:
            self.resources.set(ResourceType.SNACKS, 0.0)
            self.kerbals = max(0.0, self.kerbals - STARVATION_RATE * delta)

        has_room = self.kerbals < self.kerbal_capacity - GROWTH_HEADROOM
        if has_room and snacks > GROWTH_SNACK_THRESHOLD:
            self.kerbals = min(self.kerbal_capacity, self.kerbals + GROWTH_RATE * delta)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        """Serialise for save files."""
        return {
            "resources": [[r.value, amount] for r, amount in self.resources.items()],
            "modules": [[mt.value, n] for mt, n in self.modules.items()],
            "kerbals": self.kerbals,
            "mode": self.mode.value,
            "unlocked": sorted(mt.value for mt in self.unlocked),
            "unlocked_techs": sorted(self.unlocked_techs),
        }

    @classmethod
    def from_dict(cls, data: dict, now: float | None = None) -> "Colony":
        """Overlay saved fields onto a fresh colony. Unknown entries are skipped."""
        colony = cls(now=now)

        for entry in data.get("resources", []):
            try:
                resource, amount = ResourceType(entry[0]), float(entry[1])
            except (ValueError, TypeError, IndexError):
                logging.warning(f"Save: skipping resource entry {entry!r}")
                continue
            colony.resources.set(resource, amount)

        for entry in data.get("modules", []):
            try:
                module_type, n = ModuleType(entry[0]), int(entry[1])
            except (ValueError, TypeError, IndexError):
                logging.warning(f"Save: skipping module entry {entry!r}")
                continue
            colony.modules[module_type] = max(0, n)
        colony.modules[ModuleType.COMMAND_CENTER] = max(1, colony.count(ModuleType.COMMAND_CENTER))

        kerbals = data.get("kerbals")
        if isinstance(kerbals, (int, float)) and not isinstance(kerbals, bool):
            colony.kerbals = max(0.0, float(kerbals))

        try:
            colony.mode = ColonyMode(data.get("mode", ColonyMode.GROUND.value))
        except ValueError:
            logging.warning(f"Save: unknown colony mode {data.get('mode')!r}")

        if isinstance(data.get("unlocked"), list):
            colony.unlocked = set()
            for value in data["unlocked"]:
                try:
                    colony.unlocked.add(ModuleType(value))
                except ValueError:
                    logging.warning(f"Save: skipping unlocked module {value!r}")

        for tech_id in data.get("unlocked_techs", []):
            if colony.tech_graph.get(tech_id) is None:
                logging.warning(f"Save: skipping unknown tech {tech_id!r}")
                continue
            colony.unlocked_techs.add(tech_id)

        colony.recompute_kerbal_capacity()
        return colony

"""Colony resource stockpile.

All spending goes through ``ResourceLedger.spend`` so a cost is either paid
in full or not at all.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator, Mapping


class ResourceType(enum.Enum):
    """Resources tracked by the colony."""

    POWER = "Power"
    SNACKS = "Snacks"
    BUILDING_MATERIALS = "Building Materials"
    SCIENCE = "Science"


ResourceMap = Mapping[ResourceType, float]


class ResourceLedger:
    """Mapping of resource type to amount with all-or-nothing spending."""

    def __init__(self, amounts: ResourceMap | None = None) -> None:
        self._amounts: dict[ResourceType, float] = {r: 0.0 for r in ResourceType}
        if amounts:
            for resource, amount in amounts.items():
                self._amounts[resource] = float(amount)

    def __getitem__(self, resource: ResourceType) -> float:
        return self._amounts.get(resource, 0.0)

    def __iter__(self) -> Iterator[ResourceType]:
        return iter(self._amounts)

    def __len__(self) -> int:
        return len(self._amounts)

    def items(self):
        return self._amounts.items()

    def get(self, resource: ResourceType) -> float:
        return self._amounts.get(resource, 0.0)

    def set(self, resource: ResourceType, amount: float) -> None:
        self._amounts[resource] = float(amount)

    def add(self, resource: ResourceType, amount: float) -> None:
        """Add ``amount`` (any sign). Bounds are the caller's business."""
        self._amounts[resource] = self.get(resource) + amount

    def remove(self, resource: ResourceType, amount: float) -> bool:
        """Deduct ``amount`` if available. Returns True if successful."""
        current = self.get(resource)
        if current < amount:
            return False
        self._amounts[resource] = current - amount
        return True

    def can_afford(self, cost: ResourceMap) -> bool:
        return all(self.get(resource) >= amount for resource, amount in cost.items())

    def spend(self, cost: ResourceMap) -> bool:
        """Pay ``cost`` in full, or change nothing and return False."""
        if not self.can_afford(cost):
            return False
        for resource, amount in cost.items():
            self._amounts[resource] = self.get(resource) - amount
        return True

    def snapshot(self) -> dict[ResourceType, float]:
        return dict(self._amounts)


def format_cost(cost: ResourceMap) -> str:
    """Human-readable cost line, e.g. ``100 Building Materials, 50 Power``."""
    if not cost:
        return "Free"
    return ", ".join(f"{amount:g} {resource.value}" for resource, amount in cost.items())

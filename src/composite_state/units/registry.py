"""Registry of unit vector types addressable by name."""

from __future__ import annotations

from typing import Dict, List, Type

from composite_state.units.base import NullVector, UnitVector, is_unit_type
from composite_state.units.pendulum import PendulumState


class UnitRegistry:
    """Pluggable registry for unit vector types."""

    def __init__(self) -> None:
        self._registry: Dict[str, Type[UnitVector]] = {}
        self.register("null", NullVector)
        self.register("pendulum", PendulumState)

    def register(self, name: str, unit_type: Type[UnitVector]) -> None:
        if name in self._registry:
            raise ValueError(f"Unit type '{name}' already registered")
        if not is_unit_type(unit_type):
            raise TypeError(f"{unit_type!r} does not implement flat_size/to_flat/from_flat")
        self._registry[name] = unit_type

    def get(self, name: str) -> Type[UnitVector]:
        if name not in self._registry:
            raise ValueError(f"Unknown unit type '{name}'")
        return self._registry[name]

    def names(self) -> List[str]:
        return sorted(self._registry)

from composite_state.units.base import FixedVector, NullVector, UnitVector, is_unit_type
from composite_state.units.pendulum import PendulumState
from composite_state.units.registry import UnitRegistry

__all__ = [
    "FixedVector",
    "NullVector",
    "PendulumState",
    "UnitRegistry",
    "UnitVector",
    "is_unit_type",
]

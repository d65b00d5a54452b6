"""Unit vector contract and a reusable fixed-size implementation."""

from __future__ import annotations

from collections.abc import Sequence
from typing import ClassVar, Iterable, Optional, Protocol, Tuple, Type, TypeVar, runtime_checkable

import numpy as np

from composite_state.errors import InvalidLayout

U = TypeVar("U", bound="FixedVector")


@runtime_checkable
class UnitVector(Protocol):
    """Anything with a fixed flat length that converts to and from a flat array."""

    @classmethod
    def flat_size(cls) -> int:
        ...

    def to_flat(self) -> np.ndarray:
        ...

    @classmethod
    def from_flat(cls, values: np.ndarray) -> "UnitVector":
        ...


def is_unit_type(candidate: object) -> bool:
    """Return True if ``candidate`` is a class implementing the UnitVector contract."""
    if not isinstance(candidate, type):
        return False
    return all(callable(getattr(candidate, attr, None)) for attr in ("flat_size", "to_flat", "from_flat"))


class FixedVector:
    """
    Unit vector with a fixed set of named float64 coordinates.

    Subclasses declare ``FIELDS``; the flat layout follows that order.
    """

    FIELDS: ClassVar[Tuple[str, ...]] = ()

    def __init__(self, values: Optional[Iterable[float]] = None) -> None:
        if values is None:
            self._values = np.zeros(len(self.FIELDS), dtype=np.float64)
        else:
            self._values = _checked_flat(type(self), values)

    @classmethod
    def flat_size(cls) -> int:
        return len(cls.FIELDS)

    @classmethod
    def from_flat(cls: Type[U], values: Iterable[float]) -> U:
        return cls(values)

    def to_flat(self) -> np.ndarray:
        return self._values.copy()

    def value(self, name: str) -> float:
        try:
            return float(self._values[self.FIELDS.index(name)])
        except ValueError:
            raise KeyError(f"{type(self).__name__} has no coordinate '{name}'") from None

    def __len__(self) -> int:
        return len(self.FIELDS)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return bool(np.array_equal(self._values, other._values, equal_nan=True))

    def __repr__(self) -> str:
        coords = ", ".join(f"{name}={val!r}" for name, val in zip(self.FIELDS, self._values.tolist()))
        return f"{type(self).__name__}({coords})"


def as_float_array(values: Iterable[float]) -> np.ndarray:
    """Copy ``values`` into a float64 array; one-shot iterables are consumed once."""
    if not isinstance(values, (np.ndarray, Sequence)):
        values = list(values)
    return np.array(values, dtype=np.float64)


def _checked_flat(unit_type: type, values: Iterable[float]) -> np.ndarray:
    arr = as_float_array(values).reshape(-1)
    expected = unit_type.flat_size()
    if arr.shape[0] != expected:
        raise InvalidLayout(
            f"{unit_type.__name__} expects {expected} values, got {arr.shape[0]}"
        )
    return arr


class NullVector(FixedVector):
    """Zero-width unit vector."""

    FIELDS = ()

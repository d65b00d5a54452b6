"""
Composite vector built from homogeneous unit vectors.

The flat representation is the concatenation of each unit's flat form.
Units are appended at run time and addressed by index with O(1) access.
"""

from __future__ import annotations

import weakref
from typing import ClassVar, Generic, Iterable, Iterator, Optional, Type, TypeVar

import numpy as np

from composite_state import layout
from composite_state.errors import IndexOutOfRange, InvalidLayout
from composite_state.units.base import UnitVector, as_float_array
from composite_state.utils import get_logger

logger = get_logger("composite_state.container")

U = TypeVar("U", bound=UnitVector)

# Entries live as long as the specialised class is referenced elsewhere.
_SPECIALISED: "weakref.WeakValueDictionary[type, type]" = weakref.WeakValueDictionary()


def _as_flat(values: Iterable[float]) -> np.ndarray:
    arr = as_float_array(values)
    if arr.ndim == 2 and arr.shape[1] == 1:
        arr = arr[:, 0]
    if arr.ndim != 1:
        raise InvalidLayout(f"Expected a flat vector, got shape {arr.shape}")
    return arr


class CompositeVector(Generic[U]):
    """
    Ordered list of ``unit_type`` values stored as one flat float64 buffer.

    Use ``CompositeVector.of(UnitType)`` to obtain the container class for a
    unit type. If the unit type has zero width, ``count()`` is always -1.
    """

    unit_type: ClassVar[Optional[type]] = None

    @classmethod
    def of(cls, unit_type: Type[U]) -> Type["CompositeVector[U]"]:
        """Return the container class specialised for ``unit_type`` (cached)."""
        specialised = _SPECIALISED.get(unit_type)
        if specialised is None:
            specialised = type(
                f"CompositeVector[{unit_type.__name__}]",
                (CompositeVector,),
                {"unit_type": unit_type, "__module__": __name__},
            )
            _SPECIALISED[unit_type] = specialised
        return specialised

    @classmethod
    def unit_size(cls) -> int:
        return layout.unit_size(cls._require_unit_type())

    @classmethod
    def unit_count_from_rows(cls, rows: int) -> int:
        return layout.unit_count_from_rows(cls._require_unit_type(), rows)

    @classmethod
    def rows_from_unit_count(cls, count: int) -> int:
        return layout.rows_from_unit_count(cls._require_unit_type(), count)

    @classmethod
    def _require_unit_type(cls) -> type:
        if cls.unit_type is None:
            raise TypeError("CompositeVector must be specialised with CompositeVector.of(unit_type)")
        return cls.unit_type

    def __init__(self, count: Optional[int] = None) -> None:
        """
        Create an empty container, or one holding ``count`` NaN-filled units.

        Raises:
            InvalidCount: if ``count`` is negative and the unit is sized.
        """
        self._unit_size = self.unit_size()
        if count is None:
            self._count = self.unit_count_from_rows(0)
            self._buffer = np.empty(0, dtype=np.float64)
        else:
            rows = self.rows_from_unit_count(count)
            # Re-derive so zero-width units always report the sentinel.
            self._count = self.unit_count_from_rows(rows)
            self._buffer = np.full(rows, np.nan, dtype=np.float64)
        logger.debug(
            "Created %s with count=%d size=%d", type(self).__name__, self._count, self._buffer.shape[0]
        )

    @classmethod
    def from_flat(cls, values: Iterable[float]) -> "CompositeVector[U]":
        """
        Build a container from a flat vector; the unit count is inferred.

        Raises:
            InvalidLayout: if the length is not a multiple of the unit size.
        """
        vec = cls()
        vec.assign(values)
        return vec

    def assign(self, values: Iterable[float]) -> "CompositeVector[U]":
        """Replace the whole contents with a copy of ``values``."""
        arr = _as_flat(values)
        count = self.unit_count_from_rows(arr.shape[0])
        if self._unit_size == 0 and arr.shape[0] != 0:
            raise InvalidLayout(f"{type(self).__name__} holds zero-width units; got {arr.shape[0]} values")
        self._count = count
        self._buffer = arr
        logger.debug("Assigned %d values to %s (count=%d)", arr.shape[0], type(self).__name__, count)
        return self

    def count(self) -> int:
        """Number of units held, or -1 when the unit type has zero width."""
        return self._count

    def size(self) -> int:
        """Total number of flat values."""
        return int(self._buffer.shape[0])

    def append(self, unit: U) -> None:
        """Append ``unit`` at the end; a no-op for zero-width units."""
        if self._unit_size == 0:
            return
        flat = self._unit_to_flat(unit)
        self._buffer = np.concatenate((self._buffer, flat))
        self._count += 1

    def get(self, i: int) -> U:
        """
        Return a copy of the unit at index ``i``.

        Raises:
            IndexOutOfRange: if the unit is sized and ``i`` is not below count().
        """
        self._check_index(i)
        row0 = i * self._unit_size
        return self.unit_type.from_flat(self._buffer[row0 : row0 + self._unit_size].copy())

    def set(self, i: int, unit: U) -> None:
        """
        Overwrite the unit at index ``i`` in place.

        Raises:
            IndexOutOfRange: if the unit is sized and ``i`` is not below count().
        """
        self._check_index(i)
        flat = self._unit_to_flat(unit)
        row0 = i * self._unit_size
        self._buffer[row0 : row0 + self._unit_size] = flat

    def to_flat(self) -> np.ndarray:
        """Return a copy of the flat buffer."""
        return self._buffer.copy()

    def units(self) -> Iterator[U]:
        """Iterate over copies of the stored units."""
        for i in range(max(self._count, 0)):
            yield self.get(i)

    def copy(self) -> "CompositeVector[U]":
        clone = type(self).__new__(type(self))
        clone._unit_size = self._unit_size
        clone._count = self._count
        clone._buffer = self._buffer.copy()
        return clone

    def __copy__(self) -> "CompositeVector[U]":
        return self.copy()

    def __deepcopy__(self, memo: dict) -> "CompositeVector[U]":
        return self.copy()

    def __len__(self) -> int:
        return self.size()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CompositeVector):
            return NotImplemented
        if other.unit_type is not self.unit_type:
            return False
        return self._count == other._count and bool(
            np.array_equal(self._buffer, other._buffer, equal_nan=True)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(count={self._count}, values={self._buffer.tolist()})"

    def _check_index(self, i: int) -> None:
        if self._unit_size == 0:
            return
        if i < 0 or i >= self._count:
            raise IndexOutOfRange(f"Index {i} exceeds unit count {self._count}")

    def _unit_to_flat(self, unit: U) -> np.ndarray:
        flat = np.asarray(unit.to_flat(), dtype=np.float64).reshape(-1)
        if flat.shape[0] != self._unit_size:
            raise InvalidLayout(
                f"Unit produced {flat.shape[0]} values, expected {self._unit_size}"
            )
        return flat

"""Conversions between unit counts and flat row counts."""

from __future__ import annotations

from typing import Type

from composite_state.errors import InvalidCount, InvalidLayout
from composite_state.units.base import UnitVector

# Count reported for zero-width units, whose count is indeterminate.
NULL_UNIT_COUNT = -1


def unit_size(unit_type: Type[UnitVector]) -> int:
    """Return the flat length shared by every instance of ``unit_type``."""
    size = int(unit_type.flat_size())
    if size < 0:
        raise InvalidLayout(f"{unit_type.__name__} reports negative flat size {size}")
    return size


def unit_count_from_rows(unit_type: Type[UnitVector], rows: int) -> int:
    """
    Determine how many units are decoded from ``rows`` flat values.

    Args:
        unit_type: Unit vector type.
        rows: Flat row count; must be a multiple of the unit size.

    Returns:
        The unit count, or NULL_UNIT_COUNT when the unit has zero width.

    Raises:
        InvalidLayout: if the unit is sized and ``rows`` is not a multiple of it.
    """
    size = unit_size(unit_type)
    if size > 0:
        if rows < 0 or rows % size != 0:
            raise InvalidLayout(
                f"Row count {rows} is not a multiple of {unit_type.__name__} size {size}"
            )
        return rows // size
    return NULL_UNIT_COUNT


def rows_from_unit_count(unit_type: Type[UnitVector], count: int) -> int:
    """
    Determine how many flat rows are needed for ``count`` units.

    A negative count maps to zero rows for zero-width units.

    Raises:
        InvalidCount: if ``count`` is negative and the unit is sized.
    """
    size = unit_size(unit_type)
    if count >= 0:
        return count * size
    if size != 0:
        raise InvalidCount(f"Negative count {count} for {unit_type.__name__} of size {size}")
    return 0

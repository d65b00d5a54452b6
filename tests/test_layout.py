import pytest

from composite_state import InvalidCount, InvalidLayout
from composite_state.layout import (
    NULL_UNIT_COUNT,
    rows_from_unit_count,
    unit_count_from_rows,
    unit_size,
)
from composite_state.units import FixedVector, NullVector, PendulumState


class Triple(FixedVector):
    FIELDS = ("x", "y", "z")


def test_unit_size_matches_fields() -> None:
    assert unit_size(Triple) == 3
    assert unit_size(PendulumState) == 2
    assert unit_size(NullVector) == 0


def test_unit_count_from_rows_exact_multiple() -> None:
    assert unit_count_from_rows(Triple, 0) == 0
    assert unit_count_from_rows(Triple, 12) == 4


def test_unit_count_from_rows_rejects_partial_unit() -> None:
    with pytest.raises(InvalidLayout):
        unit_count_from_rows(Triple, 7)


@pytest.mark.parametrize("rows", [0, 1, 5, 100])
def test_null_unit_count_is_sentinel_for_any_rows(rows: int) -> None:
    assert unit_count_from_rows(NullVector, rows) == NULL_UNIT_COUNT == -1


def test_rows_from_unit_count() -> None:
    assert rows_from_unit_count(Triple, 4) == 12
    assert rows_from_unit_count(Triple, 0) == 0
    assert rows_from_unit_count(NullVector, 7) == 0
    assert rows_from_unit_count(NullVector, -5) == 0


def test_rows_from_negative_count_fails_for_sized_unit() -> None:
    with pytest.raises(InvalidCount):
        rows_from_unit_count(PendulumState, -5)

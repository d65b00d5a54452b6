import numpy as np
import pytest

from composite_state import InvalidLayout
from composite_state.units import (
    FixedVector,
    NullVector,
    PendulumState,
    UnitRegistry,
    UnitVector,
    is_unit_type,
)


def test_pendulum_state_roundtrip_and_properties() -> None:
    state = PendulumState([0.5, -1.25])
    assert state.theta == 0.5
    assert state.thetadot == -1.25
    assert state.value("thetadot") == -1.25
    assert PendulumState.from_flat(state.to_flat()) == state
    state.theta = 2.0
    assert state.to_flat().tolist() == [2.0, -1.25]


def test_default_unit_is_zeros() -> None:
    assert PendulumState().to_flat().tolist() == [0.0, 0.0]
    assert len(PendulumState()) == 2


def test_to_flat_is_a_copy() -> None:
    state = PendulumState([1.0, 2.0])
    flat = state.to_flat()
    flat[0] = 7.0
    assert state.theta == 1.0


def test_from_flat_rejects_wrong_length() -> None:
    with pytest.raises(InvalidLayout):
        PendulumState.from_flat([1.0, 2.0, 3.0])


def test_unknown_coordinate() -> None:
    with pytest.raises(KeyError):
        PendulumState().value("phi")


def test_null_vector_is_zero_width() -> None:
    assert NullVector.flat_size() == 0
    assert NullVector().to_flat().shape == (0,)
    assert repr(NullVector()) == "NullVector()"


def test_protocol_and_type_check() -> None:
    assert isinstance(PendulumState(), UnitVector)
    assert is_unit_type(PendulumState)
    assert not is_unit_type(PendulumState())
    assert not is_unit_type(dict)


def test_registry_defaults_and_custom_types() -> None:
    registry = UnitRegistry()
    assert registry.get("pendulum") is PendulumState
    assert registry.get("null") is NullVector
    assert registry.names() == ["null", "pendulum"]

    class Cart(FixedVector):
        FIELDS = ("x", "xdot")

    registry.register("cart", Cart)
    assert registry.get("cart") is Cart
    with pytest.raises(ValueError):
        registry.register("cart", Cart)
    with pytest.raises(TypeError):
        registry.register("bad", object)
    with pytest.raises(ValueError):
        registry.get("missing")


def test_equality_requires_same_type() -> None:
    class Other(FixedVector):
        FIELDS = ("theta", "thetadot")

    assert PendulumState([1.0, 2.0]) != Other([1.0, 2.0])
    assert np.array_equal(PendulumState([1.0, 2.0]).to_flat(), Other([1.0, 2.0]).to_flat())


def test_unit_accepts_generator() -> None:
    state = PendulumState(v for v in (0.25, -0.5))
    assert state.to_flat().tolist() == [0.25, -0.5]
    assert PendulumState.from_flat(iter([1.0, 2.0])).thetadot == 2.0

"""Pendulum state unit: angle and angular rate."""

from __future__ import annotations

from composite_state.units.base import FixedVector


class PendulumState(FixedVector):
    """Single pendulum state (radians, radians/second)."""

    FIELDS = ("theta", "thetadot")

    @property
    def theta(self) -> float:
        return float(self._values[0])

    @theta.setter
    def theta(self, value: float) -> None:
        self._values[0] = value

    @property
    def thetadot(self) -> float:
        return float(self._values[1])

    @thetadot.setter
    def thetadot(self, value: float) -> None:
        self._values[1] = value

"""
Plant state snapshot message.

Wire layout (big-endian, no other framing):
    int64   utime        microseconds since the epoch
    int32   num_states   number of values that follow
    float64 plant_state[num_states]
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Type

import numpy as np

from composite_state.container import CompositeVector
from composite_state.errors import MessageDecodeError
from composite_state.utils import get_logger

logger = get_logger("composite_state.messages")

UTIME_BYTES = 8
NUM_STATES_BYTES = 4
HEADER_BYTES = UTIME_BYTES + NUM_STATES_BYTES
STATE_DTYPE = np.dtype(">f8")

_INT64_MIN, _INT64_MAX = -(2**63), 2**63 - 1
_INT32_MAX = 2**31 - 1


def now_utime() -> int:
    """Current wall-clock time in microseconds."""
    return int(time.time() * 1_000_000)


@dataclass
class PlantStateMessage:
    """Timestamped flat plant state, e.g. joint angles and rates."""

    utime: int
    num_states: int
    plant_state: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=np.float64))

    def __post_init__(self) -> None:
        self.utime = int(self.utime)
        self.num_states = int(self.num_states)
        self.plant_state = np.array(self.plant_state, dtype=np.float64).reshape(-1)
        self.validate()

    def validate(self) -> None:
        if not _INT64_MIN <= self.utime <= _INT64_MAX:
            raise MessageDecodeError(f"utime {self.utime} does not fit in int64")
        if not 0 <= self.num_states <= _INT32_MAX:
            raise MessageDecodeError(f"num_states {self.num_states} out of range")
        if self.plant_state.shape[0] != self.num_states:
            raise MessageDecodeError(
                f"plant_state has {self.plant_state.shape[0]} values but num_states is {self.num_states}"
            )

    @classmethod
    def from_composite(cls, vector: CompositeVector, utime: Optional[int] = None) -> "PlantStateMessage":
        """Snapshot the flat export of ``vector``."""
        if utime is None:
            utime = now_utime()
        return cls(utime=utime, num_states=vector.size(), plant_state=vector.to_flat())

    def to_composite(self, composite_cls: Type[CompositeVector]) -> CompositeVector:
        return composite_cls.from_flat(self.plant_state)

    def encode(self) -> bytes:
        self.validate()
        return (
            self.utime.to_bytes(UTIME_BYTES, byteorder="big", signed=True)
            + self.num_states.to_bytes(NUM_STATES_BYTES, byteorder="big", signed=True)
            + self.plant_state.astype(STATE_DTYPE).tobytes()
        )

    @classmethod
    def decode(cls, data: bytes) -> "PlantStateMessage":
        """
        Parse an encoded message.

        Raises:
            MessageDecodeError: if the header is truncated or the payload length
                disagrees with num_states.
        """
        if len(data) < HEADER_BYTES:
            logger.warning("Rejecting plant state message: %d bytes is shorter than header", len(data))
            raise MessageDecodeError(f"Message too short: {len(data)} bytes")
        utime = int.from_bytes(data[:UTIME_BYTES], byteorder="big", signed=True)
        num_states = int.from_bytes(data[UTIME_BYTES:HEADER_BYTES], byteorder="big", signed=True)
        if num_states < 0:
            logger.warning("Rejecting plant state message with num_states=%d", num_states)
            raise MessageDecodeError(f"Negative num_states {num_states}")
        payload = data[HEADER_BYTES:]
        expected = num_states * STATE_DTYPE.itemsize
        if len(payload) != expected:
            logger.warning(
                "Rejecting plant state message: num_states=%d needs %d bytes, got %d",
                num_states,
                expected,
                len(payload),
            )
            raise MessageDecodeError(
                f"num_states {num_states} requires {expected} payload bytes, got {len(payload)}"
            )
        values = np.frombuffer(payload, dtype=STATE_DTYPE).astype(np.float64)
        return cls(utime=utime, num_states=num_states, plant_state=values)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "utime": self.utime,
            "num_states": self.num_states,
            "plant_state": self.plant_state.tolist(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlantStateMessage":
        try:
            utime = int(data["utime"])
            plant_state = [float(v) for v in data["plant_state"]]
            num_states = int(data.get("num_states", len(plant_state)))
        except KeyError as exc:
            raise MessageDecodeError(f"Plant state message missing field {exc}") from exc
        except (TypeError, ValueError) as exc:
            raise MessageDecodeError(f"Invalid plant state message field: {exc}") from exc
        return cls(utime=utime, num_states=num_states, plant_state=plant_state)

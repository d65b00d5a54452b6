"""
Composite numeric state vectors assembled from homogeneous unit vectors.

Components:
- Layout policy (unit count <-> flat row count)
- Composite container with per-unit access
- Unit adapters and registry
- Plant state wire messages
"""

from composite_state.container import CompositeVector
from composite_state.errors import (
    CompositeStateError,
    IndexOutOfRange,
    InvalidCount,
    InvalidLayout,
    MessageDecodeError,
)

__all__ = [
    "CompositeVector",
    "CompositeStateError",
    "IndexOutOfRange",
    "InvalidCount",
    "InvalidLayout",
    "MessageDecodeError",
    "config",
    "layout",
    "messages",
    "units",
    "utils",
]

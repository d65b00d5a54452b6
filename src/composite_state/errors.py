"""Exceptions raised by composite state containers and codecs."""


class CompositeStateError(Exception):
    """Base class for composite state failures."""


class IndexOutOfRange(CompositeStateError, IndexError):
    """Raised when a unit index exceeds the unit count."""


class InvalidLayout(CompositeStateError, ValueError):
    """Raised when a flat vector cannot be split into whole units."""


class InvalidCount(CompositeStateError, ValueError):
    """Raised when a negative unit count is requested for a sized unit."""


class MessageDecodeError(CompositeStateError, ValueError):
    """Raised when a plant state message is malformed."""

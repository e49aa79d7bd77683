class PartstreamError(Exception):
    """Base error for partstream."""


class InvalidArgumentError(PartstreamError, ValueError):
    """Raised when a caller passes a malformed or unsupported argument."""


class LogicError(PartstreamError, RuntimeError):
    """Raised when an operation is invoked in the wrong lifecycle state."""


class InvalidStateError(PartstreamError, OSError):
    """Raised when a streamed part fails to produce bytes while reading."""

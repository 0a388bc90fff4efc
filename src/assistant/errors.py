"""
Exceptions raised by the solver engine layer.
"""


class EngineError(Exception):
    """Raised when the solving engine rejects a call or cannot be reached."""

    pass


class InternalInvariantViolation(Exception):
    """Raised when a committed row is not fully specified at encoding time."""

    pass

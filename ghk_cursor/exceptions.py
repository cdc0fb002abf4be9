"""Exception types raised by ghk-cursor."""


class GHKCursorError(Exception):
    """Base class for all ghk-cursor errors."""


class InvalidStateError(GHKCursorError):
    """A state is missing information a filter step needs (e.g. delta)."""


class DegenerateIntervalError(GHKCursorError, ValueError):
    """Elapsed time between two states is zero or negative."""


class UnsupportedMethodError(GHKCursorError, ValueError):
    """The selected estimator method is not implemented."""

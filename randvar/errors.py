"""
Exception and warning types raised by randvar.

Each error also derives from the matching built-in (``ValueError``,
``KeyError``, ``IndexError``, ``NotImplementedError``) so callers that
already guard on those keep working.
"""


class RandomVariableError(Exception):
    """Base class for all randvar errors."""


class ValidationError(RandomVariableError, ValueError):
    """A precondition on an argument or on object state was violated."""


class NotFoundError(RandomVariableError, KeyError):
    """A value is absent from a weighted dataset."""

    def __str__(self):
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""


class OutOfRangeError(RandomVariableError, IndexError):
    """A positional index lies beyond the end of a dataset."""


class UnsupportedOperationError(RandomVariableError, NotImplementedError):
    """The operation is not defined for this kind of random variable."""


class QuantileClampWarning(UserWarning):
    """``icdf`` was called exactly at 0 or 1 and the probability was clamped."""

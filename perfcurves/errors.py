"""Performance-evaluation exceptions.

These are intentionally lightweight so they can be raised from compute paths
without importing containers or registries. All of them are ``ValueError``
subclasses so generic callers catching bad-input errors keep working.
"""


class PerfCurvesError(ValueError):
    """Base class for all errors raised by perfcurves."""


class InvalidInputError(PerfCurvesError):
    """Raised when run data (scores/labels) is malformed."""


class UndefinedMeasureError(PerfCurvesError):
    """Raised when a measure name is not in the registry."""


class DomainError(PerfCurvesError):
    """Raised when a measure is evaluated outside its valid domain."""


class MeasureMismatchError(PerfCurvesError):
    """Raised when two measures cannot be paired into one curve."""


class IncompatibleCurvesError(PerfCurvesError):
    """Raised when curves cannot be averaged together."""


class EmptyInputError(PerfCurvesError):
    """Raised when averaging is requested over zero curves."""

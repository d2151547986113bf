"""perfcurves: performance evaluation of scoring classifiers.

See :mod:`perfcurves.api` for the public surface.
"""

from perfcurves.api import (
    average_curves,
    compute_confusion,
    describe_measure,
    evaluate_measure,
    list_measures,
    performance,
    prediction,
)

__version__ = "0.1.0"

__all__ = [
    "prediction",
    "performance",
    "average_curves",
    "evaluate_measure",
    "compute_confusion",
    "list_measures",
    "describe_measure",
]

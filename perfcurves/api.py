"""Public perfcurves API.

This module is the **stable public surface** for evaluating scoring
classifiers.

Prefer importing from here instead of reaching into internal subpackages:

    from perfcurves.api import prediction, performance, average_curves

    pred = prediction(scores, labels)
    roc = performance(pred, "tpr", "fpr")
    mean_roc = average_curves(roc, "vertical", spread="stderror")

The underlying implementations live under :mod:`perfcurves.use_cases` and
:mod:`perfcurves.components`.
"""

from __future__ import annotations

from perfcurves.use_cases.evaluate import (
    average_performance as average_curves,
    compute_performance as performance,
    make_prediction as prediction,
)

# Non-use-case helpers that are still part of the stable public surface.
from perfcurves.components.containers import (
    AveragedCurve,
    Curve,
    Performance,
    Prediction,
    Run,
    Spread,
)
from perfcurves.components.evaluation.confusion import ConfusionTable, compute_confusion
from perfcurves.components.evaluation.evaluator import evaluate_measure
from perfcurves.contracts.averaging_configs import AveragingConfig
from perfcurves.contracts.measure_configs import MeasureParams
from perfcurves.errors import (
    DomainError,
    EmptyInputError,
    IncompatibleCurvesError,
    InvalidInputError,
    MeasureMismatchError,
    PerfCurvesError,
    UndefinedMeasureError,
)
from perfcurves.registries.measures import (
    MeasureSpec,
    list_measures,
    parse_measure as describe_measure,
)

__all__ = [
    "prediction",
    "performance",
    "average_curves",
    "evaluate_measure",
    "compute_confusion",
    "list_measures",
    "describe_measure",
    "ConfusionTable",
    "MeasureSpec",
    "MeasureParams",
    "AveragingConfig",
    "Run",
    "Prediction",
    "Curve",
    "Performance",
    "Spread",
    "AveragedCurve",
    "PerfCurvesError",
    "InvalidInputError",
    "UndefinedMeasureError",
    "DomainError",
    "MeasureMismatchError",
    "IncompatibleCurvesError",
    "EmptyInputError",
]

"""Evaluation use-cases.

Orchestrates the three stages callers chain together:

1. :func:`make_prediction`     raw scores/labels -> :class:`Prediction`
2. :func:`compute_performance` Prediction + measure names -> :class:`Performance`
3. :func:`average_performance` Performance (or curves) -> :class:`AveragedCurve`

Parameters arriving as keywords are validated through the pydantic configs
(:class:`MeasureParams`, :class:`AveragingConfig`) before any computation.
"""

from __future__ import annotations

import logging
import warnings
from typing import Any, Optional, Sequence, Tuple, Union

from perfcurves.contracts.averaging_configs import AveragingConfig
from perfcurves.contracts.measure_configs import MeasureParams
from perfcurves.core.labels import binarize_labels, declared_levels, infer_label_ordering
from perfcurves.core.shapes import coerce_runs
from perfcurves.errors import EmptyInputError
from perfcurves.registries.measures import parse_measure
from perfcurves.components.containers import AveragedCurve, Curve, Performance, Prediction, Run
from perfcurves.components.curves.averaging import average
from perfcurves.components.curves.builder import build_performance

logger = logging.getLogger(__name__)


def _levels_of(labels: Any) -> Optional[list]:
    levels = declared_levels(labels)
    if levels is None and isinstance(labels, (list, tuple)) and labels:
        levels = declared_levels(labels[0])
    return levels


def make_prediction(
    predictions: Any,
    labels: Any,
    *,
    label_ordering: Optional[Sequence[Any]] = None,
) -> Prediction:
    """Validate and normalize raw inputs into a :class:`Prediction`."""

    score_runs, label_runs = coerce_runs(predictions, labels)
    ordering = infer_label_ordering(
        label_runs,
        label_ordering=label_ordering,
        levels=_levels_of(labels),
    )

    runs = []
    for i, (scores, raw) in enumerate(zip(score_runs, label_runs)):
        run = Run(scores=scores, labels=binarize_labels(raw, ordering), raw_labels=raw)
        if run.n_pos == 0 or run.n_neg == 0:
            missing = ordering[1] if run.n_pos == 0 else ordering[0]
            warnings.warn(
                f"Run {i} has no instances of class {missing!r}; "
                "rates conditioned on that class are undefined (NaN).",
                UserWarning,
                stacklevel=2,
            )
        runs.append(run)

    logger.debug("prediction: %d runs, label ordering %r", len(runs), ordering)
    return Prediction(runs=tuple(runs), label_ordering=ordering)


def compute_performance(
    pred: Prediction,
    measure: str,
    x_measure: str = "cutoff",
    *,
    cutoffs: Optional[Sequence[float]] = None,
    n_jobs: Optional[int] = None,
    **params: Any,
) -> Performance:
    """Evaluate ``measure`` (against ``x_measure``) on every run of ``pred``."""

    y_spec = parse_measure(measure)
    x_spec = parse_measure(x_measure)
    cfg = MeasureParams(**params)

    logger.debug("performance: y=%s x=%s runs=%d", y_spec.name, x_spec.name, pred.n_runs)
    return build_performance(pred, y_spec, x_spec, cfg, cutoffs=cutoffs, n_jobs=n_jobs)


def average_performance(
    perf_or_curves: Union[Performance, Sequence[Curve]],
    mode: str = "threshold",
    *,
    spread: str = "stddev",
    n_points: Optional[int] = None,
) -> Union[AveragedCurve, Performance, Tuple[Curve, ...]]:
    """Average per-run curves; mode ``none`` hands the input back unchanged."""

    cfg = AveragingConfig(mode=mode, spread=spread, n_points=n_points)

    if isinstance(perf_or_curves, Performance):
        curves: Tuple[Curve, ...] = perf_or_curves.curves
    else:
        curves = tuple(perf_or_curves)

    if not curves:
        raise EmptyInputError("Cannot average zero curves.")

    if cfg.mode == "none":
        return perf_or_curves if isinstance(perf_or_curves, Performance) else curves

    return average(curves, cfg)

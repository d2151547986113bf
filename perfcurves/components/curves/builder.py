from __future__ import annotations

"""Multi-run curve builder.

Evaluates an (x measure, y measure) pair independently on every run of a
:class:`Prediction` and returns one :class:`Curve` per run. Runs share no
state, so they may be evaluated in parallel; results keep run order.
"""

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np
from joblib import Parallel, delayed

from perfcurves.contracts.measure_configs import MeasureParams
from perfcurves.errors import MeasureMismatchError
from perfcurves.registries.measures import MeasureSpec
from perfcurves.components.containers import Curve, Performance, Prediction, Run
from perfcurves.components.curves.interpolation import step_lookup
from perfcurves.components.evaluation.evaluator import evaluate_series
from perfcurves.components.evaluation.types import MeasureSeries, RunInputs

logger = logging.getLogger(__name__)


def check_pairing(y_spec: MeasureSpec, x_spec: MeasureSpec) -> None:
    """Reject measure pairs that cannot share one cutoff axis."""

    if not x_spec.is_cutoff_indexed:
        raise MeasureMismatchError(
            f"Measure '{x_spec.name}' is a {x_spec.kind} measure and cannot be used as x measure."
        )
    if not y_spec.is_cutoff_indexed and x_spec.name != "cutoff":
        raise MeasureMismatchError(
            f"Measure '{y_spec.name}' is a {y_spec.kind} measure; it can only be requested "
            f"on its own, not against '{x_spec.name}'."
        )


def merge_on_cutoffs(
    xs: MeasureSeries,
    ys: MeasureSeries,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Put two cutoff-indexed series on one cutoff grid.

    Series on the same grid are zipped. Otherwise the grid is the union of
    both, restricted to the cutoff range both series cover, and values are
    taken by step lookup.
    """
    if xs.cutoffs.shape == ys.cutoffs.shape and np.array_equal(xs.cutoffs, ys.cutoffs):
        return xs.cutoffs, xs.values, ys.values

    lo = max(xs.cutoffs.min(), ys.cutoffs.min())
    hi = min(xs.cutoffs.max(), ys.cutoffs.max())
    grid = np.unique(np.concatenate((xs.cutoffs, ys.cutoffs)))[::-1]
    grid = grid[(grid >= lo) & (grid <= hi)]
    if grid.size == 0:
        raise MeasureMismatchError("The two measures have no cutoff range in common.")

    return (
        grid,
        step_lookup(xs.cutoffs, xs.values, grid),
        step_lookup(ys.cutoffs, ys.values, grid),
    )


def build_run_curve(
    run: Run,
    y_spec: MeasureSpec,
    x_spec: MeasureSpec,
    params: MeasureParams,
    cutoffs: Optional[Sequence[float]] = None,
) -> Curve:
    inputs = RunInputs(
        scores=run.scores,
        labels=run.labels,
        params=params,
        natural_table=run.table,
    )
    ys = evaluate_series(y_spec, inputs, cutoffs)

    if y_spec.kind == "curve":
        return Curve(y_name=y_spec.name, y=ys.values, x_name=y_spec.x_axis, x=ys.x)
    if y_spec.kind == "scalar":
        return Curve(y_name=y_spec.name, y=ys.values, cutoffs=ys.cutoffs)

    if x_spec.name == "cutoff":
        return Curve(y_name=y_spec.name, y=ys.values, x_name="cutoff", x=ys.cutoffs, cutoffs=ys.cutoffs)

    xs = evaluate_series(x_spec, inputs, cutoffs)
    grid, x, y = merge_on_cutoffs(xs, ys)
    return Curve(y_name=y_spec.name, y=y, x_name=x_spec.name, x=x, cutoffs=grid)


def build_curves(
    pred: Prediction,
    y_spec: MeasureSpec,
    x_spec: MeasureSpec,
    params: MeasureParams,
    *,
    cutoffs: Optional[Sequence[float]] = None,
    n_jobs: Optional[int] = None,
) -> List[Curve]:
    check_pairing(y_spec, x_spec)

    if n_jobs is None or n_jobs == 1 or pred.n_runs == 1:
        return [build_run_curve(run, y_spec, x_spec, params, cutoffs) for run in pred.runs]

    logger.debug("evaluating %d runs with n_jobs=%s", pred.n_runs, n_jobs)
    return Parallel(n_jobs=n_jobs, prefer="threads")(
        delayed(build_run_curve)(run, y_spec, x_spec, params, cutoffs) for run in pred.runs
    )


def build_performance(
    pred: Prediction,
    y_spec: MeasureSpec,
    x_spec: MeasureSpec,
    params: MeasureParams,
    *,
    cutoffs: Optional[Sequence[float]] = None,
    n_jobs: Optional[int] = None,
) -> Performance:
    curves = build_curves(pred, y_spec, x_spec, params, cutoffs=cutoffs, n_jobs=n_jobs)

    if y_spec.kind == "curve":
        x_name, x_label, alpha_name = y_spec.x_axis, y_spec.x_label, None
    elif y_spec.kind == "scalar":
        x_name, x_label = None, None
        alpha_name = "cutoff" if any(c.cutoffs is not None for c in curves) else None
    else:
        x_name, x_label, alpha_name = x_spec.name, x_spec.label, "cutoff"

    used = set(y_spec.params) | set(x_spec.params)
    return Performance(
        y_name=y_spec.name,
        y_label=y_spec.label,
        curves=curves,
        x_name=x_name,
        x_label=x_label,
        alpha_name=alpha_name,
        params={k: v for k, v in params.model_dump().items() if k in used},
    )

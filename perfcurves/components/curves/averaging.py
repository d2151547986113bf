from __future__ import annotations

"""Averaging of per-run curves.

Runs produce curves of different lengths over different cutoffs. Each mode
first moves every run onto one shared grid, then averages pointwise:

- threshold:  grid = union of all cutoffs; each run contributes the point it
              holds at that cutoff (step function, no interpolation).
- vertical:   grid = evenly spaced x values; each run contributes y
              interpolated linearly along its curve.
- horizontal: vertical averaging with the roles of x and y swapped.
"""

import logging
from typing import List, Optional, Sequence

import numpy as np

from perfcurves.contracts.averaging_configs import AveragingConfig
from perfcurves.contracts.choices import SpreadMode
from perfcurves.errors import EmptyInputError, IncompatibleCurvesError
from perfcurves.components.containers import AveragedCurve, Curve
from perfcurves.components.curves.interpolation import interpolate_linear, step_lookup
from perfcurves.components.curves.spread import column_mean, compute_spread

logger = logging.getLogger(__name__)


def check_compatible(curves: Sequence[Curve]) -> None:
    if len(curves) == 0:
        raise EmptyInputError("Cannot average zero curves.")
    first = curves[0]
    for i, c in enumerate(curves[1:], start=1):
        if c.x_name != first.x_name or c.y_name != first.y_name:
            raise IncompatibleCurvesError(
                f"Curve {i} measures ({c.x_name!r}, {c.y_name!r}) differ from "
                f"curve 0 ({first.x_name!r}, {first.y_name!r})."
            )
    if any(c.x is None for c in curves):
        raise IncompatibleCurvesError(
            f"Measure {first.y_name!r} yields one value per run; there is no curve to average."
        )


def threshold_average(curves: Sequence[Curve], spread: SpreadMode) -> AveragedCurve:
    if any(c.cutoffs is None for c in curves):
        raise IncompatibleCurvesError(
            f"Threshold averaging needs cutoffs; {curves[0].y_name!r} curves have none."
        )

    grid = np.unique(np.concatenate([c.cutoffs for c in curves]))[::-1]
    X = np.vstack([step_lookup(c.cutoffs, c.x, grid) for c in curves])
    Y = np.vstack([step_lookup(c.cutoffs, c.y, grid) for c in curves])

    x_mean, _ = column_mean(X)
    y_mean, counts = column_mean(Y)
    n = len(curves)
    logger.debug("threshold averaging: %d runs onto %d cutoffs", n, grid.shape[0])

    return AveragedCurve(
        mode="threshold",
        y_name=curves[0].y_name,
        x_name=curves[0].x_name,
        x=x_mean,
        y=y_mean,
        counts=counts,
        n_runs=n,
        cutoffs=grid,
        x_spread=compute_spread(X, spread, n_runs=n),
        y_spread=compute_spread(Y, spread, n_runs=n),
    )


def vertical_average(
    curves: Sequence[Curve],
    spread: SpreadMode,
    n_points: Optional[int] = None,
) -> AveragedCurve:
    finite_x: List[np.ndarray] = []
    for c in curves:
        ok = np.isfinite(c.x) & np.isfinite(c.y)
        finite_x.append(c.x[ok])
    all_x = np.concatenate(finite_x)
    if all_x.size == 0:
        raise IncompatibleCurvesError("No run has a finite point to interpolate.")

    if n_points is None:
        n_points = max(len(c) for c in curves)
    grid = np.linspace(all_x.min(), all_x.max(), int(n_points))

    Y = np.vstack([interpolate_linear(c.x, c.y, grid) for c in curves])
    y_mean, counts = column_mean(Y)
    n = len(curves)
    logger.debug("vertical averaging: %d runs onto %d grid points", n, grid.shape[0])

    return AveragedCurve(
        mode="vertical",
        y_name=curves[0].y_name,
        x_name=curves[0].x_name,
        x=grid,
        y=y_mean,
        counts=counts,
        n_runs=n,
        y_spread=compute_spread(Y, spread, n_runs=n),
    )


def _swap(c: Curve) -> Curve:
    return Curve(y_name=c.x_name, y=c.x, x_name=c.y_name, x=c.y, cutoffs=c.cutoffs)


def horizontal_average(
    curves: Sequence[Curve],
    spread: SpreadMode,
    n_points: Optional[int] = None,
) -> AveragedCurve:
    swapped = vertical_average([_swap(c) for c in curves], spread, n_points)
    return AveragedCurve(
        mode="horizontal",
        y_name=swapped.x_name,
        x_name=swapped.y_name,
        x=swapped.y,
        y=swapped.x,
        counts=swapped.counts,
        n_runs=swapped.n_runs,
        x_spread=swapped.y_spread,
        y_spread=None,
    )


def average(curves: Sequence[Curve], cfg: AveragingConfig) -> AveragedCurve:
    """Average same-measure curves according to ``cfg`` (mode must not be ``none``)."""

    curves = list(curves)
    check_compatible(curves)

    if cfg.mode == "threshold":
        return threshold_average(curves, cfg.spread)
    if cfg.mode == "vertical":
        return vertical_average(curves, cfg.spread, cfg.n_points)
    if cfg.mode == "horizontal":
        return horizontal_average(curves, cfg.spread, cfg.n_points)

    raise ValueError(f"average() needs an averaging mode, got {cfg.mode!r}")


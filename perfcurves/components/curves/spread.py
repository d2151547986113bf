from __future__ import annotations

"""Column-wise statistics over a (n_runs, n_points) matrix.

Missing values are NaN and are left out per column; a column needs at least
two values for any spread statistic.
"""

import warnings
from typing import Optional, Tuple

import numpy as np

from perfcurves.contracts.choices import BOXPLOT_STATS, SpreadMode
from perfcurves.components.containers import Spread
from perfcurves.components.evaluation.measures.helpers import safe_div


def _as_matrix(values: np.ndarray) -> np.ndarray:
    return np.atleast_2d(np.asarray(values, dtype=float))


def column_counts(values: np.ndarray) -> np.ndarray:
    return (~np.isnan(_as_matrix(values))).sum(axis=0)


def column_mean(values: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """(mean, count) per column, ignoring NaN."""

    M = _as_matrix(values)
    with warnings.catch_warnings():
        # all-NaN columns are expected and stay NaN
        warnings.simplefilter("ignore", RuntimeWarning)
        mean = np.nanmean(M, axis=0)
    return mean, column_counts(M)


def column_stddev(values: np.ndarray) -> np.ndarray:
    """Sample standard deviation (ddof=1) per column, ignoring NaN.

    Each column is shifted by its first valid entry first, so equal values
    give exactly zero.
    """
    M = _as_matrix(values)
    first = np.argmax(~np.isnan(M), axis=0)
    shifted = M - M[first, np.arange(M.shape[1])]
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", RuntimeWarning)
        sd = np.nanstd(shifted, axis=0, ddof=1)
    sd[column_counts(M) < 2] = np.nan
    return sd


def column_boxplot(values: np.ndarray) -> np.ndarray:
    """(n_points, 5) array of min, q1, median, q3, max per column."""

    M = _as_matrix(values)
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", RuntimeWarning)
        out = np.nanquantile(M, [0.0, 0.25, 0.5, 0.75, 1.0], axis=0).T
    out[column_counts(M) < 2] = np.nan
    return out


def compute_spread(values: np.ndarray, kind: SpreadMode, *, n_runs: int) -> Optional[Spread]:
    """Spread of ``values`` across runs, or None for ``none`` / a single run."""

    if kind == "none" or n_runs < 2:
        return None

    if kind == "stddev":
        return Spread(kind=kind, stats={"stddev": column_stddev(values)})

    if kind == "stderror":
        stderr = safe_div(column_stddev(values), np.sqrt(column_counts(values)))
        return Spread(kind=kind, stats={"stderror": stderr})

    if kind == "boxplot":
        box = column_boxplot(values)
        return Spread(kind=kind, stats={name: box[:, i] for i, name in enumerate(BOXPLOT_STATS)})

    raise ValueError(f"Unknown spread mode: {kind!r}")

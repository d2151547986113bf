from __future__ import annotations

"""Lookups that move curve values onto a different grid."""

from typing import Tuple

import numpy as np


def step_lookup(cutoffs: np.ndarray, values: np.ndarray, query: np.ndarray) -> np.ndarray:
    """Value of the last point crossed when sweeping cutoffs downwards.

    For every query cutoff ``q`` this is the value at the smallest own cutoff
    ``>= q`` (the point whose prediction set equals ``score >= q``). Among
    duplicated cutoffs the one listed last wins. NaN where the curve has no
    cutoff at or above ``q``.
    """
    c = np.asarray(cutoffs, dtype=float)[::-1]
    v = np.asarray(values, dtype=float)[::-1]
    q = np.asarray(query, dtype=float)

    order = np.argsort(c, kind="stable")
    c_asc = c[order]
    v_asc = v[order]

    idx = np.searchsorted(c_asc, q, side="left")
    out = np.full(q.shape, np.nan)
    found = idx < c_asc.shape[0]
    out[found] = v_asc[idx[found]]
    return out


def collapse_ties(x: np.ndarray, y: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Finite points sorted by x, with the y values of tied x averaged."""

    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    ok = np.isfinite(x) & np.isfinite(y)
    x, y = x[ok], y[ok]
    if x.size == 0:
        return x, y
    ux, inverse = np.unique(x, return_inverse=True)
    inverse = inverse.ravel()
    sums = np.bincount(inverse, weights=y)
    counts = np.bincount(inverse)
    return ux, sums / counts


def interpolate_linear(x: np.ndarray, y: np.ndarray, grid: np.ndarray) -> np.ndarray:
    """y(grid) by linear interpolation, constant beyond the curve's x range."""

    ux, uy = collapse_ties(x, y)
    grid = np.asarray(grid, dtype=float)
    if ux.size == 0:
        return np.full(grid.shape, np.nan)
    return np.interp(grid, ux, uy)

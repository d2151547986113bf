from __future__ import annotations

"""Measures that read scores as probabilities of the positive class.

They only make sense for scores in [0, 1]; domain checks happen in the
registry before these functions are called.
"""

from typing import Tuple

import numpy as np

from perfcurves.errors import DomainError


def calibration_error_windows(
    scores: np.ndarray,
    labels: np.ndarray,
    window_size: int,
) -> Tuple[np.ndarray, np.ndarray]:
    """Sliding-window calibration error.

    Instances are sorted by score (descending). For every run of
    ``window_size`` consecutive instances the absolute difference between the
    mean score and the fraction of positives is reported, indexed by the
    window's median score.

    Returns (cutoffs, errors), both of length ``n - window_size + 1``.
    """
    s = np.asarray(scores, dtype=float)
    y = np.asarray(labels, dtype=float)
    n = s.shape[0]
    w = int(window_size)
    if w > n:
        raise DomainError(
            f"Calibration window size ({w}) exceeds the number of predictions ({n})."
        )

    order = np.argsort(-s, kind="stable")
    s = s[order]
    y = y[order]

    cs = np.concatenate(([0.0], np.cumsum(s)))
    cy = np.concatenate(([0.0], np.cumsum(y)))
    mean_score = (cs[w:] - cs[:-w]) / w
    pos_fraction = (cy[w:] - cy[:-w]) / w
    errors = np.abs(pos_fraction - mean_score)

    # windows are sorted, so the median sits in the middle
    starts = np.arange(n - w + 1)
    medians = (s[starts + (w - 1) // 2] + s[starts + w // 2]) / 2.0
    return medians, errors


def mean_cross_entropy(scores: np.ndarray, labels: np.ndarray) -> float:
    p = np.asarray(scores, dtype=float)
    y = np.asarray(labels) == 1
    with np.errstate(divide="ignore"):
        ll = np.where(y, np.log(p), np.log(1.0 - p))
    return float(-np.mean(ll))


def root_mean_squared_error(scores: np.ndarray, labels: np.ndarray) -> float:
    p = np.asarray(scores, dtype=float)
    y = np.asarray(labels, dtype=float)
    return float(np.sqrt(np.mean((p - y) ** 2)))

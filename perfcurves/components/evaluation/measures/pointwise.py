from __future__ import annotations

"""Measures that are a pure function of the confusion counts at one cutoff.

Every function takes :class:`Counts` and returns an array broadcast over the
counts. A ratio with a zero denominator is NaN; nothing here raises on
degenerate tables.

Notation: P/N = positives/negatives, P^/N^ = predicted positives/negatives.
"""

import numpy as np

from perfcurves.errors import MeasureMismatchError
from perfcurves.components.evaluation.types import Counts

from .curve_level import roc_auc
from .helpers import safe_div
from .probabilistic import root_mean_squared_error


def cutoff(c: Counts) -> np.ndarray:
    if c.cutoffs is None:
        return np.full(np.shape(c.tp), np.nan)
    return np.asarray(c.cutoffs, dtype=float)


def accuracy(c: Counts) -> np.ndarray:
    return safe_div(c.tp + c.tn, c.n)


def error_rate(c: Counts) -> np.ndarray:
    return safe_div(c.fp + c.fn, c.n)


def false_positive_rate(c: Counts) -> np.ndarray:
    return safe_div(c.fp, c.n_neg)


def true_positive_rate(c: Counts) -> np.ndarray:
    return safe_div(c.tp, c.n_pos)


def false_negative_rate(c: Counts) -> np.ndarray:
    return safe_div(c.fn, c.n_pos)


def true_negative_rate(c: Counts) -> np.ndarray:
    return safe_div(c.tn, c.n_neg)


def positive_predictive_value(c: Counts) -> np.ndarray:
    return safe_div(c.tp, c.n_pos_pred)


def negative_predictive_value(c: Counts) -> np.ndarray:
    return safe_div(c.tn, c.n_neg_pred)


def prediction_conditioned_fallout(c: Counts) -> np.ndarray:
    return safe_div(c.fp, c.n_pos_pred)


def prediction_conditioned_miss(c: Counts) -> np.ndarray:
    return safe_div(c.fn, c.n_neg_pred)


def rate_of_positive_predictions(c: Counts) -> np.ndarray:
    return safe_div(c.n_pos_pred, c.n)


def rate_of_negative_predictions(c: Counts) -> np.ndarray:
    return safe_div(c.n_neg_pred, c.n)


def phi_coefficient(c: Counts) -> np.ndarray:
    """Matthews correlation coefficient: (TP*TN - FP*FN) / sqrt(P*N*P^*N^)."""
    den = np.sqrt(c.n_pos * c.n_neg * c.n_pos_pred * c.n_neg_pred)
    return safe_div(c.tp * c.tn - c.fp * c.fn, den)


def mutual_information(c: Counts) -> np.ndarray:
    """Mutual information (bits) between true and predicted class.

    Cells with a zero count contribute nothing.
    """
    n = np.asarray(c.n, dtype=float)
    cells = (
        (c.tn, c.n_neg * c.n_neg_pred),
        (c.fn, c.n_pos * c.n_neg_pred),
        (c.fp, c.n_neg * c.n_pos_pred),
        (c.tp, c.n_pos * c.n_pos_pred),
    )
    total: np.ndarray = np.zeros(np.broadcast(c.tp, c.fp, c.tn, c.fn, n).shape)
    with np.errstate(divide="ignore", invalid="ignore"):
        for k, marginals in cells:
            k = np.asarray(k, dtype=float)
            term = k * np.log2(n * k / marginals)
            total = total + np.where(k > 0, term, 0.0)
    return safe_div(total, n)


def chi_squared(c: Counts) -> np.ndarray:
    """Pearson chi-squared of the 2x2 table (no continuity correction)."""
    den = c.n_pos * c.n_neg * c.n_pos_pred * c.n_neg_pred
    return safe_div(c.n * (c.tp * c.tn - c.fp * c.fn) ** 2, den)


def odds_ratio(c: Counts) -> np.ndarray:
    return safe_div(c.tp * c.tn, c.fp * c.fn)


def lift(c: Counts) -> np.ndarray:
    return safe_div(true_positive_rate(c), rate_of_positive_predictions(c))


def f_measure(c: Counts) -> np.ndarray:
    """Weighted harmonic mean of precision and recall.

    ``1 / (alpha / prec + (1 - alpha) / rec)``, rewritten on counts so that a
    zero precision or recall gives 0. NaN where a term with non-zero weight
    is undefined, so ``alpha = 0`` is plain recall and ``alpha = 1`` plain
    precision.
    """
    alpha = c.params.f_alpha
    f = safe_div(c.tp, c.tp + alpha * c.fp + (1.0 - alpha) * c.fn)
    undefined = np.zeros(np.shape(f), dtype=bool)
    if alpha > 0:
        undefined |= np.asarray(c.n_pos_pred) == 0
    if alpha < 1:
        undefined |= np.asarray(c.n_pos) == 0
    return np.where(undefined, np.nan, f)


def explicit_cost(c: Counts) -> np.ndarray:
    """prior_pos * FNR * cost_fn + (1 - prior_pos) * FPR * cost_fp.

    With no prior given, the run's class ratio is used, which reduces to
    ``(FN * cost_fn + FP * cost_fp) / (P + N)``.
    """
    p = c.params
    prior_pos = p.prior_pos if p.prior_pos is not None else safe_div(c.n_pos, c.n)
    return (
        prior_pos * false_negative_rate(c) * p.cost_fn
        + (1.0 - prior_pos) * false_positive_rate(c) * p.cost_fp
    )


def sar(c: Counts) -> np.ndarray:
    """(accuracy + AUC + (1 - RMSE)) / 3."""
    if c.run is None:
        raise MeasureMismatchError(
            "Measure 'sar' combines per-cutoff accuracy with run-level AUC and RMSE; "
            "it needs the run's scores, not only confusion counts."
        )
    auc = roc_auc(c.run.table, fpr_stop=1.0)
    rmse = root_mean_squared_error(c.run.scores, c.run.labels)
    return (accuracy(c) + auc + (1.0 - rmse)) / 3.0

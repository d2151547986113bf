from __future__ import annotations

"""Cumulative confusion counts over a sequence of cutoffs.

An instance is predicted positive iff ``score >= cutoff``. Scores are sorted
once (descending); counts for every cutoff are read off cumulative sums, so
the cost is O(n log n + k log n) instead of re-scanning all instances per
cutoff. Instances with equal scores always change side together.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from perfcurves.errors import InvalidInputError


def _readonly(a: np.ndarray) -> np.ndarray:
    a = np.array(a, copy=True)
    a.setflags(write=False)
    return a


@dataclass(frozen=True)
class ConfusionTable:
    """TP/FP/TN/FN counts of one run, parallel to ``cutoffs`` (descending)."""

    cutoffs: np.ndarray
    tp: np.ndarray
    fp: np.ndarray
    tn: np.ndarray
    fn: np.ndarray
    n_pos: int
    n_neg: int

    def __post_init__(self) -> None:
        for name in ("cutoffs", "tp", "fp", "tn", "fn"):
            object.__setattr__(self, name, _readonly(getattr(self, name)))

    @property
    def n_pos_pred(self) -> np.ndarray:
        return self.tp + self.fp

    @property
    def n_neg_pred(self) -> np.ndarray:
        return self.tn + self.fn

    @property
    def n_samples(self) -> int:
        return self.n_pos + self.n_neg

    def __len__(self) -> int:
        return int(self.cutoffs.shape[0])


def normalize_cutoffs(cutoffs: Sequence[float]) -> np.ndarray:
    """Deduplicate requested cutoffs and order them descending."""

    c = np.asarray(cutoffs, dtype=float).ravel()
    if c.size == 0:
        raise InvalidInputError("At least one cutoff must be requested.")
    if np.isnan(c).any():
        raise InvalidInputError("Cutoffs must not contain NaN.")
    return np.unique(c)[::-1]


def compute_confusion(
    scores: np.ndarray,
    labels: np.ndarray,
    cutoffs: Optional[Sequence[float]] = None,
) -> ConfusionTable:
    """Confusion counts of one run.

    Parameters
    ----------
    scores : array-like, shape (n_samples,)
        Predicted scores (higher means more positive). ``-inf`` is allowed,
        ``+inf`` is not: it is the cutoff at which nothing is positive.
    labels : array-like, shape (n_samples,)
        Canonical 0/1 labels (1 = positive).
    cutoffs : sequence of float, optional
        Cutoffs to evaluate. By default the natural cutoffs are used:
        ``+inf`` followed by every distinct score, descending.

    Returns
    -------
    ConfusionTable
    """
    s = np.asarray(scores, dtype=float).ravel()
    y = np.asarray(labels).ravel().astype(np.int64)
    if s.shape[0] != y.shape[0]:
        raise InvalidInputError(
            f"Length mismatch: scores({s.shape[0]}) vs labels({y.shape[0]})."
        )
    if np.isnan(s).any() or np.isposinf(s).any():
        raise InvalidInputError("Scores must not contain NaN or +inf.")

    n_pos = int(y.sum())
    n_neg = int(y.shape[0] - n_pos)

    order = np.argsort(-s, kind="stable")
    s_desc = s[order]
    # cum_*[k] = positives/negatives among the k highest-scoring instances
    cum_pos = np.concatenate(([0], np.cumsum(y[order])))
    cum_neg = np.arange(s_desc.shape[0] + 1) - cum_pos

    if cutoffs is None:
        # last position of every group of tied scores
        last_of_tie = np.flatnonzero(np.append(s_desc[1:] != s_desc[:-1], True))
        cut = np.concatenate(([np.inf], s_desc[last_of_tie]))
        n_above = np.concatenate(([0], last_of_tie + 1))
    else:
        cut = normalize_cutoffs(cutoffs)
        # number of instances with score >= cutoff
        s_asc = s_desc[::-1]
        n_above = s_asc.shape[0] - np.searchsorted(s_asc, cut, side="left")

    tp = cum_pos[n_above]
    fp = cum_neg[n_above]

    return ConfusionTable(
        cutoffs=cut,
        tp=tp,
        fp=fp,
        tn=n_neg - fp,
        fn=n_pos - tp,
        n_pos=n_pos,
        n_neg=n_neg,
    )

from __future__ import annotations

from typing import Any, Tuple

import numpy as np

from perfcurves.components.evaluation.confusion import ConfusionTable


def safe_div(num: Any, den: Any) -> np.ndarray:
    """Elementwise ``num / den`` with NaN wherever ``den == 0``."""

    num, den = np.broadcast_arrays(np.asarray(num, dtype=float), np.asarray(den, dtype=float))
    out = np.full(num.shape, np.nan)
    np.divide(num, den, out=out, where=den != 0)
    return out


def roc_points(table: ConfusionTable) -> Tuple[np.ndarray, np.ndarray]:
    """(fpr, tpr) at every cutoff of ``table``; NaN if a class is absent."""

    fpr = safe_div(table.fp, table.n_neg)
    tpr = safe_div(table.tp, table.n_pos)
    return fpr, tpr


def has_both_classes(table: ConfusionTable) -> bool:
    return table.n_pos > 0 and table.n_neg > 0

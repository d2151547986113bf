from __future__ import annotations

"""Measures that need a run's full curve rather than one cutoff.

All functions read the run's *natural* confusion table (every distinct score
as a cutoff), so the ROC / precision-recall curves they integrate or hull are
complete.
"""

from typing import List, Tuple

import numpy as np
from sklearn.metrics import auc as trapezoid_area

from perfcurves.errors import DomainError
from perfcurves.components.evaluation.confusion import ConfusionTable

from .helpers import has_both_classes, roc_points, safe_div

Point = Tuple[float, float]


def roc_auc(table: ConfusionTable, *, fpr_stop: float = 1.0) -> float:
    """Area under the ROC curve by trapezoidal integration.

    Tied scores produce diagonal ROC segments, so the area equals the
    Mann-Whitney U statistic divided by ``n_pos * n_neg``. With
    ``fpr_stop < 1`` the partial area up to that false positive rate is
    returned, with the curve interpolated linearly at the bound.

    NaN if the run lacks one of the two classes.
    """
    if not has_both_classes(table):
        return float("nan")

    fpr, tpr = roc_points(table)
    if fpr_stop < 1.0:
        ind = int(np.flatnonzero(fpr <= fpr_stop)[-1])
        if ind < fpr.shape[0] - 1:
            tpr_stop = np.interp(fpr_stop, fpr[ind : ind + 2], tpr[ind : ind + 2])
            fpr = np.append(fpr[: ind + 1], fpr_stop)
            tpr = np.append(tpr[: ind + 1], tpr_stop)
    return float(trapezoid_area(fpr, tpr))


def _cross(o: Point, a: Point, b: Point) -> float:
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def _upper_hull(points: List[Point]) -> List[Point]:
    # highest point first at every x, then left to right
    pts = sorted(set(points), key=lambda p: (p[0], -p[1]))
    hull: List[Point] = []
    for p in pts:
        if hull and hull[-1][0] == p[0]:
            continue
        # collinear points are dropped as well
        while len(hull) >= 2 and _cross(hull[-2], hull[-1], p) >= 0:
            hull.pop()
        hull.append(p)
    return hull


def roc_convex_hull(table: ConfusionTable) -> Tuple[np.ndarray, np.ndarray]:
    """Vertices of the ROC convex hull, sorted by false positive rate.

    Only hull points strictly above the diagonal are kept; (0, 0) and (1, 1)
    are always included.
    """
    if not has_both_classes(table):
        raise DomainError("The ROC convex hull needs at least one positive and one negative.")

    fpr, tpr = roc_points(table)
    hull = _upper_hull(list(zip(fpr.tolist(), tpr.tolist())))
    above = [(x, y) for x, y in hull if x < y]

    x = np.array([0.0] + [p[0] for p in above] + [1.0])
    y = np.array([0.0] + [p[1] for p in above] + [1.0])
    return x, y


def expected_cost_curve(table: ConfusionTable) -> Tuple[np.ndarray, np.ndarray]:
    """Lower envelope of the cost lines of all ROC hull points.

    Every operating point (fpr, tpr) has a normalized expected cost
    ``fpr * (1 - pc) + (1 - tpr) * pc`` as a function of the probability
    cost ``pc`` in [0, 1]. The optimal points are exactly the ROC hull
    vertices, and consecutive vertices trade places where their lines cross.
    Returns (pc, cost), running from (0, 0) to (1, 0).
    """
    hx, hy = roc_convex_hull(table)

    dx = np.diff(hx)
    dy = np.diff(hy)
    pc = dx / (dx + dy)
    cost = hx[:-1] * (1.0 - pc) + (1.0 - hy[:-1]) * pc

    x = np.concatenate(([0.0], pc, [1.0]))
    y = np.concatenate(([0.0], cost, [0.0]))

    keep = np.ones(x.shape[0], dtype=bool)
    keep[1:] = ~(np.isclose(x[1:], x[:-1]) & np.isclose(y[1:], y[:-1]))
    return x[keep], y[keep]


def precision_recall_break_even(table: ConfusionTable) -> Tuple[float, float]:
    """Value and cutoff where precision equals recall.

    Walking down the cutoffs, the first point where ``precision - recall``
    reaches zero or changes sign is taken, linearly interpolated between the
    two neighbouring cutoffs. Without any crossing the point closest to the
    break-even line is used, with the mean of precision and recall as value.
    """
    prec = safe_div(table.tp, table.n_pos_pred)
    rec = safe_div(table.tp, table.n_pos)
    ok = np.isfinite(prec) & np.isfinite(rec)
    if not ok.any():
        return float("nan"), float("nan")

    p, r, c = prec[ok], rec[ok], table.cutoffs[ok]
    d = p - r

    exact = np.flatnonzero(d == 0)
    crossing = np.flatnonzero(d[:-1] * d[1:] < 0)
    first_exact = int(exact[0]) if exact.size else None
    first_cross = int(crossing[0]) if crossing.size else None

    if first_cross is not None and (first_exact is None or first_cross < first_exact):
        i = first_cross
        t = d[i] / (d[i] - d[i + 1])
        value = p[i] + t * (p[i + 1] - p[i])
        cut = c[i] + t * (c[i + 1] - c[i])
        return float(value), float(cut)

    if first_exact is not None:
        return float(p[first_exact]), float(c[first_exact])

    i = int(np.argmin(np.abs(d)))
    return float((p[i] + r[i]) / 2.0), float(c[i])

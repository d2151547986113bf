from .helpers import has_both_classes, roc_points, safe_div
from .curve_level import (
    expected_cost_curve,
    precision_recall_break_even,
    roc_auc,
    roc_convex_hull,
)
from .probabilistic import (
    calibration_error_windows,
    mean_cross_entropy,
    root_mean_squared_error,
)

__all__ = [
    "safe_div",
    "roc_points",
    "has_both_classes",
    "roc_auc",
    "roc_convex_hull",
    "expected_cost_curve",
    "precision_recall_break_even",
    "calibration_error_windows",
    "mean_cross_entropy",
    "root_mean_squared_error",
]

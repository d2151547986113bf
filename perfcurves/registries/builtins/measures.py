"""Built-in measure registrations.

Aliases are registered as separate names sharing one function, each with its
own display label.
"""

from __future__ import annotations

from typing import Tuple

import numpy as np

from perfcurves.registries.measures import UNIT_INTERVAL, register_measure
from perfcurves.components.evaluation.types import RunInputs
from perfcurves.components.evaluation.measures import curve_level, pointwise, probabilistic


# -----------------------------
# Pointwise (one value per cutoff)
# -----------------------------

register_measure("cutoff", label="Cutoff")(pointwise.cutoff)
register_measure("acc", label="Accuracy")(pointwise.accuracy)
register_measure("err", label="Error Rate")(pointwise.error_rate)

register_measure("fpr", label="False positive rate")(pointwise.false_positive_rate)
register_measure("fall", label="Fallout")(pointwise.false_positive_rate)

register_measure("tpr", label="True positive rate")(pointwise.true_positive_rate)
register_measure("rec", label="Recall")(pointwise.true_positive_rate)
register_measure("sens", label="Sensitivity")(pointwise.true_positive_rate)

register_measure("fnr", label="False negative rate")(pointwise.false_negative_rate)
register_measure("miss", label="Miss")(pointwise.false_negative_rate)

register_measure("tnr", label="True negative rate")(pointwise.true_negative_rate)
register_measure("spec", label="Specificity")(pointwise.true_negative_rate)

register_measure("ppv", label="Positive predictive value")(pointwise.positive_predictive_value)
register_measure("prec", label="Precision")(pointwise.positive_predictive_value)
register_measure("npv", label="Negative predictive value")(pointwise.negative_predictive_value)

register_measure("pcfall", label="Prediction-conditioned fallout")(
    pointwise.prediction_conditioned_fallout
)
register_measure("pcmiss", label="Prediction-conditioned miss")(
    pointwise.prediction_conditioned_miss
)
register_measure("rpp", label="Rate of positive predictions")(
    pointwise.rate_of_positive_predictions
)
register_measure("rnp", label="Rate of negative predictions")(
    pointwise.rate_of_negative_predictions
)

register_measure("phi", label="Phi correlation coefficient")(pointwise.phi_coefficient)
register_measure("mat", label="Matthews correlation coefficient")(pointwise.phi_coefficient)
register_measure("mi", label="Mutual information")(pointwise.mutual_information)
register_measure("chisq", label="Chi squared")(pointwise.chi_squared)
register_measure("odds", label="Odds ratio")(pointwise.odds_ratio)
register_measure("lift", label="Lift value")(pointwise.lift)
register_measure("f", label="Precision-Recall F measure", params=("f_alpha",))(pointwise.f_measure)
register_measure(
    "cost",
    label="Explicit cost",
    params=("cost_fp", "cost_fn", "prior_pos"),
)(pointwise.explicit_cost)
register_measure(
    "sar",
    label="SAR",
    domain=UNIT_INTERVAL,
    needs_scores=True,
)(pointwise.sar)


# -----------------------------
# Window / curve / scalar measures
# -----------------------------


@register_measure(
    "cal",
    label="Calibration error",
    kind="window",
    domain=UNIT_INTERVAL,
    params=("window_size",),
)
def _cal(run: RunInputs) -> Tuple[np.ndarray, np.ndarray]:
    return probabilistic.calibration_error_windows(
        run.scores, run.labels, run.params.window_size
    )


@register_measure(
    "rch",
    label="ROC convex hull",
    kind="curve",
    x_axis="fpr",
    x_label="False positive rate",
)
def _rch(run: RunInputs) -> Tuple[np.ndarray, np.ndarray]:
    return curve_level.roc_convex_hull(run.table)


@register_measure(
    "ecost",
    label="Expected cost",
    kind="curve",
    x_axis="pcost",
    x_label="Probability cost function",
)
def _ecost(run: RunInputs) -> Tuple[np.ndarray, np.ndarray]:
    return curve_level.expected_cost_curve(run.table)


@register_measure("auc", label="Area under the ROC curve", kind="scalar", params=("fpr_stop",))
def _auc(run: RunInputs) -> Tuple[float, None]:
    return curve_level.roc_auc(run.table, fpr_stop=run.params.fpr_stop), None


@register_measure("prbe", label="Precision/recall break-even point", kind="scalar")
def _prbe(run: RunInputs) -> Tuple[float, float]:
    return curve_level.precision_recall_break_even(run.table)


@register_measure("mxe", label="Mean cross-entropy", kind="scalar", domain=UNIT_INTERVAL)
def _mxe(run: RunInputs) -> Tuple[float, None]:
    return probabilistic.mean_cross_entropy(run.scores, run.labels), None


@register_measure(
    "rmse",
    label="Root-mean-squared error",
    kind="scalar",
    domain=UNIT_INTERVAL,
)
def _rmse(run: RunInputs) -> Tuple[float, None]:
    return probabilistic.root_mean_squared_error(run.scores, run.labels), None


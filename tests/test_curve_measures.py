"""Curve-level, window and probabilistic measures on real runs."""

import math

import numpy as np
import pytest
from scipy.stats import mannwhitneyu
from sklearn.metrics import auc as trapezoid_area
from sklearn.metrics import roc_auc_score

from perfcurves.api import DomainError, performance, prediction


def _single(perf):
    return float(perf.y_values[0][0])


class TestAUC:
    def test_matches_sklearn_and_mann_whitney(self, noisy_run):
        s, y = noisy_run
        value = _single(performance(prediction(s, y), "auc"))

        u = mannwhitneyu(s[y == 1], s[y == 0]).statistic
        assert value == pytest.approx(roc_auc_score(y, s))
        assert value == pytest.approx(u / ((y == 1).sum() * (y == 0).sum()))

    def test_worked_example(self, small_pred):
        assert _single(performance(small_pred, "auc")) == pytest.approx(5 / 6)

    def test_partial_auc(self):
        pred = prediction([0.9, 0.8, 0.3, 0.2], [1, 1, 0, 0])
        assert _single(performance(pred, "auc")) == pytest.approx(1.0)
        assert _single(performance(pred, "auc", fpr_stop=0.5)) == pytest.approx(0.5)
        assert _single(performance(pred, "auc", fpr_stop=0.25)) == pytest.approx(0.25)

    def test_partial_auc_interpolates_at_the_bound(self, small_pred):
        # ROC: (0, 2/3) -> (0.5, 2/3) -> (0.5, 1) -> (1, 1)
        value = _single(performance(small_pred, "auc", fpr_stop=0.25))
        assert value == pytest.approx(0.25 * 2 / 3)

    def test_undefined_for_single_class(self):
        with pytest.warns(UserWarning):
            pred = prediction([0.2, 0.4, 0.6], [1, 1, 1], label_ordering=(0, 1))
        assert math.isnan(_single(performance(pred, "auc")))

    def test_auc_has_no_cutoff(self, small_pred):
        perf = performance(small_pred, "auc")
        assert perf.curves[0].cutoffs is None
        assert perf.alpha_name is None


class TestConvexHull:
    def test_worked_example(self, small_pred):
        curve = performance(small_pred, "rch").curves[0]

        np.testing.assert_allclose(curve.x, [0.0, 0.0, 0.5, 1.0])
        np.testing.assert_allclose(curve.y, [0.0, 2 / 3, 1.0, 1.0])

    def test_hull_dominates_roc(self, noisy_run):
        s, y = noisy_run
        pred = prediction(s, y)
        roc = performance(pred, "tpr", "fpr").curves[0]
        hull = performance(pred, "rch").curves[0]

        # first vertex after (0, 0) onwards has strictly increasing x
        upper = np.interp(roc.x, hull.x[1:], hull.y[1:])
        assert (upper >= roc.y - 1e-12).all()
        assert (np.diff(hull.x) >= 0).all()

    def test_hull_area_not_below_auc(self, noisy_run):
        s, y = noisy_run
        pred = prediction(s, y)
        hull = performance(pred, "rch").curves[0]
        assert trapezoid_area(hull.x, hull.y) >= _single(performance(pred, "auc")) - 1e-12

    def test_needs_both_classes(self):
        with pytest.warns(UserWarning):
            pred = prediction([0.2, 0.4], [0, 0], label_ordering=(0, 1))
        with pytest.raises(DomainError):
            performance(pred, "rch")


class TestExpectedCost:
    def test_worked_example(self, small_pred):
        perf = performance(small_pred, "ecost")
        curve = perf.curves[0]

        assert perf.x_name == "pcost"
        np.testing.assert_allclose(curve.x, [0.0, 0.6, 1.0])
        np.testing.assert_allclose(curve.y, [0.0, 0.2, 0.0])

    def test_perfect_classifier_costs_nothing(self):
        pred = prediction([0.9, 0.8, 0.3, 0.2], [1, 1, 0, 0])
        curve = performance(pred, "ecost").curves[0]
        np.testing.assert_allclose(curve.y, 0.0)

    def test_random_classifier(self):
        pred = prediction([0.5, 0.5], [1, 0])
        curve = performance(pred, "ecost").curves[0]
        np.testing.assert_allclose(curve.x, [0.0, 0.5, 1.0])
        np.testing.assert_allclose(curve.y, [0.0, 0.5, 0.0])


class TestBreakEven:
    def test_exact_break_even(self, small_pred):
        perf = performance(small_pred, "prbe")

        assert _single(perf) == pytest.approx(2 / 3)
        assert perf.curves[0].cutoffs[0] == pytest.approx(0.7)
        assert perf.alpha_name == "cutoff"

    def test_interpolated_break_even(self):
        # tied scores skip the exact crossing; prec - rec: 1/2 at 0.9, -1/3 at 0.5
        pred = prediction([0.9, 0.5, 0.5, 0.1], [1, 0, 1, 0])
        perf = performance(pred, "prbe")

        t = 0.5 / (0.5 + 1 / 3)
        assert _single(perf) == pytest.approx(1.0 + t * (2 / 3 - 1.0))
        assert perf.curves[0].cutoffs[0] == pytest.approx(0.9 + t * (0.5 - 0.9))


class TestCalibration:
    def test_window_errors(self, small_pred):
        curve = performance(small_pred, "cal", window_size=3).curves[0]

        np.testing.assert_allclose(curve.cutoffs, [0.8, 0.7, 0.6])
        np.testing.assert_allclose(curve.y, [2 / 15, 1 / 30, 4 / 15])

    def test_requested_cutoff_outside_unit_interval(self, small_pred):
        with pytest.raises(DomainError):
            performance(small_pred, "cal", window_size=3, cutoffs=[1.5])

    def test_window_larger_than_run(self, small_pred):
        with pytest.raises(DomainError):
            performance(small_pred, "cal", window_size=10)

    def test_scores_must_be_probabilities(self):
        pred = prediction([2.0, 0.5, -1.0], [1, 0, 0])
        with pytest.raises(DomainError):
            performance(pred, "cal", window_size=2)


class TestProbabilistic:
    def test_rmse(self, small_pred):
        assert _single(performance(small_pred, "rmse")) == pytest.approx(math.sqrt(0.19))

    def test_mxe(self, small_pred):
        expected = -np.mean(np.log([0.9, 0.8, 0.3, 0.6, 0.5]))
        assert _single(performance(small_pred, "mxe")) == pytest.approx(expected)

    def test_sar_at_cutoff(self, small_pred):
        perf = performance(small_pred, "sar", cutoffs=[0.7])
        expected = (3 / 5 + 5 / 6 + 1 - math.sqrt(0.19)) / 3
        assert _single(perf) == pytest.approx(expected)

    def test_sar_natural_cutoffs_include_inf(self, small_pred):
        perf = performance(small_pred, "sar")
        assert np.isposinf(perf.curves[0].cutoffs[0])

    @pytest.mark.parametrize("name", ["sar", "mxe", "rmse"])
    def test_domain(self, name):
        pred = prediction([1.5, 0.2], [1, 0])
        with pytest.raises(DomainError):
            performance(pred, name)

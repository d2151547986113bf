"""Multi-run curve builder."""

import numpy as np
import pytest

from perfcurves.api import (
    MeasureMismatchError,
    UndefinedMeasureError,
    performance,
    prediction,
)


class TestPairs:
    def test_roc_curve(self, small_pred):
        perf = performance(small_pred, "tpr", "fpr")
        curve = perf.curves[0]

        assert (perf.x_name, perf.y_name, perf.alpha_name) == ("fpr", "tpr", "cutoff")
        assert perf.x_label == "False positive rate"
        assert perf.y_label == "True positive rate"
        np.testing.assert_allclose(curve.x, [0, 0, 0, 0.5, 0.5, 1])
        np.testing.assert_allclose(curve.y, [0, 1 / 3, 2 / 3, 2 / 3, 1, 1])
        assert np.isposinf(curve.cutoffs[0])

    def test_single_measure_is_plotted_against_cutoff(self, small_pred):
        perf = performance(small_pred, "acc")
        curve = perf.curves[0]

        assert perf.x_name == "cutoff"
        np.testing.assert_array_equal(curve.x, curve.cutoffs)
        np.testing.assert_allclose(curve.y, [2 / 5, 3 / 5, 4 / 5, 3 / 5, 4 / 5, 3 / 5])

    def test_precision_undefined_at_inf(self, small_pred):
        curve = performance(small_pred, "prec", "rec").curves[0]
        assert np.isnan(curve.y[0])
        assert curve.x[0] == 0.0

    def test_explicit_cutoffs(self, small_pred):
        curve = performance(small_pred, "tpr", cutoffs=[0.7, 0.75, 0.7]).curves[0]

        np.testing.assert_allclose(curve.cutoffs, [0.75, 0.7])
        np.testing.assert_allclose(curve.y, [2 / 3, 2 / 3])

    def test_window_measure_against_pointwise(self, small_pred):
        perf = performance(small_pred, "cal", "acc", window_size=3)
        curve = perf.curves[0]

        # acc grid is restricted to the range covered by the window medians
        np.testing.assert_allclose(curve.cutoffs, [0.8, 0.7, 0.6])
        np.testing.assert_allclose(curve.x, [4 / 5, 3 / 5, 4 / 5])
        np.testing.assert_allclose(curve.y, [2 / 15, 1 / 30, 4 / 15])

    def test_curve_measure_keeps_own_axis(self, small_pred):
        perf = performance(small_pred, "rch")
        assert (perf.x_name, perf.x_label) == ("fpr", "False positive rate")
        assert perf.alpha_name is None
        assert perf.curves[0].cutoffs is None

    def test_scalar_measure_has_no_x(self, small_pred):
        perf = performance(small_pred, "rmse")
        assert perf.x_name is None
        assert perf.curves[0].x is None
        assert len(perf.curves[0]) == 1

    def test_used_params_are_recorded(self, small_pred):
        assert performance(small_pred, "f", f_alpha=0.3).params == {"f_alpha": 0.3}
        assert performance(small_pred, "tpr", "fpr").params == {}


class TestPairingErrors:
    def test_unknown_measure(self, small_pred):
        with pytest.raises(UndefinedMeasureError):
            performance(small_pred, "tpr", "nope")

    @pytest.mark.parametrize(
        "y, x",
        [("auc", "fpr"), ("tpr", "auc"), ("rch", "fpr"), ("acc", "ecost"), ("prbe", "acc")],
    )
    def test_incompatible_pairs(self, small_pred, y, x):
        with pytest.raises(MeasureMismatchError):
            performance(small_pred, y, x)

    def test_cutoffs_for_scalar_measure(self, small_pred):
        with pytest.raises(MeasureMismatchError):
            performance(small_pred, "auc", cutoffs=[0.5])


class TestRuns:
    def test_one_curve_per_run_in_order(self, two_run_pred):
        perf = performance(two_run_pred, "tpr", "fpr")

        assert perf.n_runs == 2
        assert [len(c) for c in perf.curves] == [5, 4]
        np.testing.assert_allclose(perf.alpha_values[1][1:], [0.8, 0.6, 0.4])

    def test_columns_of_a_matrix_are_runs(self):
        scores = np.array([[0.9, 0.1], [0.4, 0.8], [0.3, 0.6]])
        labels = np.array([[1, 0], [0, 1], [1, 1]])
        perf = performance(prediction(scores, labels), "auc")

        assert perf.n_runs == 2
        assert perf.y_values[0][0] == pytest.approx(0.5)
        assert perf.y_values[1][0] == pytest.approx(1.0)

    def test_parallel_runs_match_sequential(self, noisy_run):
        s, y = noisy_run
        pred = prediction([s[:150], s[150:], s[::2]], [y[:150], y[150:], y[::2]])

        seq = performance(pred, "prec", "rec")
        par = performance(pred, "prec", "rec", n_jobs=2)
        for a, b in zip(seq.curves, par.curves):
            np.testing.assert_array_equal(a.x, b.x)
            np.testing.assert_array_equal(a.y, b.y)
            np.testing.assert_array_equal(a.cutoffs, b.cutoffs)

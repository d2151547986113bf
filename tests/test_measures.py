"""Pointwise measures and the measure registry."""

import math

import numpy as np
import pytest
from pydantic import ValidationError
from sklearn.metrics import matthews_corrcoef, mutual_info_score

from perfcurves.api import (
    DomainError,
    MeasureMismatchError,
    UndefinedMeasureError,
    describe_measure,
    evaluate_measure,
    list_measures,
)
from perfcurves.contracts.choices import measure_names
from perfcurves.registries.measures import register_measure

# TP=2, FP=1, TN=1, FN=1
COUNTS = (2, 1, 1, 1)
Y_TRUE = [1, 1, 1, 0, 0]
Y_PRED = [1, 1, 0, 1, 0]


class TestPointwiseFormulas:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("acc", 3 / 5),
            ("err", 2 / 5),
            ("tpr", 2 / 3),
            ("sens", 2 / 3),
            ("rec", 2 / 3),
            ("fpr", 1 / 2),
            ("fall", 1 / 2),
            ("fnr", 1 / 3),
            ("miss", 1 / 3),
            ("tnr", 1 / 2),
            ("spec", 1 / 2),
            ("ppv", 2 / 3),
            ("prec", 2 / 3),
            ("npv", 1 / 2),
            ("pcfall", 1 / 3),
            ("pcmiss", 1 / 2),
            ("rpp", 3 / 5),
            ("rnp", 2 / 5),
            ("odds", 2.0),
            ("lift", 10 / 9),
            ("chisq", 5 / 36),
            ("f", 2 / 3),
            ("cost", 2 / 5),
        ],
    )
    def test_worked_counts(self, name, expected):
        assert evaluate_measure(name, *COUNTS) == pytest.approx(expected)

    def test_phi_matches_matthews_corrcoef(self):
        expected = matthews_corrcoef(Y_TRUE, Y_PRED)
        assert evaluate_measure("phi", *COUNTS) == pytest.approx(expected)
        assert evaluate_measure("mat", *COUNTS) == pytest.approx(expected)

    def test_mutual_information_in_bits(self):
        nats = mutual_info_score(Y_TRUE, Y_PRED)
        assert evaluate_measure("mi", *COUNTS) == pytest.approx(nats / math.log(2))

    def test_f_alpha_weights_precision(self):
        # precision 2/3, recall 1/2
        value = evaluate_measure("f", 2, 1, 0, 2, f_alpha=1.0)
        assert value == pytest.approx(2 / 3)
        value = evaluate_measure("f", 2, 1, 0, 2, f_alpha=0.0)
        assert value == pytest.approx(1 / 2)

    def test_cost_with_prior_and_costs(self):
        value = evaluate_measure("cost", *COUNTS, cost_fn=2.0, prior_pos=0.5)
        assert value == pytest.approx(0.5 * (1 / 3) * 2.0 + 0.5 * (1 / 2) * 1.0)

    def test_cutoff_measure_echoes_cutoff(self):
        assert evaluate_measure("cutoff", *COUNTS, cutoff=0.7) == pytest.approx(0.7)

    def test_arrays_broadcast(self):
        out = evaluate_measure("tpr", [0, 1, 2], [0, 0, 1], [2, 2, 1], [3, 2, 1])
        np.testing.assert_allclose(out, [0.0, 1 / 3, 2 / 3])

    def test_explicit_class_totals(self):
        assert evaluate_measure("tpr", 1, 0, 0, 0, n_pos=4, n_neg=0) == pytest.approx(0.25)


class TestUndefinedValues:
    def test_precision_without_positive_predictions(self):
        assert math.isnan(evaluate_measure("prec", 0, 0, 3, 2))

    def test_f_undefined_when_precision_undefined(self):
        assert math.isnan(evaluate_measure("f", 0, 0, 3, 2))

    def test_f_zero_when_nothing_found(self):
        assert evaluate_measure("f", 0, 2, 1, 1) == 0.0

    def test_f_as_recall_ignores_missing_predictions(self):
        # alpha = 0 is recall: defined even with no positive predictions
        assert evaluate_measure("f", 0, 0, 2, 3, f_alpha=0.0) == 0.0
        assert math.isnan(evaluate_measure("f", 0, 0, 2, 0, f_alpha=0.0))

    def test_f_as_precision_ignores_missing_positives(self):
        assert evaluate_measure("f", 0, 2, 1, 0, f_alpha=1.0) == 0.0
        assert math.isnan(evaluate_measure("f", 0, 0, 3, 0, f_alpha=1.0))

    def test_rates_without_negatives(self):
        assert math.isnan(evaluate_measure("fpr", 2, 0, 0, 1))
        assert math.isnan(evaluate_measure("phi", 2, 0, 0, 1))

    def test_odds_with_zero_off_diagonal(self):
        assert math.isnan(evaluate_measure("odds", 2, 0, 2, 0))


class TestEvaluateMeasureErrors:
    def test_unknown_name(self):
        with pytest.raises(UndefinedMeasureError):
            evaluate_measure("nope", *COUNTS)

    @pytest.mark.parametrize("name", ["sar", "cal", "auc", "rch", "prbe", "rmse"])
    def test_measures_that_need_scores(self, name):
        with pytest.raises(MeasureMismatchError):
            evaluate_measure(name, *COUNTS)

    def test_cutoff_outside_domain(self):
        with pytest.raises(DomainError):
            evaluate_measure("cal", *COUNTS, cutoff=1.5)
        with pytest.raises(DomainError):
            evaluate_measure("sar", *COUNTS, cutoff=-0.5)

    def test_cutoff_inside_domain_still_needs_scores(self):
        with pytest.raises(MeasureMismatchError):
            evaluate_measure("cal", *COUNTS, cutoff=0.5)

    def test_invalid_parameter_value(self):
        with pytest.raises(ValidationError):
            evaluate_measure("f", *COUNTS, f_alpha=2.0)

    def test_unknown_parameter(self):
        with pytest.raises(ValidationError):
            evaluate_measure("f", *COUNTS, beta=2.0)


class TestRegistry:
    def test_vocabulary_is_registered(self):
        assert set(list_measures()) == set(measure_names())

    def test_list_by_kind(self):
        assert list_measures("scalar") == ["auc", "mxe", "prbe", "rmse"]
        assert list_measures("curve") == ["ecost", "rch"]
        assert list_measures("window") == ["cal"]

    def test_aliases_share_the_formula_not_the_label(self):
        rec, sens = describe_measure("rec"), describe_measure("sens")
        assert rec.func is sens.func
        assert rec.label == "Recall"
        assert sens.label == "Sensitivity"

    def test_describe_unknown(self):
        with pytest.raises(UndefinedMeasureError):
            describe_measure("roc")

    def test_duplicate_registration_rejected(self):
        list_measures()
        with pytest.raises(KeyError):
            register_measure("tpr", label="Again")(lambda c: c.tp)

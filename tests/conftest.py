"""Shared fixtures.

The small run below is used throughout: at cutoff 0.7 it has TP=2, FP=1,
FN=1, TN=1.
"""

import numpy as np
import pytest

from perfcurves.api import prediction


SCORES = np.array([0.9, 0.8, 0.7, 0.6, 0.5])
LABELS = np.array([1, 1, 0, 1, 0])


@pytest.fixture
def scores():
    return SCORES.copy()


@pytest.fixture
def labels():
    return LABELS.copy()


@pytest.fixture
def small_pred():
    return prediction(SCORES, LABELS)


@pytest.fixture
def two_run_pred():
    """Two runs without a single shared finite cutoff."""
    return prediction(
        [[0.9, 0.7, 0.5, 0.3], [0.8, 0.6, 0.4]],
        [[1, 0, 1, 0], [1, 1, 0]],
    )


@pytest.fixture
def noisy_run():
    rng = np.random.default_rng(7)
    y = rng.integers(0, 2, size=300)
    s = np.round(rng.normal(loc=0.8 * y, scale=1.0), 1)
    return s, y

from __future__ import annotations

"""Public shape utilities for run inputs.

Callers hand over scores and labels in several container shapes. Everything is
normalized here, at the input boundary, into one canonical representation:
a list of 1D arrays, one per run. Nothing downstream special-cases a single run.

Conventions
-----------
- A 1D array-like is one run.
- A list/tuple whose elements are themselves sequences is one run per element.
- A 2D array (or DataFrame-like) holds one run per *column*.
"""

from typing import Any, List, Sequence, Tuple

import numpy as np

from perfcurves.errors import InvalidInputError


def coerce_1d(a: Any) -> np.ndarray:
    """Return ``a`` as a 1D array; a (n, 1) or (1, n) array is flattened."""

    arr = np.asarray(a)
    if arr.ndim == 0:
        raise InvalidInputError(f"Expected a 1D sequence, got a scalar: {a!r}")
    if arr.ndim == 2 and 1 in arr.shape:
        arr = arr.ravel()
    if arr.ndim != 1:
        raise InvalidInputError(f"Expected a 1D sequence, got shape {arr.shape}")
    return arr


def _is_sequence_of_sequences(obj: Sequence[Any]) -> bool:
    nested = [np.ndim(el) >= 1 and not isinstance(el, (str, bytes)) for el in obj]
    if any(nested) and not all(nested):
        raise InvalidInputError("Cannot mix scalars and sequences in one input container.")
    return bool(nested) and all(nested)


def split_runs(obj: Any, *, name: str) -> List[np.ndarray]:
    """Normalize one-or-more runs into a list of 1D arrays."""

    if obj is None:
        raise InvalidInputError(f"'{name}' must not be None.")

    if isinstance(obj, (list, tuple)):
        if len(obj) == 0:
            raise InvalidInputError(f"'{name}' is empty.")
        if _is_sequence_of_sequences(obj):
            return [coerce_1d(el) for el in obj]

    arr = np.asarray(obj)
    if arr.ndim == 1:
        return [arr]
    if arr.ndim == 2:
        return [arr[:, j] for j in range(arr.shape[1])]
    raise InvalidInputError(f"'{name}' must be 1D or 2D; got shape {arr.shape}.")


def coerce_scores(run: np.ndarray, *, index: int) -> np.ndarray:
    try:
        scores = np.asarray(run, dtype=float)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Run {index}: predictions must be numeric ({e}).") from e
    if np.isnan(scores).any():
        raise InvalidInputError(f"Run {index}: predictions contain NaN.")
    if np.isposinf(scores).any():
        raise InvalidInputError(
            f"Run {index}: predictions contain +inf, which is reserved for the cutoff "
            "that predicts nothing positive."
        )
    return scores


def coerce_runs(predictions: Any, labels: Any) -> Tuple[List[np.ndarray], List[np.ndarray]]:
    """Split predictions/labels into aligned per-run arrays.

    - Both inputs must describe the same number of runs.
    - Each run must be non-empty with equal-length scores and labels.
    - Scores must be numeric and free of NaN and +inf.
    """

    score_runs = split_runs(predictions, name="predictions")
    label_runs = split_runs(labels, name="labels")

    if len(score_runs) != len(label_runs):
        raise InvalidInputError(
            f"Number of runs differs: predictions({len(score_runs)}) vs labels({len(label_runs)})."
        )

    out_scores: List[np.ndarray] = []
    for i, (s, y) in enumerate(zip(score_runs, label_runs)):
        if s.shape[0] == 0 or y.shape[0] == 0:
            raise InvalidInputError(f"Run {i} is empty.")
        if s.shape[0] != y.shape[0]:
            raise InvalidInputError(
                f"Run {i}: length mismatch: predictions({s.shape[0]}) vs labels({y.shape[0]})."
            )
        out_scores.append(coerce_scores(s, index=i))

    return out_scores, label_runs

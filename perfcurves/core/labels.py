from __future__ import annotations

"""Label polarity inference.

Labels arrive as any two distinct values. Before any counting they are mapped
to a canonical 0 (negative) / 1 (positive) encoding. The positive class is
chosen deterministically, first rule that applies:

1. an explicit ``label_ordering=(negative, positive)``;
2. the declared category order of a categorical input (last is positive);
3. booleans: ``True`` is positive;
4. numbers: the larger value is positive;
5. strings: the lexicographically later value is positive.
"""

import math
from numbers import Number
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from perfcurves.errors import InvalidInputError

LabelOrdering = Tuple[Any, Any]


def declared_levels(obj: Any) -> Optional[List[Any]]:
    """Category order of a categorical container (pandas-like), if it has one."""

    for holder in (obj, getattr(obj, "cat", None)):
        categories = getattr(holder, "categories", None)
        if categories is not None:
            return list(categories)
    return None


def _observed_values(label_runs: Sequence[np.ndarray]) -> List[Any]:
    seen: List[Any] = []
    for run in label_runs:
        for v in np.asarray(run).tolist():
            if isinstance(v, float) and math.isnan(v):
                raise InvalidInputError("Labels contain NaN.")
            if v not in seen:
                seen.append(v)
    return seen


def _natural_order(values: List[Any]) -> List[Any]:
    if all(isinstance(v, bool) for v in values):
        return sorted(values)
    if all(isinstance(v, Number) and not isinstance(v, bool) for v in values):
        return sorted(values)
    if all(isinstance(v, str) for v in values):
        return sorted(values)
    kinds = sorted({type(v).__name__ for v in values})
    raise InvalidInputError(f"Labels mix incompatible types: {kinds}.")


def infer_label_ordering(
    label_runs: Sequence[np.ndarray],
    *,
    label_ordering: Optional[Sequence[Any]] = None,
    levels: Optional[Sequence[Any]] = None,
) -> LabelOrdering:
    """Return ``(negative, positive)`` for the labels of all runs."""

    observed = _observed_values(label_runs)

    explicit = label_ordering if label_ordering is not None else levels
    if explicit is not None:
        explicit = list(explicit)
        if len(explicit) != 2 or explicit[0] == explicit[1]:
            raise InvalidInputError(
                f"Label ordering must name exactly two distinct classes; got {explicit!r}."
            )
        unknown = [v for v in observed if v not in explicit]
        if unknown:
            raise InvalidInputError(
                f"Labels {unknown!r} are not part of the label ordering {explicit!r}."
            )
        return explicit[0], explicit[1]

    if len(observed) != 2:
        raise InvalidInputError(
            "Binary classification requires exactly two label classes; "
            f"found {len(observed)}: {observed!r}."
        )

    neg, pos = _natural_order(observed)
    return neg, pos


def binarize_labels(labels: np.ndarray, ordering: LabelOrdering) -> np.ndarray:
    """Map raw labels to 0 (negative) / 1 (positive)."""

    pos = ordering[1]
    return np.asarray([v == pos for v in np.asarray(labels).tolist()], dtype=np.int8)

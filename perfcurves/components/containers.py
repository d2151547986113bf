from __future__ import annotations

"""Immutable result holders.

- ``Run`` / ``Prediction``: normalized inputs of one or more runs.
- ``Curve`` / ``Performance``: per-run curves for one measure pair.
- ``Spread`` / ``AveragedCurve``: the output of curve averaging.

All arrays are copied and made read-only on construction. No behaviour
beyond construction-time validation and read access lives here.
"""

from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, List, Mapping, Optional, Tuple

import numpy as np

from perfcurves.contracts.choices import AveragingMode, SpreadMode
from perfcurves.contracts.results import (
    AveragedCurvePayload,
    CurvePayload,
    PerformancePayload,
    SpreadPayload,
    finite_or_none_list,
)
from perfcurves.errors import InvalidInputError
from perfcurves.components.evaluation.confusion import ConfusionTable, compute_confusion


def _frozen_array(a: Any, dtype: Any = None) -> Optional[np.ndarray]:
    if a is None:
        return None
    arr = np.array(a, dtype=dtype, copy=True)
    arr.setflags(write=False)
    return arr


# -----------------------------
# Inputs
# -----------------------------


@dataclass(frozen=True, eq=False)
class Run:
    """One fold: scores, canonical 0/1 labels and the labels as given."""

    scores: np.ndarray
    labels: np.ndarray
    raw_labels: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "scores", _frozen_array(self.scores, float))
        object.__setattr__(self, "labels", _frozen_array(self.labels, np.int8))
        object.__setattr__(self, "raw_labels", _frozen_array(self.raw_labels))
        n = self.scores.shape[0]
        if n == 0:
            raise InvalidInputError("A run needs at least one prediction.")
        if self.labels.shape[0] != n or self.raw_labels.shape[0] != n:
            raise InvalidInputError("Scores and labels of a run must have equal length.")

    @cached_property
    def table(self) -> ConfusionTable:
        """Confusion counts at the run's natural cutoffs."""
        return compute_confusion(self.scores, self.labels)

    @property
    def n_pos(self) -> int:
        return int(self.labels.sum())

    @property
    def n_neg(self) -> int:
        return int(self.labels.shape[0] - self.labels.sum())

    def __len__(self) -> int:
        return int(self.scores.shape[0])


@dataclass(frozen=True, eq=False)
class Prediction:
    """One or more runs sharing a label ordering ``(negative, positive)``."""

    runs: Tuple[Run, ...]
    label_ordering: Tuple[Any, Any]

    def __post_init__(self) -> None:
        object.__setattr__(self, "runs", tuple(self.runs))
        if not self.runs:
            raise InvalidInputError("A prediction needs at least one run.")

    @property
    def n_runs(self) -> int:
        return len(self.runs)

    @property
    def tables(self) -> List[ConfusionTable]:
        return [r.table for r in self.runs]

    # Per-run views, one list entry per run.

    @property
    def predictions(self) -> List[np.ndarray]:
        return [r.scores for r in self.runs]

    @property
    def labels(self) -> List[np.ndarray]:
        return [r.raw_labels for r in self.runs]

    @property
    def cutoffs(self) -> List[np.ndarray]:
        return [t.cutoffs for t in self.tables]

    @property
    def tp(self) -> List[np.ndarray]:
        return [t.tp for t in self.tables]

    @property
    def fp(self) -> List[np.ndarray]:
        return [t.fp for t in self.tables]

    @property
    def tn(self) -> List[np.ndarray]:
        return [t.tn for t in self.tables]

    @property
    def fn(self) -> List[np.ndarray]:
        return [t.fn for t in self.tables]

    @property
    def n_pos(self) -> List[int]:
        return [t.n_pos for t in self.tables]

    @property
    def n_neg(self) -> List[int]:
        return [t.n_neg for t in self.tables]

    @property
    def n_pos_pred(self) -> List[np.ndarray]:
        return [t.n_pos_pred for t in self.tables]

    @property
    def n_neg_pred(self) -> List[np.ndarray]:
        return [t.n_neg_pred for t in self.tables]


# -----------------------------
# Curves
# -----------------------------


@dataclass(frozen=True, eq=False)
class Curve:
    """Points of one run for one (x, y) measure pair, by decreasing cutoff.

    ``x`` is None for scalar measures; ``cutoffs`` is None for measures with
    their own x axis (and for most scalar measures).
    """

    y_name: str
    y: np.ndarray
    x_name: Optional[str] = None
    x: Optional[np.ndarray] = None
    cutoffs: Optional[np.ndarray] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "y", _frozen_array(self.y, float))
        object.__setattr__(self, "x", _frozen_array(self.x, float))
        object.__setattr__(self, "cutoffs", _frozen_array(self.cutoffs, float))
        n = self.y.shape[0]
        if self.x is not None and self.x.shape[0] != n:
            raise InvalidInputError(f"Curve x/y length mismatch: {self.x.shape[0]} vs {n}.")
        if self.cutoffs is not None and self.cutoffs.shape[0] != n:
            raise InvalidInputError(
                f"Curve cutoffs/y length mismatch: {self.cutoffs.shape[0]} vs {n}."
            )

    def __len__(self) -> int:
        return int(self.y.shape[0])

    def points(self) -> List[Tuple[Optional[float], Optional[float], float]]:
        """(cutoff, x, y) triples in curve order."""
        n = len(self)
        cut = self.cutoffs.tolist() if self.cutoffs is not None else [None] * n
        xs = self.x.tolist() if self.x is not None else [None] * n
        return list(zip(cut, xs, self.y.tolist()))

    def to_payload(self) -> CurvePayload:
        return CurvePayload(
            cutoffs=finite_or_none_list(self.cutoffs),
            x=finite_or_none_list(self.x),
            y=finite_or_none_list(self.y) or [],
        )


@dataclass(frozen=True, eq=False)
class Performance:
    """Per-run curves of one measure pair, plus their metadata."""

    y_name: str
    y_label: str
    curves: Tuple[Curve, ...]
    x_name: Optional[str] = None
    x_label: Optional[str] = None
    alpha_name: Optional[str] = None
    params: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "curves", tuple(self.curves))
        object.__setattr__(self, "params", dict(self.params))

    @property
    def n_runs(self) -> int:
        return len(self.curves)

    @property
    def x_values(self) -> List[Optional[np.ndarray]]:
        return [c.x for c in self.curves]

    @property
    def y_values(self) -> List[np.ndarray]:
        return [c.y for c in self.curves]

    @property
    def alpha_values(self) -> List[Optional[np.ndarray]]:
        return [c.cutoffs for c in self.curves]

    def to_payload(self) -> PerformancePayload:
        return PerformancePayload(
            x_name=self.x_name,
            y_name=self.y_name,
            alpha_name=self.alpha_name,
            x_label=self.x_label,
            y_label=self.y_label,
            params=dict(self.params),
            runs=[c.to_payload() for c in self.curves],
        )


# -----------------------------
# Averaging output
# -----------------------------


@dataclass(frozen=True, eq=False)
class Spread:
    """Per-point variability across runs.

    ``stats`` maps a statistic name to an array parallel to the averaged
    curve: ``stddev``, ``stderror``, or ``min``/``q1``/``median``/``q3``/``max``.
    """

    kind: SpreadMode
    stats: Mapping[str, np.ndarray]

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "stats", {k: _frozen_array(v, float) for k, v in self.stats.items()}
        )

    def to_payload(self) -> SpreadPayload:
        return SpreadPayload(
            kind=self.kind,
            stats={k: finite_or_none_list(v) or [] for k, v in self.stats.items()},
        )


@dataclass(frozen=True, eq=False)
class AveragedCurve:
    """One curve averaged over ``n_runs`` runs.

    ``counts[i]`` is the number of runs that contributed to point ``i``.
    ``x_spread``/``y_spread`` are None when not requested, not applicable to
    the mode, or when only one run was averaged.
    """

    mode: AveragingMode
    y_name: str
    x_name: Optional[str]
    x: np.ndarray
    y: np.ndarray
    counts: np.ndarray
    n_runs: int
    cutoffs: Optional[np.ndarray] = None
    x_spread: Optional[Spread] = None
    y_spread: Optional[Spread] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", _frozen_array(self.x, float))
        object.__setattr__(self, "y", _frozen_array(self.y, float))
        object.__setattr__(self, "counts", _frozen_array(self.counts, int))
        object.__setattr__(self, "cutoffs", _frozen_array(self.cutoffs, float))

    def __len__(self) -> int:
        return int(self.y.shape[0])

    def as_curve(self) -> Curve:
        return Curve(y_name=self.y_name, y=self.y, x_name=self.x_name, x=self.x, cutoffs=self.cutoffs)

    def to_payload(self) -> AveragedCurvePayload:
        return AveragedCurvePayload(
            mode=self.mode,
            x_name=self.x_name,
            y_name=self.y_name,
            n_runs=self.n_runs,
            curve=self.as_curve().to_payload(),
            counts=[int(v) for v in self.counts.tolist()],
            x_spread=None if self.x_spread is None else self.x_spread.to_payload(),
            y_spread=None if self.y_spread is None else self.y_spread.to_payload(),
        )


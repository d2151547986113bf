from __future__ import annotations

"""Internal evaluation payload types.

These are not result contracts; they are the typed shapes measure functions
receive and return inside the engine.
"""

from dataclasses import dataclass
from functools import cached_property
from typing import Any, Optional

import numpy as np

from perfcurves.contracts.measure_configs import MeasureParams
from perfcurves.components.evaluation.confusion import ConfusionTable, compute_confusion


@dataclass(frozen=True)
class RunInputs:
    """Scores and 0/1 labels of one run plus the measure parameters in effect."""

    scores: np.ndarray
    labels: np.ndarray
    params: MeasureParams
    natural_table: Optional[ConfusionTable] = None

    @cached_property
    def table(self) -> ConfusionTable:
        if self.natural_table is not None:
            return self.natural_table
        return compute_confusion(self.scores, self.labels)


@dataclass(frozen=True)
class Counts:
    """Confusion counts handed to pointwise measures.

    All count fields broadcast against each other; ``n_pos``/``n_neg`` may be
    scalars. ``run`` is only set when the counts come from a run, for measures
    that also need the raw scores.
    """

    tp: np.ndarray
    fp: np.ndarray
    tn: np.ndarray
    fn: np.ndarray
    n_pos: Any
    n_neg: Any
    params: MeasureParams
    cutoffs: Optional[np.ndarray] = None
    run: Optional[RunInputs] = None

    @classmethod
    def from_table(cls, table: ConfusionTable, run: RunInputs) -> "Counts":
        return cls(
            tp=table.tp.astype(float),
            fp=table.fp.astype(float),
            tn=table.tn.astype(float),
            fn=table.fn.astype(float),
            n_pos=float(table.n_pos),
            n_neg=float(table.n_neg),
            params=run.params,
            cutoffs=table.cutoffs,
            run=run,
        )

    @property
    def n(self) -> Any:
        return self.n_pos + self.n_neg

    @property
    def n_pos_pred(self) -> np.ndarray:
        return self.tp + self.fp

    @property
    def n_neg_pred(self) -> np.ndarray:
        return self.tn + self.fn


@dataclass(frozen=True)
class MeasureSeries:
    """One measure evaluated on one run.

    - cutoff/window measures: ``cutoffs`` and ``values`` are parallel.
    - curve measures: ``x`` and ``values`` are parallel, ``cutoffs`` is None.
    - scalar measures: ``values`` has one element; ``cutoffs`` optionally
      holds the cutoff the value was reached at.
    """

    values: np.ndarray
    cutoffs: Optional[np.ndarray] = None
    x: Optional[np.ndarray] = None

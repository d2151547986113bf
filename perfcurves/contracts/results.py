from __future__ import annotations

"""Result contracts handed to downstream consumers (plotting, reporting).

These models represent *outputs* of the curve builder and averager and are
intended to be stable across consumer changes.

Design goals:
- JSON-friendly field types (lists, dicts, scalars) at the contract boundary.
- Strict top-level validation (extra fields forbidden) to prevent silent drift.
- Non-finite numbers (NaN, +/-inf) are exported as ``None``.

Note: contracts should only depend on stdlib + numpy + pydantic.
"""

import math
from typing import Any, Dict, List, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict

from .choices import AveragingMode, SpreadMode


class ResultModel(BaseModel):
    """Base class for result contracts (strict by default)."""

    model_config = ConfigDict(extra="forbid")


FloatList = List[Optional[float]]


def finite_or_none(x: Any) -> Optional[float]:
    """Return float(x) if it's finite, otherwise None."""

    try:
        f = float(x)
    except (TypeError, ValueError):
        return None
    return f if math.isfinite(f) else None


def finite_or_none_list(arr: Any) -> Optional[FloatList]:
    if arr is None:
        return None
    return [finite_or_none(v) for v in np.asarray(arr, dtype=float).ravel().tolist()]


class CurvePayload(ResultModel):
    cutoffs: Optional[FloatList] = None
    x: Optional[FloatList] = None
    y: FloatList


class PerformancePayload(ResultModel):
    x_name: Optional[str]
    y_name: str
    alpha_name: Optional[str]
    x_label: Optional[str]
    y_label: str
    params: Dict[str, Any]
    runs: List[CurvePayload]


class SpreadPayload(ResultModel):
    kind: SpreadMode
    stats: Dict[str, FloatList]


class AveragedCurvePayload(ResultModel):
    mode: AveragingMode
    x_name: Optional[str]
    y_name: str
    n_runs: int
    curve: CurvePayload
    counts: List[int]
    x_spread: Optional[SpreadPayload] = None
    y_spread: Optional[SpreadPayload] = None

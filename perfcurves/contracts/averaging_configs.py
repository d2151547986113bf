from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .choices import AveragingMode, SpreadMode


class AveragingConfig(BaseModel):
    """
    Configuration for combining per-run curves into one averaged curve.

    Attributes
    ----------
    mode:
        ``threshold`` aligns runs on shared cutoffs, ``vertical`` on a fixed
        x grid, ``horizontal`` on a fixed y grid. ``none`` leaves the runs
        untouched.

    spread:
        Per-point variability across runs: sample standard deviation,
        standard error, or the five-number boxplot summary.

    n_points:
        Grid size for vertical/horizontal averaging. ``None`` uses the length
        of the longest run curve.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    mode: AveragingMode = "threshold"
    spread: SpreadMode = "stddev"
    n_points: Optional[int] = Field(default=None, ge=2)

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MeasureParams(BaseModel):
    """
    Parameters read by the measures that need them.

    Every measure receives the same ``MeasureParams`` instance and only reads
    the fields listed in its registry entry; unknown keys are rejected so a
    typo never silently falls back to a default.

    Attributes
    ----------
    f_alpha:
        Weight of precision in the F-measure,
        ``F = 1 / (alpha / precision + (1 - alpha) / recall)``. 0.5 is the
        balanced F1 score.

    cost_fp, cost_fn:
        Costs of a false positive / false negative for the explicit ``cost``
        measure.

    prior_pos:
        Prior probability of the positive class used by ``cost``. ``None``
        uses the empirical class ratio of the run.

    window_size:
        Number of consecutive (sorted) instances per window for the
        calibration error ``cal``.

    fpr_stop:
        Upper false positive rate bound for partial ``auc``. 1.0 integrates
        the whole ROC curve.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    f_alpha: float = Field(default=0.5, ge=0.0, le=1.0)
    cost_fp: float = Field(default=1.0, ge=0.0)
    cost_fn: float = Field(default=1.0, ge=0.0)
    prior_pos: Optional[float] = Field(default=None, gt=0.0, lt=1.0)
    window_size: int = Field(default=100, ge=1)
    fpr_stop: float = Field(default=1.0, ge=0.0, le=1.0)

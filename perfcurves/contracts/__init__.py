"""Configuration and result contracts.

Pydantic models and Literal-based choice types used to validate measure
parameters and averaging requests, plus the JSON-friendly result models.

Export policy:
- Keep module imports explicit in most of the codebase:
    from perfcurves.contracts.measure_configs import MeasureParams
- The names re-exported here are a small set of convenience imports.
"""

from .choices import AveragingMode, MeasureKind, MeasureName, SpreadMode
from .measure_configs import MeasureParams
from .averaging_configs import AveragingConfig
from .results import AveragedCurvePayload, CurvePayload, PerformancePayload, SpreadPayload

__all__ = [
    "AveragingMode",
    "MeasureKind",
    "MeasureName",
    "SpreadMode",
    "MeasureParams",
    "AveragingConfig",
    "CurvePayload",
    "PerformancePayload",
    "SpreadPayload",
    "AveragedCurvePayload",
]

from __future__ import annotations

"""Literal-based "choice" types used across perfcurves.

This module centralizes the small enumerations (TypeAlias + Literal) that are
shared across configs, registries and containers.

Design intent:
- Keep this file dependency-free (stdlib + typing only).
- Prefer importing choice sets from here rather than repeating Literal[...] in
  multiple modules.
"""

from typing import Literal, Tuple, TypeAlias, get_args


# -----------------------------
# Measures
# -----------------------------

# The public measure vocabulary. Callers request measures by these exact strings.
MeasureName: TypeAlias = Literal[
    "cutoff",
    "acc",
    "err",
    "fpr",
    "fall",
    "tpr",
    "rec",
    "sens",
    "fnr",
    "miss",
    "tnr",
    "spec",
    "ppv",
    "prec",
    "npv",
    "pcfall",
    "pcmiss",
    "rpp",
    "rnp",
    "phi",
    "mat",
    "mi",
    "chisq",
    "odds",
    "lift",
    "f",
    "cost",
    "sar",
    "cal",
    "rch",
    "ecost",
    "auc",
    "prbe",
    "mxe",
    "rmse",
]

# How a measure relates to cutoffs:
# - cutoff: one value per cutoff, a pure function of the confusion counts
# - window: one value per window of sorted scores, indexed by a derived cutoff
# - curve:  a whole curve with its own x axis (no cutoffs)
# - scalar: a single value per run
MeasureKind: TypeAlias = Literal["cutoff", "window", "curve", "scalar"]


# -----------------------------
# Averaging
# -----------------------------

AveragingMode: TypeAlias = Literal["none", "threshold", "vertical", "horizontal"]

SpreadMode: TypeAlias = Literal["none", "stddev", "stderror", "boxplot"]

BOXPLOT_STATS: Tuple[str, ...] = ("min", "q1", "median", "q3", "max")


def measure_names() -> Tuple[str, ...]:
    return get_args(MeasureName)

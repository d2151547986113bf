from __future__ import annotations

"""Measure registry.

Maps every public measure name to a :class:`MeasureSpec`. Built-in measures
are registered in :mod:`perfcurves.registries.builtins.measures`; the rest of
the engine only looks measures up by name through :func:`parse_measure`.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Tuple

import numpy as np

from perfcurves.contracts.choices import MeasureKind
from perfcurves.errors import DomainError, UndefinedMeasureError
from perfcurves.registries.base import Registry

Domain = Tuple[float, float]

UNIT_INTERVAL: Domain = (0.0, 1.0)


@dataclass(frozen=True)
class MeasureSpec:
    """Static description of one measure.

    Attributes
    ----------
    name:
        Public identifier, e.g. ``"tpr"``.
    label:
        Human-readable name for axis titles.
    kind:
        ``cutoff`` (pointwise), ``window``, ``curve`` or ``scalar``.
    func:
        The computation. Signature depends on ``kind``:
        cutoff -> ``f(Counts) -> ndarray``; window -> ``f(RunInputs) -> (cutoffs, values)``;
        curve -> ``f(RunInputs) -> (x, y)``; scalar -> ``f(RunInputs) -> (value, cutoff)``.
    domain:
        Allowed range for scores and requested cutoffs, or None if unrestricted.
    params:
        Names of the :class:`MeasureParams` fields the measure reads.
    needs_scores:
        Pointwise measure that also needs the run's raw scores.
    x_axis, x_label:
        Name/label of the own x axis of ``curve`` measures.
    """

    name: str
    label: str
    kind: MeasureKind
    func: Callable[..., Any]
    domain: Optional[Domain] = None
    params: Tuple[str, ...] = ()
    needs_scores: bool = False
    x_axis: Optional[str] = None
    x_label: Optional[str] = None

    @property
    def is_cutoff_indexed(self) -> bool:
        return self.kind in ("cutoff", "window")

    def _outside(self, values: np.ndarray) -> np.ndarray:
        lo, hi = self.domain  # type: ignore[misc]
        return (values < lo) | (values > hi)

    def check_scores(self, scores: np.ndarray) -> None:
        if self.domain is None:
            return
        if self._outside(np.asarray(scores, dtype=float)).any():
            lo, hi = self.domain
            raise DomainError(
                f"Measure '{self.name}' needs predictions in [{lo}, {hi}] "
                "(they are read as probabilities)."
            )

    def check_cutoffs(self, cutoffs: Any) -> None:
        if self.domain is None:
            return
        c = np.atleast_1d(np.asarray(cutoffs, dtype=float))
        # +inf predicts nothing positive and is valid for every measure
        bad = c[self._outside(c) & ~np.isposinf(c)]
        if bad.size:
            lo, hi = self.domain
            raise DomainError(
                f"Measure '{self.name}' is only defined for cutoffs in [{lo}, {hi}]; "
                f"got {bad.tolist()}."
            )


_MEASURES: Registry[str, MeasureSpec] = Registry(_name="measures")

_BUILTINS_LOADED = False


def register_measure(
    name: str,
    *,
    label: str,
    kind: MeasureKind = "cutoff",
    domain: Optional[Domain] = None,
    params: Iterable[str] = (),
    needs_scores: bool = False,
    x_axis: Optional[str] = None,
    x_label: Optional[str] = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator registering ``func`` under ``name``; stack it for aliases."""

    def deco(func: Callable[..., Any]) -> Callable[..., Any]:
        _MEASURES.add(
            name,
            MeasureSpec(
                name=name,
                label=label,
                kind=kind,
                func=func,
                domain=domain,
                params=tuple(params),
                needs_scores=needs_scores,
                x_axis=x_axis,
                x_label=x_label,
            ),
        )
        return func

    return deco


def _ensure_builtins() -> None:
    global _BUILTINS_LOADED
    if _BUILTINS_LOADED:
        return
    from perfcurves.registries.builtins import measures as _  # noqa: F401
    _BUILTINS_LOADED = True


def parse_measure(name: str) -> MeasureSpec:
    """Look a measure up by its public name; unknown names fail here."""

    _ensure_builtins()
    spec = _MEASURES.try_get(str(name))
    if spec is None:
        raise UndefinedMeasureError(
            f"Unknown performance measure {name!r}. Supported: {list_measures()}"
        )
    return spec


def list_measures(kind: Optional[MeasureKind] = None) -> list[str]:
    _ensure_builtins()
    return sorted(s.name for s in _MEASURES.values() if kind is None or s.kind == kind)

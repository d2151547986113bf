from __future__ import annotations

from typing import Any, Optional, Sequence, Union

import numpy as np

from perfcurves.contracts.measure_configs import MeasureParams
from perfcurves.errors import MeasureMismatchError
from perfcurves.registries.measures import MeasureSpec, parse_measure
from perfcurves.components.curves.interpolation import step_lookup
from perfcurves.components.evaluation.confusion import compute_confusion, normalize_cutoffs
from perfcurves.components.evaluation.types import Counts, MeasureSeries, RunInputs


def evaluate_series(
    spec: MeasureSpec,
    run: RunInputs,
    cutoffs: Optional[Sequence[float]] = None,
) -> MeasureSeries:
    """Evaluate one measure on one run.

    Parameters
    ----------
    spec : MeasureSpec
        The measure, as returned by ``parse_measure``.
    run : RunInputs
        Scores, 0/1 labels and parameters of the run.
    cutoffs : sequence of float, optional
        Explicit cutoffs for cutoff-indexed measures. By default the run's
        natural cutoffs (window medians for ``window`` measures) are used.

    Raises
    ------
    DomainError
        Scores or requested cutoffs outside the measure's domain.
    MeasureMismatchError
        Explicit cutoffs requested for a curve or scalar measure.
    """
    spec.check_scores(run.scores)

    requested = None
    if cutoffs is not None:
        if not spec.is_cutoff_indexed:
            raise MeasureMismatchError(
                f"Measure '{spec.name}' is a {spec.kind} measure and is not evaluated at cutoffs."
            )
        requested = normalize_cutoffs(cutoffs)
        spec.check_cutoffs(requested)

    if spec.kind == "cutoff":
        table = run.table if requested is None else compute_confusion(run.scores, run.labels, requested)
        values = np.asarray(spec.func(Counts.from_table(table, run)), dtype=float)
        return MeasureSeries(values=values, cutoffs=np.asarray(table.cutoffs, dtype=float))

    if spec.kind == "window":
        own_cutoffs, values = spec.func(run)
        if requested is None:
            return MeasureSeries(values=np.asarray(values, dtype=float), cutoffs=own_cutoffs)
        return MeasureSeries(values=step_lookup(own_cutoffs, values, requested), cutoffs=requested)

    if spec.kind == "curve":
        x, y = spec.func(run)
        return MeasureSeries(values=np.asarray(y, dtype=float), x=np.asarray(x, dtype=float))

    value, at_cutoff = spec.func(run)
    return MeasureSeries(
        values=np.array([value], dtype=float),
        cutoffs=None if at_cutoff is None else np.array([at_cutoff], dtype=float),
    )


def evaluate_measure(
    name: str,
    tp: Any,
    fp: Any,
    tn: Any,
    fn: Any,
    *,
    cutoff: Any = None,
    n_pos: Any = None,
    n_neg: Any = None,
    params: Optional[MeasureParams] = None,
    **param_kwargs: Any,
) -> Union[float, np.ndarray]:
    """Evaluate a pointwise measure directly on confusion counts.

    Counts may be scalars or arrays (broadcast together). ``n_pos``/``n_neg``
    default to ``tp + fn`` / ``fp + tn``. Returns a float for scalar input.

    A ``cutoff`` outside the measure's domain raises :class:`DomainError`
    for every measure; measures that need more than the counts then raise
    :class:`MeasureMismatchError`.
    """
    spec = parse_measure(name)
    if cutoff is not None:
        spec.check_cutoffs(cutoff)
    if spec.kind != "cutoff" or spec.needs_scores:
        raise MeasureMismatchError(
            f"Measure '{spec.name}' cannot be computed from confusion counts alone."
        )
    if params is None:
        params = MeasureParams(**param_kwargs)

    tp, fp, tn, fn = (np.asarray(v, dtype=float) for v in (tp, fp, tn, fn))

    counts = Counts(
        tp=tp,
        fp=fp,
        tn=tn,
        fn=fn,
        n_pos=tp + fn if n_pos is None else np.asarray(n_pos, dtype=float),
        n_neg=fp + tn if n_neg is None else np.asarray(n_neg, dtype=float),
        params=params,
        cutoffs=None if cutoff is None else np.asarray(cutoff, dtype=float),
    )
    out = np.asarray(spec.func(counts), dtype=float)
    return float(out) if out.ndim == 0 else out

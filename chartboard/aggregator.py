"""
Grouping statistics for Chartboard.

Pure functions of their inputs: the same records always give the same
aggregates, in the same order.  Groups appear in discovery order unless
a chart asks for a ranked (descending) ordering or supplies the full
key list itself.

Quantiles use linear interpolation between closest ranks (NumPy's
default ``"linear"`` method), so ``[1..10]`` gives p25 = 3.25,
median = 5.5 and p75 = 7.75.
"""

from collections import OrderedDict
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .data_model import (
    Aggregate, BoxStats, GridCell, HistogramSeries, Record,
    SankeyGraph, SankeyLink, SankeyNode, StreamMatrix,
)


KeyFn = Callable[[Record], Any]

STAT_COUNT = "count"
STAT_MEAN = "mean"


def _as_key(value: Any) -> Tuple[Any, ...]:
    return value if isinstance(value, tuple) else (value,)


def field_key(*fields: str) -> KeyFn:
    """Key extractor for one or more record fields (compound if several)."""
    if len(fields) == 1:
        name = fields[0]
        return lambda rec: rec[name]
    return lambda rec: tuple(rec[f] for f in fields)


def distinct(records: Iterable[Record], key_fn: KeyFn) -> Tuple[Any, ...]:
    """Distinct key values in discovery order."""
    return tuple(OrderedDict.fromkeys(key_fn(rec) for rec in records))


def group_records(
    records: Iterable[Record],
    key_fn: KeyFn,
) -> "OrderedDict[Tuple[Any, ...], List[Record]]":
    """Group *records* by ``key_fn``, preserving discovery order."""
    groups: "OrderedDict[Tuple[Any, ...], List[Record]]" = OrderedDict()
    for rec in records:
        groups.setdefault(_as_key(key_fn(rec)), []).append(rec)
    return groups


# ── Count / mean ─────────────────────────────────────────────────────────

def aggregate(
    records: Iterable[Record],
    key_fn: KeyFn,
    stat: str = STAT_COUNT,
    value_field: Optional[str] = None,
    *,
    ranked: bool = False,
    keys: Optional[Sequence[Any]] = None,
) -> Tuple[Aggregate, ...]:
    """One ``Aggregate`` per distinct key.

    Parameters
    ----------
    records : iterable of Record
    key_fn : callable
        Record → key (scalar or tuple for compound keys).
    stat : str
        ``"count"`` or ``"mean"``.
    value_field : str, optional
        Numeric field averaged when ``stat == "mean"``.
    ranked : bool
        Sort descending by value; ties keep discovery order.
    keys : sequence, optional
        Complete key list.  Keys without records are emitted with a
        zero value; output follows this order (before ranking).

    Raises
    ------
    ValueError
        Unknown *stat*, or ``"mean"`` without *value_field*.
    """
    if stat not in (STAT_COUNT, STAT_MEAN):
        raise ValueError(f"Unsupported statistic: {stat!r}")
    if stat == STAT_MEAN and value_field is None:
        raise ValueError("Mean aggregation needs a value_field.")

    groups = group_records(records, key_fn)
    if keys is not None:
        ordered = [_as_key(k) for k in keys]
    else:
        ordered = list(groups)

    result = []
    for key in ordered:
        members = groups.get(key, [])
        n = len(members)
        if stat == STAT_COUNT:
            value = float(n)
        elif n:
            value = float(np.mean([rec[value_field] for rec in members]))
        else:
            value = 0.0
        result.append(Aggregate(key=key, stat=stat, value=value, n=n))

    if ranked:
        result.sort(key=lambda agg: -agg.value)
    return tuple(result)


# ── Quantiles ────────────────────────────────────────────────────────────

def quantile(values: Sequence[float], p: float) -> float:
    """Linear-interpolation quantile of *values* (need not be sorted)."""
    if len(values) == 0:
        raise ValueError("quantile of an empty sequence")
    if not 0.0 <= p <= 1.0:
        raise ValueError(f"quantile probability out of range: {p}")
    return float(np.quantile(np.asarray(values, dtype=float), p))


def box_stats(
    records: Iterable[Record],
    key_fn: KeyFn,
    value_field: str,
) -> Tuple[BoxStats, ...]:
    """Min, p25, median, p75 and max of *value_field* per group."""
    result = []
    for key, members in group_records(records, key_fn).items():
        values = np.sort(np.asarray([rec[value_field] for rec in members],
                                    dtype=float))
        q1, med, q3 = np.quantile(values, [0.25, 0.5, 0.75])
        result.append(BoxStats(
            key=key,
            min=float(values[0]),
            p25=float(q1),
            median=float(med),
            p75=float(q3),
            max=float(values[-1]),
            n=len(values),
        ))
    return tuple(result)


def quantile_buckets(values: Sequence[float], n: int) -> Tuple[int, ...]:
    """Bucket index ``0..n-1`` of each value under a quantile scale.

    The ``n - 1`` thresholds are the quantiles ``1/n … (n-1)/n`` of
    *values*; a value falls in the bucket of the first threshold strictly
    greater than it.
    """
    if n < 1:
        raise ValueError(f"bucket count must be positive, got {n}")
    if len(values) == 0:
        return ()
    arr = np.asarray(values, dtype=float)
    probs = [i / n for i in range(1, n)]
    thresholds = np.quantile(arr, probs) if probs else np.empty(0)
    return tuple(int(i) for i in np.searchsorted(thresholds, arr, side='right'))


# ── Grids and matrices ───────────────────────────────────────────────────

def complete_grid(
    records: Iterable[Record],
    row_fn: KeyFn,
    col_fn: KeyFn,
    rows: Sequence[str],
    cols: Sequence[str],
) -> Tuple[GridCell, ...]:
    """Count per (row, column) over the full ``rows × cols`` product.

    *rows* and *cols* normally come from the unfiltered dataset, so a
    filtered subset still yields every combination, zero-filled.  Cells
    are ordered row-major.
    """
    counts: Dict[Tuple[str, str], int] = {}
    for rec in records:
        key = (row_fn(rec), col_fn(rec))
        counts[key] = counts.get(key, 0) + 1
    return tuple(
        GridCell(row=r, column=c, count=counts.get((r, c), 0))
        for r in rows
        for c in cols
    )


def stream_matrix(
    records: Iterable[Record],
    series_fn: KeyFn,
    year_field: str,
    *,
    series_order: Optional[Sequence[str]] = None,
) -> StreamMatrix:
    """Count records per year and series, zero-filling missing pairs.

    Years are ascending.  Series follow discovery order, or
    *series_order* when given (records of other series are ignored).
    """
    records = list(records)
    if series_order is None:
        series = distinct(records, series_fn)
    else:
        series = tuple(series_order)
    years = tuple(sorted({int(rec[year_field]) for rec in records}))

    year_idx = {y: i for i, y in enumerate(years)}
    series_idx = {s: j for j, s in enumerate(series)}
    grid = np.zeros((len(years), len(series)), dtype=int)
    for rec in records:
        j = series_idx.get(series_fn(rec))
        if j is None:
            continue
        grid[year_idx[int(rec[year_field])], j] += 1

    return StreamMatrix(
        years=years,
        series=series,
        counts=tuple(tuple(int(v) for v in row) for row in grid),
    )


def histogram(
    records: Iterable[Record],
    key_fn: KeyFn,
    value_field: str,
    *,
    bins: int,
    domain: Optional[Tuple[float, float]] = None,
) -> Tuple[HistogramSeries, ...]:
    """Per-group histograms over shared, equal-width bins.

    The domain defaults to ``[0, max]`` of *value_field* over all
    records, so every group is binned on the same edges.  Values below
    zero fall outside the domain and are not counted.
    """
    groups = group_records(records, key_fn)
    if not groups:
        return ()
    if domain is None:
        top = max(rec[value_field] for members in groups.values()
                  for rec in members)
        # All-negative groups would otherwise reverse the range
        domain = (0.0, max(float(top), 0.0))

    edges = np.histogram_bin_edges([], bins=bins, range=domain)
    result = []
    for key, members in groups.items():
        counts, _ = np.histogram(
            [rec[value_field] for rec in members], bins=edges,
        )
        result.append(HistogramSeries(
            key=key[0] if len(key) == 1 else " / ".join(map(str, key)),
            edges=tuple(float(e) for e in edges),
            counts=tuple(int(c) for c in counts),
        ))
    return tuple(result)


def sankey_graph(
    records: Iterable[Record],
    source_fn: KeyFn,
    target_fn: KeyFn,
) -> SankeyGraph:
    """Flow counts from source categories to target categories.

    Nodes: every source (column 0) then every target (column 1), each
    in discovery order.  One link per observed (source, target) pair.
    """
    flows: "OrderedDict[Tuple[Any, Any], int]" = OrderedDict()
    for rec in records:
        pair = (source_fn(rec), target_fn(rec))
        flows[pair] = flows.get(pair, 0) + 1

    sources = tuple(OrderedDict.fromkeys(s for s, _ in flows))
    targets = tuple(OrderedDict.fromkeys(t for _, t in flows))
    nodes = tuple(SankeyNode(name=str(s), column=0) for s in sources) + \
        tuple(SankeyNode(name=str(t), column=1) for t in targets)

    source_idx = {s: i for i, s in enumerate(sources)}
    target_idx = {t: len(sources) + i for i, t in enumerate(targets)}
    links = tuple(
        SankeyLink(source=source_idx[s], target=target_idx[t], value=v)
        for (s, t), v in flows.items()
    )
    return SankeyGraph(nodes=nodes, links=links)

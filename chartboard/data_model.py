"""
Data model for Chartboard.

Immutable dataclasses for every stage of the chart pipeline: the
projected CSV ``Record``, the static lookup structures that drive
normalisation, and the aggregates handed to the chart renderers.

Renderers receive these read-only.  Nothing here is mutated after
construction; a new data or selection state always produces new
aggregate objects.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple


@dataclass(frozen=True)
class FieldMap:
    """Projection of CSV columns onto record fields.

    Parameters
    ----------
    categorical : dict
        ``{record_field: csv_column}`` for string-valued fields.
    numeric : dict
        ``{record_field: csv_column}`` for fields that must parse to a
        finite number.
    optional : dict
        ``{record_field: csv_column}`` for string-valued fields that never
        discard a row.  Blank or rejected values become ``None``.
    """
    categorical: Mapping[str, str] = field(default_factory=dict)
    numeric: Mapping[str, str] = field(default_factory=dict)
    optional: Mapping[str, str] = field(default_factory=dict)

    @property
    def fields(self) -> Tuple[str, ...]:
        return (
            tuple(self.categorical) + tuple(self.numeric)
            + tuple(self.optional)
        )


class Record:
    """One validated CSV row, projected to the fields a chart needs.

    Behaves as a read-only mapping.  ``replace`` returns a new record.
    """

    __slots__ = ('_values',)

    def __init__(self, values: Mapping[str, Any]):
        self._values = MappingProxyType(dict(values))

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self):
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return dict(self._values) == dict(other._values)

    def __hash__(self) -> int:
        return hash(tuple(sorted(self._values.items())))

    def __repr__(self) -> str:
        return f"Record({dict(self._values)!r})"

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    def replace(self, **changes: Any) -> "Record":
        values = dict(self._values)
        values.update(changes)
        return Record(values)


@dataclass(frozen=True)
class CategoryVocabulary:
    """Canonical category set plus raw → canonical synonym map.

    Normalisation substitutes synonyms first and then checks the result
    against ``canonical``.  Construction rejects maps that would make
    substitution non-idempotent (a synonym target that is itself a
    synonym key) or that point outside the canonical set.

    Parameters
    ----------
    canonical : frozenset of str
        The only values that survive normalisation.
    synonyms : dict
        Raw spelling → canonical spelling.
    order : tuple of str
        Canonical values in display order.
    """
    canonical: FrozenSet[str]
    synonyms: Mapping[str, str]
    order: Tuple[str, ...]

    def __post_init__(self):
        for raw, target in self.synonyms.items():
            if target in self.synonyms:
                raise ValueError(
                    f"Synonym '{raw}' maps to '{target}', which is itself "
                    f"a synonym key."
                )
            if target not in self.canonical:
                raise ValueError(
                    f"Synonym '{raw}' maps to '{target}', which is not a "
                    f"canonical category."
                )
            if raw in self.canonical:
                raise ValueError(
                    f"'{raw}' is both canonical and a synonym."
                )

    @classmethod
    def build(cls, canonical, synonyms: Optional[Mapping[str, str]] = None):
        """Create a vocabulary keeping *canonical* in the given order."""
        order = tuple(canonical)
        return cls(
            canonical=frozenset(order),
            synonyms=MappingProxyType(dict(synonyms or {})),
            order=order,
        )


# ── Aggregates ───────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Aggregate:
    """A count or mean over one group.

    Parameters
    ----------
    key : tuple of str
        Group key (one or more canonical category values).
    stat : str
        ``"count"`` or ``"mean"``.
    value : float
        The statistic.  ``0`` for an empty group.
    n : int
        Number of records in the group.
    """
    key: Tuple[Any, ...]
    stat: str
    value: float
    n: int

    @property
    def label(self) -> str:
        return " / ".join(str(k) for k in self.key)


@dataclass(frozen=True)
class BoxStats:
    """Five-number summary of one group (linear-interpolation quantiles)."""
    key: Tuple[Any, ...]
    min: float
    p25: float
    median: float
    p75: float
    max: float
    n: int


@dataclass(frozen=True)
class GridCell:
    """One cell of a complete row × column count grid."""
    row: str
    column: str
    count: int


@dataclass(frozen=True)
class StreamMatrix:
    """Counts per year (rows) and series (columns), zero-filled.

    ``counts[i][j]`` is the number of records in ``years[i]`` belonging
    to ``series[j]``.
    """
    years: Tuple[int, ...]
    series: Tuple[str, ...]
    counts: Tuple[Tuple[int, ...], ...]

    def column(self, key: str) -> Tuple[int, ...]:
        j = self.series.index(key)
        return tuple(row[j] for row in self.counts)

    def total(self) -> int:
        return sum(sum(row) for row in self.counts)


@dataclass(frozen=True)
class StackLayer:
    """Stacked interval for one series across all x positions."""
    key: str
    x: Tuple[float, ...]
    lower: Tuple[float, ...]
    upper: Tuple[float, ...]


@dataclass(frozen=True)
class HistogramSeries:
    """Histogram of one group over shared bin edges."""
    key: str
    edges: Tuple[float, ...]
    counts: Tuple[int, ...]


@dataclass(frozen=True)
class SankeyNode:
    name: str
    column: int


@dataclass(frozen=True)
class SankeyLink:
    source: int
    target: int
    value: int


@dataclass(frozen=True)
class SankeyGraph:
    """Two-column flow graph: sources in column 0, targets in column 1."""
    nodes: Tuple[SankeyNode, ...]
    links: Tuple[SankeyLink, ...]


@dataclass(frozen=True)
class ChartData:
    """Everything a renderer needs for one pass.

    Parameters
    ----------
    kind : str
        Chart kind, e.g. ``"bar"`` or ``"heatmap"``.
    title : str
        Chart title.
    payload : Any
        Kind-specific aggregate (tuple of aggregates, grid, matrix, …).
    options : dict
        Extra render options such as axis orders or the current
        selection.
    """
    kind: str
    title: str
    payload: Any
    options: Mapping[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        payload = self.payload
        if payload is None:
            return True
        if isinstance(payload, StreamMatrix):
            return not payload.series or not payload.years
        if isinstance(payload, SankeyGraph):
            return not payload.links
        try:
            return len(payload) == 0
        except TypeError:
            return False

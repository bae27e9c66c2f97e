"""
Parameterised chart pipeline for Chartboard.

Every chart runs the same three steps with its own parameters:

    load(source, field_map) → normalize(records, vocabularies) → prepare(records, options)

``PipelineSpec`` carries the first two steps' parameters; the chart's
prepare function (see ``chart_registry``) performs the aggregation.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from .csv_loader import (
    CancelToken, coerce_rows, load_records, make_coercer,
)
from .data_model import CategoryVocabulary, FieldMap, Record
from .normalizer import normalize_records


@dataclass(frozen=True)
class PipelineSpec:
    """Load and normalisation parameters for one chart.

    Parameters
    ----------
    dataset : str
        Dataset key (``constants.DATASET_*``).
    field_map : FieldMap
        Columns projected onto record fields.
    vocabularies : tuple of (field, CategoryVocabulary)
        Categorical fields to canonicalise, in application order.
    """
    dataset: str
    field_map: FieldMap
    vocabularies: Tuple[Tuple[str, CategoryVocabulary], ...] = ()


def normalize(records: Iterable[Record], spec: PipelineSpec) -> List[Record]:
    """Apply each vocabulary of *spec* in turn.

    Optional fields keep their records; a rejected value becomes ``None``.
    """
    result = list(records)
    for field, vocabulary in spec.vocabularies:
        result = normalize_records(
            result, field, vocabulary,
            keep_rejected=field in spec.field_map.optional,
        )
    return result


def records_from_rows(
    rows: Iterable[Dict[str, Optional[str]]],
    spec: PipelineSpec,
    *,
    cancel: Optional[CancelToken] = None,
) -> List[Record]:
    """Coerce and normalise already-parsed CSV rows."""
    coerced = coerce_rows(rows, make_coercer(spec.field_map), cancel=cancel)
    return normalize(coerced, spec)


def load(
    source: str,
    spec: PipelineSpec,
    *,
    cancel: Optional[CancelToken] = None,
) -> List[Record]:
    """Load *source* and return normalised records for *spec*."""
    records = load_records(source, make_coercer(spec.field_map), cancel=cancel)
    return normalize(records, spec)

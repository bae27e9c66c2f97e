"""
Category normalisation for Chartboard.

One order for every chart: strip, substitute synonyms, then keep the
value only if it is canonical.  Both raw synonyms ("gray") and
canonical spellings ("silver") are therefore admitted, and anything
else ("teal", "—") is dropped.
"""

from typing import Iterable, List, Optional

from .constants import (
    CGPA_BANDS, COLOR_CANONICAL, COLOR_SYNONYMS, EDUCATION_LEVELS,
    RISK_RATINGS, TRANSMISSIONS, YES_NO,
)
from .data_model import CategoryVocabulary, Record


COLOR_VOCABULARY = CategoryVocabulary.build(COLOR_CANONICAL, COLOR_SYNONYMS)
TRANSMISSION_VOCABULARY = CategoryVocabulary.build(TRANSMISSIONS)
EDUCATION_VOCABULARY = CategoryVocabulary.build(EDUCATION_LEVELS)
RISK_VOCABULARY = CategoryVocabulary.build(RISK_RATINGS)
YES_NO_VOCABULARY = CategoryVocabulary.build(YES_NO)
CGPA_VOCABULARY = CategoryVocabulary.build(CGPA_BANDS)


def normalize_category(
    value: Optional[str],
    vocabulary: CategoryVocabulary,
) -> Optional[str]:
    """Return the canonical spelling of *value*, or ``None`` if rejected."""
    if value is None:
        return None
    raw = value.strip()
    canonical = vocabulary.synonyms.get(raw, raw)
    if canonical not in vocabulary.canonical:
        return None
    return canonical


def normalize_records(
    records: Iterable[Record],
    field: str,
    vocabulary: CategoryVocabulary,
    *,
    keep_rejected: bool = False,
) -> List[Record]:
    """Canonicalise *field* on every record, dropping rejected ones.

    With *keep_rejected* a rejected record is kept with *field* set to
    ``None`` instead.
    """
    result = []
    for rec in records:
        canonical = normalize_category(rec.get(field), vocabulary)
        if canonical is None and not keep_rejected:
            continue
        if canonical != rec[field]:
            rec = rec.replace(**{field: canonical})
        result.append(rec)
    return result

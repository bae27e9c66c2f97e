"""Unit tests for category vocabularies and normalisation."""

from __future__ import annotations

import pytest

from chartboard.constants import COLOR_CANONICAL, COLOR_SYNONYMS
from chartboard.data_model import CategoryVocabulary
from chartboard.normalizer import (
    COLOR_VOCABULARY,
    TRANSMISSION_VOCABULARY,
    normalize_category,
    normalize_records,
)
from tests.conftest import make_records

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("gray", "silver"),
        ("charcoal", "black"),
        ("beige", "white"),
        ("silver", "silver"),
        (" black ", "black"),
        ("teal", None),
        ("—", None),
        ("", None),
        (None, None),
    ],
)
def test_normalize_category_colors(raw, expected) -> None:
    """Synonyms map to canonical values; anything else is rejected."""

    assert normalize_category(raw, COLOR_VOCABULARY) == expected


def test_normalization_is_idempotent() -> None:
    """Normalising an already normalised value returns it unchanged."""

    for raw in list(COLOR_CANONICAL) + list(COLOR_SYNONYMS):
        once = normalize_category(raw, COLOR_VOCABULARY)
        assert once is not None
        assert normalize_category(once, COLOR_VOCABULARY) == once


def test_transmission_vocabulary_has_no_synonyms() -> None:
    """Only 'manual' and 'automatic' survive the transmission filter."""

    assert normalize_category("manual", TRANSMISSION_VOCABULARY) == "manual"
    assert normalize_category("automatic", TRANSMISSION_VOCABULARY) == "automatic"
    assert normalize_category("cvt", TRANSMISSION_VOCABULARY) is None


def test_normalize_records_replaces_and_drops() -> None:
    """Records are rewritten to canonical values; rejected ones are dropped."""

    records = make_records(
        {"color": "gray", "price": 1.0},
        {"color": "teal", "price": 2.0},
        {"color": "white", "price": 3.0},
    )

    result = normalize_records(records, "color", COLOR_VOCABULARY)

    assert [r["color"] for r in result] == ["silver", "white"]
    assert [r["price"] for r in result] == [1.0, 3.0]
    # Inputs are left untouched
    assert records[0]["color"] == "gray"


def test_normalize_records_keep_rejected_sets_none() -> None:
    """With keep_rejected, rejected values become None and the record stays."""

    records = make_records(
        {"color": "gray", "make": "Ford"},
        {"color": "teal", "make": "Tesla"},
        {"color": None, "make": "Kia"},
    )

    result = normalize_records(records, "color", COLOR_VOCABULARY, keep_rejected=True)

    assert [r.as_dict() for r in result] == [
        {"color": "silver", "make": "Ford"},
        {"color": None, "make": "Tesla"},
        {"color": None, "make": "Kia"},
    ]


def test_vocabulary_rejects_chained_synonyms() -> None:
    """A synonym target may not itself be a synonym key."""

    with pytest.raises(ValueError):
        CategoryVocabulary.build(("a", "b"), {"x": "y", "y": "a"})


def test_vocabulary_rejects_non_canonical_target() -> None:
    """Every synonym must land inside the canonical set."""

    with pytest.raises(ValueError):
        CategoryVocabulary.build(("a",), {"x": "z"})


def test_vocabulary_rejects_canonical_raw_value() -> None:
    """A value cannot be both canonical and a synonym."""

    with pytest.raises(ValueError):
        CategoryVocabulary.build(("a", "b"), {"a": "b"})


def test_vocabulary_keeps_display_order() -> None:
    """The canonical order is preserved for display."""

    assert COLOR_VOCABULARY.order == tuple(COLOR_CANONICAL)

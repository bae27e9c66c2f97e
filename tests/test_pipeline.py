"""Integration tests for the parameterised load → normalise → prepare pipeline."""

from __future__ import annotations

import pytest

from chartboard.chart_heatmap import prepare_heatmap
from chartboard.chart_registry import CHARTS, charts_for_dataset, get_chart
from chartboard.constants import (
    CGPA_BANDS,
    COLOR_CANONICAL,
    COLOR_SYNONYMS,
    DATASET_CARS,
    DATASET_FINANCIAL,
    DATASET_MENTAL_HEALTH,
    EDUCATION_LEVELS,
)
from chartboard.csv_loader import read_rows
from chartboard.pipeline import load, records_from_rows

pytestmark = pytest.mark.unit


@pytest.mark.parametrize("chart", CHARTS, ids=lambda c: c.key)
def test_every_chart_loads_example_data(chart, example_paths) -> None:
    """Each chart's pipeline yields records with exactly its fields."""

    records = load(example_paths[chart.spec.dataset], chart.spec)

    assert records
    assert all(set(r) == set(chart.spec.field_map.fields) for r in records)


def test_color_charts_only_see_canonical_colors(example_paths) -> None:
    """Synonyms are mapped and unknown spellings dropped for every colour chart."""

    rows = read_rows(example_paths[DATASET_CARS])
    raw_colors = {row["color"] for row in rows}
    assert "gray" in raw_colors
    assert raw_colors - set(COLOR_CANONICAL) - set(COLOR_SYNONYMS)

    for chart in charts_for_dataset(DATASET_CARS):
        if "color" not in chart.spec.field_map.fields:
            continue
        records = records_from_rows(rows, chart.spec)
        colors = {r["color"] for r in records}
        if "color" in chart.spec.field_map.optional:
            colors.discard(None)
        assert colors <= set(COLOR_CANONICAL)
        assert "silver" in colors


def test_mental_health_bands_are_stripped(example_paths) -> None:
    """CGPA answers with trailing spaces still match the canonical bands."""

    chart = get_chart("mental_health_parallel")

    records = load(example_paths[DATASET_MENTAL_HEALTH], chart.spec)

    assert {r["cgpa"] for r in records} <= set(CGPA_BANDS)
    assert len(records) == 101


def test_financial_rows_with_blank_income_are_dropped(example_paths) -> None:
    """Rows missing a required number never reach the chart."""

    chart = get_chart("income_histogram")
    rows = read_rows(example_paths[DATASET_FINANCIAL])

    records = records_from_rows(rows, chart.spec)

    blank = sum(1 for row in rows if not row["Income"].strip())
    assert blank > 0
    assert len(records) == len(rows) - blank
    assert {r["education"] for r in records} <= set(EDUCATION_LEVELS)


def test_inline_rows_go_through_the_same_steps() -> None:
    """records_from_rows coerces then normalises in one call."""

    chart = get_chart("bar")
    rows = [
        {"color": "gray", "sellingprice": "100"},
        {"color": "teal", "sellingprice": "200"},
        {"color": "white", "sellingprice": "oops"},
    ]

    records = records_from_rows(rows, chart.spec)

    assert [r.as_dict() for r in records] == [{"color": "silver", "price": 100.0}]


def test_heatmap_selection_keeps_full_grid(example_paths) -> None:
    """Selecting a colour filters counts but never drops rows or columns."""

    chart = get_chart("heatmap")
    records = load(example_paths[DATASET_CARS], chart.spec)

    everything = prepare_heatmap(records, {"selected": None})
    white = prepare_heatmap(records, {"selected": "white"})

    assert [(c.row, c.column) for c in everything.payload] == [
        (c.row, c.column) for c in white.payload
    ]
    assert sum(c.count for c in everything.payload) == sum(
        1 for r in records if r["color"] is not None
    )
    assert sum(c.count for c in white.payload) == sum(
        1 for r in records if r["color"] == "white"
    )


def test_get_chart_unknown_key() -> None:
    """Unknown chart keys raise KeyError."""

    with pytest.raises(KeyError):
        get_chart("pie")


def test_heatmap_axes_include_makes_with_rejected_colors() -> None:
    """A make seen only with a blank or unknown colour keeps a zero row."""

    chart = get_chart("heatmap")
    rows = [
        {"make": "Ford", "body": "Sedan", "color": "white"},
        {"make": "Tesla", "body": "Sedan", "color": "teal"},
        {"make": "Kia", "body": "SUV", "color": ""},
    ]

    records = records_from_rows(rows, chart.spec)
    data = prepare_heatmap(records, {"selected": None})

    assert data.options["makes"] == ("Ford", "Tesla", "Kia")
    assert data.options["bodies"] == ("Sedan", "SUV")
    counts = {(c.row, c.column): c.count for c in data.payload}
    assert counts[("Ford", "Sedan")] == 1
    assert counts[("Tesla", "Sedan")] == 0
    assert counts[("Kia", "SUV")] == 0
    assert sum(counts.values()) == 1

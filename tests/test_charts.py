"""Rendering tests for every chart, on an off-screen Agg canvas."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from chartboard.chart_bar import prepare_bar, render_bar
from chartboard.chart_heatmap import prepare_heatmap, render_heatmap
from chartboard.chart_histogram import prepare_histogram, render_histogram
from chartboard.chart_parallel import prepare_car_parallel, render_parallel
from chartboard.chart_registry import CHARTS
from chartboard.chart_sankey import contrasting_text_color
from chartboard.chart_stream import (
    prepare_color_stream,
    prepare_transmission_stream,
    render_stream,
)
from chartboard.constants import STREAM_YEAR_WINDOWS
from chartboard.pipeline import load
from tests.conftest import make_records

pytestmark = pytest.mark.unit


def _texts(fig) -> list[str]:
    return [t.get_text() for ax in fig.axes for t in ax.texts]


@pytest.mark.parametrize("chart", CHARTS, ids=lambda c: c.key)
def test_chart_renders_example_data(chart, figure, example_paths) -> None:
    """Each chart draws real data and returns a handler dict."""

    records = load(example_paths[chart.spec.dataset], chart.spec)
    data = chart.prepare(records, {})

    handlers = chart.render(figure, data, for_export=False)

    assert isinstance(handlers, dict)
    assert not data.is_empty
    assert figure.axes
    assert "No valid data points" not in _texts(figure)
    figure.canvas.draw()


@pytest.mark.parametrize("chart", CHARTS, ids=lambda c: c.key)
def test_chart_renders_empty_state(chart, figure) -> None:
    """No records shows a message instead of raising."""

    data = chart.prepare([], {})

    handlers = chart.render(figure, data, for_export=True)

    assert data.is_empty
    assert handlers == {}
    assert "No valid data points" in _texts(figure)


def _price_records():
    return make_records(
        {"color": "white", "price": 10000.0},
        {"color": "white", "price": 30000.0},
        {"color": "black", "price": 40000.0},
    )


def test_bar_click_reports_category(figure) -> None:
    """Picking a bar calls on_select with that bar's colour."""

    selected = []
    data = prepare_bar(_price_records(), {})

    handlers = render_bar(figure, data, on_select=selected.append)
    first_bar = figure.axes[0].patches[0]
    handlers["pick_event"](SimpleNamespace(artist=first_bar))

    assert first_bar.get_gid() == "black"
    assert selected == ["black"]


def test_bar_without_select_callback_has_no_handlers(figure) -> None:
    """Export renders are not interactive."""

    assert render_bar(figure, prepare_bar(_price_records(), {})) == {}


def test_bar_highlights_selected_color(figure) -> None:
    """The selected bar is opaque and the others fade."""

    data = prepare_bar(_price_records(), {"selected": "white"})

    render_bar(figure, data)

    alphas = {p.get_gid(): p.get_alpha() for p in figure.axes[0].patches}
    assert alphas == {"black": 0.25, "white": 1.0}


def test_heatmap_hover_reports_count(figure) -> None:
    """Hovering a cell writes its make, body and count."""

    records = make_records(
        {"make": "Ford", "body": "Sedan", "color": "white"},
        {"make": "Ford", "body": "Sedan", "color": "black"},
        {"make": "Kia", "body": "SUV", "color": "white"},
    )
    data = prepare_heatmap(records, {"selected": "white"})

    handlers = render_heatmap(figure, data)
    ax = figure.axes[0]
    handlers["motion_notify_event"](SimpleNamespace(inaxes=ax, xdata=0.0, ydata=0.0))

    assert "Ford / Sedan, count: 1" in _texts(figure)


def test_stream_hover_reports_year_count(figure) -> None:
    """Hovering a layer names its series, year and count."""

    records = make_records(
        {"transmission": "manual", "year": 2001.0},
        {"transmission": "manual", "year": 2001.0},
        {"transmission": "automatic", "year": 2001.0},
        {"transmission": "automatic", "year": 2002.0},
    )
    data = prepare_transmission_stream(records, {})

    handlers = render_stream(figure, data)
    ax = figure.axes[0]
    handlers["motion_notify_event"](SimpleNamespace(inaxes=ax, xdata=2001.2, ydata=0.5))

    assert "manual car sold in year 2001 : 2" in _texts(figure)


def test_color_stream_uses_year_window(figure) -> None:
    """The selected window bounds the x axis."""

    records = make_records(
        {"color": "white", "year": 2003.0},
        {"color": "black", "year": 2008.0},
    )
    data = prepare_color_stream(records, {"stream_window": "2006-2010"})

    render_stream(figure, data)

    assert figure.axes[0].get_xlim() == STREAM_YEAR_WINDOWS["2006-2010"]


def test_histogram_draws_one_panel_per_group(figure) -> None:
    """Each education level gets its own panel."""

    records = make_records(
        {"education": "PhD", "income": 90000.0},
        {"education": "High School", "income": 30000.0},
        {"education": "Master's", "income": 60000.0},
    )

    render_histogram(figure, prepare_histogram(records, {}))

    assert len(figure.axes) == 3



def test_car_condition_axis_is_categorical(figure) -> None:
    """Condition gets one evenly spaced point per grade, best grade on top."""

    records = make_records(
        {"transmission": "manual", "condition": 4.5, "odometer": 1000.0, "price": 9000.0},
        {"transmission": "automatic", "condition": 2.0, "odometer": 9000.0, "price": 3000.0},
        {"transmission": "manual", "condition": 3.0, "odometer": 5000.0, "price": 6000.0},
    )
    data = prepare_car_parallel(records, {})

    dims = {dim.field: dim for dim in data.options["dimensions"]}
    assert dims["condition"].categories == (2.0, 3.0, 4.5)

    render_parallel(figure, data)

    positions = {t.get_text(): t.get_position()[1] for t in figure.axes[0].texts}
    assert positions["2"] == 0.0
    assert positions["3"] == 0.5
    assert positions["4.5"] == 1.0


@pytest.mark.parametrize(
    "color,expected",
    [("#FFFFFF", "#000000"), ("#FFFF00", "#000000"), ("#000000", "#ffffff"), ("#5D0000", "#ffffff")],
)
def test_contrasting_text_color(color, expected) -> None:
    """Light fills get black text and dark fills get white text."""

    assert contrasting_text_color(color) == expected

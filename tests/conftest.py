"""Pytest fixtures shared across the Chartboard test suite."""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import pytest
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from chartboard.data_model import Record
from chartboard.example_data import generate_example_csvs


@pytest.fixture(scope="session")
def example_paths(tmp_path_factory):
    """Return ``{dataset: path}`` for the generated example CSVs."""

    return generate_example_csvs(str(tmp_path_factory.mktemp("example")))


@pytest.fixture
def write_csv(tmp_path):
    """Return a helper that writes *text* to a CSV file and returns its path."""

    def _write(text: str, name: str = "data.csv", encoding: str = "utf-8") -> str:
        path = tmp_path / name
        path.write_text(text, encoding=encoding)
        return str(path)

    return _write


@pytest.fixture
def figure():
    """Return an off-screen figure attached to an Agg canvas."""

    fig = Figure(figsize=(6, 4))
    FigureCanvasAgg(fig)
    return fig


def make_records(*rows: dict) -> list[Record]:
    """Build records from plain dicts."""

    return [Record(row) for row in rows]

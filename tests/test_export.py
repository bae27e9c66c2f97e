"""Tests for PNG export, batch export and the headless command line."""

from __future__ import annotations

import os

import pytest
from matplotlib.colors import to_hex

from chartboard.__main__ import parse_args, run_export
from chartboard.chart_registry import CHARTS, charts_for_dataset
from chartboard.constants import DARK_COLORS, DATASET_CARS, DATASET_FINANCIAL
from chartboard.csv_loader import CancelToken, LoadCancelled
from chartboard.export import export_datasets, export_png, safe_filename

pytestmark = pytest.mark.unit

PNG_MAGIC = b"\x89PNG"


def test_export_png_writes_file_and_restores_theme(figure, tmp_path) -> None:
    """Export switches to the light theme only for the saved file."""

    figure.set_facecolor(DARK_COLORS["bg_alt"])
    ax = figure.add_subplot(111)
    ax.set_facecolor(DARK_COLORS["bg_widget"])
    label = ax.text(0.5, 0.5, "hello", color=DARK_COLORS["fg"])
    width, height = figure.get_size_inches()
    path = tmp_path / "chart.png"

    export_png(figure, str(path), dpi=50)

    assert path.read_bytes()[:4] == PNG_MAGIC
    assert to_hex(figure.get_facecolor()) == DARK_COLORS["bg_alt"]
    assert to_hex(ax.get_facecolor()) == DARK_COLORS["bg_widget"]
    assert to_hex(label.get_color()) == DARK_COLORS["fg"]
    assert tuple(figure.get_size_inches()) == (width, height)


def test_safe_filename() -> None:
    """Characters outside letters, digits, '-' and '_' are replaced."""

    assert safe_filename("Color → Make") == "Color___Make"
    assert safe_filename("bar") == "bar"


def test_export_datasets_writes_one_png_per_chart(example_paths, tmp_path) -> None:
    """Every registered chart is exported when all datasets are given."""

    paths, errors = export_datasets(example_paths, str(tmp_path / "out"), dpi=40)

    assert errors == {}
    assert len(paths) == len(CHARTS)
    for path in paths:
        with open(path, "rb") as fh:
            assert fh.read(4) == PNG_MAGIC


def test_export_datasets_skips_missing_datasets(example_paths, tmp_path) -> None:
    """Only charts for the supplied datasets are exported."""

    paths, _ = export_datasets(
        {DATASET_CARS: example_paths[DATASET_CARS]}, str(tmp_path), dpi=40,
    )

    expected = {f"{c.key}.png" for c in charts_for_dataset(DATASET_CARS)}
    assert {os.path.basename(p) for p in paths} == expected


def test_export_datasets_unreadable_source_skips_only_its_charts(
    example_paths, tmp_path, capsys,
) -> None:
    """A failed dataset is reported while the other charts are still written."""

    sources = {
        DATASET_CARS: example_paths[DATASET_CARS],
        DATASET_FINANCIAL: str(tmp_path / "missing.csv"),
    }

    paths, errors = export_datasets(sources, str(tmp_path / "out"), dpi=40)

    expected = {f"{c.key}.png" for c in charts_for_dataset(DATASET_CARS)}
    assert {os.path.basename(p) for p in paths} == expected
    assert list(errors) == [DATASET_FINANCIAL]
    assert "not found" in errors[DATASET_FINANCIAL]
    assert "[Chartboard] financial" in capsys.readouterr().err


def test_export_datasets_cancelled_load_raises(example_paths, tmp_path) -> None:
    """Cancellation is not swallowed as a per-dataset failure."""

    token = CancelToken()
    token.cancel()

    with pytest.raises(LoadCancelled):
        export_datasets(example_paths, str(tmp_path), cancel=token)


def test_cli_parses_export_arguments() -> None:
    """The --export flag and dataset paths are parsed."""

    args = parse_args(["--export", "out", "--cars", "cars.csv", "--years", "2001-2005"])

    assert args.export == "out"
    assert args.cars == "cars.csv"
    assert args.financial is None
    assert args.years == "2001-2005"


def test_cli_without_sources_fails(tmp_path, capsys) -> None:
    """Export with no dataset at all exits with status 2."""

    assert run_export(parse_args(["--export", str(tmp_path)])) == 2
    assert "Nothing to export" in capsys.readouterr().err


def test_cli_missing_file_reports_error(tmp_path, capsys) -> None:
    """A missing input file exits with status 1 and a message."""

    args = parse_args(["--export", str(tmp_path), "--cars", str(tmp_path / "x.csv")])

    assert run_export(args) == 1
    assert "not found" in capsys.readouterr().err


def test_cli_partial_failure_still_writes_other_charts(
    example_paths, tmp_path, capsys,
) -> None:
    """One bad dataset gives status 1 but the good datasets are exported."""

    out = tmp_path / "out"
    args = parse_args([
        "--export", str(out),
        "--cars", example_paths[DATASET_CARS],
        "--financial", str(tmp_path / "missing.csv"),
    ])

    assert run_export(args) == 1
    captured = capsys.readouterr()
    assert "not found" in captured.err
    written = captured.out.splitlines()
    assert len(written) == len(charts_for_dataset(DATASET_CARS))
    assert all(os.path.exists(p) for p in written)

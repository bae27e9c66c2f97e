"""Unit tests for CSV loading, strict coercion and cancellation."""

from __future__ import annotations

import pytest
import requests

from chartboard import csv_loader
from chartboard.csv_loader import (
    CancelToken,
    DataLoadError,
    LoadCancelled,
    load_records,
    make_coercer,
    read_rows,
    strict_float,
)
from chartboard.data_model import FieldMap

pytestmark = pytest.mark.unit

CAR_FIELDS = FieldMap(
    categorical={"color": "color"},
    numeric={"price": "sellingprice"},
)


@pytest.mark.parametrize("text,expected", [("12.5", 12.5), (" 7 ", 7.0), ("-3e2", -300.0)])
def test_strict_float_accepts_finite_numbers(text, expected) -> None:
    """Surrounding whitespace is ignored for well-formed numbers."""

    assert strict_float(text) == expected


@pytest.mark.parametrize("text", [None, "", "   ", "12k", "1,5", "nan", "inf", "-inf", "1_000"])
def test_strict_float_rejects_invalid_input(text) -> None:
    """Blank, non-numeric and non-finite input raises ValueError."""

    with pytest.raises(ValueError):
        strict_float(text)


def test_coercer_projects_and_strips_fields() -> None:
    """Only mapped columns survive; categorical values are stripped."""

    coerce = make_coercer(CAR_FIELDS)
    record = coerce({"color": " white ", "sellingprice": "10000", "make": "Ford"})

    assert record is not None
    assert record.as_dict() == {"color": "white", "price": 10000.0}


@pytest.mark.parametrize(
    "row",
    [
        {"color": "", "sellingprice": "10000"},
        {"color": "   ", "sellingprice": "10000"},
        {"sellingprice": "10000"},
        {"color": "white", "sellingprice": ""},
        {"color": "white", "sellingprice": "n/a"},
        {"color": "white", "sellingprice": None},
        {"color": "white"},
    ],
)
def test_coercer_discards_invalid_rows(row) -> None:
    """A missing, blank or non-numeric required field drops the row."""

    assert make_coercer(CAR_FIELDS)(row) is None


@pytest.mark.parametrize("raw", [None, "", "  "])
def test_coercer_keeps_row_with_blank_optional_field(raw) -> None:
    """An optional field never discards the row; blanks become None."""

    fields = FieldMap(categorical={"make": "make"}, optional={"color": "color"})
    row = {"make": "Kia"} if raw is None else {"make": "Kia", "color": raw}

    record = make_coercer(fields)(row)

    assert record is not None
    assert record.as_dict() == {"make": "Kia", "color": None}


def test_read_rows_strips_bom_from_header(write_csv) -> None:
    """A UTF-8 BOM does not leak into the first column name."""

    path = write_csv("color,sellingprice\nwhite,100\n", encoding="utf-8-sig")

    rows = read_rows(path)

    assert rows == [{"color": "white", "sellingprice": "100"}]


def test_read_rows_header_only_file_is_empty(write_csv) -> None:
    """A header without data rows yields no rows rather than an error."""

    assert read_rows(write_csv("color,sellingprice\n")) == []


def test_read_rows_missing_file_raises(tmp_path) -> None:
    """A path that does not exist is a DataLoadError."""

    with pytest.raises(DataLoadError, match="not found"):
        read_rows(str(tmp_path / "nope.csv"))


def test_read_rows_empty_file_raises(write_csv) -> None:
    """A file without a header row is a DataLoadError."""

    with pytest.raises(DataLoadError, match="no header"):
        read_rows(write_csv(""))


def test_load_records_keeps_valid_rows_in_order(write_csv) -> None:
    """Invalid rows are dropped silently and the rest keep file order."""

    path = write_csv(
        "color,sellingprice\n"
        "white,10000\n"
        ",5000\n"
        "black,abc\n"
        "gray,30000\n"
    )

    records = load_records(path, make_coercer(CAR_FIELDS))

    assert [r["color"] for r in records] == ["white", "gray"]
    assert [r["price"] for r in records] == [10000.0, 30000.0]


def test_cancelled_token_raises_load_cancelled(write_csv) -> None:
    """A token cancelled before the read stops the load."""

    token = CancelToken()
    token.cancel()

    with pytest.raises(LoadCancelled):
        read_rows(write_csv("color\nwhite\n"), cancel=token)
    assert issubclass(LoadCancelled, DataLoadError)


class _FakeResponse:
    def __init__(self, text: str, status: int = 200):
        self.text = text
        self.encoding = None
        self.status_code = status

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


def test_url_source_uses_requests_with_timeout(monkeypatch) -> None:
    """http(s) sources are fetched through requests.get with a timeout."""

    calls = []

    def fake_get(url, timeout=None):
        calls.append((url, timeout))
        return _FakeResponse("color,sellingprice\nred,500\n")

    monkeypatch.setattr(csv_loader.requests, "get", fake_get)

    rows = read_rows("https://example.org/cars.csv", timeout=5.0)

    assert rows == [{"color": "red", "sellingprice": "500"}]
    assert calls == [("https://example.org/cars.csv", 5.0)]


def test_url_http_error_becomes_data_load_error(monkeypatch) -> None:
    """A non-2xx response is reported as DataLoadError."""

    monkeypatch.setattr(
        csv_loader.requests, "get", lambda url, timeout=None: _FakeResponse("", 404)
    )

    with pytest.raises(DataLoadError, match="Could not fetch"):
        read_rows("http://example.org/missing.csv")


def test_url_connection_error_becomes_data_load_error(monkeypatch) -> None:
    """Network failures are reported as DataLoadError."""

    def fail(url, timeout=None):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(csv_loader.requests, "get", fail)

    with pytest.raises(DataLoadError):
        read_rows("http://example.org/cars.csv")

"""
CSV loader for Chartboard.

Reads one comma-separated dataset (local path or http(s) URL) and
projects each row onto the fields a chart needs.  Handles:

- UTF-8 BOM markers
- Strict numeric coercion (blank, non-numeric and non-finite → discard)
- Rows with missing or blank required fields (discarded, never defaulted)
- Cooperative cancellation between rows

A resource that cannot be fetched or parsed raises ``DataLoadError``;
the caller decides how the chart shows it.
"""

import csv
import io
import math
import os
import threading
import warnings
from typing import Callable, Dict, Iterable, List, Optional

import requests

from .constants import FETCH_TIMEOUT_S, LARGE_FILE_BYTES
from .data_model import FieldMap, Record


RowCoercer = Callable[[Dict[str, Optional[str]]], Optional[Record]]


class DataLoadError(Exception):
    """The CSV resource could not be fetched or parsed."""


class LoadCancelled(DataLoadError):
    """The load was cancelled before it completed."""


class CancelToken:
    """Thread-safe cancellation flag shared by a loader and its owner."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise LoadCancelled("Load cancelled")


# ── Strict numeric parsing ───────────────────────────────────────────────

def strict_float(text: Optional[str]) -> float:
    """Parse *text* as a finite float.

    Surrounding whitespace is ignored.  Raises ``ValueError`` for
    ``None``, blank, non-numeric (``"12k"``, ``"1,5"``) and non-finite
    (``"nan"``, ``"inf"``) input.
    """
    if text is None:
        raise ValueError("missing value")
    s = text.strip()
    if not s:
        raise ValueError("empty string")
    # float() accepts digit separators ("1_000"); CSV numbers never carry them
    if '_' in s:
        raise ValueError(f"not a number: {s!r}")
    result = float(s)
    if not math.isfinite(result):
        raise ValueError(f"non-finite value: {s!r}")
    return result


def make_coercer(field_map: FieldMap) -> RowCoercer:
    """Build a per-row coercion function for *field_map*.

    The returned function maps a raw ``csv.DictReader`` row to a
    ``Record``, or to ``None`` when any required field is missing,
    blank, or (for numeric fields) not a finite number.  Optional
    fields are stored as ``None`` when missing or blank.
    """
    categorical = tuple(field_map.categorical.items())
    numeric = tuple(field_map.numeric.items())
    optional = tuple(field_map.optional.items())

    def coerce(row: Dict[str, Optional[str]]) -> Optional[Record]:
        values = {}
        for name, column in categorical:
            raw = row.get(column)
            if raw is None:
                return None
            raw = raw.strip()
            if not raw:
                return None
            values[name] = raw
        for name, column in numeric:
            try:
                values[name] = strict_float(row.get(column))
            except ValueError:
                return None
        for name, column in optional:
            raw = (row.get(column) or '').strip()
            values[name] = raw or None
        return Record(values)

    return coerce


# ── Fetching ─────────────────────────────────────────────────────────────

def _is_url(source: str) -> bool:
    return source.lower().startswith(('http://', 'https://'))


def _read_text(source: str, timeout: float) -> str:
    if _is_url(source):
        try:
            response = requests.get(source, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise DataLoadError(f"Could not fetch '{source}': {exc}") from exc
        # Servers often omit the charset for text/csv
        response.encoding = response.encoding or 'utf-8'
        return response.text.lstrip('\ufeff')

    if not os.path.isfile(source):
        raise DataLoadError(f"CSV file not found: {source}")

    file_size = os.path.getsize(source)
    if file_size > LARGE_FILE_BYTES:
        warnings.warn(
            f"File is very large ({file_size / (1024 * 1024):.0f} MB). "
            f"Loading may take a while.",
            stacklevel=3,
        )
    try:
        with open(source, 'r', encoding='utf-8-sig', newline='') as fh:
            return fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise DataLoadError(
            f"Could not read '{os.path.basename(source)}': {exc}"
        ) from exc


def read_rows(
    source: str,
    *,
    cancel: Optional[CancelToken] = None,
    timeout: float = FETCH_TIMEOUT_S,
) -> List[Dict[str, Optional[str]]]:
    """Fetch *source* and parse it into header-keyed rows.

    Parameters
    ----------
    source : str
        Local file path or ``http(s)://`` URL.
    cancel : CancelToken, optional
        Checked before fetching and after every row.
    timeout : float
        Network timeout in seconds (URLs only).

    Raises
    ------
    DataLoadError
        Resource missing, unreachable, undecodable, or without a
        header row.
    LoadCancelled
        *cancel* was set while loading.
    """
    if cancel is not None:
        cancel.raise_if_cancelled()

    text = _read_text(source, timeout)

    reader = csv.DictReader(io.StringIO(text))
    try:
        header = reader.fieldnames
    except csv.Error as exc:
        raise DataLoadError(f"Could not parse '{source}': {exc}") from exc
    if not header:
        raise DataLoadError(f"CSV '{source}' has no header row.")

    rows = []
    try:
        for row in reader:
            if cancel is not None:
                cancel.raise_if_cancelled()
            rows.append(row)
    except csv.Error as exc:
        raise DataLoadError(
            f"Could not parse '{source}' near line {reader.line_num}: {exc}"
        ) from exc
    return rows


def coerce_rows(
    rows: Iterable[Dict[str, Optional[str]]],
    coerce: RowCoercer,
    *,
    cancel: Optional[CancelToken] = None,
) -> List[Record]:
    """Apply *coerce* to every row, keeping non-``None`` results in order."""
    records = []
    for row in rows:
        if cancel is not None:
            cancel.raise_if_cancelled()
        record = coerce(row)
        if record is not None:
            records.append(record)
    return records


def load_records(
    source: str,
    coerce: RowCoercer,
    *,
    cancel: Optional[CancelToken] = None,
    timeout: float = FETCH_TIMEOUT_S,
) -> List[Record]:
    """Load *source* and coerce each row into a ``Record``.

    Rows for which *coerce* returns ``None`` are dropped silently.
    """
    rows = read_rows(source, cancel=cancel, timeout=timeout)
    return coerce_rows(rows, coerce, cancel=cancel)

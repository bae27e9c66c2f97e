"""Unit tests for the cross-chart selection bridge."""

from __future__ import annotations

import pytest

from chartboard.selection import SelectionBridge, category_predicate
from tests.conftest import make_records

pytestmark = pytest.mark.unit


def test_toggle_selects_replaces_and_clears() -> None:
    """Same value clears; a different value replaces."""

    bridge = SelectionBridge()
    assert bridge.value is None

    assert bridge.toggle("white") == "white"
    assert bridge.toggle("black") == "black"
    assert bridge.toggle("black") is None
    assert bridge.value is None


def test_subscribers_see_stored_value() -> None:
    """The value is stored before any subscriber runs."""

    bridge = SelectionBridge()
    observed = []
    bridge.subscribe(lambda value: observed.append((value, bridge.value)))

    bridge.toggle("red")
    bridge.clear()

    assert observed == [("red", "red"), (None, None)]


def test_unchanged_value_does_not_notify() -> None:
    """Clearing an empty selection is a no-op."""

    bridge = SelectionBridge()
    calls = []
    bridge.subscribe(calls.append)

    bridge.clear()

    assert calls == []


def test_unsubscribe_stops_notifications() -> None:
    """The function returned by subscribe detaches the callback."""

    bridge = SelectionBridge()
    calls = []
    unsubscribe = bridge.subscribe(calls.append)

    bridge.toggle("white")
    unsubscribe()
    bridge.toggle("black")

    assert calls == ["white"]


def test_predicate_filters_only_when_set() -> None:
    """No selection accepts everything; a selection keeps matching records."""

    records = make_records({"color": "white"}, {"color": "black"})
    bridge = SelectionBridge()

    assert [r["color"] for r in records if bridge.predicate("color")(r)] == ["white", "black"]

    bridge.toggle("black")

    assert [r["color"] for r in records if bridge.predicate("color")(r)] == ["black"]
    assert category_predicate("color", None)(records[0]) is True

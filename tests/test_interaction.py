"""Unit tests for canvas handler rebinding."""

from __future__ import annotations

import pytest

from chartboard.interaction import HandlerBinding

pytestmark = pytest.mark.unit


class _RecordingCanvas:
    def __init__(self):
        self.connected = {}
        self._next = 0

    def mpl_connect(self, event, handler):
        self._next += 1
        self.connected[self._next] = (event, handler)
        return self._next

    def mpl_disconnect(self, cid):
        del self.connected[cid]


def test_rebind_replaces_previous_handlers() -> None:
    """Only the latest pass's handlers stay connected."""

    canvas = _RecordingCanvas()
    binding = HandlerBinding()

    def first(event):
        return "first"

    def second(event):
        return "second"

    binding.rebind(canvas, {"pick_event": first, "motion_notify_event": first})
    binding.rebind(canvas, {"pick_event": second})

    assert [h for _, h in canvas.connected.values()] == [second]
    assert binding.bound_count == 1


def test_rebind_with_no_handlers_disconnects_all() -> None:
    """An empty render result leaves nothing connected."""

    canvas = _RecordingCanvas()
    binding = HandlerBinding()
    binding.rebind(canvas, {"pick_event": lambda e: None})

    binding.rebind(canvas, {})

    assert canvas.connected == {}
    assert binding.bound_count == 0


def test_release_is_idempotent(figure) -> None:
    """Releasing twice on a real canvas is harmless."""

    binding = HandlerBinding()
    binding.rebind(figure.canvas, {"pick_event": lambda e: None})

    binding.release()
    binding.release()

    assert binding.bound_count == 0

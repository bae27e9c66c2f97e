"""
Cross-chart selection for Chartboard.

``SelectionBridge`` holds the one piece of shared mutable state: the
category chosen in a producer chart (the colour bar chart).  Consumer
charts subscribe and rebuild their aggregates from ``predicate()``.

The new value is stored before any subscriber runs, so every consumer
sees it before any redraw it triggers.
"""

from typing import Any, Callable, List, Optional

from .data_model import Record


def category_predicate(
    field: str, value: Optional[str],
) -> Callable[[Record], bool]:
    """``record[field] == value``, or accept-all when *value* is ``None``."""
    if value is None:
        return lambda rec: True
    return lambda rec: rec[field] == value


class SelectionBridge:
    """Optional selected category shared by sibling charts."""

    def __init__(self):
        self._value: Optional[str] = None
        self._subscribers: List[Callable[[Optional[str]], None]] = []

    @property
    def value(self) -> Optional[str]:
        return self._value

    def toggle(self, category: str) -> Optional[str]:
        """Select *category*, or clear it if it is already selected."""
        self._set(None if category == self._value else category)
        return self._value

    def clear(self) -> None:
        self._set(None)

    def subscribe(
        self, callback: Callable[[Optional[str]], None],
    ) -> Callable[[], None]:
        """Call *callback(value)* on every change.  Returns an unsubscriber."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def predicate(self, field: str) -> Callable[[Record], bool]:
        """Record filter for the current value (accept-all when unset)."""
        return category_predicate(field, self._value)

    def _set(self, value: Any) -> None:
        if value == self._value:
            return
        self._value = value
        for callback in list(self._subscribers):
            callback(value)

"""
Event-handler binding for chart canvases.

Renderers return fresh ``{event_name: handler}`` dicts on every pass,
each handler closing over the aggregate just drawn.  ``HandlerBinding``
disconnects the previous pass's handlers before connecting the new
ones, so a redraw never leaves a handler reading an old snapshot.
"""

from typing import Callable, Dict, List, Optional


Handlers = Dict[str, Callable]


class HandlerBinding:
    """Owns the matplotlib callback ids connected to one canvas."""

    def __init__(self):
        self._canvas = None
        self._cids: List[int] = []

    def rebind(self, canvas, handlers: Optional[Handlers]) -> None:
        """Replace every handler on *canvas* with *handlers*."""
        self.release()
        self._canvas = canvas
        for event, handler in (handlers or {}).items():
            self._cids.append(canvas.mpl_connect(event, handler))

    def release(self) -> None:
        if self._canvas is not None:
            for cid in self._cids:
                self._canvas.mpl_disconnect(cid)
        self._cids = []
        self._canvas = None

    @property
    def bound_count(self) -> int:
        return len(self._cids)

"""Location — where requests go to be dispatched.

The router never dispatches on its own. It hands requests to a location,
which records them in history and notifies its listeners (normally
``App.dispatch``). ``MemoryLocation`` keeps that history in process,
which is what tests and non-browser hosts use.
"""

import logging
from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from waypoint.http.request import Request

logger = logging.getLogger("waypoint.location")

Listener = Callable[[Request], Any]


@runtime_checkable
class Location(Protocol):
    """What the router and app need from a history implementation."""

    def assign(self, request: Request) -> None:
        """Record *request* as a new history entry and dispatch it."""
        ...

    def replace(self, request: Request) -> None:
        """Record *request* over the current entry and dispatch it."""
        ...

    def on_change(self, listener: Listener) -> None:
        """Call *listener* with every request this location dispatches."""
        ...


class MemoryLocation:
    """In-process history.

    Every assigned request gets an entry, including state requests, so
    ``back()`` can return to a previous state. ``current_url`` only follows
    requests that have a ``location``: a state transition or a form post
    leaves it unchanged.
    """

    __slots__ = ("_entries", "_index", "_listeners", "current_url")

    def __init__(self, current_url: str = "/") -> None:
        self.current_url = current_url
        self._entries: list[Request] = []
        self._index = -1
        self._listeners: list[Listener] = []

    def on_change(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def assign(self, request: Request) -> None:
        # A new entry discards anything ahead of the current position
        del self._entries[self._index + 1 :]
        self._entries.append(request)
        self._index = len(self._entries) - 1
        self._change(request)

    def replace(self, request: Request) -> None:
        if self._index < 0:
            self.assign(request)
            return
        self._entries[self._index] = request
        self._change(request)

    def back(self) -> Request | None:
        """Step back one entry and dispatch it again. ``None`` at the start."""
        if self._index <= 0:
            return None
        self._index -= 1
        request = self._entries[self._index]
        self._change(request)
        return request

    def forward(self) -> Request | None:
        """Step forward one entry and dispatch it again. ``None`` at the end."""
        if self._index >= len(self._entries) - 1:
            return None
        self._index += 1
        request = self._entries[self._index]
        self._change(request)
        return request

    @property
    def current(self) -> Request | None:
        """The request at the current history position."""
        if self._index < 0:
            return None
        return self._entries[self._index]

    @property
    def history(self) -> tuple[Request, ...]:
        return tuple(self._entries)

    def _change(self, request: Request) -> None:
        if request.location is not None:
            self.current_url = request.location
        logger.debug("Location change: %s %s", request.method, request.full_path)
        for listener in tuple(self._listeners):
            listener(request)

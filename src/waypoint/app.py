"""The waypoint App: a router, a location, and the dispatch pipeline.

The router answers "what runs for this request"; the App runs it. Every
request the location reports (navigation, form submission, state
transition, history movement) goes through ``dispatch``::

    before filters -> first matching route -> after filters
"""

import enum
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from waypoint.config import AppConfig
from waypoint.errors import RouteNotFound
from waypoint.http.request import Request
from waypoint.location import Location, MemoryLocation
from waypoint.routing.route import RouteEntry
from waypoint.routing.router import Router

logger = logging.getLogger("waypoint.dispatch")


class Status(enum.Enum):
    """How a dispatched request ended."""

    COMPLETED = "completed"
    HALTED = "halted"  # a before filter returned a falsy value other than None
    NOT_FOUND = "not_found"
    FAILED = "failed"  # a handler raised and raise_errors is off


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """Outcome of one ``App.dispatch`` call."""

    request: Request
    status: Status
    route: RouteEntry | None = None
    value: Any = None
    error: BaseException | None = None


class App:
    """A client-side application.

    Register handlers on ``app.router``, then drive it through
    ``navigate``, ``submit`` or ``app.router.trans``::

        app = App()
        app.router.get("/notes/:id", show_note)
        app.navigate("/notes/3")
    """

    __slots__ = ("config", "last_result", "location", "router")

    def __init__(self, config: AppConfig | None = None, *, location: Location | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self.location: Location = location if location is not None else MemoryLocation()
        self.router = Router(self.location)
        self.last_result: DispatchResult | None = None
        self.location.on_change(self._on_location_change)

        if self.config.log_level:
            logging.getLogger("waypoint").setLevel(self.config.log_level.upper())

    # -- Request sources --

    def navigate(
        self,
        path: str,
        data: Mapping[str, Any] | None = None,
        title: str = "",
    ) -> DispatchResult | None:
        """Follow a link to *path*, as a get request that changes the URL."""
        return self.submit(path, "get", data, title)

    def submit(
        self,
        action: str,
        method: str = "post",
        data: Mapping[str, Any] | None = None,
        title: str = "",
    ) -> DispatchResult | None:
        """Submit a form to *action*. A ``_method`` field overrides *method*."""
        return self._assign(Request.from_form(action, method, data, title))

    def trans(self, path: str, data: Mapping[str, Any] | None = None) -> DispatchResult | None:
        """Transition into a state; see ``Router.trans``."""
        return self._collect(lambda: self.router.trans(path, data))

    def start(self, path: str = "/") -> DispatchResult | None:
        """Dispatch the page-load request for *path*.

        Does nothing unless ``generate_request_on_page_load`` is set. The
        request replaces the current history entry instead of adding one.
        """
        if not self.config.generate_request_on_page_load:
            return None
        request = Request.from_fields("get", path)
        return self._collect(lambda: self.location.replace(request))

    # -- Dispatch --

    def dispatch(self, request: Request) -> DispatchResult:
        """Run the before filters, the matched route and the after filters.

        A before filter returning a falsy value other than ``None`` (``False``,
        ``0``, ``""``, an empty collection) halts the request. ``None`` and
        truthy values let it continue. After filters only run when a route ran.
        """
        try:
            return self._run_chain(request)
        except RouteNotFound:
            raise
        except Exception as exc:
            if self.config.raise_errors:
                raise
            logger.exception("Handler failed for %s %s", request.method, request.path)
            return DispatchResult(request, Status.FAILED, error=exc)

    def _run_chain(self, request: Request) -> DispatchResult:
        router = self.router
        method, path = request.method, request.path

        for entry in router.lookup_before_filters(method, path):
            result = entry.run(request)
            if result is not None and not result:
                logger.info("Request halted by before filter: %s %s", method, path)
                return DispatchResult(request, Status.HALTED, route=entry)

        route = router.lookup_route(method, path)
        if route is None:
            if self.config.raise_on_not_found:
                raise RouteNotFound(method, path)
            logger.info("No route for %s %s", method, path)
            return DispatchResult(request, Status.NOT_FOUND)

        value = route.run(request)
        for entry in router.lookup_after_filters(method, path):
            entry.run(request)
        return DispatchResult(request, Status.COMPLETED, route=route, value=value)

    # -- Internal --

    def _on_location_change(self, request: Request) -> None:
        self.last_result = self.dispatch(request)

    def _assign(self, request: Request) -> DispatchResult | None:
        return self._collect(lambda: self.location.assign(request))

    def _collect(self, action: Callable[[], None]) -> DispatchResult | None:
        """Run *action* and return the result of the dispatch it caused.

        ``MemoryLocation`` dispatches synchronously. A location that defers
        dispatch leaves nothing to collect yet, and ``None`` is returned.
        """
        self.last_result = None
        action()
        return self.last_result

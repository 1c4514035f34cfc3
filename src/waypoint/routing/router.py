"""Route and filter registry with ordered lookup.

Routes are matched first-registered-wins; filters are matched all-at-once
in registration order. Tables only grow, until ``remove_all_routes``
empties them.

Usage::

    router = Router(location)
    router.get("/users/:id", show_user)
    router.before(require_login, path="/admin/*rest")
    route = router.lookup_route("get", "/users/42")
"""

import logging
import re
from collections.abc import Callable, Mapping
from functools import partial
from typing import Any, Literal

from waypoint.errors import ConfigurationError
from waypoint.http.query import encode_query
from waypoint.http.request import Request
from waypoint.location import Location
from waypoint.routing.pattern import ANY_PATH, AnyPath
from waypoint.routing.route import ANY_METHOD, Handler, MethodMatcher, RouteEntry

logger = logging.getLogger("waypoint.routing")

FilterKind = Literal["before", "after"]
FILTER_KINDS: tuple[FilterKind, ...] = ("before", "after")

PathSpec = str | re.Pattern[str] | AnyPath
RouteBuilder = Callable[[PathSpec, Handler], RouteEntry]
FilterBuilder = Callable[..., RouteEntry]

STATE_METHOD = "state"


class Router:
    """Ordered route and filter tables.

    Each instance owns its own tables, so independent routers never share
    registrations. Tables must not be mutated from inside a handler that is
    running because of a lookup on the same router; lookups scan a snapshot
    so such a registration only shows up on the next lookup.
    """

    __slots__ = (
        "_filters",
        "_routes",
        "after",
        "before",
        "delete",
        "get",
        "location",
        "post",
        "put",
        "state",
    )

    def __init__(self, location: Location | None = None) -> None:
        self.location = location
        self._routes: list[RouteEntry] = []
        self._filters: dict[FilterKind, list[RouteEntry]] = {kind: [] for kind in FILTER_KINDS}

        self.get: RouteBuilder = self.route_for("get")
        self.post: RouteBuilder = self.route_for("post")
        self.put: RouteBuilder = self.route_for("put")
        self.delete: RouteBuilder = self.route_for("delete")
        # State routes are only reached through trans(), never through a URL
        self.state: RouteBuilder = self.route_for(STATE_METHOD)

        self.before: FilterBuilder = self._filter("before")
        self.after: FilterBuilder = self._filter("after")

    # -- Registration --

    def route(self, method: str | MethodMatcher, path: PathSpec, handler: Handler) -> RouteEntry:
        """Create a route and append it to the route table.

        Use this for methods without a shortcut::

            router.route("patch", "/bar", patch_bar)
        """
        entry = RouteEntry.create(method, path, handler)
        self._routes.append(entry)
        logger.debug("Registered route %s %s", entry.method, entry.path)
        return entry

    def route_for(self, method: str | MethodMatcher) -> RouteBuilder:
        """Bind *method*, returning a ``(path, handler)`` route builder.

        Builders share this router's table with ``route``::

            patch = router.route_for("patch")
            patch("/bar", patch_bar)
        """
        return partial(self.route, method)

    def _filter(self, kind: FilterKind) -> FilterBuilder:
        def register(handler: Handler, *, path: PathSpec = ANY_PATH) -> RouteEntry:
            """Register a filter. Without *path* it applies to every request."""
            entry = RouteEntry.create(ANY_METHOD, path, handler)
            self._filters[kind].append(entry)
            logger.debug("Registered %s filter %s", kind, entry.path)
            return entry

        register.__name__ = kind
        return register

    def add_filter(self, kind: str, handler: Handler, *, path: PathSpec = ANY_PATH) -> RouteEntry:
        """Register a filter by table name (``"before"`` or ``"after"``)."""
        if kind == "before":
            return self.before(handler, path=path)
        if kind == "after":
            return self.after(handler, path=path)
        msg = f"Unknown filter table {kind!r}; expected 'before' or 'after'"
        raise ConfigurationError(msg)

    # -- Lookup --

    def lookup_route(self, method: str, path: str) -> RouteEntry | None:
        """Return the first registered route matching *method* and *path*."""
        for entry in tuple(self._routes):
            if entry.match(method, path):
                logger.debug("Route %s %s matched %s", method, path, entry.path)
                return entry
        logger.debug("No route for %s %s", method, path)
        return None

    def lookup_before_filters(self, method: str, path: str) -> list[RouteEntry]:
        """Every before filter matching *method* and *path*, in order."""
        return self._lookup_filters("before", method, path)

    def lookup_after_filters(self, method: str, path: str) -> list[RouteEntry]:
        """Every after filter matching *method* and *path*, in order."""
        return self._lookup_filters("after", method, path)

    def _lookup_filters(self, kind: FilterKind, method: str, path: str) -> list[RouteEntry]:
        return [entry for entry in tuple(self._filters[kind]) if entry.match(method, path)]

    # -- State transitions --

    def trans(self, path: str, data: Mapping[str, Any] | None = None) -> None:
        """Transition into the state identified by *path*.

        Builds a ``state`` request and hands it to the location, which
        dispatches it like any other request. The page URL does not change,
        so the state cannot be revisited by reloading the page. *data* is
        query-encoded onto the path and shows up in ``request.params``.
        """
        if self.location is None:
            msg = "Router has no location; state transitions need one to dispatch"
            raise ConfigurationError(msg)
        full_path = f"{path}?{encode_query(data)}" if data else path
        request = Request.from_fields(method=STATE_METHOD, full_path=full_path, title="")
        logger.debug("Transition to state %s", full_path)
        self.location.assign(request)

    # -- Lifecycle & introspection --

    def remove_all_routes(self) -> None:
        """Empty the route table and both filter tables."""
        self._routes = []
        self._filters = {kind: [] for kind in FILTER_KINDS}
        logger.debug("Removed all routes and filters")

    @property
    def routes(self) -> tuple[RouteEntry, ...]:
        """All registered routes, in registration order."""
        return tuple(self._routes)

    def filters(self, kind: FilterKind) -> tuple[RouteEntry, ...]:
        """All registered filters of *kind*, in registration order."""
        return tuple(self._filters[kind])

"""Waypoint — client-side request routing for single-page applications.

Maps a request method and path to the handlers that should run, with
before/after filters and state transitions that never touch the URL.

Basic usage::

    from waypoint import App

    app = App()

    def show_note(request):
        return f"note {request.params['id']}"

    app.router.get("/notes/:id", show_note)
    app.router.before(lambda request: request.title != "locked")
    app.navigate("/notes/3")
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ANY_METHOD",
    "ANY_PATH",
    "App",
    "AppConfig",
    "ConfigurationError",
    "DispatchResult",
    "MemoryLocation",
    "Request",
    "RouteEntry",
    "RouteNotFound",
    "Router",
    "Status",
    "WaypointError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypoint`` fast while providing a clean top-level API.
    """
    if name in ("App", "DispatchResult", "Status"):
        from waypoint import app as _app

        return getattr(_app, name)

    if name == "AppConfig":
        from waypoint.config import AppConfig

        return AppConfig

    if name == "Router":
        from waypoint.routing.router import Router

        return Router

    if name in ("RouteEntry", "ANY_METHOD"):
        from waypoint.routing import route as _route

        return getattr(_route, name)

    if name == "ANY_PATH":
        from waypoint.routing.pattern import ANY_PATH

        return ANY_PATH

    if name == "Request":
        from waypoint.http.request import Request

        return Request

    if name == "MemoryLocation":
        from waypoint.location import MemoryLocation

        return MemoryLocation

    if name in ("WaypointError", "ConfigurationError", "RouteNotFound"):
        from waypoint import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)

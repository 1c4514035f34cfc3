"""Waypoint exception hierarchy.

Shared across Router, App and the pattern compiler so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class WaypointError(Exception):
    """Base for all waypoint-specific errors."""


class ConfigurationError(WaypointError):
    """Raised when a route or filter registration is invalid.

    Typically raised at startup, while route tables are being populated.
    """


@dataclass(frozen=True, slots=True)
class RouteNotFound(WaypointError):  # noqa: N818 — mirrors the dispatch outcome name
    """No registered route matched a dispatched request.

    Only raised by ``App.dispatch`` when ``AppConfig.raise_on_not_found``
    is set. ``Router.lookup_route`` signals a miss by returning ``None``.
    """

    method: str
    path: str

    def __str__(self) -> str:
        return f"No route matches {self.method} {self.path!r}"

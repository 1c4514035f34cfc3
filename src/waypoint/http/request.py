"""Immutable client-side request.

A request is built when a link is followed, a form is submitted or a state
transition happens. It never changes afterwards; binding route params
produces a new request.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from waypoint.http.query import QueryParams, encode_query

# Form field that overrides the submitted method (forms only speak get/post)
METHOD_OVERRIDE_FIELD = "_method"


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable request.

    ``method`` is always lower case. ``full_path`` is kept exactly as the
    request was built; ``path`` (without the query string, ``"/"`` when
    empty) and the parsed ``query`` are derived from it. ``path_params``
    is empty until a route binds it.
    """

    method: str
    full_path: str
    title: str = ""
    path_params: Mapping[str, str] = field(default_factory=dict)
    path: str = field(init=False)
    query: QueryParams = field(init=False)

    def __post_init__(self) -> None:
        path, _, query_string = self.full_path.partition("?")
        object.__setattr__(self, "method", self.method.lower())
        object.__setattr__(self, "path", path or "/")
        object.__setattr__(self, "query", QueryParams(query_string))

    # -- Computed properties --

    @property
    def params(self) -> dict[str, str]:
        """Query values merged with path params; path params win."""
        return {**{key: self.query[key] for key in self.query}, **self.path_params}

    @property
    def is_state(self) -> bool:
        """True for requests created by ``Router.trans``."""
        return self.method == "state"

    @property
    def location(self) -> str | None:
        """The URL this request shows in the address bar.

        Only get requests navigate; any other method leaves the current
        URL in place and returns ``None``.
        """
        if self.method == "get":
            return self.full_path
        return None

    def with_path_params(self, path_params: Mapping[str, str]) -> Request:
        """Return a copy with *path_params* bound."""
        return replace(self, path_params=dict(path_params))

    # -- Factories --

    @classmethod
    def from_fields(cls, method: str, full_path: str, title: str = "") -> Request:
        """Create a request from a method and a path that may carry a query.

        *full_path* is stored verbatim, so ``request.full_path == full_path``.
        """
        return cls(method=method, full_path=full_path, title=title)

    @classmethod
    def from_form(
        cls,
        action: str,
        method: str = "post",
        data: Mapping[str, Any] | None = None,
        title: str = "",
    ) -> Request:
        """Create a request from a form submission.

        A ``_method`` field overrides *method*, so a form can issue put and
        delete requests. The override field itself is not passed on.
        """
        fields = dict(data or {})
        override = fields.pop(METHOD_OVERRIDE_FIELD, None)
        if override:
            method = str(override)
        if not fields:
            return cls.from_fields(method, action, title)
        separator = "&" if "?" in action else "?"
        return cls.from_fields(method, f"{action}{separator}{encode_query(fields)}", title)

"""RouteEntry and the method matcher variant.

Routes and filters share one entry shape. A filter is a route whose
method is ``ANY_METHOD`` and, unless scoped, whose path is ``ANY_PATH``.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from waypoint.routing.pattern import AnyPath, PathPattern, compile_pattern

if TYPE_CHECKING:
    from waypoint.http.request import Request

Handler = Callable[["Request"], Any]


@dataclass(frozen=True, slots=True)
class LiteralMethod:
    """Accepts exactly one method token, compared case-insensitively."""

    token: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "token", self.token.lower())

    def accepts(self, method: str) -> bool:
        return self.token == method.lower()

    def __str__(self) -> str:
        return self.token


class AnyMethod:
    """Wildcard matcher that accepts every method."""

    __slots__ = ()

    def accepts(self, method: str) -> bool:
        return True

    def __str__(self) -> str:
        return "*"

    def __repr__(self) -> str:
        return "ANY_METHOD"


ANY_METHOD = AnyMethod()

MethodMatcher = LiteralMethod | AnyMethod


def method_matcher(value: str | MethodMatcher) -> MethodMatcher:
    """Coerce a method token into a matcher."""
    if isinstance(value, LiteralMethod | AnyMethod):
        return value
    return LiteralMethod(value)


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """A registered (method, path pattern, handler) triple.

    The entry owns its matching predicate: the router never inspects
    ``method`` or ``pattern`` except through ``match``.
    """

    method: MethodMatcher
    pattern: PathPattern | AnyPath
    handler: Handler

    @classmethod
    def create(
        cls,
        method: str | MethodMatcher,
        path: str | re.Pattern[str] | AnyPath,
        handler: Handler,
    ) -> "RouteEntry":
        """Build an entry, compiling *path*.

        Raises ``ConfigurationError`` if *path* is malformed.
        """
        return cls(method=method_matcher(method), pattern=compile_pattern(path), handler=handler)

    @property
    def path(self) -> str:
        """The path spec this entry was registered with."""
        return self.pattern.source

    def match(self, method: str, path: str) -> bool:
        return self.method.accepts(method) and self.pattern.match(path) is not None

    def params(self, path: str) -> dict[str, str]:
        """Path parameters captured from *path* (empty if it doesn't match)."""
        return self.pattern.match(path) or {}

    def run(self, request: "Request") -> Any:
        """Call the handler with *request*, bound to this entry's path params."""
        return self.handler(request.with_path_params(self.params(request.path)))

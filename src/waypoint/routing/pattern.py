"""Path pattern compilation.

Translates a route path like ``/users/:id`` or ``/files/*rest`` into an
anchored regex, and answers "does this path match, and with which params".
"""

import re
from dataclasses import dataclass
from urllib.parse import unquote

from waypoint.errors import ConfigurationError

# (prefix, regex) for each supported placeholder kind
PLACEHOLDERS: dict[str, str] = {
    ":": r"[^/]+",
    "*": r".*",
}

_NAME = re.compile(r"^[A-Za-z_]\w*$")
_FOREIGN_PARAM = re.compile(r"[{<][^}>]*[}>]")


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:  ``users``  (is_param=False)
    Param:   ``:id``    (is_param=True, param_name="id", kind=":")
    Splat:   ``*rest``  (is_param=True, param_name="rest", kind="*")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    kind: str = ":"


class AnyPath:
    """Wildcard pattern that accepts every path."""

    __slots__ = ()

    source = "*"

    def match(self, path: str) -> dict[str, str] | None:
        return {}

    def __repr__(self) -> str:
        return "ANY_PATH"


ANY_PATH = AnyPath()


@dataclass(frozen=True, slots=True)
class PathPattern:
    """A compiled path pattern.

    ``source`` is what the route was registered with, kept for display.
    """

    source: str
    regex: re.Pattern[str]

    def match(self, path: str) -> dict[str, str] | None:
        """Return captured params if *path* matches, else ``None``.

        Any query string on *path* is ignored.
        """
        path = path.partition("?")[0]
        found = self.regex.fullmatch(path)
        if found is None:
            return None
        return {name: unquote(value) for name, value in found.groupdict(default="").items()}


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"        -> [PathSegment("users")]
        "/users/:id"    -> [PathSegment("users"), PathSegment(":id", is_param=True, ...)]
        "/files/*rest"  -> [PathSegment("files"), PathSegment("*rest", kind="*", ...)]

    Raises ``ConfigurationError`` for ``{param}`` / ``<param>`` placeholders
    and for invalid parameter names.
    """
    if _FOREIGN_PARAM.search(path):
        msg = (
            f"Route path {path!r} uses {{param}} or <param> syntax. "
            "Waypoint path parameters are written :param (one segment) "
            "or *param (rest of the path)."
        )
        raise ConfigurationError(msg)

    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        kind = part[0]
        if kind in PLACEHOLDERS:
            name = part[1:]
            if not _NAME.match(name):
                msg = f"Invalid parameter name {name!r} in route path {path!r}"
                raise ConfigurationError(msg)
            segments.append(PathSegment(value=part, is_param=True, param_name=name, kind=kind))
        else:
            segments.append(PathSegment(value=part))
    return segments


def _build_regex(path: str, segments: list[PathSegment]) -> re.Pattern[str]:
    pieces: list[str] = []
    seen: set[str] = set()
    for seg in segments:
        if not seg.is_param:
            pieces.append("/" + re.escape(seg.value))
            continue
        if seg.param_name in seen:
            msg = f"Duplicate parameter {seg.param_name!r} in route path {path!r}"
            raise ConfigurationError(msg)
        seen.add(seg.param_name or "")
        group = f"(?P<{seg.param_name}>{PLACEHOLDERS[seg.kind]})"
        if seg.kind == "*":
            # Splat may swallow the separator too, so "/files/*rest" matches "/files"
            pieces.append(f"(?:/{group})?")
        else:
            pieces.append("/" + group)
    body = "".join(pieces) or "/"
    # Tolerate one trailing slash on non-root paths
    suffix = "/?" if body != "/" else ""
    return re.compile(body + suffix)


def compile_pattern(spec: str | re.Pattern[str] | AnyPath) -> PathPattern | AnyPath:
    """Compile a path spec into a matcher.

    Accepts a route path string, a pre-compiled regex (named groups become
    params) or ``ANY_PATH``.
    """
    if isinstance(spec, AnyPath | PathPattern):
        return spec
    if isinstance(spec, re.Pattern):
        return PathPattern(source=spec.pattern, regex=spec)
    if not isinstance(spec, str):
        msg = f"Route path must be a string, regex or ANY_PATH, not {type(spec).__name__}"
        raise ConfigurationError(msg)
    return PathPattern(source=spec, regex=_build_regex(spec, parse_path(spec)))

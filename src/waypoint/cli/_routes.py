"""``waypoint routes`` — list registered routes and filters.

Resolves an import string to a waypoint App and prints its route table,
then its before and after filter tables, in registration order.
"""

import argparse

from waypoint.cli._resolve import handler_name, load_app
from waypoint.routing.route import RouteEntry


def format_table(title: str, entries: tuple[RouteEntry, ...]) -> list[str]:
    """Render *entries* as aligned ``METHOD  PATH  HANDLER`` rows."""
    if not entries:
        return [f"{title}: none"]

    rows = [(str(e.method), e.path, handler_name(e.handler)) for e in entries]
    max_method = max(6, *(len(r[0]) for r in rows))  # "METHOD" header
    max_path = max(4, *(len(r[1]) for r in rows))  # "PATH" header

    fmt = f"{{:<{max_method}}}  {{:<{max_path}}}  {{}}"
    lines = [f"{title}:", fmt.format("METHOD", "PATH", "HANDLER")]
    sep_len = max_method + max_path + 4 + max(len(r[2]) for r in rows)
    lines.append("-" * min(sep_len, 80))
    lines.extend(fmt.format(*row) for row in rows)
    return lines


def run_routes(args: argparse.Namespace) -> None:
    """Print the route table and both filter tables of ``args.app``."""
    app = load_app(args.app)
    router = app.router

    sections = [
        format_table("Routes", router.routes),
        format_table("Before filters", router.filters("before")),
        format_table("After filters", router.filters("after")),
    ]
    print("\n\n".join("\n".join(section) for section in sections))

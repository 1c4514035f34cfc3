"""``waypoint match`` — show what a request would run, without running it."""

import argparse

from waypoint.cli._resolve import handler_name, load_app
from waypoint.cli._routes import format_table
from waypoint.http.request import Request


def run_match(args: argparse.Namespace) -> None:
    """Print the before filters, route and after filters for one request."""
    app = load_app(args.app)
    router = app.router
    request = Request.from_fields(args.method, args.path)
    method, path = request.method, request.path

    print(f"Request: {method} {request.full_path}")
    print()
    print("\n".join(format_table("Before filters", tuple(router.lookup_before_filters(method, path)))))
    print()

    route = router.lookup_route(method, path)
    if route is None:
        print("Route: no match")
    else:
        print(f"Route: {route.method} {route.path} -> {handler_name(route.handler)}")
        params = route.params(path)
        if params:
            print("Params: " + ", ".join(f"{k}={v}" for k, v in params.items()))
        print()
        print("\n".join(format_table("After filters", tuple(router.lookup_after_filters(method, path)))))

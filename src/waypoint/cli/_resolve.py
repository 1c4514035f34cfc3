"""Locating the App a CLI command inspects.

``waypoint routes`` and ``waypoint match`` take either an import string
(``myapp:app``) or a path to a Python file (``examples/notes/app.py``),
since client-side apps are often a single script rather than a package.
"""

import importlib
import importlib.util
import os
import sys
from pathlib import Path
from types import ModuleType

from waypoint.app import App


def _load_module(source: str) -> ModuleType:
    if not source.endswith(".py"):
        return importlib.import_module(source)

    path = Path(source)
    if not path.is_file():
        msg = f"No such app file: {source!r}"
        raise ModuleNotFoundError(msg)
    spec = importlib.util.spec_from_file_location(f"_waypoint_app_{path.stem}", path)
    if spec is None or spec.loader is None:
        msg = f"Cannot load app file {source!r}"
        raise ModuleNotFoundError(msg)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def resolve_app(target: str) -> App:
    """Find the waypoint App named by *target*.

    *target* is ``"module[:attribute]"`` or ``"file.py[:attribute]"``; the
    attribute defaults to ``app``. An attribute that is a factory (any
    callable that is not an App) is called with no arguments.

    Raises:
        ModuleNotFoundError: The module or file cannot be found.
        AttributeError: The attribute does not exist.
        TypeError: The result is not an App, or the factory failed.
    """
    source, _, attr_name = target.partition(":")
    obj = getattr(_load_module(source), attr_name or "app")

    if callable(obj) and not isinstance(obj, App):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"App factory {target!r} failed: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, App):
        msg = f"{target!r} is a {type(obj).__name__}, not a waypoint.App"
        raise TypeError(msg)
    return obj


def load_app(target: str) -> App:
    """``resolve_app`` for CLI commands: report failures and exit 1.

    The working directory is importable, so ``waypoint routes app`` finds
    an ``app.py`` next to where the command runs.
    """
    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)
    try:
        return resolve_app(target)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def handler_name(handler: object) -> str:
    """Display name for a route or filter handler."""
    return getattr(handler, "__qualname__", None) or getattr(handler, "__name__", repr(handler))

"""``waypoint routes`` — list declared actions.

Resolves an import string to an ActionRegistry and prints every
declared action with method, path, and identifier.
"""

import argparse
import sys

from waypoint.cli._resolve import resolve_registry
from waypoint.errors import WaypointError


def run_routes(args: argparse.Namespace) -> None:
    """Print a METHOD / PATH / ACTION table for ``args.registry``."""
    try:
        registry = resolve_registry(args.registry)
    except (ModuleNotFoundError, AttributeError, TypeError, WaypointError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    actions = list(registry)
    if not actions:
        print("No actions declared.")
        return

    rows = [(a.method, a.path, f"{a.identifier} ({a.name})") for a in actions]

    max_method = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_path = max(max(len(r[1]) for r in rows), 4)  # "PATH" header

    fmt = f"{{:<{max_method}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "ACTION"))
    sep_len = max_method + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for method, path, label in rows:
        print(fmt.format(method, path, label))

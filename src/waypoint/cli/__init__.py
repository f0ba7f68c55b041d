"""Waypoint CLI — route derivation and route listing.

Entry point registered as ``waypoint`` in ``pyproject.toml``::

    [project.scripts]
    waypoint = "waypoint.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``waypoint`` command."""
    parser = argparse.ArgumentParser(
        prog="waypoint",
        description="Waypoint — convention-based routes for action-style web apps.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- waypoint derive --------------------------------------------------
    derive_parser = subparsers.add_parser("derive", help="Derive the route for an action")
    derive_parser.add_argument(
        "identifier",
        help="Action identifier (e.g. Users::Show)",
    )
    derive_parser.add_argument(
        "--nested",
        type=int,
        default=0,
        help="Number of parent resources before the resource segment",
    )
    derive_parser.add_argument(
        "--singular",
        action="append",
        default=[],
        metavar="PLURAL=SINGULAR",
        help="Singular form for a parent resource (repeatable)",
    )
    derive_parser.add_argument(
        "--strict-singulars",
        action="store_true",
        help="Fail on parent resources without a --singular entry",
    )
    derive_parser.add_argument("--prefix", default="", help="Path prefix (e.g. /api)")
    derive_parser.add_argument("--id-param", default="id", help="Member param name")

    # -- waypoint routes --------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List declared actions")
    routes_parser.add_argument(
        "registry",
        help="Import string (e.g. myapp.actions:actions)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "derive":
        from waypoint.cli._derive import run_derive

        run_derive(args)
    elif args.command == "routes":
        from waypoint.cli._routes import run_routes

        run_routes(args)

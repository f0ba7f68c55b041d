"""``waypoint derive`` — print the route an identifier derives to."""

import argparse
import sys

from waypoint.actions.derive import derive
from waypoint.config import RouteConfig
from waypoint.errors import DerivationError


def _parse_singulars(pairs: list[str]) -> dict[str, str]:
    singulars: dict[str, str] = {}
    for pair in pairs:
        plural, sep, singular = pair.partition("=")
        if not sep or not plural or not singular:
            print(f"Error: --singular expects PLURAL=SINGULAR, got {pair!r}", file=sys.stderr)
            raise SystemExit(2)
        singulars[plural.strip()] = singular.strip()
    return singulars


def run_derive(args: argparse.Namespace) -> None:
    """Derive and print ``METHOD PATH`` for ``args.identifier``.

    Exits with code 1 on a malformed identifier or unknown action kind.
    """
    config = RouteConfig(
        id_param=args.id_param,
        path_prefix=args.prefix,
        singulars=_parse_singulars(args.singular),
        strict_singulars=args.strict_singulars,
    )
    try:
        descriptor = derive(args.identifier, args.nested, config=config)
    except DerivationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    print(f"{descriptor.method} {descriptor.path}")

"""Duet CLI — inspect a layout and call its endpoints.

Entry point registered as ``duet`` in ``pyproject.toml``::

    [project.scripts]
    duet = "duet.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``duet`` command."""
    parser = argparse.ArgumentParser(
        prog="duet",
        description="Duet — one API layout, served and called.",
    )
    parser.add_argument(
        "--log-level",
        default="warning",
        choices=("debug", "info", "warning", "error"),
        help="Logging level (default: warning)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- duet routes ------------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List the endpoints of a layout")
    routes_parser.add_argument(
        "target",
        help="Import string of a layout or App (e.g. myapi:api)",
    )

    # -- duet call --------------------------------------------------------
    call_parser = subparsers.add_parser("call", help="Call one named endpoint")
    call_parser.add_argument(
        "target",
        help="Import string of a layout or App (e.g. myapi:api)",
    )
    call_parser.add_argument("operation", help="Endpoint name (the leaf's name=)")
    call_parser.add_argument(
        "--base-url",
        required=True,
        help="Scheme, host and port of the server (e.g. http://localhost:8000)",
    )
    call_parser.add_argument("--body", default=None, help="JSON request body (POST only)")
    call_parser.add_argument(
        "--query",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Query parameter; repeat for more",
    )
    call_parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Request timeout in seconds (default: 30)",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from duet.cli._routes import run_routes

        run_routes(args)
    elif args.command == "call":
        from duet.cli._call import run_call

        run_call(args)

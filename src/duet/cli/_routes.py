"""``duet routes`` — list the endpoints of a layout.

Prints METHOD, PATH, RESULT and NAME for every endpoint, in the order
the router tries them.
"""

import argparse
import sys

from duet.api.layout import Post
from duet.api.walk import describe_kind, iter_endpoints
from duet.cli._resolve import resolve_layout


def run_routes(args: argparse.Namespace) -> None:
    """Resolve ``args.target`` and print its route table."""
    try:
        layout = resolve_layout(args.target)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rows: list[tuple[str, str, str, str]] = []
    for endpoint in iter_endpoints(layout):
        result = describe_kind(endpoint.leaf.result)
        leaf = endpoint.leaf
        if isinstance(leaf, Post) and leaf.body is not None:
            result = f"{describe_kind(leaf.body)} -> {result}"
        rows.append((endpoint.method, endpoint.path, result, leaf.name or ""))

    headers = ("METHOD", "PATH", "RESULT", "NAME")
    widths = [max(len(headers[i]), *(len(row[i]) for row in rows)) for i in range(3)]
    fmt = f"{{:<{widths[0]}}}  {{:<{widths[1]}}}  {{:<{widths[2]}}}  {{}}"

    print(fmt.format(*headers).rstrip())
    print("-" * min(sum(widths) + 6 + max(len(r[3]) for r in rows), 80))
    for row in rows:
        print(fmt.format(*row).rstrip())

"""``duet call`` — invoke one named endpoint from the command line.

Builds the client for the layout, calls the operation once, and prints
the decoded value as JSON. Failures go to stderr with exit status 1.
"""

import argparse
import json
import sys
from typing import Any

import anyio

from duet.cli._resolve import resolve_layout
from duet.client.builder import build_client, operations
from duet.client.result import Err
from duet.client.transport import Transport
from duet.codec import encode
from duet.config import ClientConfig
from duet.errors import ConfigurationError


def run_call(args: argparse.Namespace) -> None:
    """Resolve the layout, call ``args.operation`` and print the result."""
    try:
        layout = resolve_layout(args.target)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        _fail(str(exc))

    query = [_parse_query(item) for item in args.query]

    body: Any = None
    if args.body is not None:
        try:
            body = json.loads(args.body)
        except json.JSONDecodeError as exc:
            _fail(f"--body is not valid JSON: {exc}")

    transport = Transport(ClientConfig(timeout=args.timeout))
    exit_code = anyio.run(_call, layout, transport, args.operation, args.base_url, body, query)
    if exit_code:
        raise SystemExit(exit_code)


async def _call(
    layout: Any,
    transport: Transport,
    name: str,
    base_url: str,
    body: Any,
    query: list[tuple[str, str]],
) -> int:
    async with transport:
        try:
            named = operations(build_client(layout, transport))
        except ConfigurationError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        operation = named.get(name)
        if operation is None:
            known = ", ".join(sorted(named)) or "none"
            print(f"Error: no operation named {name!r} (known: {known})", file=sys.stderr)
            return 1

        if body is None:
            result = await operation(base_url, query=query)
        else:
            try:
                result = await operation(base_url, body, query=query)
            except TypeError as exc:
                print(f"Error: {exc}", file=sys.stderr)
                return 1

    if isinstance(result, Err):
        print(f"Error: {result.message}", file=sys.stderr)
        return 1
    print(encode(result.value).decode("utf-8"))
    return 0


def _parse_query(item: str) -> tuple[str, str]:
    name, sep, value = item.partition("=")
    if not sep or not name:
        _fail(f"--query expects NAME=VALUE, got {item!r}")
    return name, value


def _fail(message: str) -> Any:
    print(f"Error: {message}", file=sys.stderr)
    raise SystemExit(1)

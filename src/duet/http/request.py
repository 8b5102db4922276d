"""Immutable HTTP request and the per-request routing context.

Frozen metadata with async body access. The request is honest about
what it is: received data that doesn't change.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qsl

from duet._internal.asgi import HTTPScope, Receive, Scope


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Metadata (method, path, segments, headers) is frozen at creation.
    Body is accessed asynchronously via ``.body()``, ``.json()``, ``.text()``.

    The query string is kept raw. The router never looks at it; handlers
    that want it can read ``query_params``.
    """

    method: str
    path: str
    path_segments: tuple[str, ...]
    headers: tuple[tuple[bytes, bytes], ...]
    query_string: bytes

    # Private: ASGI receive callable for body streaming
    _receive: Receive

    # Private: mutable cache for the body (dict contents mutate, the field doesn't)
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def header(self, name: str, default: str | None = None) -> str | None:
        """First value of header *name* (case-insensitive), or *default*."""
        key = name.lower().encode("latin-1")
        for raw_name, raw_value in self.headers:
            if raw_name.lower() == key:
                return raw_value.decode("latin-1")
        return default

    @property
    def content_type(self) -> str | None:
        return self.header("content-type")

    @property
    def query_params(self) -> list[tuple[str, str]]:
        """Query string as ordered (name, value) pairs, blanks kept."""
        return parse_qsl(self.query_string.decode("latin-1"), keep_blank_values=True)

    # -- Async body access --

    async def body(self) -> bytes:
        """Read the full request body.

        Result is cached — the ASGI receive is consumed once, then
        the same bytes are returned on subsequent calls.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncIterator[bytes]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            if message["type"] == "http.disconnect":
                break
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def json(self) -> Any:
        """Parse the body as JSON, without any type checking."""
        import json as json_module

        raw = await self.body()
        return json_module.loads(raw)

    async def text(self) -> str:
        """Read the body as text (UTF-8)."""
        raw = await self.body()
        return raw.decode("utf-8")

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        parsed = HTTPScope.from_scope(scope)
        return cls(
            method=parsed.method,
            path=parsed.path,
            path_segments=parsed.path_segments,
            headers=parsed.headers,
            query_string=parsed.query_string,
            _receive=receive,
        )

    def routing_context(self) -> RoutingContext:
        """A fresh routing context positioned at the start of the path."""
        return RoutingContext(remaining=self.path_segments, method=self.method)


@dataclass(frozen=True, slots=True)
class RoutingContext:
    """What is left to match of one request.

    Created per request and never mutated: ``consume`` returns a new,
    narrower context, so concurrent dispatches share nothing.
    """

    remaining: tuple[str, ...]
    method: str

    @property
    def exhausted(self) -> bool:
        """True when every path segment has been matched."""
        return not self.remaining

    def consume(self, label: str) -> RoutingContext | None:
        """Strip *label* from the front of the path.

        Returns ``None`` if the path is exhausted or starts with a
        different segment.
        """
        if not self.remaining or self.remaining[0] != label:
            return None
        return RoutingContext(remaining=self.remaining[1:], method=self.method)

"""Client request context — the state a layout walk accumulates.

Each ``Segment`` on the way down appends to the path; a leaf operation
then adds the caller's query parameters and body before sending.
Every helper returns a new context, so sibling branches never share
state.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from urllib.parse import quote

import httpx

QueryInput = Mapping[str, str | None] | Iterable[tuple[str, str | None]]


@dataclass(frozen=True, slots=True)
class RequestContext:
    """Path, query and body of an outgoing request, built incrementally."""

    path: str = ""
    query: tuple[tuple[str, str], ...] = ()
    body: bytes = b""

    def append_to_path(self, label: str) -> RequestContext:
        """Return a context whose path ends in ``/label`` (percent-encoded)."""
        return replace(self, path=f"{self.path}/{quote(label, safe='')}")

    def append_to_query(self, name: str, value: str | None) -> RequestContext:
        """Return a context with ``name=value`` added to the query.

        An absent value (``None``) adds nothing: the parameter is omitted,
        not sent empty.
        """
        if value is None:
            return self
        return replace(self, query=(*self.query, (name, str(value))))

    def extend_query(self, params: QueryInput | None) -> RequestContext:
        """Append every pair of *params*, in order, skipping absent values."""
        if not params:
            return self
        pairs = params.items() if isinstance(params, Mapping) else params
        context = self
        for name, value in pairs:
            context = context.append_to_query(name, value)
        return context

    def with_body(self, raw: bytes) -> RequestContext:
        """Return a context carrying *raw* as the request body."""
        return replace(self, body=raw)

    def target(self, base_url: str | httpx.URL) -> httpx.URL:
        """Resolve the accumulated path against *base_url*.

        Standard reference resolution: the path is absolute, so it
        replaces any path on the base. An empty path yields the base.
        """
        base = httpx.URL(base_url)
        if not self.path:
            return base
        return base.join(self.path)

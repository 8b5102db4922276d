"""Client builder — one async operation per endpoint of a layout.

The operation tree mirrors the layout: every leaf becomes an
``Operation``, every ``Alt`` a ``Both`` of its sides, and every
``Segment`` extends the path of the operations beneath it. Nothing is
tried at call time; the caller picks the operation.
"""

import logging
from typing import Any

import httpx

from duet.api.layout import Alt, Layout, Leaf, Segment
from duet.client.request import QueryInput, RequestContext
from duet.client.result import Err, Ok, Result
from duet.client.transport import Transport
from duet.codec import decode, encode
from duet.errors import ConfigurationError, DecodeError
from duet.routing.route import Both

logger = logging.getLogger("duet.client")

_NO_BODY: Any = object()


class Operation:
    """A callable remote endpoint.

    ``await op(base_url)`` for ``GET``; ``await op(base_url, payload)``
    for ``POST``. Both take ``query=`` pairs or a mapping; ``None``
    values are left out of the query string.
    """

    __slots__ = ("context", "leaf", "transport")

    def __init__(self, leaf: Leaf, context: RequestContext, transport: Transport) -> None:
        self.leaf = leaf
        self.context = context
        self.transport = transport

    @property
    def name(self) -> str | None:
        return self.leaf.name

    @property
    def method(self) -> str:
        return self.leaf.method

    @property
    def path(self) -> str:
        return self.context.path or "/"

    def __repr__(self) -> str:
        return f"Operation({self.method} {self.path})"

    async def __call__(
        self,
        base_url: str | httpx.URL,
        body: Any = _NO_BODY,
        *,
        query: QueryInput | None = None,
    ) -> Result[Any]:
        """Issue the request and decode the response.

        Returns ``Ok(value)`` or ``Err(message)``; HTTP-level failures are
        never raised. Passing a body to a ``GET`` operation is a
        ``TypeError``.
        """
        method = self.leaf.method
        context = self.context.extend_query(query)
        headers = {"accept": "application/json"}
        content: bytes | None = None

        if body is not _NO_BODY:
            if method == "GET":
                msg = f"GET operation {self.path} does not take a body"
                raise TypeError(msg)
            context = context.with_body(encode(body))
            headers["content-type"] = "application/json"
        if method != "GET":
            content = context.body

        try:
            url = context.target(base_url)
            logger.debug("%s %s", method, url)
            response = await self.transport.send(
                method,
                url,
                params=context.query,
                content=content,
                headers=headers,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("%s %s failed: %s", method, self.path, exc)
            return Err(f"HTTP {method} request failed: {type(exc).__name__}: {exc}", "transport")

        if response.status_code != self.leaf.success_status:
            return Err(
                f"HTTP {method} request failed with status: {response.status_code}",
                "status",
                response.status_code,
            )

        try:
            value = decode(response.content, self.leaf.result)
        except DecodeError as exc:
            logger.debug("%s %s: undecodable body: %s", method, url, exc)
            return Err(f"HTTP {method} request returned invalid json", "body", response.status_code)
        return Ok(value)


def build_client(layout: Layout, transport: Transport) -> Any:
    """Build the operation tree for *layout*, sending through *transport*."""
    return _build(layout, transport, RequestContext())


def _build(layout: Layout, transport: Transport, context: RequestContext) -> Any:
    match layout:
        case Leaf():
            return Operation(layout, context, transport)
        case Segment(label=label, inner=inner):
            return _build(inner, transport, context.append_to_path(label))
        case Alt(left=left, right=right):
            return Both(_build(left, transport, context), _build(right, transport, context))
    msg = f"Not a layout node: {layout!r}"
    raise ConfigurationError(msg)


def operations(tree: Any) -> dict[str, Operation]:
    """Index the named operations of an operation tree by name.

    Unnamed leaves are skipped. Two leaves with the same name is a
    ``ConfigurationError``.
    """
    found: dict[str, Operation] = {}
    pending = [tree]
    while pending:
        node = pending.pop()
        if isinstance(node, Both):
            pending.extend((node.right, node.left))
        elif isinstance(node, Operation) and node.name is not None:
            if node.name in found:
                msg = f"Duplicate operation name {node.name!r}"
                raise ConfigurationError(msg)
            found[node.name] = node
    return found

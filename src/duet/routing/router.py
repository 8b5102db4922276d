"""Compiled router — ordered first-match dispatch over a layout.

The layout and its handler tree are walked together once, at
construction, into a flat tuple of routes (left branches before right).
Shape mismatches surface there, before any request is served.
"""

import inspect
import logging
from collections.abc import Awaitable, Callable, Iterator
from typing import Any

from duet._internal.invoke import invoke
from duet.api.layout import Alt, Layout, Leaf, Post, Segment
from duet.codec import decode
from duet.errors import DecodeError, HTTPError, LayoutMismatchError
from duet.http.request import Request, RoutingContext
from duet.http.response import Response
from duet.routing.route import Both, Route

logger = logging.getLogger("duet.routing")


class Router:
    """Compiled router over a layout and its handler tree.

    Usage::

        router = Router.from_layout(
            "users" / (Get(list[User]) | Post(User, body=User)),
            Both(list_users, create_user),
        )
        response = await router.dispatch(request)  # None when nothing matches
    """

    __slots__ = ("_routes",)

    def __init__(self, routes: tuple[Route, ...]) -> None:
        self._routes = routes

    @classmethod
    def from_layout(cls, layout: Layout, handlers: Any) -> "Router":
        """Pair *layout* with *handlers* and compile the route table.

        Raises ``LayoutMismatchError`` if the handler tree does not mirror
        the layout.
        """
        return cls(tuple(_compile(layout, handlers, ())))

    @property
    def routes(self) -> tuple[Route, ...]:
        """All compiled routes, in the order they are tried."""
        return self._routes

    def match(self, context: RoutingContext) -> Route | None:
        """Return the first route that fits *context*, or ``None``.

        A route fits when each of its labels consumes the next path
        segment, nothing is left over, and the method is the leaf's.
        """
        for candidate in self._routes:
            narrowed: RoutingContext | None = context
            for label in candidate.segments:
                narrowed = narrowed.consume(label)
                if narrowed is None:
                    break
            else:
                if narrowed.exhausted and narrowed.method == candidate.method:
                    return candidate
        return None

    async def dispatch(self, request: Request) -> Response | None:
        """Route *request* to its handler.

        Returns the handler's response, or ``None`` if no route matches.
        Handler failures (``HTTPError``) come back as responses; any other
        exception propagates.
        """
        matched = self.match(request.routing_context())
        if matched is None:
            logger.debug("no route for %s %s", request.method, request.path)
            return None

        logger.debug("%s %s -> %s", request.method, request.path, _handler_name(matched.handler))
        try:
            kwargs = await _handler_kwargs(matched, request)
            result = await invoke(matched.handler, **kwargs)
        except HTTPError as exc:
            logger.debug("%d %s %s — %s", exc.status, request.method, request.path, exc.detail)
            return Response.failure(exc.status, exc.detail)

        return Response.json(result, status=matched.leaf.success_status)


def route(layout: Layout, handlers: Any) -> Callable[[Request], Awaitable[Response | None]]:
    """Compile *layout* and *handlers* into a request-dispatch function."""
    return Router.from_layout(layout, handlers).dispatch


# -- Compilation --


def _compile(layout: Layout, handlers: Any, prefix: tuple[str, ...]) -> Iterator[Route]:
    match layout:
        case Leaf():
            where = f"{layout.method} /{'/'.join(prefix)}"
            if isinstance(handlers, (Both, tuple)) or not callable(handlers):
                msg = f"{where}: expected a handler callable, got {type(handlers).__name__}"
                raise LayoutMismatchError(msg)
            yield Route(prefix, layout, handlers, _plan_injection(handlers, layout, where))
        case Segment(label=label, inner=inner):
            yield from _compile(inner, handlers, (*prefix, label))
        case Alt(left=left, right=right):
            left_handlers, right_handlers = _split_pair(handlers, prefix)
            yield from _compile(left, left_handlers, prefix)
            yield from _compile(right, right_handlers, prefix)
        case _:
            msg = f"Not a layout node: {layout!r}"
            raise LayoutMismatchError(msg)


def _split_pair(handlers: Any, prefix: tuple[str, ...]) -> tuple[Any, Any]:
    if isinstance(handlers, Both):
        return handlers.left, handlers.right
    if isinstance(handlers, tuple) and len(handlers) == 2:
        return handlers
    msg = (
        f"Alternative under /{'/'.join(prefix)}: expected Both(left, right) "
        f"or a 2-tuple of handlers, got {type(handlers).__name__}"
    )
    raise LayoutMismatchError(msg)


def _plan_injection(handler: Any, leaf: Leaf, where: str) -> tuple[tuple[str, str], ...]:
    """Decide, once, which parameters the handler receives.

    ``request`` (by name or ``Request`` annotation) gets the request;
    ``body`` gets the decoded payload of a ``Post`` that declares one.
    Any other parameter must have a default.
    """
    try:
        sig = inspect.signature(handler)
    except (TypeError, ValueError):
        return ()

    accepts_body = isinstance(leaf, Post) and leaf.body is not None
    plan: list[tuple[str, str]] = []
    for name, param in sig.parameters.items():
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue
        if name == "request" or param.annotation is Request or param.annotation == "Request":
            source = "request"
        elif name == "body" and accepts_body:
            source = "body"
        elif param.default is not inspect.Parameter.empty:
            continue
        else:
            msg = f"{where}: handler {_handler_name(handler)}() requires {name!r}, which this endpoint cannot supply"
            raise LayoutMismatchError(msg)
        if param.kind is inspect.Parameter.POSITIONAL_ONLY:
            msg = f"{where}: handler parameter {name!r} must not be positional-only"
            raise LayoutMismatchError(msg)
        plan.append((name, source))
    return tuple(plan)


# -- Invocation --


async def _handler_kwargs(matched: Route, request: Request) -> dict[str, Any]:
    kwargs: dict[str, Any] = {}
    for name, source in matched.inject:
        if source == "request":
            kwargs[name] = request
        else:
            raw = await request.body()
            try:
                kwargs[name] = decode(raw, matched.leaf.body)  # type: ignore[attr-defined]
            except DecodeError as exc:
                raise HTTPError(400, f"invalid request body: {exc}") from exc
    return kwargs


def _handler_name(handler: Any) -> str:
    return getattr(handler, "__qualname__", None) or type(handler).__name__

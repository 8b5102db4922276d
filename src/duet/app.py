"""Duet application class — a layout served over ASGI.

The route table is compiled in the constructor, so a handler tree that
doesn't mirror its layout fails at import time rather than on the first
request.
"""

import inspect
import logging

from duet._internal.asgi import Receive, Scope, Send
from duet._internal.types import Hook
from duet.api.layout import Layout
from duet.config import AppConfig
from duet.routing.route import Route
from duet.routing.router import Router
from duet.server.handler import handle_request

logger = logging.getLogger("duet.server")


class App:
    """An ASGI application serving one layout.

    Usage::

        api = "users" / (Get(list[User]) | Post(User, body=User))
        app = App(api, Both(list_users, create_user))

    Run it with any ASGI server (``uvicorn myservice:app``). Unmatched
    requests get a plain-text 404.

    Thread safety:
        Nothing is mutated while serving. Each request gets its own
        Request and routing context, so one App can dispatch
        concurrently on as many tasks or threads as the server likes.
    """

    __slots__ = (
        "_router",
        "_shutdown_hooks",
        "_started",
        "_startup_hooks",
        "config",
        "layout",
    )

    def __init__(
        self,
        layout: Layout,
        handlers: object,
        config: AppConfig | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self.layout: Layout = layout
        self._router: Router = Router.from_layout(layout, handlers)
        self._startup_hooks: list[Hook] = []
        self._shutdown_hooks: list[Hook] = []
        self._started: bool = False

    @property
    def router(self) -> Router:
        return self._router

    @property
    def routes(self) -> tuple[Route, ...]:
        return self._router.routes

    # -- Lifecycle hooks --

    def on_startup(self, func: Hook) -> Hook:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup,
        before the server begins accepting HTTP requests. This is where a
        shared client ``Transport`` for upstream services belongs::

            @app.on_startup
            async def open_upstream():
                state.upstream = Transport(ClientConfig(timeout=5.0))
        """
        self._check_not_started()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Hook) -> Hook:
        """Register an async or sync shutdown hook via decorator.

        Hooks run in registration order during ASGI lifespan shutdown,
        after the server stops accepting new requests.
        """
        self._check_not_started()
        self._shutdown_hooks.append(func)
        return func

    async def startup(self) -> None:
        """Run the startup hooks. Called by the lifespan protocol and TestClient."""
        self._started = True
        for hook in self._startup_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    async def shutdown(self) -> None:
        """Run the shutdown hooks."""
        for hook in self._shutdown_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles lifespan scopes directly, then delegates HTTP scopes to
        the request handler pipeline. Other scope types are ignored.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        await handle_request(scope, receive, send, router=self._router, config=self.config)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    logger.exception("startup hook failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                logger.debug("serving %d routes", len(self._router.routes))
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return

    def _check_not_started(self) -> None:
        if self._started:
            msg = "Cannot register lifecycle hooks after the app has started."
            raise RuntimeError(msg)

"""ASGI handler — translates ASGI scope/messages to duet types.

The only component that touches raw HTTP scopes directly. Builds a
Request, dispatches through the router, falls back to 404 on no match,
and sends the Response back through ASGI send().
"""

from duet._internal.asgi import Receive, Scope, Send
from duet.config import AppConfig
from duet.http.request import Request
from duet.routing.router import Router
from duet.server.errors import internal_error, not_found
from duet.server.sender import send_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    config: AppConfig,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    try:
        response = await router.dispatch(request)
    except Exception as exc:
        response = internal_error(exc, request, config)

    if response is None:
        response = not_found(request, config)

    await send_response(response, send)

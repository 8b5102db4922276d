"""In-process client transport for round-trip tests.

Client operations built on it hit the App directly through
``httpx.ASGITransport``; no server, no sockets::

    async with asgi_transport(app) as transport:
        list_users, create_user = build_client(api, transport)
        result = await list_users(TEST_BASE_URL)
"""

import httpx

from duet.app import App
from duet.client.transport import Transport

TEST_BASE_URL = "http://testserver"


def asgi_transport(app: App) -> Transport:
    """A ``Transport`` whose requests are served by *app* in-process."""
    client = httpx.AsyncClient(transport=httpx.ASGITransport(app=app))
    return Transport(client=client)

"""Duet — one API layout, served and called.

Describe an HTTP API once; get a router for the server and typed
operations for the client, guaranteed to agree on paths, methods and
payloads.

Basic usage::

    from duet import App, Both, Get, Post

    api = "users" / (Get(list[User], name="list_users") | Post(User, body=User, name="create_user"))

    app = App(api, Both(list_users, create_user))   # serve with any ASGI server

Calling it::

    from duet import Transport, build_client

    async with Transport() as transport:
        list_users, create_user = build_client(api, transport)
        result = await create_user("http://localhost:8000", User(name="ada"))
"""

__version__ = "0.1.0"
__all__ = [
    "Alt",
    "App",
    "AppConfig",
    "Both",
    "ClientConfig",
    "ConfigurationError",
    "DecodeError",
    "DuetError",
    "Err",
    "Get",
    "HTTPError",
    "LayoutMismatchError",
    "Ok",
    "Post",
    "Request",
    "Response",
    "Router",
    "Segment",
    "Transport",
    "alt",
    "build_client",
    "operations",
    "path",
    "route",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import duet`` fast while providing a clean top-level API.
    """
    if name in ("Alt", "Get", "Post", "Segment", "alt", "path"):
        from duet.api import layout as _layout

        return getattr(_layout, name)

    if name == "App":
        from duet.app import App

        return App

    if name in ("AppConfig", "ClientConfig"):
        from duet import config as _config

        return getattr(_config, name)

    if name in ("Both", "Router", "route"):
        from duet import routing as _routing

        return getattr(_routing, name)

    if name == "Request":
        from duet.http.request import Request

        return Request

    if name == "Response":
        from duet.http.response import Response

        return Response

    if name in ("Err", "Ok", "Transport", "build_client", "operations"):
        from duet import client as _client

        return getattr(_client, name)

    if name in (
        "ConfigurationError",
        "DecodeError",
        "DuetError",
        "HTTPError",
        "LayoutMismatchError",
    ):
        from duet import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)

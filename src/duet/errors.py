"""Duet exception hierarchy.

Shared across the layout model, Router, App, and client so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class DuetError(Exception):
    """Base for all duet-specific errors."""


class ConfigurationError(DuetError):
    """Raised when a layout is malformed.

    Always raised while the layout is being built, never while serving.
    """


class LayoutMismatchError(ConfigurationError):
    """The handler tree does not mirror the layout it is paired with.

    Raised when the router is compiled (``Router.from_layout`` or
    ``App(...)``), so a mismatched server never starts serving.
    """


class DecodeError(DuetError, ValueError):
    """A JSON payload could not be decoded as the declared type."""


@dataclass(frozen=True, slots=True)
class HTTPError(DuetError):
    """A handler failure carrying an explicit status code.

    Raise it from a handler to answer with ``status`` and ``detail`` as a
    plain body. The router renders it verbatim; it never reaches the
    ASGI boundary as an error::

        def get_user():
            raise HTTPError(404, "no such user")
    """

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)

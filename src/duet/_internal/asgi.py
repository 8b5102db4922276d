"""Typed ASGI definitions.

Raw ASGI aliases plus a typed view of the HTTP scope for internal use.
Handlers never see these; they get a ``Request``.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from dataclasses import dataclass
from typing import Any, TypeAlias

Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]


@dataclass(frozen=True, slots=True)
class HTTPScope:
    """The parts of an ASGI HTTP scope the router and handlers use."""

    method: str
    path: str
    query_string: bytes
    headers: tuple[tuple[bytes, bytes], ...]

    @classmethod
    def from_scope(cls, scope: Scope) -> "HTTPScope":
        """Parse a raw ASGI scope. Missing optional keys get ASGI defaults."""
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            query_string=scope.get("query_string", b""),
            headers=tuple(scope.get("headers", ())),
        )

    @property
    def path_segments(self) -> tuple[str, ...]:
        """The path split into components.

        One leading ``/`` is dropped, so ``/`` has no segments and
        ``/users/`` ends in an empty segment.
        """
        trimmed = self.path[1:] if self.path.startswith("/") else self.path
        if not trimmed:
            return ()
        return tuple(trimmed.split("/"))

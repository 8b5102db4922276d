"""Layout nodes — the declarative description of an API's shape.

A layout is plain immutable data. It does nothing on its own; the router
and the client builder both interpret the same value::

    api = alt(
        "users" / (Get(list[User], name="list_users") | Post(User, body=User, name="create_user")),
        path("health/live", Get(str, name="live")),
    )

``"label" / layout`` builds a ``Segment`` and ``a | b`` builds an ``Alt``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, TypeAlias

from duet.errors import ConfigurationError


class _Node:
    """Operator sugar shared by every layout node."""

    __slots__ = ()

    def __or__(self, other: object) -> Alt:
        if not isinstance(other, _Node):
            return NotImplemented
        return Alt(self, other)  # type: ignore[arg-type]

    def __rtruediv__(self, label: object) -> Segment:
        if not isinstance(label, str):
            return NotImplemented
        return Segment(label, self)  # type: ignore[arg-type]


@dataclass(frozen=True, slots=True)
class Leaf(_Node):
    """A single endpoint with no further path structure.

    ``result`` is the type of the JSON value served on success. ``name``
    is optional and only used to look operations up by name on the client
    side and in route listings.
    """

    result: Any
    name: str | None = field(default=None, kw_only=True)

    method: ClassVar[str]
    success_status: ClassVar[int]

    def __post_init__(self) -> None:
        if type(self) is Leaf:
            msg = "Leaf is abstract; use Get or Post"
            raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class Get(Leaf):
    """``GET`` endpoint. Serves ``result`` as JSON with status 200."""

    method: ClassVar[str] = "GET"
    success_status: ClassVar[int] = 200


@dataclass(frozen=True, slots=True)
class Post(Leaf):
    """``POST`` endpoint. Serves ``result`` as JSON with status 201.

    ``body`` optionally declares the type of the JSON request payload.
    When set, handlers can take a ``body`` parameter and client operations
    accept a ``body`` argument.
    """

    body: Any = field(default=None, kw_only=True)

    method: ClassVar[str] = "POST"
    success_status: ClassVar[int] = 201


@dataclass(frozen=True, slots=True)
class Segment(_Node):
    """The ``inner`` layout, found under the literal path component ``label``."""

    label: str
    inner: Layout

    def __post_init__(self) -> None:
        if not isinstance(self.label, str) or not self.label:
            msg = f"Segment label must be a non-empty string, got {self.label!r}"
            raise ConfigurationError(msg)
        if "/" in self.label:
            msg = (
                f"Segment label {self.label!r} contains '/'. "
                f"A segment matches exactly one path component; use path() to nest."
            )
            raise ConfigurationError(msg)
        if self.label in (".", ".."):
            msg = f"Segment label {self.label!r} is a dot segment; URL resolution would remove it."
            raise ConfigurationError(msg)
        _check_node(self.inner, "Segment inner")


@dataclass(frozen=True, slots=True)
class Alt(_Node):
    """Ordered alternative. ``left`` takes precedence on overlap."""

    left: Layout
    right: Layout

    def __post_init__(self) -> None:
        _check_node(self.left, "Alt left")
        _check_node(self.right, "Alt right")


Layout: TypeAlias = Leaf | Segment | Alt


def _check_node(value: object, where: str) -> None:
    if not isinstance(value, (Leaf, Segment, Alt)):
        msg = f"{where} must be a layout node (Get, Post, Segment, Alt), got {type(value).__name__}"
        raise ConfigurationError(msg)


def alt(*branches: Layout) -> Layout:
    """Combine branches right-nested: ``alt(a, b, c) == Alt(a, Alt(b, c))``.

    Order is preserved, so earlier branches still win on overlap.
    """
    if not branches:
        msg = "alt() needs at least one branch"
        raise ConfigurationError(msg)
    result = branches[-1]
    for branch in reversed(branches[:-1]):
        result = Alt(branch, result)
    return result


def path(prefix: str, inner: Layout) -> Layout:
    """Nest *inner* under every component of a ``/``-separated prefix.

    ``path("api/v1", inner) == Segment("api", Segment("v1", inner))``.
    Empty components are skipped, so leading and trailing slashes are fine.
    """
    result = inner
    for label in reversed([part for part in prefix.split("/") if part]):
        result = Segment(label, result)
    _check_node(result, "path() inner")
    return result

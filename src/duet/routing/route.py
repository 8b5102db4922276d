"""Route and Both frozen dataclasses."""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from duet._internal.types import Handler
from duet.api.layout import Leaf


@dataclass(frozen=True)
class Both[L, R]:
    """The pair mirroring an ``Alt`` in handler and operation trees.

    Iterable, so it unpacks like a 2-tuple::

        list_users, create_user = build_client(api, transport)
    """

    left: L
    right: R

    def __iter__(self) -> Iterator[Any]:
        yield self.left
        yield self.right


@dataclass(frozen=True, slots=True)
class Route:
    """One compiled endpoint: the labels to consume, the leaf, its handler.

    Created when the router is compiled; never changes afterwards.
    ``inject`` maps handler parameter names to what they receive
    (``"request"`` or ``"body"``).
    """

    segments: tuple[str, ...]
    leaf: Leaf
    handler: Handler
    inject: tuple[tuple[str, str], ...] = ()

    @property
    def method(self) -> str:
        return self.leaf.method

    @property
    def path(self) -> str:
        return "/" + "/".join(self.segments)

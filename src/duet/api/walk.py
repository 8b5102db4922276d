"""Endpoint enumeration over a layout.

Flattens a layout into its leaves, left branch before right, each paired
with the chain of segment labels leading to it.
"""

from __future__ import annotations

import types
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Literal, Union, get_args, get_origin

from duet.api.layout import Alt, Layout, Leaf, Segment


@dataclass(frozen=True, slots=True)
class Endpoint:
    """A leaf together with the labels of its ancestor segments."""

    segments: tuple[str, ...]
    leaf: Leaf

    @property
    def method(self) -> str:
        return self.leaf.method

    @property
    def path(self) -> str:
        """Display path, e.g. ``/users/active``. The root endpoint is ``/``."""
        return "/" + "/".join(self.segments)


def iter_endpoints(layout: Layout, prefix: tuple[str, ...] = ()) -> Iterator[Endpoint]:
    """Yield every endpoint of *layout* in precedence order."""
    match layout:
        case Leaf():
            yield Endpoint(prefix, layout)
        case Segment(label=label, inner=inner):
            yield from iter_endpoints(inner, (*prefix, label))
        case Alt(left=left, right=right):
            yield from iter_endpoints(left, prefix)
            yield from iter_endpoints(right, prefix)


def describe_kind(kind: Any) -> str:
    """Short human-readable name for a declared result or body type.

    Generic arguments are named without their module: ``list[User]``.
    """
    if kind is None or kind is type(None):
        return "None"
    origin = get_origin(kind)
    args = get_args(kind)
    if origin is Literal:
        return f"Literal[{', '.join(repr(arg) for arg in args)}]"
    if origin is Union or origin is types.UnionType:
        return " | ".join(describe_kind(arg) for arg in args)
    if origin is not None and args:
        inner = ", ".join("..." if arg is Ellipsis else describe_kind(arg) for arg in args)
        return f"{getattr(origin, '__name__', origin)}[{inner}]"
    if isinstance(kind, type):
        return kind.__name__
    return str(kind).replace("typing.", "")

"""Shared type aliases used across duet modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Leaf handler — user-defined function, sync or async
Handler: TypeAlias = Callable[..., Any]

# Lifespan hook — no arguments, sync or async
Hook: TypeAlias = Callable[[], Any]

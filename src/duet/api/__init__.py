"""API layouts — the single description both router and client interpret.

Layouts are composed once at import time and never change afterwards.
"""

from duet.api.layout import Alt, Get, Layout, Leaf, Post, Segment, alt, path
from duet.api.walk import Endpoint, describe_kind, iter_endpoints

__all__ = [
    "Alt",
    "Endpoint",
    "Get",
    "Layout",
    "Leaf",
    "Post",
    "Segment",
    "alt",
    "describe_kind",
    "iter_endpoints",
    "path",
]

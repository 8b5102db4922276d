"""Routing — a layout plus a handler tree, compiled to an ordered route table.

Routes are tried in layout order; the first one whose segments and method
fit the request handles it.
"""

from duet.routing.route import Both, Route
from duet.routing.router import Router, route

__all__ = ["Both", "Route", "Router", "route"]

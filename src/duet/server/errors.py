"""Boundary responses — what the server answers when routing can't.

Unmatched requests get a plain-text 404. Handler crashes (anything that
is not an ``HTTPError``) get a plain-text 500 and a logged traceback.
"""

import logging

from duet.config import AppConfig
from duet.http.request import Request
from duet.http.response import Response

logger = logging.getLogger("duet.server")


def not_found(request: Request, config: AppConfig) -> Response:
    """404 for a request no route matched."""
    logger.debug("404 %s %s", request.method, request.path)
    return Response.plain(config.not_found_body, 404)


def internal_error(exc: Exception, request: Request, config: AppConfig) -> Response:
    """Handle an unexpected handler exception as a 500."""
    logger.exception("500 %s %s", request.method, request.path)
    if config.debug:
        return Response.plain(f"{type(exc).__name__}: {exc}", 500)
    return Response.plain(config.internal_error_body, 500)

"""Server and client configuration.

Both configs are frozen dataclasses — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Server-side configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True)
    """

    # Include exception text in 500 bodies
    debug: bool = False

    # Body of the plain-text 404 sent for unmatched requests
    not_found_body: str = "not found"

    # Body of the plain-text 500 sent when a handler crashes (non-debug)
    internal_error_body: str = "Internal Server Error"


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Client-side transport configuration. Immutable after creation.

    Used by ``Transport`` to build its shared connection pool::

        transport = Transport(ClientConfig(timeout=5.0))
    """

    # Per-request timeout in seconds (connect, read, write, pool)
    timeout: float = 30.0

    # Connection pool limits
    max_connections: int = 100
    max_keepalive_connections: int = 20

    # Headers sent with every request
    headers: tuple[tuple[str, str], ...] = ()

    follow_redirects: bool = False

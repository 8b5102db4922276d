"""Shared client transport — one connection pool for every operation.

Create it once at startup, pass it to ``build_client``, close it at
shutdown::

    async with Transport(ClientConfig(timeout=5.0)) as transport:
        client = build_client(api, transport)
        ...

The pool is safe to use from concurrent calls; duet adds no locking of
its own.
"""

import httpx

from duet.config import ClientConfig


class Transport:
    """A long-lived ``httpx.AsyncClient`` with an explicit lifecycle.

    Pass *client* to reuse an existing ``httpx.AsyncClient`` (for example
    one on an ``httpx.ASGITransport`` in tests). The transport owns it
    either way: ``aclose()`` closes it.
    """

    __slots__ = ("_client",)

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        if client is None:
            config = config or ClientConfig()
            client = httpx.AsyncClient(
                timeout=httpx.Timeout(config.timeout),
                limits=httpx.Limits(
                    max_connections=config.max_connections,
                    max_keepalive_connections=config.max_keepalive_connections,
                ),
                headers=list(config.headers),
                follow_redirects=config.follow_redirects,
            )
        self._client = client

    @property
    def closed(self) -> bool:
        return self._client.is_closed

    async def send(
        self,
        method: str,
        url: httpx.URL,
        *,
        params: tuple[tuple[str, str], ...] = (),
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Issue one request and read the full response.

        Raises ``httpx.HTTPError`` subclasses for transport failures.
        """
        return await self._client.request(
            method,
            url,
            params=list(params) or None,
            content=content,
            headers=headers,
        )

    async def aclose(self) -> None:
        """Close the pool. Pending connections are released."""
        await self._client.aclose()

    async def __aenter__(self) -> "Transport":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

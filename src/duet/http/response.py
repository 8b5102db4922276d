"""HTTP response value.

Immutable by convention; ``with_*`` helpers return a new Response.
"""

from dataclasses import dataclass, replace

from duet.codec import encode

JSON_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"


@dataclass(frozen=True, slots=True)
class Response:
    """A fully formed HTTP response.

    ``content_type`` is ``None`` for responses that declare no type
    (handler failures render their message that way).
    """

    body: str | bytes = b""
    status: int = 200
    content_type: str | None = None
    headers: tuple[tuple[str, str], ...] = ()

    def with_header(self, name: str, value: str) -> "Response":
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body

    # -- Factories --

    @classmethod
    def json(cls, value: object, status: int = 200) -> "Response":
        """A JSON success response for *value*."""
        return cls(body=encode(value), status=status, content_type=JSON_CONTENT_TYPE)

    @classmethod
    def plain(cls, message: str, status: int) -> "Response":
        """A ``text/plain`` response (404 and 500 from the boundary)."""
        return cls(body=message, status=status, content_type=TEXT_CONTENT_TYPE)

    @classmethod
    def failure(cls, status: int, message: str) -> "Response":
        """A handler failure: the message verbatim, no content type."""
        return cls(body=message, status=status)

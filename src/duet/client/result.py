"""Call results — a decoded value or a description of what went wrong.

Client operations never raise for HTTP-level failures. They return
``Ok`` or ``Err``; ``Err`` is falsy, so the usual check reads::

    result = await list_users(base_url)
    if not result:
        log.warning(result.message)
"""

from dataclasses import dataclass
from typing import Literal

ErrorKind = Literal["transport", "status", "body"]


@dataclass(frozen=True)
class Ok[T]:
    """A successful call with its decoded value."""

    value: T

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Err:
    """A failed call.

    ``kind`` tells the failures apart:

    - ``"transport"``: the request never got a response (connect, timeout)
    - ``"status"``: the server answered with an unexpected status
    - ``"body"``: the status was right but the body wasn't valid JSON
      of the declared type

    ``status`` is the observed status code, when there was a response.
    """

    message: str
    kind: ErrorKind
    status: int | None = None

    def __bool__(self) -> bool:
        return False


type Result[T] = Ok[T] | Err

"""Test utilities for duet applications::

    from duet.testing import TestClient, asgi_transport
"""

from duet.testing.client import TestClient
from duet.testing.transport import TEST_BASE_URL, asgi_transport

__all__ = ["TEST_BASE_URL", "TestClient", "asgi_transport"]

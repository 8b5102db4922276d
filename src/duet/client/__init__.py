"""Client side — call a layout's endpoints over HTTP.

    async with Transport() as transport:
        list_users, create_user = build_client(api, transport)
        result = await list_users("http://localhost:8000")
"""

from duet.client.builder import Operation, build_client, operations
from duet.client.request import RequestContext
from duet.client.result import Err, Ok, Result
from duet.client.transport import Transport

__all__ = [
    "Err",
    "Ok",
    "Operation",
    "RequestContext",
    "Result",
    "Transport",
    "build_client",
    "operations",
]

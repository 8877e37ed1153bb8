"""HTTP layer: pooled clients and the transport seam."""

from .client import close_all_clients, get_httpx_client
from .transport import HttpxTransport, RawStream, Transport

__all__ = [
    "close_all_clients",
    "get_httpx_client",
    "HttpxTransport",
    "RawStream",
    "Transport",
]

"""Transport implementations exposed to users."""

from .base import ReadResult, StreamReader, Transport, TransportResponse
from .http import HttpResponse, HttpStreamReader, HttpTransport

__all__ = [
    "HttpResponse",
    "HttpStreamReader",
    "HttpTransport",
    "ReadResult",
    "StreamReader",
    "Transport",
    "TransportResponse",
]

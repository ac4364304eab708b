"""Public surface for the apiclient request executor."""

from .client import ApiClient, ClientOptions
from .completion import is_stream_complete
from .errors import (
    ApiClientError,
    DecodeError,
    HttpStatusError,
    OrchestrationError,
    TransportError,
)
from .observers import BatchObserver, StreamObserver
from .parser import decode_lenient
from .request import ChatBody, RequestSpec
from .transport import HttpTransport
from .types import ResponseOutcome, batch_summary
from .version import __version__

__all__ = [
    "__version__",
    "ApiClient",
    "ApiClientError",
    "BatchObserver",
    "ChatBody",
    "ClientOptions",
    "DecodeError",
    "HttpStatusError",
    "HttpTransport",
    "OrchestrationError",
    "RequestSpec",
    "ResponseOutcome",
    "StreamObserver",
    "TransportError",
    "batch_summary",
    "decode_lenient",
    "is_stream_complete",
]

"""HTTP and event stream access to the admin console backend."""

from emuconsole.controllers.api.client import ConsoleApiClient
from emuconsole.controllers.api.stream import HttpxSseTransport, SseDecoder, SseEvent

__all__ = [
    "ConsoleApiClient",
    "HttpxSseTransport",
    "SseDecoder",
    "SseEvent",
]

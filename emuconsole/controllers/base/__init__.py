"""Base controller classes and the console exception hierarchy."""

from emuconsole.controllers.base.base_controller import (
    BaseController,
)
from emuconsole.controllers.base.errors import (
    ApiError,
    ConsoleError,
    StreamError,
    TransportError,
    ValidationFailed,
)

__all__ = [
    "ApiError",
    "BaseController",
    "ConsoleError",
    "StreamError",
    "TransportError",
    "ValidationFailed",
]

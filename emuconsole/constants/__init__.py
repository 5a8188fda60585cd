"""Constants module for the console.

Centralized constants organized by domain:
- enums.py: All Enum class definitions
- values.py: Scalar constants (strings, service names, messages)
- timeouts.py: Timeout values (seconds)
- limits.py: Validation ranges and limits
- defaults.py: Default values for settings and forms
"""

from emuconsole.constants.defaults import (
    BASE_URL_DEFAULT,
    DEFAULT_CREATE_QUEUE_ATTRIBUTES,
    PEEK_LIMIT_DEFAULT,
)
from emuconsole.constants.enums import (
    AlertTone,
    BannerChannel,
    BannerState,
    EditPhase,
    OperationKind,
    StreamState,
    ViewName,
)
from emuconsole.constants.limits import (
    EDITABLE_QUEUE_ATTRIBUTE_KEYS,
    QUEUE_ATTRIBUTE_RANGES,
)
from emuconsole.constants.timeouts import (
    BANNER_AUTO_HIDE_SECONDS,
    REQUEST_TIMEOUT,
    STREAM_RETRY_DELAY,
)
from emuconsole.constants.values import (
    APP_TITLE,
    PUBSUB_SERVICE,
    QUEUE_SERVICE,
)

__all__ = [
    # Application
    "APP_TITLE",
    # Timeouts
    "BANNER_AUTO_HIDE_SECONDS",
    # Defaults
    "BASE_URL_DEFAULT",
    "DEFAULT_CREATE_QUEUE_ATTRIBUTES",
    # Limits
    "EDITABLE_QUEUE_ATTRIBUTE_KEYS",
    "PEEK_LIMIT_DEFAULT",
    "PUBSUB_SERVICE",
    "QUEUE_ATTRIBUTE_RANGES",
    "QUEUE_SERVICE",
    "REQUEST_TIMEOUT",
    "STREAM_RETRY_DELAY",
    # Enums
    "AlertTone",
    "BannerChannel",
    "BannerState",
    "EditPhase",
    "OperationKind",
    "StreamState",
    "ViewName",
]

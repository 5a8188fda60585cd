"""Timeout constants for the console.

All timeout and interval values for API requests, streams, and banners.
"""

from typing import Final

# ============================================================================
# HTTP timeouts (float, in seconds)
# ============================================================================

REQUEST_TIMEOUT: Final = 5.0
STREAM_CONNECT_TIMEOUT: Final = 10.0

# ============================================================================
# Stream reconnection (event-stream default, overridable by ``retry:``)
# ============================================================================

STREAM_RETRY_DELAY: Final = 3.0

# ============================================================================
# Status banners
# ============================================================================

BANNER_AUTO_HIDE_SECONDS: Final = 3.0

__all__ = [
    "BANNER_AUTO_HIDE_SECONDS",
    "REQUEST_TIMEOUT",
    "STREAM_CONNECT_TIMEOUT",
    "STREAM_RETRY_DELAY",
]

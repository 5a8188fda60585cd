"""Application settings models."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from emuconsole.constants.defaults import (
    BASE_URL_DEFAULT,
    EXPORT_PATH_DEFAULT,
    INITIAL_VIEW_DEFAULT,
    PEEK_LIMIT_DEFAULT,
    REDRIVE_MAX_MESSAGES_PER_SECOND_DEFAULT,
)
from emuconsole.constants.enums import ViewName
from emuconsole.constants.limits import PEEK_LIMIT_MAX, PEEK_LIMIT_MIN
from emuconsole.constants.timeouts import (
    BANNER_AUTO_HIDE_SECONDS,
    REQUEST_TIMEOUT,
    STREAM_RETRY_DELAY,
)


class AppSettings(BaseModel):
    """Application settings model with validation."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    # Backend
    base_url: str = BASE_URL_DEFAULT
    request_timeout_seconds: float = Field(default=REQUEST_TIMEOUT, gt=0)

    # Timers
    banner_hide_seconds: float = Field(default=BANNER_AUTO_HIDE_SECONDS, gt=0)
    stream_retry_seconds: float = Field(default=STREAM_RETRY_DELAY, gt=0)

    # Queue inspection
    peek_limit: int = Field(default=PEEK_LIMIT_DEFAULT, ge=PEEK_LIMIT_MIN, le=PEEK_LIMIT_MAX)
    redrive_max_messages_per_second: int = Field(
        default=REDRIVE_MAX_MESSAGES_PER_SECOND_DEFAULT, ge=1
    )

    # Paths
    export_path: str = EXPORT_PATH_DEFAULT

    # UI preferences
    initial_view: str = INITIAL_VIEW_DEFAULT

    @property
    def view(self) -> ViewName:
        return ViewName(self.initial_view)

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("base_url must not be empty")
        return value.rstrip("/")

    @field_validator("initial_view")
    @classmethod
    def check_view(cls, value: str) -> str:
        return ViewName(value).value


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings fail to load."""


class ConfigSaveError(ConfigError):
    """Raised when settings fail to save."""

"""Data models for structured logging."""

from enum import Enum
from typing import Any

from pydantic import BaseModel


class LogLevel(str, Enum):
    """Log level enumeration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogContext(BaseModel):
    """Structured log context.

    All fields are optional. Extra fields (from ``extra=`` or a
    LoggerAdapter, e.g. ``sequence="Intro"``) are kept as-is.
    """

    # Source
    logger_name: str | None = None
    module: str | None = None
    function: str | None = None
    line: int | None = None
    thread: int | None = None
    thread_name: str | None = None
    process: int | None = None

    # Errors
    error_type: str | None = None
    error_message: str | None = None
    stack_trace: str | None = None

    model_config = {"extra": "allow"}


class LogEntry(BaseModel):
    """Complete log entry with message and context."""

    level: LogLevel
    message: str
    timestamp: str
    context: LogContext

    model_config = {"frozen": True}

    def to_dict(self) -> dict[str, Any]:
        """Plain dict with unset context fields dropped."""
        return self.model_dump(exclude_none=True)

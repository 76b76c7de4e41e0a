"""Result and error types shared by the store and the engine."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    """Failure kinds reported by log operations."""
    ALREADY_EXISTS = "already_exists"
    NOT_FOUND = "not_found"
    EMPTY_LOG = "empty_log"
    INVALID_INDEX = "invalid_index"
    INVALID_ENTRY = "invalid_entry"
    INVALID_NAME = "invalid_name"
    IO_FAILURE = "io_failure"

    @property
    def is_existence_error(self) -> bool:
        """Whether the failure is about a log being present, absent or empty."""
        return self in (
            ErrorKind.ALREADY_EXISTS,
            ErrorKind.NOT_FOUND,
            ErrorKind.EMPTY_LOG,
        )


@dataclass
class LogError(Exception):
    """
    Exception form of a failed LogResult.

    Raised by LogResult.unwrap() for callers that prefer exceptions
    over checking ``success``.
    """
    kind: ErrorKind
    message: str

    def __str__(self):
        return self.message


@dataclass
class LogResult:
    """Outcome of a single log operation."""

    success: bool
    value: Any = None
    error: Optional[ErrorKind] = None
    message: str = ""

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(cls, value: Any = None, message: str = "") -> "LogResult":
        """Create successful result."""
        return cls(success=True, value=value, message=message)

    @classmethod
    def fail(cls, error: ErrorKind, message: str) -> "LogResult":
        """Create failed result."""
        return cls(success=False, error=error, message=message)

    def unwrap(self) -> Any:
        """Return the value, or raise LogError if the operation failed."""
        if not self.success:
            raise LogError(self.error, self.message)
        return self.value

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "success": self.success,
            "value": self.value,
            "error": self.error.value if self.error else None,
            "message": self.message,
        }

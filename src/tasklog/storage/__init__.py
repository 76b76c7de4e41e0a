"""Storage layer for task logs."""

from .result import ErrorKind, LogError, LogResult
from .store import LogStore, LOG_SUFFIX

__all__ = ["ErrorKind", "LogError", "LogResult", "LogStore", "LOG_SUFFIX"]

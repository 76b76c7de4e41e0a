"""Mapping of log names to files under the storage root."""

import logging
import re
from pathlib import Path
from typing import Optional

from .result import ErrorKind, LogResult
from ..config import config

logger = logging.getLogger(__name__)

LOG_SUFFIX = "_bashlog.csv"
_NAME_RE = re.compile(r"^[A-Za-z0-9_-][A-Za-z0-9._-]*$")


class LogStore:
    """
    Manages log existence on disk.

    Every log is one file named ``<name>_bashlog.csv`` directly under
    the storage root. The file existing is the log existing; there is
    no other metadata.
    """

    def __init__(self, base_path: Optional[Path] = None):
        self.base_path = Path(base_path) if base_path else config.paths.logs

    @staticmethod
    def is_valid_name(name: str) -> bool:
        """Check that a name is safe to use as part of a filename."""
        return bool(name) and _NAME_RE.match(name) is not None

    def path_for(self, name: str) -> Path:
        """Resolve a log name to its backing file."""
        return self.base_path / f"{name}{LOG_SUFFIX}"

    def check_name(self, name: str) -> Optional[LogResult]:
        """Return a failed result for an unsafe name, None if it is fine."""
        if not self.is_valid_name(name):
            return LogResult.fail(
                ErrorKind.INVALID_NAME,
                f"Invalid log name: {name!r}",
            )
        return None

    def exists(self, name: str) -> bool:
        """Check whether a log is present."""
        if not self.is_valid_name(name):
            return False
        return self.path_for(name).is_file()

    def create(self, name: str) -> LogResult:
        """
        Create an empty log.

        Args:
            name: Log name

        Returns:
            LogResult with the created path, or ALREADY_EXISTS / IO_FAILURE
        """
        invalid = self.check_name(name)
        if invalid:
            return invalid

        if self.exists(name):
            return LogResult.fail(
                ErrorKind.ALREADY_EXISTS,
                f"Log already exists: {name}",
            )

        path = self.path_for(name)
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
            # "x" refuses to clobber a file that appeared since the check
            with open(path, "x", encoding="utf-8"):
                pass
        except FileExistsError:
            return LogResult.fail(
                ErrorKind.ALREADY_EXISTS,
                f"Log already exists: {name}",
            )
        except OSError as e:
            logger.warning("Could not create log %s: %s", path, e)
            return LogResult.fail(
                ErrorKind.IO_FAILURE,
                f"Could not create log {name}: {e}",
            )

        logger.debug("Created log %s at %s", name, path)
        return LogResult.ok(path, message=f"Created log {name}")

    def delete(self, name: str) -> LogResult:
        """
        Delete a log and all its entries.

        Args:
            name: Log name

        Returns:
            LogResult, NOT_FOUND if the log is absent
        """
        invalid = self.check_name(name)
        if invalid:
            return invalid

        if not self.exists(name):
            return LogResult.fail(ErrorKind.NOT_FOUND, f"Log not found: {name}")

        try:
            self.path_for(name).unlink()
        except FileNotFoundError:
            return LogResult.fail(ErrorKind.NOT_FOUND, f"Log not found: {name}")
        except OSError as e:
            logger.warning("Could not delete log %s: %s", name, e)
            return LogResult.fail(
                ErrorKind.IO_FAILURE,
                f"Could not delete log {name}: {e}",
            )

        logger.debug("Deleted log %s", name)
        return LogResult.ok(message=f"Deleted log {name}")

    def list(self) -> list[str]:
        """List all log names, sorted."""
        if not self.base_path.is_dir():
            return []

        names = []
        for file_path in self.base_path.glob(f"*{LOG_SUFFIX}"):
            if not file_path.is_file():
                continue
            name = file_path.name[: -len(LOG_SUFFIX)]
            if self.is_valid_name(name):
                names.append(name)
        return sorted(names)

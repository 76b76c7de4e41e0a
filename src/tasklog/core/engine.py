"""Reading and editing the entries of a single log."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from ..storage.result import ErrorKind, LogResult
from ..storage.store import LogStore

logger = logging.getLogger(__name__)

Index = Union[int, str]


class LogEngine:
    """
    Reads and mutates the ordered entries of existing logs.

    Entries are 1-indexed by position. Edits that rewrite the file
    (completion, swap) build the new content in memory and replace the
    file in one ``os.replace`` so a crash leaves either the old or the
    new image on disk, never a mix.
    """

    def __init__(self, store: Optional[LogStore] = None):
        self.store = store or LogStore()

    # ==================== Helpers ====================

    def _resolve(self, name: str) -> tuple[Optional[Path], Optional[LogResult]]:
        """Return the log path, or a failed result if it cannot be used."""
        invalid = self.store.check_name(name)
        if invalid:
            return None, invalid
        if not self.store.exists(name):
            return None, LogResult.fail(ErrorKind.NOT_FOUND, f"Log not found: {name}")
        return self.store.path_for(name), None

    def _load_all(self, path: Path) -> list[str]:
        """Load all entries from a log file."""
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
        if not content:
            return []
        lines = content.split("\n")
        if content.endswith("\n"):
            lines.pop()
        return lines

    def _save_all(self, path: Path, entries: list[str]):
        """Replace a log file with the given entries."""
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.",
            suffix=".tmp",
            dir=path.parent,
        )
        try:
            os.chmod(tmp_name, path.stat().st_mode & 0o7777)
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                for entry in entries:
                    f.write(entry + "\n")
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
        finally:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)

    @staticmethod
    def _parse_index(value: Index) -> Optional[int]:
        """Convert a user-supplied index to an int, None if it is not a positive integer."""
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            index = value
        elif isinstance(value, str) and value.strip().isascii() and value.strip().isdecimal():
            index = int(value.strip())
        else:
            return None
        return index if index >= 1 else None

    @staticmethod
    def _io_failure(name: str, action: str, error: Exception) -> LogResult:
        logger.warning("Could not %s log %s: %s", action, name, error)
        return LogResult.fail(
            ErrorKind.IO_FAILURE,
            f"Could not {action} log {name}: {error}",
        )

    # ==================== Operations ====================

    def read_all(self, name: str) -> LogResult:
        """
        Read every entry of a log, in stored order.

        Args:
            name: Log name

        Returns:
            LogResult whose value is the list of entries
        """
        path, failure = self._resolve(name)
        if failure:
            return failure

        try:
            entries = self._load_all(path)
        except (OSError, UnicodeDecodeError) as e:
            return self._io_failure(name, "read", e)

        return LogResult.ok(entries)

    def count(self, name: str) -> LogResult:
        """Number of entries in a log."""
        result = self.read_all(name)
        if not result:
            return result
        return LogResult.ok(len(result.value))

    def append(self, name: str, entry: str) -> LogResult:
        """
        Append an entry as the new last line of a log.

        Args:
            name: Log name
            entry: Entry text, must not contain a line break

        Returns:
            LogResult, NOT_FOUND or INVALID_ENTRY on failure
        """
        path, failure = self._resolve(name)
        if failure:
            return failure

        if "\n" in entry or "\r" in entry:
            return LogResult.fail(
                ErrorKind.INVALID_ENTRY,
                "Entry must be a single line of text",
            )

        try:
            # A final line without its terminator would otherwise absorb the new entry
            needs_newline = False
            with open(path, "rb") as f:
                f.seek(0, os.SEEK_END)
                if f.tell() > 0:
                    f.seek(-1, os.SEEK_END)
                    needs_newline = f.read(1) != b"\n"

            with open(path, "a", encoding="utf-8", newline="\n") as f:
                if needs_newline:
                    f.write("\n")
                f.write(entry + "\n")
        except OSError as e:
            return self._io_failure(name, "append to", e)

        logger.debug("Appended entry to %s", name)
        return LogResult.ok(message=f"Added entry to {name}")

    def complete_first(self, name: str) -> LogResult:
        """
        Preview the entry that completing a log would remove.

        Nothing is removed here; call commit_complete_first() once the
        caller has confirmed.

        Returns:
            LogResult whose value is entry 1, EMPTY_LOG if there is none
        """
        result = self.read_all(name)
        if not result:
            return result

        if not result.value:
            return LogResult.fail(ErrorKind.EMPTY_LOG, f"Log is empty: {name}")

        return LogResult.ok(result.value[0])

    def commit_complete_first(self, name: str) -> LogResult:
        """
        Remove entry 1 of a log; the remaining entries move up by one.

        Returns:
            LogResult whose value is the removed entry
        """
        path, failure = self._resolve(name)
        if failure:
            return failure

        try:
            entries = self._load_all(path)
        except (OSError, UnicodeDecodeError) as e:
            return self._io_failure(name, "read", e)

        if not entries:
            return LogResult.fail(ErrorKind.EMPTY_LOG, f"Log is empty: {name}")

        completed = entries.pop(0)
        try:
            self._save_all(path, entries)
        except OSError as e:
            return self._io_failure(name, "update", e)

        logger.debug("Completed first entry of %s", name)
        return LogResult.ok(completed, message=f"Completed: {completed}")

    def swap(self, name: str, i: Index, j: Index) -> LogResult:
        """
        Exchange the entries at positions i and j.

        Args:
            name: Log name
            i: First 1-based position
            j: Second 1-based position

        Returns:
            LogResult, INVALID_INDEX if either position is out of range
        """
        path, failure = self._resolve(name)
        if failure:
            return failure

        try:
            entries = self._load_all(path)
        except (OSError, UnicodeDecodeError) as e:
            return self._io_failure(name, "read", e)

        positions = []
        for raw in (i, j):
            index = self._parse_index(raw)
            if index is None or index > len(entries):
                return LogResult.fail(
                    ErrorKind.INVALID_INDEX,
                    f"Invalid index {raw!r}: {name} has {len(entries)} entries",
                )
            positions.append(index)

        first, second = positions
        if first == second:
            return LogResult.ok(message="Nothing to swap")

        entries[first - 1], entries[second - 1] = entries[second - 1], entries[first - 1]
        try:
            self._save_all(path, entries)
        except OSError as e:
            return self._io_failure(name, "update", e)

        logger.debug("Swapped entries %d and %d of %s", first, second, name)
        return LogResult.ok(message=f"Swapped entries {first} and {second}")

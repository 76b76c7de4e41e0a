"""Command-line interface for tasklog."""

import argparse
import logging
from typing import Callable, Optional, Sequence

from rich.markup import escape
from rich.prompt import Confirm

from ..core.engine import LogEngine
from ..storage.result import LogResult
from ..storage.store import LogStore
from .renderer import LogRenderer

logger = logging.getLogger(__name__)

USAGE = """\
Usage: tasklog OPTION [ARGS]

  -n LOG              Create a new log
  -r LOG              Show a log
  -u LOG              Complete (remove) the first entry of a log
  -a LOG ENTRY        Add an entry to the end of a log
  -d LOG              Delete a log
  -s LOG I J          Swap entries I and J of a log
  -l                  List all logs
  -h                  Show this help message

  -y                  With -u, do not ask for confirmation
"""


class UsageError(Exception):
    """Raised when the command line cannot be parsed."""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    """Build the flag parser; exactly one action flag per invocation."""
    parser = _ArgumentParser(prog="tasklog", add_help=False)
    actions = parser.add_mutually_exclusive_group()
    actions.add_argument("-n", dest="new", metavar="LOG")
    actions.add_argument("-r", dest="read", metavar="LOG")
    actions.add_argument("-u", dest="update", metavar="LOG")
    actions.add_argument("-a", dest="add", nargs=2, metavar=("LOG", "ENTRY"))
    actions.add_argument("-d", dest="delete", metavar="LOG")
    actions.add_argument("-s", dest="swap", nargs=3, metavar=("LOG", "I", "J"))
    actions.add_argument("-l", dest="list", action="store_true")
    actions.add_argument("-h", dest="help", action="store_true")
    parser.add_argument("-y", "--yes", dest="yes", action="store_true")
    return parser


def _ask(prompt: str) -> bool:
    return Confirm.ask(escape(prompt), default=False)


class LogCLI:
    """
    Maps one parsed command line to store and engine calls.

    Every handler returns the process exit code: 0 on success, 1 on
    any failure.
    """

    def __init__(
        self,
        store: Optional[LogStore] = None,
        engine: Optional[LogEngine] = None,
        renderer: Optional[LogRenderer] = None,
        confirm: Optional[Callable[[str], bool]] = None,
    ):
        self.store = store or LogStore()
        self.engine = engine or LogEngine(self.store)
        self.renderer = renderer or LogRenderer()
        self.confirm = confirm or _ask

    def run(self, argv: Optional[Sequence[str]] = None) -> int:
        """Parse argv and run the selected action."""
        try:
            args = build_parser().parse_args(argv)
        except UsageError as e:
            self.renderer.error(f"Invalid option: {e}")
            self.renderer.info(USAGE)
            return 1

        if args.help:
            self.renderer.info(USAGE)
            return 0
        if args.list:
            self.renderer.render_names(self.store.list())
            return 0
        if args.new is not None:
            return self._report(self.store.create(args.new))
        if args.delete is not None:
            return self._report(self.store.delete(args.delete))
        if args.read is not None:
            return self._show(args.read)
        if args.add is not None:
            name, entry = args.add
            return self._then_show(name, self.engine.append(name, entry))
        if args.swap is not None:
            name, i, j = args.swap
            return self._then_show(name, self.engine.swap(name, i, j))
        if args.update is not None:
            return self._complete(args.update, assume_yes=args.yes)

        self.renderer.error("Invalid option: no action given")
        self.renderer.info(USAGE)
        return 1

    # ==================== Handlers ====================

    def _report(self, result: LogResult) -> int:
        """Print the outcome of an operation and return its exit code."""
        if result:
            if result.message:
                self.renderer.success(result.message)
            return 0

        if result.error.is_existence_error:
            self.renderer.warning(result.message)
        else:
            self.renderer.error(result.message)
        logger.debug("Operation failed: %s (%s)", result.message, result.error.value)
        return 1

    def _show(self, name: str) -> int:
        result = self.engine.read_all(name)
        if not result:
            return self._report(result)
        self.renderer.render_log(name, result.value)
        return 0

    def _then_show(self, name: str, result: LogResult) -> int:
        if not result:
            return self._report(result)
        if result.message:
            self.renderer.success(result.message)
        return self._show(name)

    def _complete(self, name: str, assume_yes: bool = False) -> int:
        """Preview entry 1, ask, and remove it only on confirmation."""
        preview = self.engine.complete_first(name)
        if not preview:
            return self._report(preview)

        if not assume_yes:
            try:
                approved = self.confirm(f"Complete '{preview.value}'?")
            except (EOFError, KeyboardInterrupt):
                approved = False

            if not approved:
                self.renderer.info("Nothing changed.")
                return self._show(name)

        return self._then_show(name, self.engine.commit_complete_first(name))

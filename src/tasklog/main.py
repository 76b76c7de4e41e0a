"""Main entry point for tasklog."""

import logging
import sys

from .core.engine import LogEngine
from .storage.store import LogStore
from .interfaces.cli import LogCLI
from .config import config

logger = logging.getLogger(__name__)


def cli_main():
    """Entry point for CLI."""
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    logger.debug("Using storage root %s", config.paths.logs)

    store = LogStore(config.paths.logs)
    cli = LogCLI(store=store, engine=LogEngine(store))

    sys.exit(cli.run(sys.argv[1:]))


if __name__ == "__main__":
    cli_main()

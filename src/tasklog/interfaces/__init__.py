"""User-facing interfaces."""

from .cli import LogCLI, build_parser
from .renderer import LogRenderer

__all__ = ["LogCLI", "LogRenderer", "build_parser"]

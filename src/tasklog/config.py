"""Configuration management for tasklog."""

from pathlib import Path
from dataclasses import dataclass, field
import os
from dotenv import load_dotenv

# Load .env file
load_dotenv()

DEFAULT_HOME = Path.home() / ".bashlog"


@dataclass
class PathConfig:
    """Path configuration."""
    base: Path = field(default_factory=lambda: DEFAULT_HOME)

    @property
    def logs(self) -> Path:
        """Storage root holding one file per log."""
        return self.base

    @classmethod
    def from_env(cls) -> "PathConfig":
        home = os.getenv("TASKLOG_HOME")
        if home:
            return cls(base=Path(home).expanduser())
        return cls()


@dataclass
class Config:
    """Main configuration class."""
    paths: PathConfig = field(default_factory=PathConfig)
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            paths=PathConfig.from_env(),
            log_level=os.getenv("TASKLOG_LOG_LEVEL", "WARNING").upper(),
        )


# Global config instance
config = Config.from_env()

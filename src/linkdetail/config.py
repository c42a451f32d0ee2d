"""
Configuration management for LinkDetail.

Loads display and logging settings from environment variables or a .env file.
"""

import os
from pathlib import Path
from dataclasses import dataclass, field

from dotenv import load_dotenv

from linkdetail.exceptions import ConfigError

# Check common locations for .env
ENV_LOCATIONS = [
    Path.home() / ".linkdetail" / ".env",
    Path.home() / ".config" / "linkdetail" / ".env",
    Path.cwd() / ".env",
]

DEFAULT_SIGNAL_LABELS = ("Poor", "Fair", "Good", "Excellent")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_env_file() -> Path | None:
    """Load the first .env file found, returning its path."""
    for env_path in ENV_LOCATIONS:
        if env_path.exists():
            load_dotenv(env_path)
            return env_path
    return None


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class LinkDetailConfig:
    """Display and logging configuration."""

    # Logging
    log_level: str = "INFO"
    log_to_file: bool = False

    # Signal strength buckets shown to the user
    signal_levels: int = 4
    signal_labels: tuple[str, ...] = field(default=DEFAULT_SIGNAL_LABELS)

    def __post_init__(self):
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(
                f"Unknown log level {self.log_level!r}, expected one of {', '.join(LOG_LEVELS)}"
            )
        if self.signal_levels < 2:
            raise ConfigError(f"signal_levels must be at least 2, got {self.signal_levels}")
        if len(self.signal_labels) != self.signal_levels:
            raise ConfigError(
                f"Expected {self.signal_levels} signal labels, got {len(self.signal_labels)}"
            )

    @classmethod
    def from_env(cls) -> "LinkDetailConfig":
        """Load configuration from environment variables."""
        levels_raw = os.getenv("LINKDETAIL_SIGNAL_LEVELS", "4")
        try:
            levels = int(levels_raw)
        except ValueError:
            raise ConfigError(f"LINKDETAIL_SIGNAL_LEVELS is not an integer: {levels_raw!r}")

        labels_raw = os.getenv("LINKDETAIL_SIGNAL_LABELS", "")
        if labels_raw:
            labels = tuple(label.strip() for label in labels_raw.split(","))
        else:
            labels = DEFAULT_SIGNAL_LABELS

        return cls(
            log_level=os.getenv("LINKDETAIL_LOG_LEVEL", "INFO"),
            log_to_file=_parse_bool(os.getenv("LINKDETAIL_LOG_FILE_ENABLED", "false")),
            signal_levels=levels,
            signal_labels=labels,
        )


# Global config instance
_config: LinkDetailConfig | None = None


def get_config() -> LinkDetailConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        load_env_file()
        _config = LinkDetailConfig.from_env()
    return _config


def set_config(config: LinkDetailConfig | None) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config

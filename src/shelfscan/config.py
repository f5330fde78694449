"""Configuration management for shelfscan.

Loads configuration from environment variables and provides defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

MEMORY_DB = ":memory:"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """Application configuration."""

    # Database
    db_path: Path
    echo_sql: bool

    # Logging
    log_level: str
    slow_query_ms: float  # statements slower than this log a warning

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        db_path_str = os.environ.get(
            "SHELFSCAN_DB_PATH",
            str(Path.home() / ".shelfscan" / "shelfscan.db"),
        )
        db_path = Path(db_path_str).expanduser()

        return cls(
            db_path=db_path,
            echo_sql=os.environ.get("SHELFSCAN_ECHO_SQL", "").lower() in ("1", "true", "yes"),
            log_level=os.environ.get("SHELFSCAN_LOG_LEVEL", "WARNING").upper(),
            slow_query_ms=float(os.environ.get("SHELFSCAN_SLOW_QUERY_MS", "100")),
        )

    @property
    def is_memory(self) -> bool:
        """Check if the configured database lives in memory."""
        return str(self.db_path) == MEMORY_DB

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        # Check database directory is writable
        if not self.is_memory and not self.db_path.parent.exists():
            try:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            except PermissionError:
                errors.append(f"Cannot create database directory: {self.db_path.parent}")

        if self.log_level not in LOG_LEVELS:
            errors.append(f"Unknown log level: {self.log_level}")

        if self.slow_query_ms < 0:
            errors.append("Slow query threshold must not be negative")

        return errors


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global config instance. Used for testing."""
    global _config
    _config = None

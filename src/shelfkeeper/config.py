"""Configuration management for shelfkeeper.

Loads configuration from environment variables and provides defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

STORAGE_BACKENDS = ("json", "sqlite", "memory")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """Application configuration."""

    # Storage
    data_dir: Path
    storage_backend: str

    # Collection names, one store location per collection
    books_collection: str
    members_collection: str

    # Logging
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        data_dir_str = os.environ.get(
            "SHELFKEEPER_DATA_DIR",
            str(Path.home() / ".shelfkeeper"),
        )

        return cls(
            data_dir=Path(data_dir_str).expanduser(),
            storage_backend=os.environ.get("SHELFKEEPER_STORAGE", "json").lower(),
            books_collection=os.environ.get("SHELFKEEPER_BOOKS_COLLECTION", "books"),
            members_collection=os.environ.get("SHELFKEEPER_MEMBERS_COLLECTION", "members"),
            log_level=os.environ.get("SHELFKEEPER_LOG_LEVEL", "WARNING").upper(),
        )

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        if self.storage_backend not in STORAGE_BACKENDS:
            errors.append(
                f"Unknown storage backend: {self.storage_backend} "
                f"(expected one of {', '.join(STORAGE_BACKENDS)})"
            )

        if self.log_level not in LOG_LEVELS:
            errors.append(f"Unknown log level: {self.log_level}")

        if self.books_collection == self.members_collection:
            errors.append("Books and members must use different collection names")

        # Check data directory is writable
        if self.storage_backend != "memory" and not self.data_dir.exists():
            try:
                self.data_dir.mkdir(parents=True, exist_ok=True)
            except OSError:
                errors.append(f"Cannot create data directory: {self.data_dir}")

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

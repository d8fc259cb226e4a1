"""Configuration management for librarymanager.

Loads configuration from environment variables and provides defaults.
"""

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

DEFAULT_LOAN_DAYS = 7
MAX_LOAN_DAYS = 36500
DEFAULT_DATE_FORMAT = "%d/%m/%Y"
DEFAULT_SCRIPT_PATH = "library_manager.txt"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass
class Config:
    """Application configuration."""

    # Loans
    loan_days: int

    # Output
    date_format: str

    # Script runner
    script_path: str

    # Diagnostics
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            loan_days=int(os.environ.get("LIBRARY_LOAN_DAYS", str(DEFAULT_LOAN_DAYS))),
            date_format=os.environ.get("LIBRARY_DATE_FORMAT", DEFAULT_DATE_FORMAT),
            script_path=os.environ.get("LIBRARY_SCRIPT_PATH", DEFAULT_SCRIPT_PATH),
            log_level=os.environ.get("LIBRARY_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )

    @classmethod
    def defaults(cls) -> "Config":
        """Configuration with built-in defaults, ignoring the environment."""
        return cls(
            loan_days=DEFAULT_LOAN_DAYS,
            date_format=DEFAULT_DATE_FORMAT,
            script_path=DEFAULT_SCRIPT_PATH,
            log_level=DEFAULT_LOG_LEVEL,
        )

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        if self.loan_days <= 0:
            errors.append(f"Loan days must be positive: {self.loan_days}")
        elif self.loan_days > MAX_LOAN_DAYS:
            errors.append(f"Loan days must be at most {MAX_LOAN_DAYS}: {self.loan_days}")

        if not isinstance(logging.getLevelName(self.log_level), int):
            errors.append(f"Unknown log level: {self.log_level}")

        try:
            datetime(2000, 1, 31).strftime(self.date_format)
        except ValueError:
            errors.append(f"Invalid date format: {self.date_format}")

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

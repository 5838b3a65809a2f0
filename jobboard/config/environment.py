"""Environment variable configuration."""

import os
import re
from typing import Optional

from .exceptions import ConfigurationError

DEFAULT_FRONTEND_URL = "http://localhost:5173"
DEFAULT_DATABASE_URL = "sqlite:///./data/job_board.db"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_URL_PATTERN = re.compile(r"^https?://.+")


class EnvironmentConfig:
    """Settings that come from the process environment."""

    def __init__(
        self,
        frontend_url: Optional[str] = None,
        database_url: Optional[str] = None,
        log_level: Optional[str] = None,
        environment: Optional[str] = None,
    ):
        self.frontend_url = (frontend_url or DEFAULT_FRONTEND_URL).rstrip("/")
        self.database_url = database_url or DEFAULT_DATABASE_URL
        self.log_level = log_level
        self.environment = environment or "local"


def load_environment_config() -> EnvironmentConfig:
    """Read and validate environment variables.

    All variables are optional:
    - FRONTEND_URL: Base URL used to build notification links
      (default: http://localhost:5173)
    - DATABASE_URL: SQLAlchemy URL (default: sqlite:///./data/job_board.db)
    - LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL
    - ENVIRONMENT: Label attached to log records (default: local)

    Returns:
        EnvironmentConfig with defaults applied

    Raises:
        ConfigurationError: If a variable is set to an invalid value
    """
    errors = []

    frontend_url = os.getenv("FRONTEND_URL") or None
    database_url = os.getenv("DATABASE_URL") or None
    log_level = os.getenv("LOG_LEVEL") or None
    environment = os.getenv("ENVIRONMENT") or None

    if frontend_url and not _URL_PATTERN.match(frontend_url):
        errors.append(
            f"Invalid FRONTEND_URL: '{frontend_url}'. Must start with http:// or https://"
        )

    if log_level and log_level.upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and adjust the values",
                "Unset a variable to fall back to its default",
            ],
        )

    return EnvironmentConfig(
        frontend_url=frontend_url,
        database_url=database_url,
        log_level=log_level.upper() if log_level else None,
        environment=environment,
    )

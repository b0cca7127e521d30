"""
tokenvest Configuration

All settings come from environment variables so the engine can be embedded
in any service without a config file:

- TOKENVEST_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL (default INFO)
- TOKENVEST_ENVIRONMENT: deployment name attached to every log record
- TOKENVEST_LOG_FILE: optional path of a rotating JSON log file
- TOKENVEST_SERVICE_NAME: service name attached to every log record
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from tokenvest.core.vesting_exceptions import ConfigurationError

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Log file rotation
LOG_MAX_BYTES = int(os.getenv("TOKENVEST_LOG_MAX_BYTES", str(100 * 1024 * 1024)))  # 100MB
LOG_BACKUP_COUNT = int(os.getenv("TOKENVEST_LOG_BACKUP_COUNT", "10"))


@dataclass(frozen=True)
class LoggingSettings:
    """Resolved logging configuration."""

    level: str = "INFO"
    environment: str = "development"
    log_file: Optional[str] = None
    service_name: str = "tokenvest"


def load_logging_settings(environ: Optional[Mapping[str, str]] = None) -> LoggingSettings:
    """Read logging settings from ``environ`` (defaults to ``os.environ``).

    Raises:
        ConfigurationError: if TOKENVEST_LOG_LEVEL is not a known level name
    """
    env = os.environ if environ is None else environ

    level = env.get("TOKENVEST_LOG_LEVEL", "INFO").strip().upper() or "INFO"
    if level == "WARN":
        level = "WARNING"
    if level not in VALID_LOG_LEVELS:
        raise ConfigurationError(
            f"Invalid TOKENVEST_LOG_LEVEL '{level}'. "
            f"Expected one of: {', '.join(VALID_LOG_LEVELS)}",
            details={"env_var": "TOKENVEST_LOG_LEVEL", "value": level},
        )

    log_file = env.get("TOKENVEST_LOG_FILE", "").strip() or None
    settings = LoggingSettings(
        level=level,
        environment=env.get("TOKENVEST_ENVIRONMENT", "development").strip() or "development",
        log_file=log_file,
        service_name=env.get("TOKENVEST_SERVICE_NAME", "tokenvest").strip() or "tokenvest",
    )
    logger.debug(
        "Loaded logging settings: level=%s environment=%s file=%s",
        settings.level,
        settings.environment,
        settings.log_file or "-",
    )
    return settings

"""
tokenvest - Structured Logging

Keyword-field logging on top of the standard ``logging`` module:
- ``logger.info("message", key=value)`` attaches fields as ``extra_fields``
  which CustomJsonFormatter merges into the JSON record
- Sensitive keys are redacted and long beneficiary identifiers truncated
- Per-level counters for diagnostics
"""

import logging
import threading
from typing import Dict, Any, Optional


class StructuredLogger:
    """
    Structured logger with keyword fields.

    Handlers and formatting are owned by ``tokenvest.core.logging_config``;
    this class only shapes the records.
    """

    SENSITIVE_KEYS = ("private_key", "password", "secret", "api_key", "signature")

    def __init__(self, name: str = "tokenvest", logger: Optional[logging.Logger] = None):
        """
        Initialize structured logger

        Args:
            name: Logger name
            logger: Existing logger to wrap (looked up by name if omitted)
        """
        self.name = name
        self.logger = logger or logging.getLogger(name)
        self._counts_lock = threading.Lock()
        self.log_counts = {"DEBUG": 0, "INFO": 0, "WARNING": 0, "ERROR": 0, "CRITICAL": 0}

    def _truncate_address(self, address: str) -> str:
        """Truncate long identifiers so logs do not carry full beneficiary ids"""
        if not address:
            return "UNKNOWN"
        if len(address) <= 16:
            return address
        return f"{address[:8]}...{address[-4:]}"

    def _sanitize_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Remove sensitive information from data"""
        sanitized = {}

        for key, value in data.items():
            if any(sensitive in key.lower() for sensitive in self.SENSITIVE_KEYS):
                sanitized[key] = "REDACTED"
            elif isinstance(value, dict):
                sanitized[key] = self._sanitize_data(value)
            else:
                sanitized[key] = value

        return sanitized

    def _log(self, level: str, message: str, **kwargs):
        """Internal logging method"""
        with self._counts_lock:
            self.log_counts[level] += 1

        if kwargs:
            kwargs = self._sanitize_data(kwargs)

        extra = {"extra_fields": kwargs} if kwargs else {}

        log_func = getattr(self.logger, level.lower())
        log_func(message, extra=extra)

    def debug(self, message: str, **kwargs):
        self._log("DEBUG", message, **kwargs)

    def info(self, message: str, **kwargs):
        self._log("INFO", message, **kwargs)

    def warning(self, message: str, **kwargs):
        self._log("WARNING", message, **kwargs)

    warn = warning

    def error(self, message: str, **kwargs):
        self._log("ERROR", message, **kwargs)

    def critical(self, message: str, **kwargs):
        self._log("CRITICAL", message, **kwargs)

    # Vesting-specific logging methods

    def vesting_event(self, event_type: str, beneficiary: str, level: str = "INFO", **kwargs):
        """Log a vesting lifecycle event (created, released, revoked, rejected)"""
        self._log(
            level.upper(),
            f"Vesting: {event_type}",
            event=f"vesting.{event_type}",
            beneficiary=self._truncate_address(beneficiary),
            **kwargs,
        )

    def get_stats(self) -> Dict[str, Any]:
        """Get logger statistics"""
        with self._counts_lock:
            counts = self.log_counts.copy()
        return {
            "log_counts": counts,
            "total_logs": sum(counts.values()),
        }


_global_structured_logger = None
_global_lock = threading.Lock()


def get_structured_logger(name: str = "tokenvest") -> StructuredLogger:
    """
    Get global structured logger instance

    Args:
        name: Logger name used when the instance is first created

    Returns:
        StructuredLogger instance
    """
    global _global_structured_logger
    with _global_lock:
        if _global_structured_logger is None:
            _global_structured_logger = StructuredLogger(name)
    return _global_structured_logger

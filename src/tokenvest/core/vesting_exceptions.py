"""
Vesting-specific exception hierarchy for tokenvest.

Every failure of the vesting engine is reported as one of these typed
exceptions so callers can decide whether to log, retry later, or abort.
No exception here is fatal to the process and none is retried internally.
"""

from __future__ import annotations
from typing import Optional, Any, Dict


class VestingError(Exception):
    """Base exception for all vesting-related errors.

    Attributes:
        message: Human-readable error description
        details: Additional context about the error (beneficiary, amounts, times)
        recoverable: Whether the operation can be retried later
    """

    recoverable = False

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        recoverable: Optional[bool] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if recoverable is not None:
            self.recoverable = recoverable


# ==================== Validation Errors ====================


class VestingValidationError(VestingError):
    """Raised when a request is rejected before any state is touched."""
    pass


class InvalidScheduleError(VestingValidationError):
    """Raised for invalid schedule parameters.

    Examples: empty beneficiary, zero amount, zero duration, cliff longer
    than the vesting duration.
    """
    pass


class ScheduleExistsError(VestingValidationError):
    """Raised when a beneficiary already has a vesting schedule."""
    pass


# ==================== State Errors ====================


class VestingStateError(VestingError):
    """Raised when the schedule's current state does not allow the operation."""
    pass


class ScheduleNotFoundError(VestingStateError):
    """Raised when no vesting schedule exists for a beneficiary."""
    pass


class ScheduleRevokedError(VestingStateError):
    """Raised when an operation requires an active (non-revoked) schedule."""
    pass


class ScheduleNotRevocableError(VestingStateError):
    """Raised when revoking a schedule created as non-revocable."""
    pass


class ScheduleAlreadyRevokedError(VestingStateError):
    """Raised when revoking a schedule a second time."""
    pass


class NothingToReleaseError(VestingStateError):
    """Raised when a release finds no newly vested tokens."""
    recoverable = True  # Can retry after more time has passed


# ==================== Configuration Errors ====================


class ConfigurationError(VestingError):
    """Raised when tokenvest configuration is missing or invalid."""
    recoverable = False


# ==================== Utility Functions ====================


def is_recoverable_error(exc: Exception) -> bool:
    """Check if an exception represents a recoverable error.

    Args:
        exc: The exception to check

    Returns:
        True if the operation may succeed when retried later
    """
    if isinstance(exc, VestingError):
        return bool(exc.recoverable)
    return False

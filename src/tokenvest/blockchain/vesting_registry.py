"""
Cliff-plus-linear token vesting.

A VestingRegistry owns one schedule per beneficiary and the running ledger of
tokens paid out by ``release``. Vesting is computed lazily from the ``now``
timestamp supplied by the caller; the registry never reads a clock.

Vested amount at ``now`` (all values are integers, timestamps in seconds):

    now < start_time + cliff_duration   ->  0
    now - start_time >= duration        ->  total_amount
    otherwise                           ->  total_amount * (now - start_time) // duration

The cliff only hides the curve until it has passed; it never shifts it, so the
full ``duration`` is always the denominator. Fractional tokens are truncated.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Iterator

from tokenvest.core.structured_logger import StructuredLogger
from tokenvest.core.vesting_exceptions import (
    InvalidScheduleError,
    NothingToReleaseError,
    ScheduleAlreadyRevokedError,
    ScheduleExistsError,
    ScheduleNotFoundError,
    ScheduleNotRevocableError,
    ScheduleRevokedError,
)


class ScheduleStatus(Enum):
    PRE_CLIFF = "pre_cliff"
    VESTING = "vesting"
    FULLY_VESTED = "fully_vested"
    REVOKED = "revoked"


@dataclass
class VestingSchedule:
    """Vesting terms and progress for a single beneficiary."""

    total_amount: int
    start_time: int
    duration: int
    cliff_duration: int
    is_revocable: bool
    released_amount: int = 0
    is_revoked: bool = False
    revoked_at: int | None = None

    @property
    def cliff_end(self) -> int:
        return self.start_time + self.cliff_duration

    @property
    def end_time(self) -> int:
        return self.start_time + self.duration

    def vested_at(self, now: int) -> int:
        """Vested amount at ``now`` ignoring revocation."""
        if now < self.cliff_end:
            return 0
        elapsed = now - self.start_time
        if elapsed >= self.duration:
            return self.total_amount
        return self.total_amount * elapsed // self.duration

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_amount": self.total_amount,
            "released_amount": self.released_amount,
            "start_time": self.start_time,
            "duration": self.duration,
            "cliff_duration": self.cliff_duration,
            "is_revocable": self.is_revocable,
            "is_revoked": self.is_revoked,
            "revoked_at": self.revoked_at,
        }


def _require_int(name: str, value: Any, minimum: int) -> int:
    # bool is an int subclass; True must not pass as an amount of 1
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidScheduleError(
            f"{name} must be an integer.", details={"field": name, "value": repr(value)}
        )
    if value < minimum:
        raise InvalidScheduleError(
            f"{name} must be at least {minimum}.", details={"field": name, "value": value}
        )
    return value


class VestingRegistry:
    """In-memory registry of vesting schedules for one owner.

    Mutations on the same beneficiary are serialized by a per-beneficiary lock;
    different beneficiaries never contend beyond the short registry lookup.
    """

    def __init__(self, owner: str = "", logger: StructuredLogger | None = None):
        self.owner = owner
        self.logger = logger or StructuredLogger("tokenvest.blockchain.vesting_registry")
        self._lock = threading.RLock()
        self._schedules: dict[str, VestingSchedule] = {}
        self._schedule_locks: dict[str, threading.RLock] = {}
        # Cumulative payouts made through release(), per beneficiary
        self._released_totals: dict[str, int] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._schedules)

    def __contains__(self, beneficiary: object) -> bool:
        with self._lock:
            return beneficiary in self._schedules

    @contextmanager
    def _locked_schedule(self, beneficiary: str) -> Iterator[VestingSchedule]:
        with self._lock:
            schedule = self._schedules.get(beneficiary)
            if schedule is None:
                raise ScheduleNotFoundError(
                    f"No vesting schedule found for {beneficiary!r}.",
                    details={"beneficiary": beneficiary},
                )
            schedule_lock = self._schedule_locks[beneficiary]
        with schedule_lock:
            yield schedule

    @staticmethod
    def _active_vested_amount(beneficiary: str, schedule: VestingSchedule, now: int) -> int:
        if schedule.is_revoked:
            raise ScheduleRevokedError(
                f"Vesting schedule for {beneficiary!r} has been revoked.",
                details={"beneficiary": beneficiary, "revoked_at": schedule.revoked_at},
            )
        return schedule.vested_at(now)

    def create_schedule(
        self,
        beneficiary: str,
        amount: int,
        start_time: int,
        duration: int,
        cliff_duration: int = 0,
        is_revocable: bool = True,
    ) -> VestingSchedule:
        """
        Creates a vesting schedule for ``beneficiary`` and returns a copy of it.
        """
        if not isinstance(beneficiary, str) or not beneficiary:
            raise InvalidScheduleError("Beneficiary identifier cannot be empty.")
        _require_int("amount", amount, 1)
        _require_int("start_time", start_time, 0)
        _require_int("duration", duration, 1)
        _require_int("cliff_duration", cliff_duration, 0)
        if cliff_duration > duration:
            raise InvalidScheduleError(
                "Cliff duration must not exceed the vesting duration.",
                details={"cliff_duration": cliff_duration, "duration": duration},
            )

        schedule = VestingSchedule(
            total_amount=amount,
            start_time=start_time,
            duration=duration,
            cliff_duration=cliff_duration,
            is_revocable=bool(is_revocable),
        )
        with self._lock:
            if beneficiary in self._schedules:
                self.logger.vesting_event("create_rejected", beneficiary, level="WARNING", reason="exists")
                raise ScheduleExistsError(
                    f"Vesting schedule already exists for {beneficiary!r}.",
                    details={"beneficiary": beneficiary},
                )
            self._schedules[beneficiary] = schedule
            self._schedule_locks[beneficiary] = threading.RLock()
            snapshot = replace(schedule)

        self.logger.vesting_event(
            "created",
            beneficiary,
            total_amount=amount,
            start_time=start_time,
            duration=duration,
            cliff_duration=cliff_duration,
            is_revocable=schedule.is_revocable,
        )
        return snapshot

    def calculate_vested_amount(self, beneficiary: str, now: int) -> int:
        """
        Returns the amount vested at ``now``. Raises ScheduleRevokedError once
        the schedule is revoked; read ``released_amount`` from get_schedule() instead.
        """
        _require_int("now", now, 0)
        with self._locked_schedule(beneficiary) as schedule:
            return self._active_vested_amount(beneficiary, schedule, now)

    def release(self, beneficiary: str, now: int) -> int:
        """
        Pays out everything vested but not yet released and returns that amount.
        """
        _require_int("now", now, 0)
        with self._locked_schedule(beneficiary) as schedule:
            vested = self._active_vested_amount(beneficiary, schedule, now)
            releasable = vested - schedule.released_amount
            # Negative only when now moves backwards after an earlier release
            if releasable <= 0:
                self.logger.vesting_event(
                    "release_rejected",
                    beneficiary,
                    level="DEBUG",
                    vested_amount=vested,
                    released_amount=schedule.released_amount,
                )
                raise NothingToReleaseError(
                    f"No tokens available for release for {beneficiary!r}.",
                    details={
                        "beneficiary": beneficiary,
                        "vested_amount": vested,
                        "released_amount": schedule.released_amount,
                        "now": now,
                    },
                )

            schedule.released_amount += releasable
            with self._lock:
                self._released_totals[beneficiary] = (
                    self._released_totals.get(beneficiary, 0) + releasable
                )
            released_total = schedule.released_amount

        self.logger.vesting_event(
            "released",
            beneficiary,
            amount=releasable,
            released_amount=released_total,
            now=now,
        )
        return releasable

    def revoke(self, beneficiary: str, now: int) -> int:
        """
        Revokes a revocable schedule at ``now``.

        The beneficiary keeps exactly what had vested at ``now``; that amount
        becomes the schedule's final ``released_amount`` and is returned.
        """
        _require_int("now", now, 0)
        with self._locked_schedule(beneficiary) as schedule:
            if not schedule.is_revocable:
                raise ScheduleNotRevocableError(
                    f"Vesting schedule for {beneficiary!r} is not revocable.",
                    details={"beneficiary": beneficiary},
                )
            if schedule.is_revoked:
                raise ScheduleAlreadyRevokedError(
                    f"Vesting schedule for {beneficiary!r} is already revoked.",
                    details={"beneficiary": beneficiary, "revoked_at": schedule.revoked_at},
                )

            # Must run before is_revoked is set; the vested query rejects revoked schedules
            vested = self._active_vested_amount(beneficiary, schedule, now)
            schedule.is_revoked = True
            schedule.released_amount = max(schedule.released_amount, vested)
            schedule.revoked_at = now
            entitlement = schedule.released_amount
            forfeited = schedule.total_amount - entitlement

        self.logger.vesting_event(
            "revoked",
            beneficiary,
            level="WARNING",
            vested_amount=entitlement,
            forfeited_amount=forfeited,
            now=now,
        )
        return entitlement

    def get_schedule(self, beneficiary: str) -> VestingSchedule:
        """Returns a copy of the beneficiary's schedule."""
        with self._locked_schedule(beneficiary) as schedule:
            return replace(schedule)

    def get_releasable_amount(self, beneficiary: str, now: int) -> int:
        _require_int("now", now, 0)
        with self._locked_schedule(beneficiary) as schedule:
            vested = self._active_vested_amount(beneficiary, schedule, now)
            return max(vested - schedule.released_amount, 0)

    def get_released_total(self, beneficiary: str) -> int:
        with self._locked_schedule(beneficiary):
            with self._lock:
                return self._released_totals.get(beneficiary, 0)

    def get_unpaid_entitlement(self, beneficiary: str) -> int:
        """
        Tokens a revoked beneficiary is still owed: the frozen entitlement
        minus what release() already paid. Always 0 for active schedules.
        """
        with self._locked_schedule(beneficiary) as schedule:
            if not schedule.is_revoked:
                return 0
            with self._lock:
                paid = self._released_totals.get(beneficiary, 0)
            return schedule.released_amount - paid

    def get_status(self, beneficiary: str, now: int) -> ScheduleStatus:
        _require_int("now", now, 0)
        with self._locked_schedule(beneficiary) as schedule:
            if schedule.is_revoked:
                return ScheduleStatus.REVOKED
            if now < schedule.cliff_end:
                return ScheduleStatus.PRE_CLIFF
            if now >= schedule.end_time:
                return ScheduleStatus.FULLY_VESTED
            return ScheduleStatus.VESTING

    def has_schedule(self, beneficiary: str) -> bool:
        return beneficiary in self

    def beneficiaries(self) -> list[str]:
        with self._lock:
            return list(self._schedules)

"""
tokenvest Blockchain Module

Token management components:
- VestingRegistry: per-beneficiary cliff-plus-linear vesting with
  release bookkeeping and owner revocation
"""

from tokenvest.blockchain.vesting_registry import ScheduleStatus, VestingRegistry, VestingSchedule

__all__ = ["ScheduleStatus", "VestingRegistry", "VestingSchedule"]

"""
tokenvest - Token Vesting Engine

Time-based release of a fixed token allocation to named beneficiaries:
- Cliff-plus-linear vesting schedules, one per beneficiary
- Idempotent partial releases with a cumulative payout ledger
- Owner revocation that freezes the entitlement at the vested amount

Main Components:
- blockchain.vesting_registry: VestingRegistry and VestingSchedule
- core.vesting_exceptions: typed error taxonomy
- core.logging_config / core.structured_logger: JSON structured logging
"""

__version__ = "0.1.0"
__author__ = "tokenvest Development Team"

__all__ = []

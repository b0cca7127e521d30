import sys
from pathlib import Path

import pytest

# Ensure the src directory is on the Python path before collection runs.
project_root = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(project_root / "src"))

from tokenvest.blockchain.vesting_registry import VestingRegistry

DAY = 24 * 3600
T0 = 1_700_000_000


class ManualClock:
    def __init__(self, start_time: int):
        self.current_time = start_time

    def now(self) -> int:
        return self.current_time

    def advance(self, seconds: int):
        self.current_time += seconds


@pytest.fixture
def clock():
    return ManualClock(start_time=T0)


@pytest.fixture
def registry():
    return VestingRegistry(owner="owner123")


@pytest.fixture
def yearly_registry(registry):
    """Registry holding 1,000,000 tokens over 365 days with a 30 day cliff for 'beneficiary1'."""
    registry.create_schedule(
        "beneficiary1",
        1_000_000,
        start_time=T0,
        duration=365 * DAY,
        cliff_duration=30 * DAY,
        is_revocable=True,
    )
    return registry

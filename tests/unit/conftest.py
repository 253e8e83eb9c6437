"""
Shared fixtures for unit tests.

- Accrual timezone
- Sample moments away from local day boundaries
"""

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

import pytest


@pytest.fixture
def karachi():
    """Accrual timezone (UTC+5, no DST)."""
    return ZoneInfo("Asia/Karachi")


@pytest.fixture
def midday_utc():
    """A moment well away from any local day boundary."""
    return datetime(2026, 3, 10, 7, 0, tzinfo=UTC)

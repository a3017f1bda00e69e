"""Expiry scheduling for migrated sandbox records."""

from __future__ import annotations

import time
from typing import Callable

MS_PER_MINUTE = 60 * 1000
MS_PER_DAY = 24 * 60 * MS_PER_MINUTE

Clock = Callable[[], int]


def now_ms() -> int:
    return time.time_ns() // 1_000_000


def minutes_until_expiry(created_at: int, expiry_days: int, now: int) -> int:
    """Minutes from ``now`` until the sandbox retention window closes.

    All timestamps are epoch milliseconds. A negative result means the expiry
    job is already overdue and should run immediately.
    """
    return (created_at + expiry_days * MS_PER_DAY - now) // MS_PER_MINUTE

"""
Clock abstractions for deterministic behavior.

Notes
-----
Order creation stamps ``order_date`` from a Clock rather than reading wall-clock
time directly. Tests pass a FixedClock.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol


class Clock(Protocol):
    """A source of time for deterministic behavior."""

    def now(self) -> datetime:
        """
        Return the current time.

        Returns
        -------
        datetime
            A timezone-aware datetime.
        """
        ...


@dataclass(frozen=True, slots=True)
class SystemClock:
    """Clock that returns the current system time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class FixedClock:
    """Clock that always returns a fixed time (useful for tests)."""

    fixed_time: datetime

    def now(self) -> datetime:
        """
        Return the fixed time, treating a naive value as UTC.

        Returns
        -------
        datetime
            The fixed time value.
        """
        if self.fixed_time.tzinfo is None:
            return self.fixed_time.replace(tzinfo=timezone.utc)
        return self.fixed_time

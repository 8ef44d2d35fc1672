"""Block-height clocks.

Every timestamp in the vault is a block-height-equivalent integer, never a
wall-clock datetime.  ``ManualClock`` is driven explicitly by the host (or
a test); ``WallClock`` derives height from elapsed real time.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Protocol


class Clock(Protocol):
    """Anything that can report the current height."""

    def now(self) -> int: ...


class ManualClock:
    """A height counter advanced explicitly.  Never moves backwards."""

    def __init__(self, height: int = 0) -> None:
        if height < 0:
            raise ValueError("height must be non-negative")
        self._height = height

    def now(self) -> int:
        return self._height

    def advance(self, blocks: int = 1) -> int:
        """Move forward *blocks* heights and return the new height."""
        if blocks < 0:
            raise ValueError("clock cannot move backwards")
        self._height += blocks
        return self._height

    def __repr__(self) -> str:
        return f"ManualClock(height={self._height})"


class WallClock:
    """Height derived from whole intervals elapsed since *genesis*.

    With the default 600-second interval, one height unit is ~10 minutes,
    so the maximum grant window (52560) is roughly one year.

    Parameters
    ----------
    interval_seconds:
        Length of one height unit in seconds.
    genesis:
        UTC instant that corresponds to height 0.
    time_source:
        Returns the current UTC datetime; overridable for tests.
    """

    def __init__(
        self,
        interval_seconds: int = 600,
        genesis: datetime | None = None,
        *,
        time_source: Callable[[], datetime] | None = None,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._interval = interval_seconds
        self._genesis = genesis or datetime(2024, 1, 1, tzinfo=timezone.utc)
        self._time_source = time_source or (lambda: datetime.now(timezone.utc))
        self._last = 0

    def now(self) -> int:
        elapsed = (self._time_source() - self._genesis).total_seconds()
        height = max(0, int(elapsed // self._interval))
        # Non-decreasing even if the system clock steps back.
        self._last = max(self._last, height)
        return self._last

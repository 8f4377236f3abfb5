"""
Injectable wall clock.

Build and verify take `now` explicitly; only the message-side processor and
the CLI read a clock, and they do it through this protocol.
"""
from datetime import datetime, timedelta, timezone
from typing import Protocol

from wssec.timeutil import ensure_utc


class Clock(Protocol):
    def now_utc(self) -> datetime:
        ...


class SystemClock:
    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Test clock returning a fixed instant until advanced."""

    def __init__(self, fixed_dt: datetime):
        self._fixed_dt = ensure_utc(fixed_dt)

    def now_utc(self) -> datetime:
        return self._fixed_dt

    def advance(self, seconds: float) -> None:
        self._fixed_dt = self._fixed_dt + timedelta(seconds=seconds)

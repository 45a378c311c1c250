"""Time source used by services that compare against expiries and windows."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class Clock:
    """Injectable time source.

    Services read time through a Clock so that expiry and rate-limit windows
    can be exercised deterministically in tests.
    """

    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock(Clock):
    """Wall clock."""

    def now(self) -> datetime:
        return utc_now()

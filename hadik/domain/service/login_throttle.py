"""Per-client failed-login throttling.

A sliding window of failed attempt timestamps, owned by one client and passed
into each login call. This is a deterrent, not a security boundary; the
allow-list and credential check are.
"""

import math
from collections import deque
from datetime import datetime, timedelta


class LoginAttemptTracker:
    """Failed attempts of one client within a sliding window."""

    def __init__(self, window_seconds: int = 60, max_failures: int = 5) -> None:
        self.window = timedelta(seconds=window_seconds)
        self.max_failures = max_failures
        self._failures: deque[datetime] = deque()

    def _prune(self, now: datetime) -> None:
        while self._failures and now - self._failures[0] >= self.window:
            self._failures.popleft()

    def failure_count(self, now: datetime) -> int:
        self._prune(now)
        return len(self._failures)

    def lockout_remaining(self, now: datetime) -> int:
        """Seconds until the earliest counted failure leaves the window.

        Returns:
            0 if the client may attempt, else the remaining lockout in whole seconds
        """
        self._prune(now)
        if len(self._failures) < self.max_failures:
            return 0
        remaining = (self._failures[0] + self.window - now).total_seconds()
        return max(1, math.ceil(remaining))

    def record_failure(self, now: datetime) -> None:
        self._prune(now)
        self._failures.append(now)

    def clear(self) -> None:
        self._failures.clear()

    def is_idle(self, now: datetime) -> bool:
        return self.failure_count(now) == 0


class LoginThrottle:
    """Registry of trackers keyed by client address."""

    # Idle trackers are swept once the registry grows past this size
    SWEEP_THRESHOLD = 1024

    def __init__(self, window_seconds: int = 60, max_failures: int = 5) -> None:
        self.window_seconds = window_seconds
        self.max_failures = max_failures
        self._trackers: dict[str, LoginAttemptTracker] = {}

    def tracker_for(self, client_key: str, now: datetime) -> LoginAttemptTracker:
        if len(self._trackers) > self.SWEEP_THRESHOLD:
            self._trackers = {
                key: tracker
                for key, tracker in self._trackers.items()
                if not tracker.is_idle(now)
            }
        tracker = self._trackers.get(client_key)
        if tracker is None:
            tracker = LoginAttemptTracker(self.window_seconds, self.max_failures)
            self._trackers[client_key] = tracker
        return tracker

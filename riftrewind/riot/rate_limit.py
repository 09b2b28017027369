# riot/rate_limit.py

import time
from collections import deque
from typing import Dict, Optional, Sequence, Tuple

# Quotas clé dev Riot : 20 reqs / 1 s ET 100 reqs / 120 s
DEFAULT_WINDOWS: Tuple[Tuple[int, float], ...] = ((20, 1.0), (100, 120.0))
SAFETY_MARGIN = 0.1  # secondes


class RateLimiter:
    """
    Sliding-window limiter enforcing every (max_requests, duration) quota at once.

    Every admitted request counts against all windows. Timestamps are
    monotonic clock readings in seconds.
    """

    def __init__(
        self,
        windows: Sequence[Tuple[int, float]] = DEFAULT_WINDOWS,
        margin: float = SAFETY_MARGIN,
    ):
        self.windows = tuple(windows)
        self.margin = margin
        self._records = [deque() for _ in self.windows]

    def _prune(self, now: float) -> None:
        for (_, duration), records in zip(self.windows, self._records):
            while records and now - records[0] >= duration:
                records.popleft()

    def can_admit(self, now: Optional[float] = None) -> bool:
        """True iff every window is strictly below its cap."""
        now = time.monotonic() if now is None else now
        self._prune(now)
        return all(
            len(records) < cap
            for (cap, _), records in zip(self.windows, self._records)
        )

    def record_admission(self, now: Optional[float] = None) -> None:
        now = time.monotonic() if now is None else now
        for records in self._records:
            records.append(now)

    def delay_until_next_admission(self, now: Optional[float] = None) -> float:
        """
        Seconds to wait before the next request can be admitted.

        When several windows are saturated the longest wait wins, so that
        sleeping once satisfies all of them.
        """
        now = time.monotonic() if now is None else now
        self._prune(now)

        delay = 0.0
        for (cap, duration), records in zip(self.windows, self._records):
            if len(records) >= cap:
                # on attend que la plus vieille req sorte de la fenêtre
                wait = records[0] + duration - now + self.margin
                delay = max(delay, wait)
        return delay

    @property
    def pending(self) -> Dict[float, int]:
        """Current record count per window duration (not pruned)."""
        return {duration: len(records) for (_, duration), records in zip(self.windows, self._records)}

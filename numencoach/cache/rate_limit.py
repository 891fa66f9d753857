import logging
import time
from typing import Callable, Dict, Optional, Tuple

from numencoach.config import settings

logger = logging.getLogger(__name__)


class RateLimitExceededError(Exception):
    """Raised when a user has used up their AI requests for the window."""


class RateLimiter:
    """
    Fixed-window, per-user request counter.

    A window opens on the first check after the previous one expired.
    Only successful requests are recorded, so failed LLM calls do not
    use up a user's quota.
    """

    def __init__(
        self,
        limit: Optional[int] = None,
        window: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.limit = limit if limit is not None else settings.INSIGHT_RATE_LIMIT
        self.window = window if window is not None else settings.INSIGHT_RATE_WINDOW
        self._clock = clock
        # user_id -> (count, window reset time)
        self._counts: Dict[str, Tuple[int, float]] = {}
        self._next_purge = clock() + self.window

    def check(self, user_id: str) -> bool:
        """
        True when `user_id` may make another request now.
        """
        now = self._clock()
        if now >= self._next_purge:
            self._purge(now)

        entry = self._counts.get(user_id)

        if entry is None or now > entry[1]:
            self._counts[user_id] = (0, now + self.window)
            return True

        return entry[0] < self.limit

    def ensure(self, user_id: str) -> None:
        if not self.check(user_id):
            logger.warning(f"Rate limit exceeded for user {user_id}")
            raise RateLimitExceededError(
                "Rate limit exceeded. Please try again later."
            )

    def record(self, user_id: str) -> None:
        """
        Count one successful request in the current window.
        """
        entry = self._counts.get(user_id)
        if entry is None:
            self._counts[user_id] = (1, self._clock() + self.window)
        else:
            self._counts[user_id] = (entry[0] + 1, entry[1])

    def remaining(self, user_id: str) -> int:
        entry = self._counts.get(user_id)
        if entry is None or self._clock() > entry[1]:
            return self.limit
        return max(self.limit - entry[0], 0)

    def __len__(self) -> int:
        return len(self._counts)

    def _purge(self, now: float) -> None:
        """
        Drop users whose window has closed; runs at most once per window.
        """
        self._counts = {
            user_id: entry
            for user_id, entry in self._counts.items()
            if entry[1] >= now
        }
        self._next_purge = now + self.window

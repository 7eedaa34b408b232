import logging
import threading
import time
from collections import deque
from typing import Callable, Deque, Dict, NamedTuple

from veriscan.config import RATE_LIMIT_REQUESTS, RATE_LIMIT_WINDOW_SECONDS

logger = logging.getLogger("rate_limiter")

# Number of tracked callers above which expired entries are swept,
# at most once per window
SWEEP_THRESHOLD = 1024


class RateLimitStatus(NamedTuple):
    allowed: bool
    remaining: int
    retry_after: int   # seconds until the oldest counted request leaves the window


class RateLimiter:
    """Per-caller quota over a rolling window, kept in process memory."""

    def __init__(
        self,
        limit: int = RATE_LIMIT_REQUESTS,
        window_seconds: int = RATE_LIMIT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sweep_threshold: int = SWEEP_THRESHOLD,
    ):
        self.limit = limit
        self.window = window_seconds
        self.sweep_threshold = sweep_threshold
        self._clock = clock
        self._hits: Dict[str, Deque[float]] = {}
        self._swept_at = float("-inf")
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._hits)

    def _prune(self, hits: Deque[float], now: float) -> None:
        while hits and now - hits[0] >= self.window:
            hits.popleft()

    def _sweep(self, now: float) -> None:
        self._swept_at = now
        for key in list(self._hits):
            self._prune(self._hits[key], now)
            if not self._hits[key]:
                del self._hits[key]

    def check(self, key: str) -> RateLimitStatus:
        now = self._clock()
        with self._lock:
            if len(self._hits) >= self.sweep_threshold and now - self._swept_at >= self.window:
                before = len(self._hits)
                self._sweep(now)
                logger.debug(f"Swept {before - len(self._hits)} expired caller(s)")

            hits = self._hits.get(key)
            if hits is not None:
                self._prune(hits, now)
                if not hits:
                    del self._hits[key]
                    hits = None

            if hits is not None and len(hits) >= self.limit:
                retry_after = max(1, int(self.window - (now - hits[0])))
                logger.warning(f"Rate limit hit for {key} ({len(hits)}/{self.limit})")
                return RateLimitStatus(False, 0, retry_after)

            if hits is None:
                hits = self._hits[key] = deque()
            hits.append(now)
            return RateLimitStatus(True, self.limit - len(hits), 0)

    def purge_expired(self) -> None:
        with self._lock:
            self._sweep(self._clock())

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()

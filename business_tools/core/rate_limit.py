from __future__ import annotations

import threading
import time
from collections import deque
from typing import Callable, Deque, Dict, Optional


class SlidingWindowLimiter:
    """Per-key sliding window: at most ``max_requests`` in any ``window_seconds``."""

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: Dict[str, Deque[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    @property
    def enabled(self) -> bool:
        return self.max_requests > 0 and self.window_seconds > 0

    def _clean_window(self, window: Deque[float], now: float) -> None:
        cutoff = now - self.window_seconds
        while window and window[0] <= cutoff:
            window.popleft()

    def _sweep(self, now: float) -> None:
        cutoff = now - self.window_seconds
        stale = [k for k, w in self._windows.items() if not w or w[-1] <= cutoff]
        for k in stale:
            del self._windows[k]
        self._last_sweep = now

    def hit(self, key: str) -> Optional[float]:
        """Record a request for ``key``; return seconds to wait if it is over the limit."""
        if not self.enabled:
            return None

        with self._lock:
            now = self._clock()
            # drop clients with no request inside the window, at most once per window
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(now)

            window = self._windows.setdefault(key, deque())
            self._clean_window(window, now)

            if len(window) >= self.max_requests:
                return self.window_seconds - (now - window[0])

            window.append(now)
            return None

    @property
    def tracked_clients(self) -> int:
        return len(self._windows)

    def reset(self) -> None:
        with self._lock:
            self._windows.clear()

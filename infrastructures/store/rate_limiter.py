# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description: 固定窗口计数器（登录/注册限流）

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional


@dataclass
class RateLimitCounter:
    key: str
    count: int
    reset_time: float


class RateLimiter:
    """Fixed-window counter keyed by an arbitrary string.

    - The window starts at the first increment and is never extended by later hits,
      so a burst straddling two windows may see up to 2x the nominal limit.
    - Expired counters are dropped lazily on read; there is no sweeper.
    """

    def __init__(self, *, window_seconds: int = 15 * 60, clock: Optional[Callable[[], float]] = None) -> None:
        self._window = float(window_seconds)
        self._clock = clock or time.time
        self._counters: Dict[str, RateLimitCounter] = {}
        self._lock = threading.Lock()

    @property
    def window_seconds(self) -> float:
        return self._window

    def get_count(self, key: str) -> int:
        with self._lock:
            counter = self._counters.get(key)
            if counter is None:
                return 0
            if counter.reset_time < self._clock():
                del self._counters[key]
                return 0
            return counter.count

    def increment(self, key: str) -> int:
        with self._lock:
            return self._increment_unlocked(key)

    def acquire(self, key: str, limit: int) -> bool:
        """Take one slot if the key is still under ``limit``; a refused call consumes nothing.

        Check and increment share one critical section, so concurrent callers on the
        same key can never take more than ``limit`` slots per window.
        """
        with self._lock:
            counter = self._counters.get(key)
            if counter is not None and counter.reset_time >= self._clock() and counter.count >= limit:
                return False
            self._increment_unlocked(key)
            return True

    def _increment_unlocked(self, key: str) -> int:
        now = self._clock()
        counter = self._counters.get(key)
        if counter is None or counter.reset_time < now:
            counter = RateLimitCounter(key=key, count=0, reset_time=now + self._window)
            self._counters[key] = counter
        counter.count += 1
        return counter.count

    def reset(self, key: str) -> None:
        with self._lock:
            self._counters.pop(key, None)

    def peek(self, key: str) -> Optional[RateLimitCounter]:
        with self._lock:
            return self._counters.get(key)

# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description: 固定窗口限流语义

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

from infrastructures.store.rate_limiter import RateLimiter


def test_missing_key_counts_zero(rate_limiter: RateLimiter) -> None:
    assert rate_limiter.get_count("login_attempts_1.2.3.4") == 0


def test_increment_five_times_counts_five(rate_limiter: RateLimiter) -> None:
    for _ in range(5):
        rate_limiter.increment("k")
    assert rate_limiter.get_count("k") == 5


def test_expired_counter_reads_zero_and_is_deleted(rate_limiter: RateLimiter, clock) -> None:
    rate_limiter.increment("k")
    clock.advance(rate_limiter.window_seconds + 1)

    assert rate_limiter.get_count("k") == 0
    assert rate_limiter.peek("k") is None


def test_window_is_fixed_not_sliding(rate_limiter: RateLimiter, clock) -> None:
    rate_limiter.increment("k")
    first_reset = rate_limiter.peek("k").reset_time

    clock.advance(rate_limiter.window_seconds - 1)
    rate_limiter.increment("k")

    # 窗口尾部的请求不会延长窗口
    assert rate_limiter.peek("k").reset_time == first_reset
    assert rate_limiter.get_count("k") == 2

    clock.advance(2)
    assert rate_limiter.get_count("k") == 0


def test_reset_clears_counter(rate_limiter: RateLimiter) -> None:
    rate_limiter.increment("k")
    rate_limiter.increment("k")
    rate_limiter.reset("k")
    assert rate_limiter.get_count("k") == 0

    # 不存在的 key 也可以 reset
    rate_limiter.reset("never-seen")


def test_keys_are_independent(rate_limiter: RateLimiter) -> None:
    rate_limiter.increment("login_attempts_a")
    rate_limiter.increment("login_attempts_a")
    rate_limiter.increment("registration_attempts_a")

    assert rate_limiter.get_count("login_attempts_a") == 2
    assert rate_limiter.get_count("registration_attempts_a") == 1
    assert rate_limiter.get_count("login_attempts_b") == 0


def test_default_window_is_fifteen_minutes() -> None:
    assert RateLimiter().window_seconds == 15 * 60


def test_acquire_stops_at_limit_without_consuming(rate_limiter: RateLimiter) -> None:
    assert [rate_limiter.acquire("k", 3) for _ in range(5)] == [True, True, True, False, False]
    assert rate_limiter.get_count("k") == 3


def test_acquire_opens_new_window_after_expiry(rate_limiter: RateLimiter, clock) -> None:
    for _ in range(3):
        rate_limiter.acquire("k", 3)
    clock.advance(rate_limiter.window_seconds + 1)

    assert rate_limiter.acquire("k", 3) is True
    assert rate_limiter.get_count("k") == 1


def test_concurrent_increments_are_not_lost(rate_limiter: RateLimiter) -> None:
    start = threading.Barrier(16)

    def hit(_: int) -> None:
        start.wait()
        for _ in range(250):
            rate_limiter.increment("k")

    with ThreadPoolExecutor(max_workers=16) as pool:
        list(pool.map(hit, range(16)))

    assert rate_limiter.get_count("k") == 16 * 250


def test_concurrent_acquire_grants_exactly_limit(rate_limiter: RateLimiter) -> None:
    start = threading.Barrier(32)

    def take(_: int) -> bool:
        start.wait()
        return rate_limiter.acquire("k", 5)

    with ThreadPoolExecutor(max_workers=32) as pool:
        granted = list(pool.map(take, range(32)))

    assert granted.count(True) == 5
    assert rate_limiter.get_count("k") == 5

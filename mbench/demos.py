# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Built-in demo candidates.

The classic micro-benchmark comparison: three ways to add up the squares of
the first n integers, from an explicit loop to a single builtin call. Plus
sleepers with a known duration and a candidate that always fails, which are
handy for checking a setup end to end (see configs/example.yaml).
"""

import time


def loop_sum(n: int = 10_000) -> int:
    total = 0
    for i in range(n):
        total += i * i
    return total


def comprehension_sum(n: int = 10_000) -> int:
    return sum([i * i for i in range(n)])


def generator_sum(n: int = 10_000) -> int:
    return sum(i * i for i in range(n))


def sleep_ms(ms: float = 1.0) -> None:
    """Block for roughly `ms` milliseconds."""
    time.sleep(ms / 1000.0)


def always_fails() -> None:
    raise RuntimeError("demo candidate that never succeeds")

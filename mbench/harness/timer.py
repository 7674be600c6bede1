# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Clock and stopwatch helpers.

The harness reads time through a `Clock` - any zero-argument callable that
returns integer nanoseconds. The default is time.perf_counter_ns, which is
monotonic and has the best resolution the platform offers. Tests swap in a
scripted clock to get exact, repeatable durations.

Timer overhead is not subtracted anywhere. It's a systematic error that hits
every candidate equally, so comparisons stay fair.
"""

import math
import time
from collections.abc import Callable

Clock = Callable[[], int]


def clock() -> int:
    """Current reading of the default high-resolution clock, in nanoseconds."""
    return time.perf_counter_ns()


def time_call(func: Callable[[], object], clock: Clock = clock) -> int:
    """
    Time a single call, once. Returns elapsed nanoseconds.

    This is a plain stopwatch around one invocation: no repetitions, no
    statistics, and an exception from `func` propagates to the caller.
    """
    start = clock()
    func()
    return clock() - start


_UNITS: tuple[tuple[str, float], ...] = (
    ("s", 1e9),
    ("ms", 1e6),
    ("µs", 1e3),
)


def format_duration(ns: float) -> str:
    """
    Render a nanosecond duration with a readable unit.

    NaN renders as "n/a". A candidate that never produced a sample must not
    show up as "0 ns".
    """
    if math.isnan(ns):
        return "n/a"
    if math.isinf(ns):
        return "inf"
    magnitude = abs(ns)
    for unit, scale in _UNITS:
        if magnitude >= scale:
            return f"{ns / scale:.3f} {unit}"
    return f"{ns:.0f} ns"

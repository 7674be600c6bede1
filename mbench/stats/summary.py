# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Summary statistics over timing samples.

Everything here is a pure function - given the same samples, you always get
the same numbers back, in whatever order the samples arrive. No randomness,
no side effects, no global state.

Conventions:
  - median of an even-sized sample is the mean of the two middle values
  - quantiles use linear interpolation between order statistics:
    h = (n - 1) * q, then blend sorted[floor(h)] and sorted[floor(h) + 1]
    (q = 0.5 gives the same answer as the median)
  - anything that can't be computed is NaN, not zero
"""

import math
import statistics
from collections.abc import Iterable, Mapping, Sequence

from mbench.harness.models import RunResult, Summary

DEFAULT_QUANTILES: tuple[float, ...] = (0.25, 0.75, 0.95)


def quantile(sorted_values: Sequence[float], q: float) -> float:
    """
    Linear-interpolation quantile of an already-sorted sequence.

    Args:
        sorted_values: Samples in ascending order.
        q: Quantile level in [0, 1].

    Returns:
        The interpolated value, or NaN for an empty sequence.

    Raises:
        ValueError: If q is outside [0, 1].
    """
    if not 0.0 <= q <= 1.0:
        raise ValueError(f"Quantile level must be in [0, 1], got {q}")

    n = len(sorted_values)
    if n == 0:
        return math.nan
    if n == 1:
        return float(sorted_values[0])

    h = (n - 1) * q
    lower = math.floor(h)
    upper = min(lower + 1, n - 1)
    fraction = h - lower
    low_value = float(sorted_values[lower])
    return low_value + fraction * (float(sorted_values[upper]) - low_value)


def _median(sorted_values: Sequence[float]) -> float:
    n = len(sorted_values)
    mid = n // 2
    if n % 2 == 1:
        return float(sorted_values[mid])
    return (sorted_values[mid - 1] + sorted_values[mid]) / 2.0


def summarize(
    results: Iterable[RunResult],
    quantiles: Iterable[float] = (),
    label: str | None = None,
    failures: int = 0,
) -> Summary:
    """
    Collapse a set of RunResults into one Summary.

    With no results this returns count 0 and NaN for every statistic, which
    is how "no successful samples" stays distinguishable from "0 ns, fast".

    Args:
        results: Measured executions. Order doesn't matter.
        quantiles: Extra quantile levels to compute, each in [0, 1].
        label: Label for the summary. Defaults to the label of the first
               result, or "" when there are none.
        failures: Failure count to carry on the summary. The results
                  themselves only ever describe successful invocations.

    Returns:
        A frozen Summary.

    Raises:
        ValueError: If a quantile level is outside [0, 1].
    """
    samples = list(results)
    levels = sorted(set(quantiles))
    for q in levels:
        if not 0.0 <= q <= 1.0:
            raise ValueError(f"Quantile level must be in [0, 1], got {q}")

    if label is None:
        label = samples[0].label if samples else ""

    if not samples:
        return Summary(
            label=label,
            count=0,
            failures=failures,
            quantiles={q: math.nan for q in levels},
        )

    ordered = sorted(r.elapsed_ns for r in samples)
    n = len(ordered)

    # fsum keeps the mean exact for identical samples regardless of order.
    mean = math.fsum(ordered) / n
    stddev = statistics.stdev(ordered) if n > 1 else math.nan

    return Summary(
        label=label,
        count=n,
        failures=failures,
        mean_ns=mean,
        median_ns=_median(ordered),
        min_ns=float(ordered[0]),
        max_ns=float(ordered[-1]),
        stddev_ns=stddev,
        quantiles={q: quantile(ordered, q) for q in levels},
    )


def relative_to_fastest(summaries: Mapping[str, Summary]) -> dict[str, float]:
    """
    Express each candidate's mean as a multiple of the fastest mean.

    The fastest candidate gets 1.0. Candidates without samples get NaN, and
    if nobody has samples everything is NaN.
    """
    finite = [s.mean_ns for s in summaries.values() if s.has_samples]
    if not finite:
        return {label: math.nan for label in summaries}

    fastest = min(finite)
    relative: dict[str, float] = {}
    for label, s in summaries.items():
        if not s.has_samples:
            relative[label] = math.nan
        elif fastest == 0:
            relative[label] = 1.0 if s.mean_ns == 0 else math.inf
        else:
            relative[label] = s.mean_ns / fastest
    return relative

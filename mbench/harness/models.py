# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Data models for the benchmark harness.

These are the types that everything in the pipeline passes around. They're
frozen dataclasses because a measurement should never change after it was
taken - if something rewrites a timing after the fact, that's a bug.

All durations are integer nanoseconds on the way in (straight from
time.perf_counter_ns). Summary statistics are floats, and a statistic that
can't be computed is NaN, never zero: "took 0 ns" and "never succeeded" must
not look alike.
"""

import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class Candidate:
    """
    A named, zero-argument unit of work.

    The label is for display only. Two candidates may share a label; the
    harness merges their measurements under it.
    """

    label: str
    func: Callable[[], object]


@dataclass(frozen=True)
class RunResult:
    """One measured execution of one candidate."""

    label: str
    elapsed_ns: int
    index: int


@dataclass(frozen=True)
class CandidateFailure:
    """One invocation that raised instead of returning. Excluded from statistics."""

    label: str
    index: int
    error_type: str
    message: str


@dataclass(frozen=True)
class Summary:
    """
    Aggregated timing statistics for one candidate.

    `count` is the number of successful samples, `failures` the number of
    invocations that raised. With count == 0 every statistic is NaN.
    Quantiles are keyed by level in [0, 1], e.g. {0.25: ..., 0.95: ...},
    and are stored as a read-only mapping. They are left out of the hash.
    """

    label: str
    count: int
    failures: int = 0
    mean_ns: float = math.nan
    median_ns: float = math.nan
    min_ns: float = math.nan
    max_ns: float = math.nan
    stddev_ns: float = math.nan
    quantiles: Mapping[float, float] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "quantiles", MappingProxyType(dict(self.quantiles)))

    @property
    def all_failed(self) -> bool:
        """True when every invocation failed and nothing was measured."""
        return self.count == 0 and self.failures > 0

    @property
    def has_samples(self) -> bool:
        return self.count > 0


@dataclass
class BenchmarkRun:
    """
    The complete record of one harness run.

    `summaries` is what callers usually want. The raw per-invocation
    results, the failure records, and the warm-up phase are kept alongside
    so reports can show distributions and explain missing samples.
    Warm-up timings never feed into the summaries.
    """

    repetitions: int
    warmup_repetitions: int = 0
    summaries: dict[str, Summary] = field(default_factory=dict)
    results: dict[str, list[RunResult]] = field(default_factory=dict)
    failures: dict[str, list[CandidateFailure]] = field(default_factory=dict)
    warmup: dict[str, list[RunResult]] = field(default_factory=dict)
    warmup_failures: dict[str, int] = field(default_factory=dict)

    @property
    def labels(self) -> list[str]:
        """Candidate labels in order of first appearance."""
        return list(self.summaries)

    def failed_labels(self) -> list[str]:
        """Labels whose every measured invocation failed."""
        return [label for label, s in self.summaries.items() if s.all_failed]

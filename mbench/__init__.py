# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
mbench - a minimal micro-benchmark harness.

Time a handful of zero-argument candidates, repeat each one, and compare the
distributions:

    from mbench import BenchmarkHarness, Candidate

    harness = BenchmarkHarness()
    summaries = harness.run(
        [Candidate("loop", slow_sum), Candidate("builtin", fast_sum)],
        repetitions=100,
    )
"""

from mbench.harness.exceptions import HarnessError, InvalidConfigurationError
from mbench.harness.models import BenchmarkRun, Candidate, CandidateFailure, RunResult, Summary
from mbench.harness.runner import BenchmarkHarness
from mbench.stats.summary import summarize

__version__ = "0.1.0"

__all__ = [
    "BenchmarkHarness",
    "BenchmarkRun",
    "Candidate",
    "CandidateFailure",
    "HarnessError",
    "InvalidConfigurationError",
    "RunResult",
    "Summary",
    "summarize",
    "__version__",
]

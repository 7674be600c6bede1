# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Benchmark harness - the heart of mbench.

For each candidate, in the order given, the harness:
  1. Optionally runs a warm-up phase (recorded separately, never summarized)
  2. Invokes the candidate `repetitions` times back to back
  3. Wraps every invocation with a clock reading right before the call and
     right after it returns, and records the difference
  4. Records a CandidateFailure instead of a timing when the call raises

Then each label's timings are collapsed into a Summary.

Everything runs on the calling thread, one candidate at a time. Running
candidates in parallel would put them in contention with each other and the
numbers would stop being comparable. There is no timeout: a candidate that
never returns hangs the run.

Candidates that share a label are merged: their timings and failures land
under the same label and the Summary covers all of them.
"""

from collections.abc import Iterable, Sequence

from mbench.harness.exceptions import InvalidConfigurationError
from mbench.harness.models import BenchmarkRun, Candidate, CandidateFailure, RunResult, Summary
from mbench.harness.timer import Clock, clock as default_clock
from mbench.logging.logger import get_logger
from mbench.stats.summary import DEFAULT_QUANTILES, summarize

logger = get_logger(__name__)


def _coerce_candidate(item: object) -> Candidate:
    """Accept a Candidate or a plain (label, func) pair."""
    if isinstance(item, Candidate):
        return item
    if isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], str):
        return Candidate(label=item[0], func=item[1])
    raise InvalidConfigurationError(
        f"Expected a Candidate or a (label, callable) pair, got {item!r}"
    )


def _validate_count(name: str, value: object, minimum: int) -> int:
    # bool is an int subclass; True repetitions is a caller bug, not 1.
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigurationError(
            f"{name} must be an integer, got {type(value).__name__}"
        )
    if value < minimum:
        raise InvalidConfigurationError(f"{name} must be >= {minimum}, got {value}")
    return value


class BenchmarkHarness:
    """
    Times zero-argument candidates and summarizes the results.

    Args:
        quantiles: Quantile levels in [0, 1] to include in every Summary.
        warmup: Untimed-for-statistics invocations per candidate before
                measurement starts. Their timings are kept in
                BenchmarkRun.warmup and nowhere else.
        clock: Zero-argument callable returning integer nanoseconds.
    """

    def __init__(
        self,
        quantiles: Iterable[float] = DEFAULT_QUANTILES,
        warmup: int = 0,
        clock: Clock = default_clock,
    ) -> None:
        self.quantiles: tuple[float, ...] = tuple(sorted(set(quantiles)))
        for q in self.quantiles:
            if not 0.0 <= q <= 1.0:
                raise InvalidConfigurationError(f"Quantile level must be in [0, 1], got {q}")
        self.warmup = _validate_count("warmup", warmup, 0)
        self._clock = clock

    def run(
        self,
        candidates: Sequence[Candidate | tuple[str, object]],
        repetitions: int,
    ) -> dict[str, Summary]:
        """
        Benchmark every candidate and return one Summary per distinct label.

        The mapping is ordered by first appearance of each label. Failed
        invocations are counted on the Summary, never raised.

        Raises:
            InvalidConfigurationError: repetitions < 1, no candidates, or a
                candidate whose func isn't callable. Nothing runs in that case.
        """
        return self.execute(candidates, repetitions).summaries

    def validate(
        self,
        candidates: Sequence[Candidate | tuple[str, object]],
        repetitions: int,
    ) -> tuple[int, list[Candidate]]:
        """
        Check a run's inputs without invoking anything.

        Returns the validated repetition count and the candidates coerced to
        Candidate. Raises InvalidConfigurationError on the first problem.
        """
        repetitions = _validate_count("repetitions", repetitions, 1)
        resolved = [_coerce_candidate(c) for c in candidates]
        if not resolved:
            raise InvalidConfigurationError("At least one candidate is required")
        for candidate in resolved:
            if not callable(candidate.func):
                raise InvalidConfigurationError(
                    f"Candidate '{candidate.label}' is not callable"
                )
        return repetitions, resolved

    def execute(
        self,
        candidates: Sequence[Candidate | tuple[str, object]],
        repetitions: int,
    ) -> BenchmarkRun:
        """
        Same pipeline as `run`, but returns the full BenchmarkRun record:
        raw timings, failure records, and the warm-up phase.
        """
        repetitions, resolved = self.validate(candidates, repetitions)

        run = BenchmarkRun(repetitions=repetitions, warmup_repetitions=self.warmup)

        logger.info(
            "Benchmark run started",
            extra={
                "candidates": len(resolved),
                "repetitions": repetitions,
                "warmup": self.warmup,
            },
        )

        for candidate in resolved:
            label = candidate.label
            results = run.results.setdefault(label, [])
            failures = run.failures.setdefault(label, [])

            if self.warmup:
                warm, warm_failed = self._measure(candidate, self.warmup)
                run.warmup.setdefault(label, []).extend(warm)
                run.warmup_failures[label] = run.warmup_failures.get(label, 0) + len(warm_failed)

            logger.debug("Candidate started", extra={"label": label})
            measured, failed = self._measure(candidate, repetitions)
            results.extend(measured)
            failures.extend(failed)
            logger.debug(
                "Candidate finished",
                extra={"label": label, "samples": len(measured), "failures": len(failed)},
            )

        for label, results in run.results.items():
            summary = summarize(
                results,
                quantiles=self.quantiles,
                label=label,
                failures=len(run.failures[label]),
            )
            run.summaries[label] = summary
            if summary.all_failed:
                logger.warning(
                    "Every invocation failed, no samples recorded",
                    extra={"label": label, "failures": summary.failures},
                )

        logger.info(
            "Benchmark run complete",
            extra={
                "labels": run.labels,
                "failed_labels": run.failed_labels(),
            },
        )
        return run

    def _measure(
        self,
        candidate: Candidate,
        repetitions: int,
    ) -> tuple[list[RunResult], list[CandidateFailure]]:
        """Invoke one candidate `repetitions` times, timing each call."""
        clock = self._clock
        func = candidate.func
        results: list[RunResult] = []
        failures: list[CandidateFailure] = []

        for index in range(repetitions):
            start = clock()
            try:
                func()
            except Exception as exc:
                failures.append(CandidateFailure(
                    label=candidate.label,
                    index=index,
                    error_type=type(exc).__name__,
                    message=str(exc),
                ))
                logger.warning(
                    "Candidate invocation failed",
                    extra={
                        "label": candidate.label,
                        "index": index,
                        "error": f"{type(exc).__name__}: {exc}",
                    },
                )
                continue
            end = clock()
            results.append(RunResult(
                label=candidate.label,
                elapsed_ns=max(0, end - start),
                index=index,
            ))

        return results, failures

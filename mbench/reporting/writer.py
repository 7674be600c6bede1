# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Benchmark report writer.

Writes a finished run to disk:

    <output_dir>/
    ├── results.json          - machine-readable summaries, failures, environment
    ├── report.txt            - human-readable table (and chart)
    └── config_snapshot.yaml  - the config used for this run, when there was one

results.json is the authoritative output; report.txt is a convenience view
of the same data. Statistics that couldn't be computed are written as null,
never as 0.
"""

import json
import math
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml

from mbench.harness.models import BenchmarkRun, Summary
from mbench.logging.logger import get_logger
from mbench.reporting.table import Order, render_chart, render_table
from mbench.runtime.environment import SystemInfo
from mbench.stats.summary import relative_to_fastest
from mbench.utils.paths import ensure_directory

logger = get_logger(__name__)


def _finite_or_none(value: float) -> float | None:
    return None if math.isnan(value) or math.isinf(value) else value


def summary_to_dict(summary: Summary, relative: float = math.nan) -> dict[str, Any]:
    """JSON-safe dict for one Summary. NaN becomes None, quantile keys become strings."""
    return {
        "label": summary.label,
        "count": summary.count,
        "failures": summary.failures,
        "all_failed": summary.all_failed,
        "mean_ns": _finite_or_none(summary.mean_ns),
        "median_ns": _finite_or_none(summary.median_ns),
        "min_ns": _finite_or_none(summary.min_ns),
        "max_ns": _finite_or_none(summary.max_ns),
        "stddev_ns": _finite_or_none(summary.stddev_ns),
        "quantiles": {
            f"{q:g}": _finite_or_none(v) for q, v in sorted(summary.quantiles.items())
        },
        "relative": _finite_or_none(relative),
    }


def run_to_dict(
    run: BenchmarkRun,
    system_info: SystemInfo | None = None,
    order: Order = "input",
) -> dict[str, Any]:
    """The full results.json document for a run."""
    relative = relative_to_fastest(run.summaries)
    return {
        "generated": datetime.now(tz=timezone.utc).isoformat(),
        "repetitions": run.repetitions,
        "warmup_repetitions": run.warmup_repetitions,
        "order": order,
        "summaries": [
            summary_to_dict(s, relative[label]) for label, s in run.summaries.items()
        ],
        "failures": {
            label: [asdict(f) for f in failures]
            for label, failures in run.failures.items()
            if failures
        },
        "warmup": {
            label: {
                "count": len(results),
                "failures": run.warmup_failures.get(label, 0),
                "elapsed_ns": [r.elapsed_ns for r in results],
            }
            for label, results in run.warmup.items()
        },
        "environment": system_info._asdict() if system_info is not None else None,
    }


def format_report_text(
    run: BenchmarkRun,
    order: Order = "input",
    chart: bool = False,
    system_info: SystemInfo | None = None,
) -> str:
    """
    Format a run into a human-readable text report.

    Header with repetition counts, the summary table, an optional chart, and
    a failures section listing the first error seen for each failing label.
    """
    timestamp = datetime.now(tz=timezone.utc).isoformat()
    lines: list[str] = [
        "=" * 60,
        "MBENCH REPORT",
        f"Generated: {timestamp}",
        f"Repetitions: {run.repetitions}",
        f"Warm-up: {run.warmup_repetitions}",
    ]
    if system_info is not None:
        lines.append(
            f"Python: {system_info.python_implementation} {system_info.python_version} "
            f"on {system_info.platform}/{system_info.architecture}"
        )
    lines.extend(["=" * 60, "", render_table(run.summaries, order).rstrip("\n")])

    if chart:
        lines.extend(["", "--- DISTRIBUTION ---", render_chart(run.summaries, order).rstrip("\n")])

    failing = {label: f for label, f in run.failures.items() if f}
    if failing:
        lines.extend(["", "--- FAILURES ---"])
        for label, failures in failing.items():
            first = failures[0]
            lines.append(
                f"  {label}: {len(failures)} of {len(failures) + run.summaries[label].count} "
                f"invocations failed (first: {first.error_type}: {first.message})"
            )

    lines.extend(["", "=" * 60])
    return "\n".join(lines) + "\n"


def write_report(
    run: BenchmarkRun,
    output_dir: Path,
    config_snapshot: dict[str, object] | None = None,
    system_info: SystemInfo | None = None,
    order: Order = "input",
    chart: bool = False,
) -> Path:
    """
    Write the full report to disk and return the output directory.

    Creates the directory if needed. config_snapshot.yaml is only written
    when a snapshot is given.
    """
    ensure_directory(output_dir)

    results_path = output_dir / "results.json"
    results_path.write_text(
        json.dumps(run_to_dict(run, system_info, order), indent=2, default=str),
        encoding="utf-8",
    )

    report_path = output_dir / "report.txt"
    report_path.write_text(
        format_report_text(run, order=order, chart=chart, system_info=system_info),
        encoding="utf-8",
    )

    if config_snapshot is not None:
        config_path = output_dir / "config_snapshot.yaml"
        config_path.write_text(
            yaml.safe_dump(config_snapshot, default_flow_style=False, sort_keys=True),
            encoding="utf-8",
        )

    logger.info(
        "Benchmark report written",
        extra={"output_dir": str(output_dir)},
    )

    return output_dir

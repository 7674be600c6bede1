# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Text rendering for benchmark summaries.

Two views of the same Summary mapping:

  render_table  - one row per label: count, failures, mean, median, min,
                  max, and speed relative to the fastest candidate
  render_chart  - a box-plot style line per label on a shared axis:

                  loop     |   ---[====|=====]------      |
                  builtin  |[=|]-                         |

Rows come in input order by default, or sorted by mean ascending. Labels
with no successful samples always sort last and are spelled out as such,
never shown as 0 ns.
"""

import math
from collections.abc import Mapping
from typing import Literal

from mbench.harness.models import Summary
from mbench.harness.timer import format_duration
from mbench.stats.summary import relative_to_fastest

Order = Literal["input", "mean"]

TABLE_HEADERS: tuple[str, ...] = (
    "label", "count", "failures", "mean", "median", "min", "max", "relative",
)

NO_SAMPLES = "no successful samples"


def order_summaries(summaries: Mapping[str, Summary], order: Order = "input") -> list[Summary]:
    """
    Return summaries in report order.

    "input" keeps the mapping's order (first appearance of each label).
    "mean" sorts by mean ascending; a stable sort, with sample-less labels
    last in input order.
    """
    rows = list(summaries.values())
    if order == "input":
        return rows
    if order == "mean":
        return sorted(rows, key=lambda s: (not s.has_samples, s.mean_ns if s.has_samples else 0.0))
    raise ValueError(f"Unknown order '{order}', expected 'input' or 'mean'")


def _format_relative(value: float) -> str:
    if math.isnan(value):
        return "n/a"
    if math.isinf(value):
        return "inf"
    return f"{value:.2f}x"


def table_rows(summaries: Mapping[str, Summary], order: Order = "input") -> list[list[str]]:
    """Cell strings for every row, in report order."""
    relative = relative_to_fastest(summaries)
    rows: list[list[str]] = []
    for s in order_summaries(summaries, order):
        rows.append([
            s.label,
            str(s.count),
            str(s.failures),
            format_duration(s.mean_ns),
            format_duration(s.median_ns),
            format_duration(s.min_ns),
            format_duration(s.max_ns),
            _format_relative(relative[s.label]) if s.has_samples else NO_SAMPLES,
        ])
    return rows


def render_table(summaries: Mapping[str, Summary], order: Order = "input") -> str:
    """Render summaries as an aligned plain-text table."""
    headers = list(TABLE_HEADERS)
    rows = table_rows(summaries, order)

    widths = [len(h) for h in headers]
    for row in rows:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row, strict=True)]

    # label is left-aligned, numbers right-aligned
    def _line(cells: list[str]) -> str:
        parts = [cells[0].ljust(widths[0])]
        parts.extend(cell.rjust(w) for cell, w in zip(cells[1:], widths[1:], strict=True))
        return "  ".join(parts).rstrip()

    lines = [_line(headers), "  ".join("-" * w for w in widths)]
    lines.extend(_line(row) for row in rows)
    return "\n".join(lines) + "\n"


def render_chart(
    summaries: Mapping[str, Summary],
    order: Order = "input",
    width: int = 50,
) -> str:
    """
    Render a box-plot style distribution line per label.

    The box spans p25..p75 when those quantiles are on the summary, and
    collapses to the median otherwise. Whiskers run out to min and max.
    All labels share one linear axis from the smallest min to the largest max.
    """
    if width < 10:
        raise ValueError(f"Chart width must be at least 10, got {width}")

    ordered = order_summaries(summaries, order)
    measured = [s for s in ordered if s.has_samples]
    label_width = max((len(s.label) for s in ordered), default=0)

    if not measured:
        return "".join(f"{s.label.ljust(label_width)}  {NO_SAMPLES}\n" for s in ordered)

    low = min(s.min_ns for s in measured)
    high = max(s.max_ns for s in measured)
    span = high - low

    def _pos(value: float) -> int:
        if span == 0:
            return 0
        return round((value - low) / span * (width - 1))

    lines: list[str] = []
    for s in ordered:
        if not s.has_samples:
            lines.append(f"{s.label.ljust(label_width)}  {NO_SAMPLES}")
            continue

        q1 = s.quantiles.get(0.25, s.median_ns)
        q3 = s.quantiles.get(0.75, s.median_ns)
        cells = [" "] * width
        lo, q1_pos, mid, q3_pos, hi = (_pos(v) for v in (s.min_ns, q1, s.median_ns, q3, s.max_ns))
        for i in range(lo, hi + 1):
            cells[i] = "-"
        for i in range(q1_pos, q3_pos + 1):
            cells[i] = "="
        cells[q1_pos] = "["
        cells[q3_pos] = "]"
        cells[mid] = "|"
        lines.append(f"{s.label.ljust(label_width)}  |{''.join(cells)}|")

    axis = f"{format_duration(low)} .. {format_duration(high)}"
    lines.append(f"{''.ljust(label_width)}   {axis}")
    return "\n".join(lines) + "\n"

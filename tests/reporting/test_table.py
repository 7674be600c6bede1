# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Tests for table and chart rendering.

The main thing to nail: a candidate with no successful samples must read as
exactly that, never as a fast 0 ns row.
"""

import pytest

from mbench.harness.models import Summary
from mbench.reporting.table import NO_SAMPLES, order_summaries, render_chart, render_table, table_rows


def _sample_summaries() -> dict[str, Summary]:
    return {
        "slow": Summary(
            label="slow", count=5, mean_ns=3_000_000.0, median_ns=2_900_000.0,
            min_ns=2_000_000.0, max_ns=4_000_000.0,
            quantiles={0.25: 2_500_000.0, 0.75: 3_500_000.0},
        ),
        "broken": Summary(label="broken", count=0, failures=5),
        "fast": Summary(
            label="fast", count=5, mean_ns=1_000_000.0, median_ns=1_000_000.0,
            min_ns=900_000.0, max_ns=1_100_000.0,
            quantiles={0.25: 950_000.0, 0.75: 1_050_000.0},
        ),
    }


class TestOrdering:
    def test_input_order_is_kept(self) -> None:
        labels = [s.label for s in order_summaries(_sample_summaries(), "input")]
        assert labels == ["slow", "broken", "fast"]

    def test_mean_order_puts_sample_less_last(self) -> None:
        labels = [s.label for s in order_summaries(_sample_summaries(), "mean")]
        assert labels == ["fast", "slow", "broken"]

    def test_unknown_order(self) -> None:
        with pytest.raises(ValueError, match="Unknown order"):
            order_summaries(_sample_summaries(), "median")  # type: ignore[arg-type]


class TestTable:
    def test_rows_contain_formatted_statistics(self) -> None:
        rows = {row[0]: row for row in table_rows(_sample_summaries())}
        assert rows["slow"][1] == "5"
        assert rows["slow"][3] == "3.000 ms"
        assert rows["slow"][7] == "3.00x"
        assert rows["fast"][7] == "1.00x"

    def test_failed_candidate_is_not_zero(self) -> None:
        rows = {row[0]: row for row in table_rows(_sample_summaries())}
        broken = rows["broken"]
        assert broken[1] == "0"
        assert broken[2] == "5"
        assert broken[3:7] == ["n/a"] * 4
        assert broken[7] == NO_SAMPLES
        assert "0 ns" not in " ".join(broken)

    def test_rendered_table_has_header_and_all_rows(self) -> None:
        text = render_table(_sample_summaries(), order="mean")
        lines = text.splitlines()
        assert lines[0].split()[:3] == ["label", "count", "failures"]
        assert set(lines[1]) <= {"-", " "}
        assert [line.split()[0] for line in lines[2:]] == ["fast", "slow", "broken"]
        assert NO_SAMPLES in text


class TestChart:
    def test_one_line_per_label_plus_axis(self) -> None:
        text = render_chart(_sample_summaries(), width=40)
        lines = text.splitlines()
        assert len(lines) == 4
        assert lines[0].startswith("slow")
        assert "|" in lines[0] and "[" in lines[0] and "]" in lines[0]
        assert NO_SAMPLES in lines[1]
        assert "900.000 µs" in lines[-1]
        assert "4.000 ms" in lines[-1]

    def test_bars_have_fixed_width(self) -> None:
        text = render_chart(_sample_summaries(), width=30)
        bars = [line for line in text.splitlines() if line.endswith("|")]
        assert len(bars) == 2
        # label column (6) + gap (2) + frame (2) + bar (30)
        assert all(len(bar) == 40 for bar in bars)

    def test_nothing_measured(self) -> None:
        text = render_chart({"x": Summary(label="x", count=0, failures=1)})
        assert text == f"x  {NO_SAMPLES}\n"

    def test_identical_samples_do_not_divide_by_zero(self) -> None:
        flat = {"flat": Summary(label="flat", count=3, mean_ns=5.0, median_ns=5.0, min_ns=5.0, max_ns=5.0)}
        assert "flat" in render_chart(flat)

    def test_width_too_small(self) -> None:
        with pytest.raises(ValueError):
            render_chart(_sample_summaries(), width=5)

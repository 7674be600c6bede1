# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for mbench tests.

Fixtures here are available to every test file automatically.
We keep them minimal - just the stuff that multiple test modules need.
"""

import logging
import textwrap
from pathlib import Path

import pytest


class FakeClock:
    """
    A clock that only moves when told to.

    Pass it to BenchmarkHarness(clock=...) and have candidates call
    advance(ns) to get exact, repeatable elapsed times.
    """

    def __init__(self, start: int = 0) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ns: int) -> None:
        self.now += ns


@pytest.fixture()
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(autouse=True)
def _reset_test_loggers() -> None:
    """
    Clear handlers on test loggers between tests so get_logger's
    handler-stacking guard doesn't leak captured streams across tests.
    """
    yield  # type: ignore[misc]
    for name in list(logging.Logger.manager.loggerDict):
        if name.startswith("mbench.test"):
            logging.getLogger(name).handlers.clear()


@pytest.fixture()
def tmp_config_file(tmp_path: Path) -> Path:
    """
    A small valid config with two fast demo candidates.

    Small enough that `mbench run` on it finishes instantly.
    """
    config_content = textwrap.dedent("""\
        global:
          config_version: "1.0.0"
          project_name: "mbench-test"
          seed: 42
          log_level: "DEBUG"
        harness:
          repetitions: 3
          quantiles: [0.5]
        candidates:
          - label: loop
            target: mbench.demos:loop_sum
            kwargs: {n: 100}
          - label: generator
            target: mbench.demos:generator_sum
            args: [100]
    """)
    config_file = tmp_path / "test_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def failing_config_file(tmp_path: Path) -> Path:
    """A valid config where one candidate fails on every call."""
    config_content = textwrap.dedent("""\
        global:
          config_version: "1.0.0"
        harness:
          repetitions: 2
        candidates:
          - label: ok
            target: mbench.demos:loop_sum
            args: [10]
          - label: broken
            target: mbench.demos:always_fails
    """)
    config_file = tmp_path / "failing_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def invalid_config_file(tmp_path: Path) -> Path:
    """A config file that's valid YAML but fails schema validation (missing required field)."""
    config_content = textwrap.dedent("""\
        global:
          project_name: "mbench-test"
          seed: 42
    """)
    config_file = tmp_path / "invalid_config.yaml"
    config_file.write_text(config_content, encoding="utf-8")
    return config_file


@pytest.fixture()
def broken_yaml_file(tmp_path: Path) -> Path:
    """A file that isn't valid YAML at all."""
    config_file = tmp_path / "broken.yaml"
    config_file.write_text("{{not: yaml: at: all:::", encoding="utf-8")
    return config_file

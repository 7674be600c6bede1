# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Environment validation and description for mbench.

Timings only mean something next to the machine they were taken on, so every
written report carries a SystemInfo snapshot. The minimum-version check runs
first so an unsupported interpreter fails before any measuring starts.
"""

import os
import platform
import sys
import time
from typing import NamedTuple

MINIMUM_PYTHON_MAJOR = 3
MINIMUM_PYTHON_MINOR = 11


class SystemInfo(NamedTuple):
    """Snapshot of the current system environment."""

    python_version: str
    python_implementation: str
    platform: str
    architecture: str
    hostname: str
    cpu_count: int
    clock_resolution_ns: float


def get_python_version() -> tuple[int, int, int]:
    """Return the current Python version as a (major, minor, micro) tuple."""
    return sys.version_info[:3]


def check_minimum_python() -> None:
    """
    Verify we're running Python 3.11+.

    Raises:
        RuntimeError: If Python version is below 3.11.
    """
    major, minor, _ = get_python_version()
    if major < MINIMUM_PYTHON_MAJOR or (
        major == MINIMUM_PYTHON_MAJOR and minor < MINIMUM_PYTHON_MINOR
    ):
        raise RuntimeError(
            f"mbench requires Python >= {MINIMUM_PYTHON_MAJOR}.{MINIMUM_PYTHON_MINOR}, "
            f"but you're running {major}.{minor}. Please upgrade."
        )


def get_system_info() -> SystemInfo:
    """Collect basic system information for logging and reports."""
    resolution_s = time.get_clock_info("perf_counter").resolution
    return SystemInfo(
        python_version=platform.python_version(),
        python_implementation=platform.python_implementation(),
        platform=platform.system(),
        architecture=platform.machine(),
        hostname=platform.node(),
        cpu_count=os.cpu_count() or 1,
        clock_resolution_ns=resolution_s * 1e9,
    )

# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Runtime bootstrap for mbench.

The one-time setup that happens before any candidate runs:
  1. Validate the environment (Python version)
  2. Set deterministic seeds
  3. Initialize the logger (level and optional log file from config)
  4. Log what machine we're measuring on

After bootstrap completes, candidates that draw random numbers see the same
sequence on every run, which keeps their workload comparable run to run.
"""

import os
import random
from pathlib import Path
from typing import Optional

from mbench.config.schema import GlobalConfig
from mbench.logging.logger import get_logger, set_package_level
from mbench.runtime.environment import SystemInfo, check_minimum_python, get_system_info


def set_deterministic_seed(seed: int) -> None:
    """
    Seed Python's `random` module and PYTHONHASHSEED.

    PYTHONHASHSEED only affects interpreters started after this point
    (subprocesses), not the running one.

    Args:
        seed: Integer seed value. Must be >= 0.
    """
    random.seed(seed)
    os.environ["PYTHONHASHSEED"] = str(seed)


def bootstrap(config: GlobalConfig, log_level: Optional[str] = None) -> SystemInfo:
    """
    Run the full bootstrap sequence.

    Called once at the start of every CLI command that has a config.

    Args:
        config: The validated global configuration.
        log_level: Overrides config.log_level when given (the CLI flag).

    Returns:
        The SystemInfo snapshot that was logged, so callers can put it in reports.
    """
    check_minimum_python()
    set_deterministic_seed(config.seed)

    log_file = None
    if config.log_file is not None:
        log_file = Path(config.log_file)

    level = log_level or config.log_level
    logger = get_logger("mbench.runtime", log_level=level, log_file=log_file)
    set_package_level(level)

    system_info = get_system_info()
    logger.info(
        "mbench bootstrap complete",
        extra={
            "project": config.project_name,
            "seed": config.seed,
            "python_version": system_info.python_version,
            "platform": system_info.platform,
            "architecture": system_info.architecture,
            "clock_resolution_ns": system_info.clock_resolution_ns,
        },
    )
    return system_info

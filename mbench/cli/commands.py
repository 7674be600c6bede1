# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Subcommand handlers for the mbench CLI.

Each function here corresponds to one CLI subcommand and returns an exit
code from exit_codes.py. Diagnostics go through the structured logger on
stderr; the report itself (table, chart, timing) is written to stdout so it
can be piped or redirected on its own.
"""

import argparse
import logging
import sys
from pathlib import Path

from mbench.cli.exit_codes import CONFIG_ERROR, RUNTIME_ERROR, SUCCESS, USER_ERROR, VALIDATION_ERROR
from mbench.config.exceptions import ConfigError
from mbench.config.loader import config_snapshot, load_config
from mbench.config.schema import MBenchConfig
from mbench.harness.candidates import build_candidates, resolve_callable
from mbench.harness.exceptions import CandidateResolutionError, InvalidConfigurationError
from mbench.harness.runner import BenchmarkHarness
from mbench.harness.timer import format_duration, time_call
from mbench.logging.logger import get_logger, set_package_level
from mbench.reporting.table import render_chart, render_table
from mbench.reporting.writer import write_report
from mbench.runtime.bootstrap import bootstrap, set_deterministic_seed
from mbench.runtime.environment import SystemInfo, get_system_info
from mbench.utils.paths import resolve_output_directory


def _load_and_bootstrap(
    args: argparse.Namespace,
    command_name: str,
) -> tuple[int, MBenchConfig | None, logging.Logger, SystemInfo]:
    """
    The shared setup every command needs: logger, config, bootstrap.

    Returns (exit_code, config, logger, system_info). If exit_code is not
    SUCCESS, the caller should return it immediately.
    """
    # --log-level wins over the config's log_level when both are given
    initial_level = args.log_level or "INFO"
    logger = get_logger(f"mbench.cli.{command_name}", log_level=initial_level)
    set_package_level(initial_level)

    config = None
    if args.config is not None:
        try:
            config = load_config(Path(args.config))
        except ConfigError as err:
            logger.error(
                "Configuration error",
                extra={"command": command_name, "error": str(err)},
            )
            return CONFIG_ERROR, None, logger, get_system_info()

    if config is not None:
        system_info = bootstrap(config.global_config, log_level=args.log_level)
    else:
        system_info = get_system_info()
        logger.debug(
            "No config provided, running with defaults",
            extra={"command": command_name},
        )

    if args.seed is not None:
        set_deterministic_seed(args.seed)

    return SUCCESS, config, logger, system_info


def _write_stdout(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def handle_run(args: argparse.Namespace) -> int:
    """
    Benchmark every candidate in the config and print the comparison.

    Command-line options override the config's harness section. Returns
    VALIDATION_ERROR when the run completed but some label never produced
    a successful sample.
    """
    exit_code, config, logger, system_info = _load_and_bootstrap(args, "run")
    if exit_code != SUCCESS:
        return exit_code

    if config is None:
        logger.error(
            "A config file with a candidates section is required",
            extra={"command": "run"},
        )
        return USER_ERROR

    if not config.candidates:
        logger.error(
            "Config declares no candidates",
            extra={"command": "run", "config": args.config},
        )
        return CONFIG_ERROR

    harness_config = config.harness
    repetitions = args.repetitions if args.repetitions is not None else harness_config.repetitions
    warmup = args.warmup if args.warmup is not None else harness_config.warmup
    order = args.order or harness_config.order

    try:
        candidates = build_candidates(config.candidates)
        harness = BenchmarkHarness(
            quantiles=harness_config.quantiles,
            warmup=warmup,
        )
        harness.validate(candidates, repetitions)
    except CandidateResolutionError as err:
        logger.error("Cannot resolve candidate", extra={"error": str(err)})
        return CONFIG_ERROR
    except InvalidConfigurationError as err:
        logger.error("Invalid harness settings", extra={"error": str(err)})
        return USER_ERROR

    if args.dry_run:
        logger.info(
            "Dry run - would benchmark candidates",
            extra={
                "labels": [c.label for c in candidates],
                "repetitions": repetitions,
                "warmup": warmup,
            },
        )
        return SUCCESS

    try:
        run = harness.execute(candidates, repetitions)
    except InvalidConfigurationError as err:
        logger.error("Invalid harness settings", extra={"error": str(err)})
        return USER_ERROR
    except Exception as err:
        logger.error("Benchmark run failed", extra={"error": str(err)}, exc_info=True)
        return RUNTIME_ERROR

    _write_stdout(render_table(run.summaries, order))
    if args.chart:
        _write_stdout("\n" + render_chart(run.summaries, order))

    raw_output = args.output or harness_config.output_directory
    if raw_output is not None:
        base = None if args.output else Path(args.config).resolve().parent
        output_dir = resolve_output_directory(raw_output, base)
        try:
            write_report(
                run,
                output_dir,
                config_snapshot=config_snapshot(config),
                system_info=system_info,
                order=order,
                chart=args.chart,
            )
        except OSError as err:
            logger.error(
                "Cannot write report",
                extra={"output_dir": str(output_dir), "error": str(err)},
            )
            return RUNTIME_ERROR

    failed = run.failed_labels()
    if failed:
        logger.warning(
            "Some candidates produced no successful samples",
            extra={"labels": failed},
        )
        return VALIDATION_ERROR

    return SUCCESS


def handle_time(args: argparse.Namespace) -> int:
    """Time one call of a single callable and print the elapsed time."""
    exit_code, _config, logger, _system_info = _load_and_bootstrap(args, "time")
    if exit_code != SUCCESS:
        return exit_code

    try:
        func = resolve_callable(args.target)
    except CandidateResolutionError as err:
        logger.error("Cannot resolve target", extra={"target": args.target, "error": str(err)})
        return USER_ERROR

    if args.dry_run:
        logger.info("Dry run - would time target", extra={"target": args.target})
        return SUCCESS

    try:
        elapsed_ns = time_call(func)
    except Exception as err:
        logger.error(
            "Target raised",
            extra={"target": args.target, "error": f"{type(err).__name__}: {err}"},
            exc_info=True,
        )
        return RUNTIME_ERROR

    logger.info("Timed target", extra={"target": args.target, "elapsed_ns": elapsed_ns})
    _write_stdout(f"{args.target}: {format_duration(elapsed_ns)}\n")
    return SUCCESS


def handle_info(args: argparse.Namespace) -> int:
    """Display environment and clock information."""
    exit_code, _config, logger, system_info = _load_and_bootstrap(args, "info")
    if exit_code != SUCCESS:
        return exit_code

    from mbench import __version__

    logger.info(
        "System information",
        extra={
            "mbench_version": __version__,
            "python_version": system_info.python_version,
            "python_implementation": system_info.python_implementation,
            "platform": system_info.platform,
            "architecture": system_info.architecture,
            "hostname": system_info.hostname,
            "cpu_count": system_info.cpu_count,
            "clock_resolution_ns": system_info.clock_resolution_ns,
            "config": args.config,
        },
    )

    rows = {"mbench": __version__, **{k: str(v) for k, v in system_info._asdict().items()}}
    width = max(len(k) for k in rows)
    _write_stdout("".join(f"{k.rjust(width)}: {v}\n" for k, v in rows.items()))
    return SUCCESS

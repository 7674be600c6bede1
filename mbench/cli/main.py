# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI entrypoint for mbench.

This is the single root command - every operation is a subcommand of `mbench`.
The global options (--config, --log-level, --dry-run, --seed) are inherited
by every subcommand through argparse's parent parser mechanism.

Usage:
    mbench <subcommand> [options]
    mbench run --config configs/example.yaml
    mbench run --config bench.yaml --repetitions 200 --order mean --chart
    mbench time mbench.demos:loop_sum
    mbench info
"""

import argparse
import sys

from mbench.cli.commands import handle_info, handle_run, handle_time
from mbench.cli.exit_codes import USER_ERROR


def _build_global_parser() -> argparse.ArgumentParser:
    """
    Build the parent parser with global options.

    These options get inherited by every subcommand. The parent parser has
    add_help=False so help text doesn't collide with the subcommand parsers.
    """
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to YAML configuration file.",
    )
    parent.add_argument(
        "--log-level",
        type=str,
        default=None,
        dest="log_level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging verbosity level (overrides the config; default INFO).",
    )
    parent.add_argument(
        "--dry-run",
        action="store_true",
        default=False,
        dest="dry_run",
        help="Resolve and validate everything without running any candidate.",
    )
    parent.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Override the random seed (takes precedence over config).",
    )
    return parent


def _register_subcommands(
    subparsers: argparse._SubParsersAction,  # type: ignore[type-arg]
    parent: argparse.ArgumentParser,
) -> None:
    """
    Register all subcommands with their handler functions.

    Each subcommand sets its handler via set_defaults(func=...), so after
    parsing args.func is the function to call.
    """
    run_parser = subparsers.add_parser(
        "run", parents=[parent], help="Benchmark the candidates declared in a config file."
    )
    run_parser.set_defaults(func=handle_run)
    run_parser.add_argument(
        "--repetitions", "-n",
        type=int,
        default=None,
        help="Measured invocations per candidate (overrides config).",
    )
    run_parser.add_argument(
        "--warmup",
        type=int,
        default=None,
        help="Warm-up invocations per candidate, reported separately (overrides config).",
    )
    run_parser.add_argument(
        "--order",
        type=str,
        default=None,
        choices=["input", "mean"],
        help="Row order of the report table (overrides config).",
    )
    run_parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Directory to write results.json and report.txt into (overrides config).",
    )
    run_parser.add_argument(
        "--chart",
        action="store_true",
        default=False,
        help="Also print a box-plot style distribution chart.",
    )

    time_parser = subparsers.add_parser(
        "time", parents=[parent], help="Time a single call of one callable, once."
    )
    time_parser.set_defaults(func=handle_time)
    time_parser.add_argument(
        "target",
        type=str,
        help="Callable to time, as 'package.module:function'.",
    )

    info_parser = subparsers.add_parser(
        "info", parents=[parent], help="Display environment and clock information."
    )
    info_parser.set_defaults(func=handle_info)


def build_parser() -> argparse.ArgumentParser:
    parent = _build_global_parser()
    root_parser = argparse.ArgumentParser(
        prog="mbench",
        description="mbench - a minimal micro-benchmark harness.",
        parents=[parent],
    )
    subparsers = root_parser.add_subparsers(dest="command")
    _register_subcommands(subparsers, parent)
    return root_parser


def main(argv: list[str] | None = None) -> None:
    """
    Main CLI entrypoint. This is what pyproject.toml's [project.scripts] points to.

    Builds the parser, parses the command line, calls the subcommand's
    handler and exits with its return code. With no subcommand, shows help
    and exits with USER_ERROR.
    """
    root_parser = build_parser()
    args = root_parser.parse_args(argv)

    if not hasattr(args, "func") or args.func is None:
        root_parser.print_help()
        sys.exit(USER_ERROR)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()

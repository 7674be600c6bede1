# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Type-safe configuration schemas for mbench.

Each config section gets its own frozen pydantic model. Frozen means once
you create it, you cannot mutate it. A benchmark whose settings change
halfway through isn't a benchmark anymore.

The models use pydantic v2's ConfigDict with:
  - frozen=True: immutability after construction
  - extra="forbid": unknown fields cause immediate failure (typos like
    `repetiions:` should not silently fall back to a default)
  - validate_default=True: even defaults get type-checked

A config file looks like:

    global:
      config_version: "1.0.0"
    harness:
      repetitions: 50
      warmup: 5
    candidates:
      - label: loop
        target: mbench.demos:loop_sum
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GlobalConfig(BaseModel):
    """
    Cross-cutting settings: project identity, reproducibility, logging.

    This is the first section read and it controls the seed and log output
    for everything that follows.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    config_version: str = Field(
        description="Schema version for compatibility tracking, e.g. '1.0.0'"
    )
    project_name: str = Field(
        default="mbench", description="Human-readable name shown in reports"
    )
    seed: int = Field(
        default=42,
        ge=0,
        description="Seed for `random` and PYTHONHASHSEED, so candidates that use randomness repeat",
    )
    log_level: str = Field(
        default="INFO",
        description="One of DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional path for file-based log output",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        upper = value.upper()
        if upper not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level '{value}'")
        return upper


class HarnessConfig(BaseModel):
    """How many times to run each candidate, and what to report about it."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    repetitions: int = Field(
        default=10,
        ge=1,
        description="Measured invocations per candidate",
    )
    warmup: int = Field(
        default=0,
        ge=0,
        description="Warm-up invocations per candidate, reported separately and never summarized",
    )
    quantiles: list[float] = Field(
        default_factory=lambda: [0.25, 0.75, 0.95],
        description="Quantile levels in [0, 1] included in every summary",
    )
    order: Literal["input", "mean"] = Field(
        default="input",
        description="Report row order: as declared, or by mean ascending",
    )
    output_directory: Optional[str] = Field(
        default=None,
        description="Where results.json and report.txt get written; nothing is written when unset",
    )

    @field_validator("quantiles")
    @classmethod
    def _check_quantiles(cls, value: list[float]) -> list[float]:
        for q in value:
            if not 0.0 <= q <= 1.0:
                raise ValueError(f"Quantile level must be in [0, 1], got {q}")
        return value


class CandidateConfig(BaseModel):
    """One candidate: a display label and the import path of its callable."""

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    label: str = Field(min_length=1, description="Display label; duplicates are merged")
    target: str = Field(
        pattern=r"^[\w.]+:[\w.]+$",
        description="'package.module:function' import path",
    )
    args: list[Any] = Field(
        default_factory=list,
        description="Positional arguments bound to the callable",
    )
    kwargs: dict[str, Any] = Field(
        default_factory=dict,
        description="Keyword arguments bound to the callable",
    )


class MBenchConfig(BaseModel):
    """
    Top-level config container.

    Only `global` is required. A config without candidates is valid to load
    (`mbench info` only needs the global section); `mbench run` checks that
    candidates are present before doing anything.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", validate_default=True)

    global_config: GlobalConfig = Field(alias="global")
    harness: HarnessConfig = Field(default_factory=HarnessConfig)
    candidates: list[CandidateConfig] = Field(default_factory=list)

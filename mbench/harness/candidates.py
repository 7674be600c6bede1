# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Candidate resolution from import paths.

Config files can't hold functions, so they name them instead:

    candidates:
      - label: builtin-sum
        target: mbench.demos:builtin_sum
        kwargs: {n: 10000}

A target is "<module path>:<attribute path>". The attribute path may be
dotted (e.g. "mymod:Suite.method"). Positional args and kwargs from the
config get bound with functools.partial so the resulting callable takes no
arguments, which is what the harness requires.
"""

import functools
import importlib
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from mbench.harness.exceptions import CandidateResolutionError
from mbench.harness.models import Candidate
from mbench.logging.logger import get_logger

logger = get_logger(__name__)


def resolve_callable(target: str) -> Callable[..., object]:
    """
    Import and return the callable named by `target`.

    Args:
        target: "package.module:attr" or "package.module:Outer.attr".

    Returns:
        The resolved callable.

    Raises:
        CandidateResolutionError: Malformed target, import failure, missing
            attribute, or a target that isn't callable.
    """
    module_path, sep, attr_path = target.partition(":")
    if not sep or not module_path or not attr_path:
        raise CandidateResolutionError(
            f"Invalid target '{target}'. Expected the form 'package.module:function'."
        )

    try:
        obj: Any = importlib.import_module(module_path)
    except ImportError as err:
        raise CandidateResolutionError(
            f"Cannot import module '{module_path}' for target '{target}': {err}"
        ) from err

    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as err:
            raise CandidateResolutionError(
                f"Target '{target}' has no attribute '{part}'"
            ) from err

    if not callable(obj):
        raise CandidateResolutionError(
            f"Target '{target}' resolved to a {type(obj).__name__}, which is not callable"
        )

    return obj


def make_candidate(
    label: str,
    target: str,
    args: Sequence[object] = (),
    kwargs: Mapping[str, object] | None = None,
) -> Candidate:
    """Resolve `target` and bind its arguments into a zero-argument Candidate."""
    func = resolve_callable(target)
    if args or kwargs:
        func = functools.partial(func, *args, **dict(kwargs or {}))
    logger.debug("Resolved candidate", extra={"label": label, "target": target})
    return Candidate(label=label, func=func)


def build_candidates(entries: Iterable[Any]) -> list[Candidate]:
    """
    Turn config entries into Candidates, preserving their order.

    Each entry needs `label` and `target` attributes, and may carry `args`
    and `kwargs` (CandidateConfig from the config schema fits).
    """
    return [
        make_candidate(
            entry.label,
            entry.target,
            args=getattr(entry, "args", ()) or (),
            kwargs=getattr(entry, "kwargs", None),
        )
        for entry in entries
    ]

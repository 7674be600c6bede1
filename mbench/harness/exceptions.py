# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
Custom exceptions for the benchmark harness.

Only configuration problems are raised out of a run. A candidate that blows
up is recorded as a CandidateFailure (see models.py) and never raised, so one
broken candidate can't abort measurement of the others.
"""


class HarnessError(Exception):
    """Base for all harness errors."""


class InvalidConfigurationError(HarnessError):
    """
    Raised before any execution when a run is asked for something impossible:
    fewer than one repetition, no candidates, or a candidate that can't be called.
    """


class CandidateResolutionError(HarnessError):
    """Raised when a `module:attribute` target can't be imported or isn't callable."""

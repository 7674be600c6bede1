# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
CLI exit codes.

These are the only exit codes mbench uses. VALIDATION_ERROR means the run
itself completed but at least one candidate produced no successful samples,
so scripts can tell "measured" from "measured, but something never worked".
"""

SUCCESS: int = 0
USER_ERROR: int = 1
CONFIG_ERROR: int = 2
RUNTIME_ERROR: int = 3
VALIDATION_ERROR: int = 4

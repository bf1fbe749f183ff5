# Copyright 2025 lso-fix contributors
# SPDX-License-Identifier: Apache-2.0
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# This file was created or modified with the assistance of an AI (Large Language Model).
# Review required for correctness, security, and licensing.
"""Privilege and runtime checks that run before anything is changed."""

from __future__ import annotations

import logging

from lso_fix.models import RunOutcome
from lso_fix.powershell import PowerShellError, PowerShellHost

_LOGGER = logging.getLogger(__name__)


def check_environment(
    host: PowerShellHost,
    minimum_version: tuple[int, int],
) -> RunOutcome | None:
    """Return a fatal outcome if the host cannot be remediated, else None."""

    if not host.is_available():
        _LOGGER.error("PowerShell executable not found: %s", host.executable)
        return RunOutcome.UNSUPPORTED_RUNTIME

    try:
        version = host.version()
    except PowerShellError as exc:
        _LOGGER.error("Unable to determine PowerShell version (%s)", exc.code)
        return RunOutcome.UNSUPPORTED_RUNTIME
    if version < minimum_version:
        _LOGGER.error(
            "PowerShell %s.%s is not supported; %s.%s or later is required",
            version[0],
            version[1],
            minimum_version[0],
            minimum_version[1],
        )
        return RunOutcome.UNSUPPORTED_RUNTIME

    try:
        elevated = host.is_elevated()
    except PowerShellError as exc:
        _LOGGER.error("Unable to determine elevation (%s)", exc.code)
        return RunOutcome.INSUFFICIENT_PRIVILEGE
    if not elevated:
        _LOGGER.error("Administrator rights are required; re-run from an elevated prompt")
        return RunOutcome.INSUFFICIENT_PRIVILEGE

    _LOGGER.debug("Environment OK: PowerShell %s.%s, elevated", version[0], version[1])
    return None

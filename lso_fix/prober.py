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
"""Reachability probing."""

from __future__ import annotations

import logging
from typing import Sequence

from lso_fix.powershell import PowerShellError, PowerShellHost

_LOGGER = logging.getLogger(__name__)

# Test-Connection renamed -ComputerName to -TargetName in PowerShell 6.
_TARGET_NAME_SINCE_MAJOR = 6
PROBE_TIMEOUT_SECONDS = 2


def probe(targets: Sequence[str], host: PowerShellHost) -> bool:
    """Return True as soon as one target answers a single echo request."""

    for target in targets:
        if _probe_target(target, host):
            _LOGGER.info("Ping %s succeeded", target)
            return True
        _LOGGER.info("Ping %s failed", target)
    _LOGGER.warning("No probe target responded: %s", ", ".join(targets))
    return False


def connection_parameters(host: PowerShellHost) -> tuple[str, int | None]:
    """Pick the Test-Connection target parameter and timeout for this runtime."""

    major, _minor = host.version()
    if major >= _TARGET_NAME_SINCE_MAJOR:
        return "-TargetName", PROBE_TIMEOUT_SECONDS
    return "-ComputerName", None


def _probe_target(target: str, host: PowerShellHost) -> bool:
    try:
        parameter, timeout = connection_parameters(host)
        return host.test_connection(target, parameter, timeout)
    except PowerShellError as exc:
        _LOGGER.debug("Probe of %s raised %s: %s", target, exc.code, exc.detail)
        return False

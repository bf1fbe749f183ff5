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
"""Active physical adapter discovery."""

from __future__ import annotations

import logging

from lso_fix.models import Adapter
from lso_fix.powershell import PowerShellError, PowerShellHost

_LOGGER = logging.getLogger(__name__)


def discover_active_adapters(host: PowerShellHost) -> list[Adapter]:
    """Return physical adapters whose link is up, in platform order."""

    try:
        adapters = host.get_adapters()
    except PowerShellError as exc:
        _LOGGER.error("Adapter enumeration failed (%s): %s", exc.code, exc.detail)
        return []

    active = [adapter for adapter in adapters if adapter.physical and adapter.is_up]
    for adapter in active:
        _LOGGER.info("Found active adapter: %s (%s)", adapter.name, adapter.description or "-")
    skipped = len(adapters) - len(active)
    if skipped:
        _LOGGER.debug("Ignored %s adapters that are virtual or not up", skipped)
    return active

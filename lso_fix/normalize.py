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
"""Normalization utilities."""

from __future__ import annotations

import re

from lso_fix.models import LINK_STATUS_DOWN, LINK_STATUS_OTHER, LINK_STATUS_UP

_STATUS_MAP: dict[str, str] = {
    "up": LINK_STATUS_UP,
    "connected": LINK_STATUS_UP,
    "down": LINK_STATUS_DOWN,
    "disconnected": LINK_STATUS_DOWN,
}


def normalize_link_status(raw_status: object) -> str:
    """Map a platform link status onto up/down/other."""

    if raw_status is None:
        return LINK_STATUS_OTHER
    key = str(raw_status).strip().lower()
    return _STATUS_MAP.get(key, LINK_STATUS_OTHER)


def normalize_display_value(raw_value: object) -> str:
    """Canonicalize an advanced property display value for comparison."""

    if raw_value is None:
        return ""
    return re.sub(r"\s+", " ", str(raw_value).strip()).casefold()


def display_values_equal(current: object, desired: object) -> bool:
    """Compare display values the way PowerShell's -eq does for strings."""

    return normalize_display_value(current) == normalize_display_value(desired)

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
"""Idempotent advanced-property remediation."""

from __future__ import annotations

import logging
from typing import Sequence

from lso_fix.gate import GATE_ALLOWED, GATE_SIMULATED, ActionGate
from lso_fix.models import (
    CHANGE_CHANGED,
    CHANGE_DECLINED,
    CHANGE_FAILED,
    CHANGE_NOT_PRESENT,
    CHANGE_SIMULATED,
    CHANGE_UNCHANGED,
    Adapter,
    PropertyChange,
)
from lso_fix.normalize import display_values_equal
from lso_fix.powershell import PowerShellError, PowerShellHost

_LOGGER = logging.getLogger(__name__)

SET_PROPERTY_OPERATION = "Set-NetAdapterAdvancedProperty"


def set_property_if_needed(
    host: PowerShellHost,
    adapter_name: str,
    display_name: str,
    desired_value: str,
    gate: ActionGate,
) -> PropertyChange:
    """Set one advanced property unless it is absent or already compliant.

    Only a mutation that was actually applied reports ``changed``; absent
    properties, compliant values, simulated or declined sets, and platform
    failures all leave downstream gating untouched.
    """

    try:
        prop = host.get_advanced_property(adapter_name, display_name)
    except PowerShellError as exc:
        _LOGGER.warning(
            "Could not read '%s' on %s (%s): %s", display_name, adapter_name, exc.code, exc.detail
        )
        return PropertyChange(
            adapter_name, display_name, desired_value, CHANGE_FAILED, error=exc.code
        )

    if prop is None:
        _LOGGER.info("'%s' not present on %s; skipping", display_name, adapter_name)
        return PropertyChange(adapter_name, display_name, desired_value, CHANGE_NOT_PRESENT)

    current = prop.display_value
    if display_values_equal(current, desired_value):
        _LOGGER.info("'%s' on %s already %s", display_name, adapter_name, current)
        return PropertyChange(
            adapter_name, display_name, desired_value, CHANGE_UNCHANGED, previous_value=current
        )

    target = f"{adapter_name}: {display_name} {current} -> {desired_value}"
    decision = gate.check(SET_PROPERTY_OPERATION, target)
    if decision != GATE_ALLOWED:
        status = CHANGE_SIMULATED if decision == GATE_SIMULATED else CHANGE_DECLINED
        return PropertyChange(
            adapter_name, display_name, desired_value, status, previous_value=current
        )

    try:
        host.set_advanced_property(adapter_name, display_name, desired_value)
    except PowerShellError as exc:
        _LOGGER.warning(
            "Failed to set '%s' on %s (%s): %s", display_name, adapter_name, exc.code, exc.detail
        )
        return PropertyChange(
            adapter_name,
            display_name,
            desired_value,
            CHANGE_FAILED,
            previous_value=current,
            error=exc.code,
        )

    _LOGGER.info("Set '%s' on %s: %s -> %s", display_name, adapter_name, current, desired_value)
    return PropertyChange(
        adapter_name, display_name, desired_value, CHANGE_CHANGED, previous_value=current
    )


def apply_offload_settings(
    host: PowerShellHost,
    adapters: Sequence[Adapter],
    property_names: Sequence[str],
    desired_value: str,
    gate: ActionGate,
) -> list[PropertyChange]:
    """Run set_property_if_needed for every adapter and property, in order."""

    changes: list[PropertyChange] = []
    for adapter in adapters:
        for display_name in property_names:
            changes.append(
                set_property_if_needed(host, adapter.name, display_name, desired_value, gate)
            )
    return changes


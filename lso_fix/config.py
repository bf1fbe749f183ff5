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
"""Run configuration."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_PING_TARGETS: tuple[str, ...] = ("8.8.8.8", "1.1.1.1")
DEFAULT_INITIAL_WAIT_SECONDS = 45
DEFAULT_REINITIALIZE_WAIT_SECONDS = 30
DEFAULT_REBOOT_GRACE_SECONDS = 10

LSO_IPV4_PROPERTY = "Large Send Offload V2 (IPv4)"
LSO_IPV6_PROPERTY = "Large Send Offload V2 (IPv6)"
DEFAULT_PROPERTY_NAMES: tuple[str, ...] = (LSO_IPV4_PROPERTY, LSO_IPV6_PROPERTY)
DEFAULT_DESIRED_VALUE = "Disabled"

MINIMUM_POWERSHELL_VERSION: tuple[int, int] = (5, 1)


@dataclass(frozen=True)
class RemediationConfig:
    """Immutable settings captured once from the command line."""

    ping_targets: tuple[str, ...] = DEFAULT_PING_TARGETS
    initial_wait_seconds: int = DEFAULT_INITIAL_WAIT_SECONDS
    reinitialize_wait_seconds: int = DEFAULT_REINITIALIZE_WAIT_SECONDS
    reboot_grace_seconds: int = DEFAULT_REBOOT_GRACE_SECONDS
    force_reboot: bool = False
    dry_run: bool = False
    confirm: bool = False
    property_names: tuple[str, ...] = DEFAULT_PROPERTY_NAMES
    desired_value: str = DEFAULT_DESIRED_VALUE
    minimum_version: tuple[int, int] = MINIMUM_POWERSHELL_VERSION

    def validate(self) -> None:
        """Raise ValueError when the remediation settings are unusable."""

        if not self.property_names:
            raise ValueError("at least one advanced property name is required")
        if not self.desired_value.strip():
            raise ValueError("desired property value must not be empty")

    def validate_probe_settings(self) -> None:
        """Raise ValueError when probing or escalation cannot run.

        Checked only after adapters were found, so a run with nothing to
        remediate never looks at targets or durations.
        """

        targets = [target for target in self.ping_targets if target.strip()]
        if not targets:
            raise ValueError("at least one ping target is required")
        waits = {
            "initial wait": self.initial_wait_seconds,
            "reinitialize wait": self.reinitialize_wait_seconds,
            "reboot grace": self.reboot_grace_seconds,
        }
        negative = [name for name, value in waits.items() if value < 0]
        if negative:
            raise ValueError(f"durations must not be negative: {', '.join(negative)}")


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
"""Data models for lso-fix."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

LINK_STATUS_UP = "up"
LINK_STATUS_DOWN = "down"
LINK_STATUS_OTHER = "other"

CHANGE_CHANGED = "changed"
CHANGE_UNCHANGED = "unchanged"
CHANGE_NOT_PRESENT = "not_present"
CHANGE_SIMULATED = "simulated"
CHANGE_DECLINED = "declined"
CHANGE_FAILED = "failed"


@dataclass(frozen=True)
class Adapter:
    """Physical network adapter as reported by the platform."""

    name: str
    status: str
    physical: bool = True
    description: str = ""

    @property
    def is_up(self) -> bool:
        return self.status == LINK_STATUS_UP


@dataclass(frozen=True)
class AdvancedProperty:
    """Driver-exposed advanced adapter setting."""

    adapter_name: str
    display_name: str
    display_value: str


@dataclass(frozen=True)
class PropertyChange:
    """Outcome of one set-if-needed attempt for an adapter property."""

    adapter_name: str
    display_name: str
    desired_value: str
    status: str
    previous_value: str | None = None
    error: str | None = None

    @property
    def changed(self) -> bool:
        return self.status == CHANGE_CHANGED


class RunOutcome(Enum):
    """Terminal state of one remediation run."""

    HEALTHY = "healthy"
    REMEDIATED = "remediated"
    RECOVERED_AFTER_RESTART = "recovered_after_restart"
    MANUAL_INTERVENTION = "manual_intervention"
    REBOOT_INITIATED = "reboot_initiated"
    NO_ADAPTERS = "no_adapters"
    INSUFFICIENT_PRIVILEGE = "insufficient_privilege"
    UNSUPPORTED_RUNTIME = "unsupported_runtime"
    INVALID_INPUT = "invalid_input"

    @property
    def exit_code(self) -> int:
        return EXIT_CODES[self]


EXIT_CODE_INVALID_INPUT = 2

EXIT_CODES: dict[RunOutcome, int] = {
    RunOutcome.HEALTHY: 0,
    RunOutcome.REMEDIATED: 0,
    RunOutcome.RECOVERED_AFTER_RESTART: 0,
    RunOutcome.NO_ADAPTERS: 1,
    RunOutcome.INVALID_INPUT: EXIT_CODE_INVALID_INPUT,
    RunOutcome.INSUFFICIENT_PRIVILEGE: 3,
    RunOutcome.UNSUPPORTED_RUNTIME: 4,
    RunOutcome.MANUAL_INTERVENTION: 5,
    RunOutcome.REBOOT_INITIATED: 6,
}


@dataclass
class RemediationReport:
    """Everything a run did, in the order it did it."""

    outcome: RunOutcome | None = None
    adapters: list[str] = field(default_factory=list)
    changes: list[PropertyChange] = field(default_factory=list)
    probes: list[bool] = field(default_factory=list)
    restarted_adapters: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def any_change_made(self) -> bool:
        return any(change.changed for change in self.changes)

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def extend_changes(self, changes: Sequence[PropertyChange]) -> None:
        self.changes.extend(changes)

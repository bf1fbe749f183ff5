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
"""Simulation and confirmation switch for mutating operations."""

from __future__ import annotations

import logging
from typing import Callable

_LOGGER = logging.getLogger(__name__)

GATE_ALLOWED = "allowed"
GATE_SIMULATED = "simulated"
GATE_DECLINED = "declined"


class ActionGate:
    """Decide whether a mutating operation may run.

    Every property set, adapter restart, and host restart asks the gate
    first. In dry-run mode the intended operation is logged and refused.
    When a confirmation callback is configured, a negative answer is
    treated exactly like dry-run for that single operation.
    """

    def __init__(
        self,
        dry_run: bool = False,
        confirm: Callable[[str], bool] | None = None,
    ) -> None:
        self._dry_run = dry_run
        self._confirm = confirm
        self.intended: list[tuple[str, str]] = []

    @property
    def dry_run(self) -> bool:
        return self._dry_run

    def check(self, operation: str, target: str) -> str:
        """Return GATE_ALLOWED, GATE_SIMULATED, or GATE_DECLINED."""

        self.intended.append((operation, target))
        if self._dry_run:
            _LOGGER.info(
                'What if: Performing the operation "%s" on target "%s".', operation, target
            )
            return GATE_SIMULATED
        if self._confirm is not None:
            prompt = f'Perform the operation "{operation}" on target "{target}"?'
            if not self._confirm(prompt):
                _LOGGER.info('Skipped "%s" on "%s": not confirmed', operation, target)
                return GATE_DECLINED
        return GATE_ALLOWED

    def allows(self, operation: str, target: str) -> bool:
        return self.check(operation, target) == GATE_ALLOWED


def prompt_confirmation(prompt: str, reader: Callable[[str], str] = input) -> bool:
    """Ask on the terminal; only 'y' or 'yes' counts as consent."""

    try:
        answer = reader(f"{prompt} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in {"y", "yes"}

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
"""Remediation control flow."""

from __future__ import annotations

import logging
import socket
import time
from typing import Callable, Sequence

from lso_fix.config import RemediationConfig
from lso_fix.discovery import discover_active_adapters
from lso_fix.gate import ActionGate
from lso_fix.guard import check_environment
from lso_fix.models import Adapter, RemediationReport, RunOutcome
from lso_fix.mutator import apply_offload_settings
from lso_fix.powershell import PowerShellError, PowerShellHost
from lso_fix.prober import probe

_LOGGER = logging.getLogger(__name__)

RESTART_ADAPTER_OPERATION = "Restart-NetAdapter"
RESTART_COMPUTER_OPERATION = "Restart-Computer"


def run_remediation(
    config: RemediationConfig,
    host: PowerShellHost,
    gate: ActionGate | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> RemediationReport:
    """Run one remediation pass and return what happened."""

    report = RemediationReport()
    if gate is None:
        gate = ActionGate(dry_run=config.dry_run)

    fatal = check_environment(host, config.minimum_version)
    if fatal is not None:
        report.outcome = fatal
        return report

    adapters = discover_active_adapters(host)
    if not adapters:
        _LOGGER.warning("No active physical network adapters found; nothing to remediate")
        report.outcome = RunOutcome.NO_ADAPTERS
        return report
    report.adapters = [adapter.name for adapter in adapters]

    try:
        config.validate_probe_settings()
    except ValueError as exc:
        _LOGGER.error("Invalid input: %s", exc)
        report.outcome = RunOutcome.INVALID_INPUT
        return report

    report.extend_changes(
        apply_offload_settings(
            host, adapters, config.property_names, config.desired_value, gate
        )
    )
    for change in report.changes:
        if change.error:
            report.warn(
                f"{change.adapter_name}: '{change.display_name}' not updated ({change.error})"
            )

    # Policy: an already-compliant host is assumed healthy without probing.
    if not report.any_change_made:
        _LOGGER.info("No changes were made; network assumed healthy")
        report.outcome = RunOutcome.HEALTHY
        return report

    _wait(sleep, config.initial_wait_seconds, "for adapters to settle")
    if _probe_round(config.ping_targets, host, report):
        _LOGGER.info("Connectivity verified after disabling offload")
        report.outcome = RunOutcome.REMEDIATED
        return report

    _LOGGER.warning("Connectivity check failed; restarting adapters")
    restart_adapters(host, adapters, gate, report)
    _wait(sleep, config.reinitialize_wait_seconds, "after adapter restart")
    if _probe_round(config.ping_targets, host, report):
        _LOGGER.info("Connectivity restored after adapter restart")
        report.outcome = RunOutcome.RECOVERED_AFTER_RESTART
        return report

    report.outcome = _escalate(config, host, gate, sleep, report)
    return report


def restart_adapters(
    host: PowerShellHost,
    adapters: Sequence[Adapter],
    gate: ActionGate,
    report: RemediationReport,
) -> None:
    """Restart each adapter found at discovery, tolerating individual failures."""

    for adapter in adapters:
        if not gate.allows(RESTART_ADAPTER_OPERATION, adapter.name):
            continue
        try:
            host.restart_adapter(adapter.name)
        except PowerShellError as exc:
            _LOGGER.warning("Failed to restart %s (%s): %s", adapter.name, exc.code, exc.detail)
            report.warn(f"{adapter.name}: restart failed ({exc.code})")
            continue
        _LOGGER.info("Restarted adapter %s", adapter.name)
        report.restarted_adapters.append(adapter.name)


def _escalate(
    config: RemediationConfig,
    host: PowerShellHost,
    gate: ActionGate,
    sleep: Callable[[float], None],
    report: RemediationReport,
) -> RunOutcome:
    if not config.force_reboot:
        message = (
            "Connectivity was not restored. A reboot is recommended; "
            "re-run with --force-reboot to restart automatically"
        )
        _LOGGER.warning(message)
        report.warn(message)
        return RunOutcome.MANUAL_INTERVENTION

    _LOGGER.warning(
        "Connectivity was not restored; restarting the computer in %s seconds",
        config.reboot_grace_seconds,
    )
    sleep(config.reboot_grace_seconds)
    if not gate.allows(RESTART_COMPUTER_OPERATION, socket.gethostname()):
        report.warn("Host restart was not performed")
        return RunOutcome.MANUAL_INTERVENTION
    try:
        host.restart_computer()
    except PowerShellError as exc:
        _LOGGER.error("Host restart failed (%s): %s", exc.code, exc.detail)
        report.warn(f"host restart failed ({exc.code})")
        return RunOutcome.MANUAL_INTERVENTION
    return RunOutcome.REBOOT_INITIATED


def _probe_round(targets: Sequence[str], host: PowerShellHost, report: RemediationReport) -> bool:
    result = probe(targets, host)
    report.probes.append(result)
    return result


def _wait(sleep: Callable[[float], None], seconds: int, reason: str) -> None:
    _LOGGER.info("Waiting %s seconds %s", seconds, reason)
    sleep(seconds)

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
"""CLI entrypoint."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from lso_fix.config import (
    DEFAULT_INITIAL_WAIT_SECONDS,
    DEFAULT_PING_TARGETS,
    DEFAULT_REBOOT_GRACE_SECONDS,
    DEFAULT_REINITIALIZE_WAIT_SECONDS,
    RemediationConfig,
)
from lso_fix.gate import ActionGate, prompt_confirmation
from lso_fix.models import EXIT_CODE_INVALID_INPUT
from lso_fix.orchestrator import run_remediation
from lso_fix.output import format_summary, write_report_json
from lso_fix.powershell import PowerShellHost

_LOGGER = logging.getLogger(__name__)

_LOG_FORMAT = "%(levelname)s %(message)s"


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser."""

    parser = argparse.ArgumentParser(
        description="Disable Large Send Offload on active adapters and verify connectivity",
    )
    parser.add_argument(
        "--ping-targets",
        nargs="+",
        default=list(DEFAULT_PING_TARGETS),
        metavar="TARGET",
        help="addresses probed in order; the first reply wins",
    )
    parser.add_argument(
        "--initial-wait-seconds",
        type=int,
        default=DEFAULT_INITIAL_WAIT_SECONDS,
        help="delay after changing settings before the first probe",
    )
    parser.add_argument(
        "--reinitialize-wait-seconds",
        type=int,
        default=DEFAULT_REINITIALIZE_WAIT_SECONDS,
        help="delay after restarting adapters before the second probe",
    )
    parser.add_argument(
        "--reboot-grace-seconds",
        type=int,
        default=DEFAULT_REBOOT_GRACE_SECONDS,
        help="delay before a forced reboot",
    )
    parser.add_argument(
        "--force-reboot",
        action="store_true",
        help="restart the computer if connectivity is still down after an adapter restart",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="report intended changes without applying them",
    )
    parser.add_argument(
        "--confirm",
        action="store_true",
        help="ask before every change; declined changes are skipped",
    )
    parser.add_argument(
        "--powershell",
        default="powershell",
        help="PowerShell executable (default: powershell)",
    )
    parser.add_argument("--report-json", type=str, help="write a JSON run report to this path")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["INFO", "DEBUG", "WARN"],
        help="log level",
    )
    return parser


class _BelowWarningFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.WARNING


def configure_logging(level: str) -> None:
    """Configure logging: progress to stdout, warnings and errors to stderr."""

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.addFilter(_BelowWarningFilter())
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    logging.basicConfig(
        level=getattr(logging, level),
        format=_LOG_FORMAT,
        handlers=[stdout_handler, stderr_handler],
    )


def build_config(args: argparse.Namespace) -> RemediationConfig:
    """Capture parsed arguments into a validated configuration."""

    config = RemediationConfig(
        ping_targets=tuple(target.strip() for target in args.ping_targets if target.strip()),
        initial_wait_seconds=args.initial_wait_seconds,
        reinitialize_wait_seconds=args.reinitialize_wait_seconds,
        reboot_grace_seconds=args.reboot_grace_seconds,
        force_reboot=args.force_reboot,
        dry_run=args.dry_run,
        confirm=args.confirm,
    )
    config.validate()
    return config


def main(argv: Sequence[str] | None = None) -> int:
    """Run lso-fix."""

    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = build_config(args)
    except ValueError as exc:
        _LOGGER.error("Invalid input: %s", exc)
        return EXIT_CODE_INVALID_INPUT

    if config.dry_run:
        _LOGGER.info("Dry run: no settings will be changed")
    gate = ActionGate(
        dry_run=config.dry_run,
        confirm=prompt_confirmation if config.confirm else None,
    )
    host = PowerShellHost(args.powershell)
    report = run_remediation(config, host, gate=gate)

    _LOGGER.info("Summary: %s", format_summary(report))
    if args.report_json:
        write_report_json(args.report_json, report)
        _LOGGER.info("Saved run report to %s", args.report_json)

    if report.outcome is None:
        raise RuntimeError("remediation finished without an outcome")
    return report.outcome.exit_code


if __name__ == "__main__":
    raise SystemExit(main())

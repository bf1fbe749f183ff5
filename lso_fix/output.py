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
"""Run report rendering."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from lso_fix.models import RemediationReport


def report_to_dict(report: RemediationReport) -> dict[str, Any]:
    """Convert a report into JSON-ready data."""

    outcome = report.outcome
    return {
        "outcome": outcome.value if outcome else None,
        "exit_code": outcome.exit_code if outcome else None,
        "adapters": list(report.adapters),
        "any_change_made": report.any_change_made,
        "changes": [
            {
                "adapter": change.adapter_name,
                "property": change.display_name,
                "previous_value": change.previous_value,
                "desired_value": change.desired_value,
                "status": change.status,
                "error": change.error,
            }
            for change in report.changes
        ],
        "probes": list(report.probes),
        "restarted_adapters": list(report.restarted_adapters),
        "warnings": list(report.warnings),
    }


def format_summary(report: RemediationReport) -> str:
    """Render a one-line summary of the run."""

    outcome = report.outcome.value if report.outcome else "unknown"
    changed = sum(1 for change in report.changes if change.changed)
    probes = ",".join("pass" if result else "fail" for result in report.probes) or "none"
    return (
        f"outcome={outcome} adapters={len(report.adapters)} changed={changed} "
        f"probes={probes} restarted={len(report.restarted_adapters)} "
        f"warnings={len(report.warnings)}"
    )


def write_report_json(path: str | Path, report: RemediationReport) -> None:
    """Write the run report JSON."""

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as handle:
        json.dump(report_to_dict(report), handle, indent=2, ensure_ascii=False)
        handle.write("\n")

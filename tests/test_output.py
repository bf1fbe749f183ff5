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
"""Tests for run report rendering."""

import json
from pathlib import Path

from lso_fix.models import (
    CHANGE_CHANGED,
    CHANGE_NOT_PRESENT,
    PropertyChange,
    RemediationReport,
    RunOutcome,
)
from lso_fix.output import format_summary, report_to_dict, write_report_json


def _report() -> RemediationReport:
    return RemediationReport(
        outcome=RunOutcome.RECOVERED_AFTER_RESTART,
        adapters=["Ethernet"],
        changes=[
            PropertyChange(
                "Ethernet",
                "Large Send Offload V2 (IPv4)",
                "Disabled",
                CHANGE_CHANGED,
                previous_value="Enabled",
            ),
            PropertyChange("Ethernet", "Large Send Offload V2 (IPv6)", "Disabled", CHANGE_NOT_PRESENT),
        ],
        probes=[False, True],
        restarted_adapters=["Ethernet"],
    )


def test_report_to_dict_fields() -> None:
    data = report_to_dict(_report())

    assert data["outcome"] == "recovered_after_restart"
    assert data["exit_code"] == 0
    assert data["any_change_made"] is True
    assert data["changes"][0]["previous_value"] == "Enabled"
    assert data["changes"][1]["status"] == "not_present"
    assert data["probes"] == [False, True]


def test_format_summary() -> None:
    summary = format_summary(_report())

    assert summary == (
        "outcome=recovered_after_restart adapters=1 changed=1 "
        "probes=fail,pass restarted=1 warnings=0"
    )


def test_format_summary_without_outcome() -> None:
    assert format_summary(RemediationReport()).startswith("outcome=unknown")


def test_write_report_json(tmp_path: Path) -> None:
    report_path = tmp_path / "reports" / "run.json"

    write_report_json(report_path, _report())

    data = json.loads(report_path.read_text(encoding="utf-8"))
    assert data["restarted_adapters"] == ["Ethernet"]
    assert data["warnings"] == []

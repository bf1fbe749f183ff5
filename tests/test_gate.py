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
"""Tests for the action gate."""

import logging

import pytest

from lso_fix.gate import (
    GATE_ALLOWED,
    GATE_DECLINED,
    GATE_SIMULATED,
    ActionGate,
    prompt_confirmation,
)


def test_gate_allows_by_default() -> None:
    gate = ActionGate()

    assert gate.check("Restart-NetAdapter", "Ethernet") == GATE_ALLOWED
    assert gate.intended == [("Restart-NetAdapter", "Ethernet")]


def test_gate_dry_run_logs_intent(caplog: pytest.LogCaptureFixture) -> None:
    gate = ActionGate(dry_run=True)

    with caplog.at_level(logging.INFO):
        decision = gate.check("Restart-NetAdapter", "Ethernet")

    assert decision == GATE_SIMULATED
    assert 'What if: Performing the operation "Restart-NetAdapter" on target "Ethernet".' in caplog.text


def test_gate_declined_confirmation() -> None:
    prompts: list[str] = []

    def _decline(prompt: str) -> bool:
        prompts.append(prompt)
        return False

    gate = ActionGate(confirm=_decline)

    assert gate.allows("Restart-Computer", "HOST01") is False
    assert gate.check("Restart-Computer", "HOST01") == GATE_DECLINED
    assert "Restart-Computer" in prompts[0]


def test_gate_dry_run_wins_over_confirmation() -> None:
    asked: list[str] = []
    gate = ActionGate(dry_run=True, confirm=lambda prompt: asked.append(prompt) or True)

    assert gate.check("Restart-Computer", "HOST01") == GATE_SIMULATED
    assert asked == []


def test_prompt_confirmation_answers() -> None:
    assert prompt_confirmation("Go?", reader=lambda _: "y") is True
    assert prompt_confirmation("Go?", reader=lambda _: " YES ") is True
    assert prompt_confirmation("Go?", reader=lambda _: "") is False
    assert prompt_confirmation("Go?", reader=lambda _: "n") is False


def test_prompt_confirmation_eof_declines() -> None:
    def _eof(_: str) -> str:
        raise EOFError

    assert prompt_confirmation("Go?", reader=_eof) is False

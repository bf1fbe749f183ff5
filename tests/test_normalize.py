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
"""Tests for normalization utilities."""

from lso_fix.models import LINK_STATUS_DOWN, LINK_STATUS_OTHER, LINK_STATUS_UP
from lso_fix.normalize import display_values_equal, normalize_link_status


def test_normalize_link_status_variants() -> None:
    assert normalize_link_status("Up") == LINK_STATUS_UP
    assert normalize_link_status(" up ") == LINK_STATUS_UP
    assert normalize_link_status("Disconnected") == LINK_STATUS_DOWN
    assert normalize_link_status("Disabled") == LINK_STATUS_OTHER
    assert normalize_link_status(None) == LINK_STATUS_OTHER


def test_display_values_equal_ignores_case_and_spacing() -> None:
    assert display_values_equal("Disabled", "disabled")
    assert display_values_equal(" Disabled ", "Disabled")
    assert not display_values_equal("Enabled", "Disabled")
    assert not display_values_equal(None, "Disabled")

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
"""Shared test doubles."""

from __future__ import annotations

from collections import deque

import pytest

from lso_fix.models import Adapter, AdvancedProperty
from lso_fix.powershell import PowerShellError


class FakeHost:
    """In-memory stand-in for PowerShellHost that records every call."""

    def __init__(self) -> None:
        self.executable = "powershell"
        self.available = True
        self.elevated = True
        self.ps_version: tuple[int, int] = (5, 1)
        self.adapters: list[Adapter] = []
        self.adapters_error: PowerShellError | None = None
        self.properties: dict[tuple[str, str], str] = {}
        self.read_errors: dict[tuple[str, str], PowerShellError] = {}
        self.set_errors: dict[tuple[str, str], PowerShellError] = {}
        self.restart_errors: dict[str, PowerShellError] = {}
        self.reboot_error: PowerShellError | None = None
        self.ping_results: dict[str, deque[bool]] = {}
        self.ping_errors: set[str] = set()
        self.calls: list[tuple[object, ...]] = []

    def add_adapter(self, name: str, status: str = "up", physical: bool = True) -> Adapter:
        adapter = Adapter(name=name, status=status, physical=physical)
        self.adapters.append(adapter)
        return adapter

    def set_ping(self, target: str, *results: bool) -> None:
        self.ping_results[target] = deque(results)

    def sleep(self, seconds: float) -> None:
        self.calls.append(("sleep", seconds))

    def calls_named(self, name: str) -> list[tuple[object, ...]]:
        return [call for call in self.calls if call[0] == name]

    def is_available(self) -> bool:
        return self.available

    def version(self) -> tuple[int, int]:
        return self.ps_version

    def is_elevated(self) -> bool:
        return self.elevated

    def get_adapters(self) -> list[Adapter]:
        self.calls.append(("get_adapters",))
        if self.adapters_error:
            raise self.adapters_error
        return list(self.adapters)

    def get_advanced_property(
        self, adapter_name: str, display_name: str
    ) -> AdvancedProperty | None:
        key = (adapter_name, display_name)
        self.calls.append(("get_property", adapter_name, display_name))
        if key in self.read_errors:
            raise self.read_errors[key]
        if key not in self.properties:
            return None
        return AdvancedProperty(adapter_name, display_name, self.properties[key])

    def set_advanced_property(self, adapter_name: str, display_name: str, value: str) -> None:
        key = (adapter_name, display_name)
        self.calls.append(("set_property", adapter_name, display_name, value))
        if key in self.set_errors:
            raise self.set_errors[key]
        self.properties[key] = value

    def test_connection(
        self, target: str, target_parameter: str, timeout_seconds: int | None = None
    ) -> bool:
        self.calls.append(("ping", target, target_parameter))
        if target in self.ping_errors:
            raise PowerShellError("PS_UNKNOWN_ERROR", f"ping {target} failed")
        results = self.ping_results.get(target)
        if not results:
            return False
        return results.popleft()

    def restart_adapter(self, adapter_name: str) -> None:
        self.calls.append(("restart_adapter", adapter_name))
        if adapter_name in self.restart_errors:
            raise self.restart_errors[adapter_name]

    def restart_computer(self) -> None:
        self.calls.append(("restart_computer",))
        if self.reboot_error:
            raise self.reboot_error


@pytest.fixture
def fake_host() -> FakeHost:
    return FakeHost()

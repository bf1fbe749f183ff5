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
"""Windows adapter operations via the PowerShell CLI."""

from __future__ import annotations

import json
import logging
import re
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from lso_fix.models import Adapter, AdvancedProperty
from lso_fix.normalize import normalize_link_status

_LOGGER = logging.getLogger(__name__)

# Redirected output otherwise uses the OEM code page on Windows PowerShell 5.1.
_OUTPUT_ENCODING_PREFIX = "[Console]::OutputEncoding = [Text.Encoding]::UTF8; "

_BASE_ARGS = ("-NoProfile", "-NonInteractive", "-ExecutionPolicy", "Bypass", "-Command")

_ELEVATION_SCRIPT = (
    "([Security.Principal.WindowsPrincipal]"
    "[Security.Principal.WindowsIdentity]::GetCurrent()).IsInRole("
    "[Security.Principal.WindowsBuiltInRole]::Administrator)"
)
_VERSION_SCRIPT = "$PSVersionTable.PSVersion.ToString()"
_ADAPTERS_SCRIPT = (
    "Get-NetAdapter -Physical -ErrorAction Stop | "
    "Select-Object Name, Status, Virtual, InterfaceDescription | "
    "ConvertTo-Json -Compress"
)


class PowerShellError(RuntimeError):
    """A PowerShell invocation failed."""

    def __init__(self, code: str, detail: str = "") -> None:
        super().__init__(f"{code}: {detail}" if detail else code)
        self.code = code
        self.detail = detail


@dataclass(frozen=True)
class PowerShellResult:
    """Result of running one PowerShell command."""

    stdout: str
    error: str | None
    detail: str = ""


class PowerShellHost:
    """Run platform operations through a PowerShell executable."""

    def __init__(self, executable: str = "powershell") -> None:
        self._executable = executable
        self._version: tuple[int, int] | None = None

    @property
    def executable(self) -> str:
        return self._executable

    def is_available(self) -> bool:
        return _command_exists(self._executable)

    def is_elevated(self) -> bool:
        return _parse_bool(self.run(_ELEVATION_SCRIPT))

    def version(self) -> tuple[int, int]:
        """Return the (major, minor) version of the PowerShell runtime."""

        if self._version is None:
            self._version = parse_version(self.run(_VERSION_SCRIPT))
        return self._version

    def get_adapters(self) -> list[Adapter]:
        return parse_adapters(self.run(_ADAPTERS_SCRIPT))

    def get_advanced_property(
        self, adapter_name: str, display_name: str
    ) -> AdvancedProperty | None:
        """Look up one advanced property; None when the adapter does not expose it."""

        script = (
            f"Get-NetAdapterAdvancedProperty -Name {quote(adapter_name)} "
            f"-DisplayName {quote(display_name)} -ErrorAction SilentlyContinue | "
            "Select-Object Name, DisplayName, DisplayValue | ConvertTo-Json -Compress"
        )
        records = _decode_json_records(self.run(script))
        if not records:
            return None
        record = records[0]
        return AdvancedProperty(
            adapter_name=str(record.get("Name") or adapter_name),
            display_name=str(record.get("DisplayName") or display_name),
            display_value=str(record.get("DisplayValue") or ""),
        )

    def set_advanced_property(self, adapter_name: str, display_name: str, value: str) -> None:
        script = (
            f"Set-NetAdapterAdvancedProperty -Name {quote(adapter_name)} "
            f"-DisplayName {quote(display_name)} -DisplayValue {quote(value)} "
            "-ErrorAction Stop"
        )
        self.run(script)

    def test_connection(
        self, target: str, target_parameter: str, timeout_seconds: int | None = None
    ) -> bool:
        """Send one echo request; the caller picks the target parameter name."""

        script = f"Test-Connection {target_parameter} {quote(target)} -Count 1 -Quiet"
        if timeout_seconds is not None:
            script += f" -TimeoutSeconds {int(timeout_seconds)}"
        return _parse_bool(self.run(script))

    def restart_adapter(self, adapter_name: str) -> None:
        self.run(
            f"Restart-NetAdapter -Name {quote(adapter_name)} -Confirm:$false -ErrorAction Stop"
        )

    def restart_computer(self) -> None:
        self.run("Restart-Computer -Force -ErrorAction Stop")

    def run(self, script: str) -> str:
        """Run a script and return its stdout, raising PowerShellError on failure."""

        result = _run_powershell(self._executable, script)
        if result.error:
            raise PowerShellError(result.error, result.detail)
        return result.stdout


def build_powershell_command(executable: str, script: str) -> list[str]:
    """Build the argument list used to run a PowerShell script."""

    return [executable, *_BASE_ARGS, _OUTPUT_ENCODING_PREFIX + script]


def quote(value: str) -> str:
    """Quote a value as a single-quoted PowerShell string literal."""

    return "'" + value.replace("'", "''") + "'"


def parse_version(output: str) -> tuple[int, int]:
    """Parse 'major.minor[.build[.revision]]' into (major, minor)."""

    match = re.search(r"(?P<major>\d+)\.(?P<minor>\d+)", output)
    if not match:
        raise PowerShellError("PS_BAD_OUTPUT", f"unrecognized version: {output.strip()!r}")
    return int(match.group("major")), int(match.group("minor"))


def parse_adapters(output: str) -> list[Adapter]:
    """Parse Get-NetAdapter JSON output into adapters, keeping platform order."""

    adapters: list[Adapter] = []
    for record in _decode_json_records(output):
        name = str(record.get("Name") or "").strip()
        if not name:
            continue
        adapters.append(
            Adapter(
                name=name,
                status=normalize_link_status(record.get("Status")),
                physical=not bool(record.get("Virtual", False)),
                description=str(record.get("InterfaceDescription") or ""),
            )
        )
    return adapters


def _decode_json_records(output: str) -> list[dict[str, Any]]:
    """Decode ConvertTo-Json output, which is a bare object for single results."""

    text = output.strip()
    if not text:
        return []
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PowerShellError("PS_BAD_OUTPUT", f"invalid JSON: {exc}") from exc
    if isinstance(data, dict):
        return [data]
    if isinstance(data, list):
        return [item for item in data if isinstance(item, dict)]
    raise PowerShellError("PS_BAD_OUTPUT", f"unexpected JSON type: {type(data).__name__}")


def _parse_bool(output: str) -> bool:
    lines = [line.strip() for line in output.splitlines() if line.strip()]
    return bool(lines) and lines[-1].lower() == "true"


def _command_exists(command: str) -> bool:
    """Check if a command exists on PATH."""

    return Path(command).is_file() or bool(shutil.which(command))


def _run_powershell(executable: str, script: str) -> PowerShellResult:
    """Run PowerShell and return stdout plus error classification."""

    command = build_powershell_command(executable, script)
    _LOGGER.debug("Running PowerShell: %s", script)
    try:
        result = subprocess.run(
            command,
            check=False,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except OSError as exc:
        _LOGGER.debug("Failed to launch %s: %s", executable, exc)
        return PowerShellResult("", "PS_LAUNCH_FAILED", str(exc))

    stderr = result.stderr.strip()
    if result.returncode != 0:
        combined_output = "\n".join([result.stdout, result.stderr]).strip()
        error_code = _classify_powershell_error(combined_output)
        _LOGGER.debug("PowerShell failed (%s): %s", error_code, stderr or "<empty>")
        return PowerShellResult(result.stdout, error_code, _first_line(stderr or combined_output))

    return PowerShellResult(result.stdout, None)


def _first_line(text: str) -> str:
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    return ""


def _classify_powershell_error(output: str) -> str:
    """Classify PowerShell error output into a stable error code."""

    lowered = output.lower()
    access_markers = (
        "access is denied",
        "access denied",
        "requires elevation",
        "permissiondenied",
        "unauthorizedaccess",
        "administrator privileges are required",
        "requires administrator privileges",
    )
    if any(marker in lowered for marker in access_markers):
        return "PS_ACCESS_DENIED"

    missing_command_markers = (
        "is not recognized as the name of a cmdlet",
        "commandnotfoundexception",
    )
    if any(marker in lowered for marker in missing_command_markers):
        return "PS_COMMAND_MISSING"

    not_found_markers = (
        "no matching",
        "objectnotfound",
        "cannot find",
    )
    if any(marker in lowered for marker in not_found_markers):
        return "PS_NOT_FOUND"

    invalid_markers = (
        "invalidargument",
        "invalid parameter",
        "is not valid",
        "cannot validate argument",
    )
    if any(marker in lowered for marker in invalid_markers):
        return "PS_INVALID_VALUE"

    return "PS_UNKNOWN_ERROR"

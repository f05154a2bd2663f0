"""
Persistence layer for display settings using the Windows registry.

All access goes through the ``reg.exe`` command line tool so the store can be
exercised without win32 APIs; tests substitute a fake ``CommandRunner``.
"""

from __future__ import annotations

import re
import subprocess
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from . import logger as app_logger
from .config import RegistryConfig
from .errors import CommandFailed, StoreUnavailable


@dataclass(frozen=True)
class CommandResult:
    returncode: int
    stdout: str = ""
    stderr: str = ""


class CommandRunner(Protocol):
    def __call__(self, argv: Sequence[str]) -> CommandResult:
        ...


class SubprocessRunner:
    """Runs registry commands synchronously, capturing their text output."""

    def __init__(self, timeout: Optional[float] = None) -> None:
        self.timeout = timeout

    def __call__(self, argv: Sequence[str]) -> CommandResult:
        cmd = list(argv)
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=self.timeout)
        except subprocess.TimeoutExpired as exc:
            raise StoreUnavailable(f"{cmd[0]!r} did not finish within {self.timeout} seconds") from exc
        except (OSError, subprocess.SubprocessError) as exc:
            raise StoreUnavailable(f"Cannot run {cmd[0]!r}: {exc}") from exc
        return CommandResult(result.returncode, result.stdout or "", result.stderr or "")


class RegistryStore:
    """Thin wrapper over ``reg add`` / ``reg delete`` / ``reg query`` for one root key."""

    def __init__(
        self,
        config: Optional[RegistryConfig] = None,
        *,
        runner: Optional[CommandRunner] = None,
    ) -> None:
        self.config = config or RegistryConfig()
        self._runner = runner or SubprocessRunner(timeout=self.config.timeout_seconds)
        self._logger = app_logger.get_logger()
        self._unavailable_count = 0

    @property
    def root(self) -> str:
        return self.config.root

    @property
    def store_unavailable(self) -> bool:
        return self._unavailable_count > 0

    def add(self, key: str, value: str) -> None:
        argv = [
            self.config.executable,
            "add",
            self.root,
            "/v",
            key,
            "/t",
            self.config.value_type,
            "/d",
            value,
            "/f",
        ]
        result = self._run(argv)
        if result.returncode != 0:
            raise CommandFailed(argv, result.returncode, result.stderr or result.stdout)
        self._logger.debug("Stored {}\\{} = {!r}", self.root, key, value)

    def delete(self, key: str) -> None:
        """Remove ``key``; a key that is already absent counts as deleted."""
        argv = [self.config.executable, "delete", self.root, "/v", key, "/f"]
        result = self._run(argv)
        if result.returncode == 0:
            self._logger.debug("Deleted {}\\{}", self.root, key)
            return
        if self.query(key) is None:
            return
        raise CommandFailed(argv, result.returncode, result.stderr or result.stdout)

    def query(self, key: str) -> Optional[str]:
        argv = [self.config.executable, "query", self.root, "/v", key]
        try:
            result = self._run(argv)
        except StoreUnavailable:
            return None
        if result.returncode != 0:
            return None
        return parse_query_output(result.stdout, key, self.config.value_type)

    def _run(self, argv: Sequence[str]) -> CommandResult:
        try:
            result = self._runner(argv)
        except StoreUnavailable:
            self._unavailable_count += 1
            if self._unavailable_count == self.config.unavailable_report_threshold:
                self._logger.error(
                    "Registry store {} has been unavailable for {} consecutive commands.",
                    self.root,
                    self._unavailable_count,
                )
            raise
        self._unavailable_count = 0
        return result


def parse_query_output(output: str, key: str, value_type: str = "REG_SZ") -> Optional[str]:
    """Extract the value of ``key`` from ``reg query`` output, or None if it is not listed."""
    pattern = re.compile(
        r"^ {4}(?P<name>.+?) {4}" + re.escape(value_type) + r"(?: {4}(?P<value>.*))?$"
    )
    for line in output.splitlines():
        match = pattern.match(line.rstrip("\r"))
        if match and match.group("name") == key:
            return match.group("value") or ""
    return None

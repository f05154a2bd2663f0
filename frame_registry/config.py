"""
Configuration for the registry-backed settings store.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from . import logger as app_logger

DEFAULT_ROOT = r"HKCU\Software\FrameRegistry"
DEFAULT_EXECUTABLE = "reg"
DEFAULT_VALUE_TYPE = "REG_SZ"
DEFAULT_STATUS_KEY = "FrameRegistry.Stored"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_UNAVAILABLE_THRESHOLD = 3

ENV_ROOT = "FRAME_REGISTRY_ROOT"
ENV_EXECUTABLE = "FRAME_REGISTRY_EXE"
ENV_TIMEOUT = "FRAME_REGISTRY_TIMEOUT"


@dataclass(frozen=True)
class RegistryConfig:
    root: str = DEFAULT_ROOT
    executable: str = DEFAULT_EXECUTABLE
    value_type: str = DEFAULT_VALUE_TYPE
    status_key: str = DEFAULT_STATUS_KEY
    timeout_seconds: Optional[float] = DEFAULT_TIMEOUT_SECONDS
    unavailable_report_threshold: int = DEFAULT_UNAVAILABLE_THRESHOLD

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None) -> "RegistryConfig":
        """Build a config, letting FRAME_REGISTRY_* variables override the defaults."""
        env = os.environ if environ is None else environ
        root = env.get(ENV_ROOT, "").strip() or DEFAULT_ROOT
        executable = env.get(ENV_EXECUTABLE, "").strip() or DEFAULT_EXECUTABLE
        timeout = _read_timeout(env.get(ENV_TIMEOUT))
        return cls(root=root, executable=executable, timeout_seconds=timeout)


def _read_timeout(raw: Optional[str]) -> float:
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT_SECONDS
    try:
        value = float(raw)
    except ValueError:
        value = -1.0
    if value <= 0:
        app_logger.get_logger().warning(
            "Invalid {} value {!r}; using {} seconds.", ENV_TIMEOUT, raw, DEFAULT_TIMEOUT_SECONDS
        )
        return DEFAULT_TIMEOUT_SECONDS
    return value

"""
Dictionary-backed host accessor for callers without a GUI window.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class MappingHost:
    globals: Dict[str, Any] = field(default_factory=dict)
    parameters: Dict[str, Any] = field(default_factory=dict)

    def global_value(self, name: str) -> Any:
        return self.globals[name]

    def frame_parameter(self, name: str) -> Any:
        return self.parameters[name]

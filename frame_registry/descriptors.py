"""
Declarative table of the display settings persisted to the registry.

Each descriptor names a registry value, how to encode it and where its
current value comes from: a global setting of the host, a parameter of the
host window, or a zero-argument producer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Optional, Protocol, Tuple, Union

from .encoders import EncodingKind, encode_geometry
from .errors import SourceUnavailable


class HostAccessor(Protocol):
    """Read-only view of the host application's settings."""

    def global_value(self, name: str) -> Any:
        ...

    def frame_parameter(self, name: str) -> Any:
        ...


@dataclass(frozen=True)
class GlobalVariable:
    name: str

    def resolve(self, host: HostAccessor) -> Any:
        try:
            return host.global_value(self.name)
        except Exception as exc:
            raise SourceUnavailable(f"Global setting {self.name!r} unavailable: {exc}") from exc


@dataclass(frozen=True)
class FrameParameter:
    name: str

    def resolve(self, host: HostAccessor) -> Any:
        try:
            return host.frame_parameter(self.name)
        except Exception as exc:
            raise SourceUnavailable(f"Frame parameter {self.name!r} unavailable: {exc}") from exc


@dataclass(frozen=True)
class Producer:
    func: Callable[[], Any]

    def resolve(self, host: Optional[HostAccessor] = None) -> Any:
        try:
            return self.func()
        except SourceUnavailable:
            raise
        except Exception as exc:
            name = getattr(self.func, "__name__", repr(self.func))
            raise SourceUnavailable(f"Producer {name} failed: {exc}") from exc


ValueSource = Union[GlobalVariable, FrameParameter, Producer]


@dataclass(frozen=True)
class SettingDescriptor:
    key: str
    kind: EncodingKind
    source: ValueSource


class DescriptorTable:
    """Ordered, immutable collection of descriptors with unique keys."""

    def __init__(self, descriptors: Iterable[SettingDescriptor]) -> None:
        items = tuple(descriptors)
        seen = set()
        for descriptor in items:
            if descriptor.key in seen:
                raise ValueError(f"Duplicate setting key {descriptor.key!r}")
            seen.add(descriptor.key)
        self._descriptors: Tuple[SettingDescriptor, ...] = items

    def __iter__(self) -> Iterator[SettingDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, key: object) -> bool:
        return any(d.key == key for d in self._descriptors)

    def keys(self) -> Tuple[str, ...]:
        return tuple(d.key for d in self._descriptors)

    def get(self, key: str) -> Optional[SettingDescriptor]:
        for descriptor in self._descriptors:
            if descriptor.key == key:
                return descriptor
        return None

    def __repr__(self) -> str:
        return f"DescriptorTable({list(self.keys())!r})"


def default_table(host: HostAccessor) -> DescriptorTable:
    """Settings persisted for a host window: geometry, bars, scroll bars and line spacing."""
    return DescriptorTable(
        [
            SettingDescriptor("Frame.Geometry", EncodingKind.FUNCTION, Producer(lambda: encode_geometry(host))),
            SettingDescriptor("Frame.ToolBar", EncodingKind.BOOL, GlobalVariable("tool-bar-mode")),
            SettingDescriptor("Frame.MenuBar", EncodingKind.BOOL, GlobalVariable("menu-bar-mode")),
            SettingDescriptor(
                "Frame.VerticalScrollBars", EncodingKind.OBJECT, FrameParameter("vertical-scroll-bars")
            ),
            SettingDescriptor("Frame.ScrollBarWidth", EncodingKind.INT, FrameParameter("scroll-bar-width")),
            SettingDescriptor("Frame.LineSpacing", EncodingKind.INT, GlobalVariable("line-spacing")),
        ]
    )

"""
Store and clean the descriptor table against the registry.

Every descriptor is processed independently: a failing source, encoder or
registry command is logged and never stops the remaining keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from . import logger as app_logger
from .config import RegistryConfig
from .descriptors import DescriptorTable, HostAccessor, SettingDescriptor, default_table
from .encoders import EncodingKind, decode, encode
from .errors import EncodeError, RegistryError, SourceUnavailable
from .registry_store import CommandRunner, RegistryStore
from .status_cache import StatusCache


@dataclass
class StoreReport:
    written: Dict[str, str] = field(default_factory=dict)
    deleted: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    store_unavailable: bool = False

    @property
    def ok(self) -> bool:
        return not self.failed and not self.store_unavailable


class SettingsPersister:
    """Writes, erases and reads back the settings described by ``table``."""

    def __init__(
        self,
        store: RegistryStore,
        table: DescriptorTable,
        host: HostAccessor,
        *,
        status: Optional[StatusCache] = None,
    ) -> None:
        self.store = store
        self.table = table
        self.host = host
        self.status = status or StatusCache(store, store.config.status_key)
        if self.status.key in table:
            raise ValueError(f"Status key {self.status.key!r} collides with a setting key")
        self._logger = app_logger.get_logger()

    @classmethod
    def create(
        cls,
        host: HostAccessor,
        *,
        config: Optional[RegistryConfig] = None,
        runner: Optional[CommandRunner] = None,
        table: Optional[DescriptorTable] = None,
    ) -> "SettingsPersister":
        if config is None:
            config = RegistryConfig.from_environment()
        if table is None:
            table = default_table(host)
        return cls(RegistryStore(config, runner=runner), table, host)

    def is_stored(self) -> bool:
        return self.status.is_stored()

    def store_all(self) -> StoreReport:
        report = StoreReport()
        try:
            self.status.mark_stored()
        except RegistryError as exc:
            self._logger.warning("Could not set status value {}: {}", self.status.key, exc)
            report.failed.append(self.status.key)

        for descriptor in self.table:
            text = self._encoded_value(descriptor)
            if text is None:
                self._delete(descriptor.key, report)
            else:
                self._add(descriptor.key, text, report)

        report.store_unavailable = self.store.store_unavailable
        self._logger.info(
            "Stored settings under {}: {} written, {} deleted, {} failed.",
            self.store.root,
            len(report.written),
            len(report.deleted),
            len(report.failed),
        )
        return report

    def clean_all(self) -> StoreReport:
        """Delete every key the table can write, then clear the status value."""
        report = StoreReport()
        for descriptor in self.table:
            self._delete(descriptor.key, report)
        try:
            self.status.mark_unstored()
        except RegistryError as exc:
            self._logger.warning("Could not clear status value {}: {}", self.status.key, exc)
            report.failed.append(self.status.key)

        report.store_unavailable = self.store.store_unavailable
        self._logger.info("Cleaned settings under {}: {} deleted.", self.store.root, len(report.deleted))
        return report

    def read_stored(self, *, decoded: bool = False) -> Dict[str, Any]:
        """Return the values currently present for the table's keys."""
        values: Dict[str, Any] = {}
        for descriptor in self.table:
            text = self.store.query(descriptor.key)
            if text is None:
                continue
            values[descriptor.key] = decode(descriptor.kind, text) if decoded else text
        return values

    def _encoded_value(self, descriptor: SettingDescriptor) -> Optional[str]:
        try:
            raw = descriptor.source.resolve(self.host)
        except SourceUnavailable as exc:
            self._logger.debug("No value for {}: {}", descriptor.key, exc)
            return None
        try:
            text = encode(descriptor.kind, raw)
        except EncodeError as exc:
            self._logger.warning("Cannot encode {}: {}", descriptor.key, exc)
            return None
        if descriptor.kind is not EncodingKind.BOOL and not text:
            return None
        return text

    def _add(self, key: str, value: str, report: StoreReport) -> None:
        try:
            self.store.add(key, value)
        except RegistryError as exc:
            self._logger.warning("Failed to store {}: {}", key, exc)
            report.failed.append(key)
        else:
            report.written[key] = value

    def _delete(self, key: str, report: StoreReport) -> None:
        try:
            self.store.delete(key)
        except RegistryError as exc:
            self._logger.warning("Failed to delete {}: {}", key, exc)
            report.failed.append(key)
        else:
            report.deleted.append(key)

"""In-process SearchBackend for tests and dry runs"""

import threading
from dataclasses import dataclass, field
from typing import Any

from docsearch.core.models import Record
from docsearch.crud.backend import SearchBackend
from docsearch.errors import BackendPublishError, BackendSettingsError, BackendWriteError


@dataclass
class MemoryBackend(SearchBackend):
    _records: dict[str, dict[str, dict[str, Any]]] = field(default_factory=dict)
    _settings: dict[str, dict[str, Any]] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def init_staging(self, name: str) -> None:
        with self._lock:
            self._records[name] = {}
            self._settings.pop(name, None)

    def write_batch(self, name: str, records: list[Record]) -> None:
        with self._lock:
            if name not in self._records:
                raise BackendWriteError(f"Index {name!r} does not exist")
            self._records[name].update((r.id, r.to_payload()) for r in records)

    def apply_settings(self, name: str, settings: dict[str, Any]) -> None:
        with self._lock:
            if name not in self._records:
                raise BackendSettingsError(f"Index {name!r} does not exist")
            self._settings[name] = dict(settings)

    def publish(self, staging: str, production: str) -> None:
        with self._lock:
            if staging not in self._records:
                raise BackendPublishError(f"Staging index {staging!r} does not exist")
            self._records[production] = self._records.pop(staging)
            self._settings.pop(production, None)
            if staging in self._settings:
                self._settings[production] = self._settings.pop(staging)

    def get_records(self, name: str) -> list[dict[str, Any]]:
        with self._lock:
            index = self._records.get(name, {})
            return [dict(index[k]) for k in sorted(index)]

    def get_settings(self, name: str) -> dict[str, Any] | None:
        with self._lock:
            return self._settings.get(name)

    def list_indexes(self) -> dict[str, int]:
        with self._lock:
            return {name: len(index) for name, index in sorted(self._records.items())}

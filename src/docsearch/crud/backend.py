"""Abstract search backend: staging writes, settings, atomic publish"""

from abc import ABC, abstractmethod
from typing import Any

from docsearch.core.models import Record


class SearchBackend(ABC):
    """Two-slot index store. Only publish() may touch the production slot."""

    @abstractmethod
    def init_staging(self, name: str) -> None:
        """Create the staging index, discarding leftovers from an aborted run."""
        raise NotImplementedError

    @abstractmethod
    def write_batch(self, name: str, records: list[Record]) -> None:
        """Upsert records by id. Raises BackendWriteError."""
        raise NotImplementedError

    @abstractmethod
    def apply_settings(self, name: str, settings: dict[str, Any]) -> None:
        """Replace the index settings. Raises BackendSettingsError."""
        raise NotImplementedError

    @abstractmethod
    def publish(self, staging: str, production: str) -> None:
        """Atomically replace production with staging. Raises BackendPublishError."""
        raise NotImplementedError

    @abstractmethod
    def get_records(self, name: str) -> list[dict[str, Any]]:
        """Record payloads of an index ordered by objectID; [] if the index does not exist."""
        raise NotImplementedError

    @abstractmethod
    def get_settings(self, name: str) -> dict[str, Any] | None:
        raise NotImplementedError

    @abstractmethod
    def list_indexes(self) -> dict[str, int]:
        """Map of index name to record count."""
        raise NotImplementedError

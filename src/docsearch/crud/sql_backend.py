"""SQLModel-backed SearchBackend; publish is a single database transaction"""

import threading
from datetime import datetime
from typing import Any

from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from docsearch.core.models import Record
from docsearch.crud.backend import SearchBackend
from docsearch.crud.models import IndexRecord, IndexSettings
from docsearch.errors import BackendPublishError, BackendSettingsError, BackendWriteError


def _clear(session: Session, name: str) -> None:
    """Delete every record and the settings row of an index. Flushes, does not commit."""
    for row in session.exec(select(IndexRecord).where(IndexRecord.index_name == name)).all():
        session.delete(row)
    settings = session.get(IndexSettings, name)
    if settings is not None:
        session.delete(settings)
    session.flush()


class SQLBackend(SearchBackend):
    def __init__(self, engine: Engine):
        self.engine = engine
        self._write_lock = threading.Lock()

    def init_staging(self, name: str) -> None:
        with self._write_lock, Session(self.engine) as session:
            try:
                _clear(session, name)
                session.add(IndexSettings(index_name=name, settings={}))
                session.commit()
            except SQLAlchemyError as e:
                raise BackendWriteError(f"Cannot initialize index {name!r}: {e}") from e

    def write_batch(self, name: str, records: list[Record]) -> None:
        batch = {r.id: r.to_payload() for r in records}
        with self._write_lock, Session(self.engine) as session:
            try:
                if session.get(IndexSettings, name) is None:
                    raise BackendWriteError(f"Index {name!r} does not exist")
                existing = session.exec(
                    select(IndexRecord)
                    .where(IndexRecord.index_name == name)
                    .where(col(IndexRecord.object_id).in_(list(batch)))
                ).all()
                for row in existing:
                    row.payload = batch.pop(row.object_id)
                    session.add(row)
                for object_id, payload in batch.items():
                    session.add(IndexRecord(index_name=name, object_id=object_id, payload=payload))
                session.commit()
            except SQLAlchemyError as e:
                raise BackendWriteError(f"Batch write to {name!r} failed: {e}") from e

    def apply_settings(self, name: str, settings: dict[str, Any]) -> None:
        with self._write_lock, Session(self.engine) as session:
            try:
                row = session.get(IndexSettings, name)
                if row is None:
                    raise BackendSettingsError(f"Index {name!r} does not exist")
                row.settings = dict(settings)
                row.updated_at = datetime.now()
                session.add(row)
                session.commit()
            except SQLAlchemyError as e:
                raise BackendSettingsError(f"Cannot apply settings to {name!r}: {e}") from e

    def publish(self, staging: str, production: str) -> None:
        """Move staging over production inside one transaction; rollback leaves production intact."""
        with self._write_lock, Session(self.engine) as session:
            try:
                staged_settings = session.get(IndexSettings, staging)
                if staged_settings is None:
                    raise BackendPublishError(f"Staging index {staging!r} does not exist")
                settings = dict(staged_settings.settings)

                _clear(session, production)
                for row in session.exec(select(IndexRecord).where(IndexRecord.index_name == staging)).all():
                    row.index_name = production
                    session.add(row)
                session.delete(staged_settings)
                session.flush()
                session.add(IndexSettings(index_name=production, settings=settings))
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                raise BackendPublishError(f"Cannot move {staging!r} to {production!r}: {e}") from e

    def get_records(self, name: str) -> list[dict[str, Any]]:
        with Session(self.engine) as session:
            rows = session.exec(
                select(IndexRecord)
                .where(IndexRecord.index_name == name)
                .order_by(col(IndexRecord.object_id).asc())
            ).all()
            return [dict(r.payload) for r in rows]

    def get_settings(self, name: str) -> dict[str, Any] | None:
        with Session(self.engine) as session:
            row = session.get(IndexSettings, name)
            return dict(row.settings) if row else None

    def list_indexes(self) -> dict[str, int]:
        with Session(self.engine) as session:
            names = session.exec(select(IndexSettings.index_name)).all()
            counts = dict(session.exec(
                select(IndexRecord.index_name, func.count()).group_by(IndexRecord.index_name)
            ).all())
        return {name: counts.get(name, 0) for name in sorted(set(names) | set(counts))}

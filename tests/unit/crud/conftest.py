"""Shared fixtures for crud unit tests"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from docsearch.core.models import Record
from docsearch.crud.database import init_db
from docsearch.crud.memory_backend import MemoryBackend
from docsearch.crud.sql_backend import SQLBackend


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine with all tables created."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    init_db(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="backend", params=["sql", "memory"])
def backend_fixture(request, engine):
    """Each backend test runs against both implementations."""
    if request.param == "sql":
        return SQLBackend(engine)
    return MemoryBackend()


@pytest.fixture(name="make_record")
def make_record_fixture():
    def _make(object_id: str, content: str = "Body", version: str = "5.0") -> Record:
        return Record(id=object_id, h1="Install", link="installation", content=content, importance=4, tags=[version])
    return _make

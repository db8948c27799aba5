"""Database table definitions for index records and per-index settings"""

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import Column, DateTime, JSON, Text, UniqueConstraint
from sqlmodel import Field, SQLModel


class IndexRecord(SQLModel, table=True):
    """One search record stored in a named index slot"""
    __tablename__ = "index_records"
    __table_args__ = (UniqueConstraint("index_name", "object_id", name="uq_record_index_object"),)
    id: Optional[int] = Field(default=None, primary_key=True)
    index_name: str = Field(..., index=True, nullable=False)
    object_id: str = Field(..., sa_column=Column(Text, nullable=False))
    payload: Dict[str, Any] = Field(..., sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))


class IndexSettings(SQLModel, table=True):
    """Search settings attached to a named index slot"""
    __tablename__ = "index_settings"
    index_name: str = Field(primary_key=True)
    settings: Dict[str, Any] = Field(..., sa_column=Column(JSON, nullable=False))
    updated_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime(timezone=False), nullable=False))

"""SQLAlchemy model backing the schemaless entity tables."""
from __future__ import annotations

from sqlalchemy import JSON, Column, DateTime, String, func

from .session import Base


class TableEntity(Base):
    """One flat record of a logical table, keyed by (table_name, partition_key)."""

    __tablename__ = "table_entities"

    table_name = Column(String(63), primary_key=True)
    partition_key = Column(String(255), primary_key=True)
    row_key = Column(String(255), nullable=False, default="")
    properties = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

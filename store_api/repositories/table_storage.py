"""
Schemaless entity table on top of SQLAlchemy.

Each logical table (e.g. "stores") is a slice of `table_entities`. Entities are
exchanged as flat dicts carrying `PartitionKey` and `RowKey` beside their
attributes. The primary key (table_name, partition_key) makes the database reject
a second entity with the same identity key, so `insert` is an atomic
insert-if-absent.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from store_api.core.log import get_logger
from store_api.db import Base, TableEntity, get_session

PARTITION_KEY = "PartitionKey"
ROW_KEY = "RowKey"

logger = get_logger(__name__)


class TableStorageError(Exception):
    """Raised when the backing store cannot complete an operation."""


class EntityAlreadyExistsError(TableStorageError):
    """Raised when an entity with the same partition key is already stored."""

    def __init__(self, table_name: str, partition_key: str):
        super().__init__(f"Entity '{partition_key}' already exists in table '{table_name}'.")
        self.table_name = table_name
        self.partition_key = partition_key


def _to_record(entity: TableEntity) -> dict:
    record = dict(entity.properties or {})
    record[PARTITION_KEY] = entity.partition_key
    record[ROW_KEY] = entity.row_key or ""
    return record


class TableClient:
    """Query/insert/scan helpers for one logical table."""

    def __init__(self, engine: Engine, table_name: str) -> None:
        self.engine = engine
        self.table_name = table_name

    def create_if_not_exists(self) -> None:
        try:
            Base.metadata.create_all(bind=self.engine, tables=[TableEntity.__table__])
        except SQLAlchemyError as exc:
            raise TableStorageError(f"Could not provision table '{self.table_name}': {exc}") from exc

    def query(self, *, partition_key: Optional[str] = None, limit: Optional[int] = None) -> list[dict]:
        stmt = select(TableEntity).where(TableEntity.table_name == self.table_name)
        if partition_key is not None:
            stmt = stmt.where(TableEntity.partition_key == partition_key)
        if limit is not None:
            stmt = stmt.limit(limit)
        try:
            with get_session(self.engine) as session:
                return [_to_record(entity) for entity in session.execute(stmt).scalars().all()]
        except SQLAlchemyError as exc:
            raise TableStorageError(f"Query on table '{self.table_name}' failed: {exc}") from exc

    def scan_all(self) -> list[dict]:
        return self.query()

    def _new_entity(self, partition_key: str, row_key: str, properties: dict) -> TableEntity:
        return TableEntity(
            table_name=self.table_name,
            partition_key=partition_key,
            row_key=row_key,
            properties=properties,
        )

    def _exists(self, session, partition_key: str) -> bool:
        try:
            return session.get(TableEntity, (self.table_name, partition_key)) is not None
        except SQLAlchemyError as exc:
            raise TableStorageError(f"Query on table '{self.table_name}' failed: {exc}") from exc

    def insert(self, record: Mapping[str, Any]) -> dict:
        partition_key = str(record.get(PARTITION_KEY) or "")
        if not partition_key:
            raise TableStorageError("PartitionKey is required.")
        properties = {k: v for k, v in record.items() if k not in (PARTITION_KEY, ROW_KEY)}
        entity = self._new_entity(partition_key, str(record.get(ROW_KEY) or ""), properties)
        with get_session(self.engine) as session:
            try:
                session.add(entity)
                session.commit()
            except IntegrityError as exc:
                session.rollback()
                if self._exists(session, partition_key):
                    raise EntityAlreadyExistsError(self.table_name, partition_key) from exc
                logger.error("Insert into %s rejected: %s", self.table_name, exc.orig)
                raise TableStorageError(f"Insert into table '{self.table_name}' failed: {exc.orig}") from exc
            except SQLAlchemyError as exc:
                session.rollback()
                raise TableStorageError(f"Insert into table '{self.table_name}' failed: {exc}") from exc
            logger.debug("Inserted entity %s into %s", partition_key, self.table_name)
            return _to_record(entity)

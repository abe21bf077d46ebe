"""Store persistence: duplicate-safe create and full listing."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional

from store_api.core.log import get_logger
from store_api.domain.store_codec import decode_store, encode_store
from store_api.domain.stores import Store
from store_api.repositories.table_storage import (
    EntityAlreadyExistsError,
    TableClient,
    TableStorageError,
)

logger = get_logger(__name__)


class StoreErrorKind(str, enum.Enum):
    INVALID_INPUT = "invalid_input"
    DUPLICATE_KEY = "duplicate_key"
    STORAGE_FAILURE = "storage_failure"


@dataclass
class CreateResult:
    store_no: str
    error: Optional[StoreErrorKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ListResult:
    stores: list[Store] = field(default_factory=list)
    error: Optional[StoreErrorKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None


class StoreRepository:
    """Maps stores onto the entity table and reports failures as result objects."""

    def __init__(self, table: TableClient) -> None:
        self.table = table

    def create(self, store: Optional[Store]) -> CreateResult:
        store_no = getattr(store, "store_no", None)
        if not isinstance(store_no, str) or not store_no.strip():
            return CreateResult("", StoreErrorKind.INVALID_INPUT, "StoreNo is required.")
        try:
            record = encode_store(store)
        except (AttributeError, TypeError, ValueError) as exc:
            logger.info("Rejected malformed store %s: %s", store_no, exc)
            return CreateResult(store_no, StoreErrorKind.INVALID_INPUT, f"Invalid store data: {exc}")
        duplicate = CreateResult(
            store.store_no,
            StoreErrorKind.DUPLICATE_KEY,
            f"A store with StoreNo '{store.store_no}' already exists.",
        )
        try:
            # Fast path for a friendly conflict; the primary key is what guarantees uniqueness.
            if self.table.query(partition_key=store.store_no, limit=1):
                logger.warning("Rejected duplicate StoreNo %s", store.store_no)
                return duplicate
            self.table.insert(record)
        except EntityAlreadyExistsError:
            logger.warning("StoreNo %s was inserted concurrently", store.store_no)
            return duplicate
        except TableStorageError as exc:
            logger.exception("Error occurred while saving store %s", store.store_no)
            return CreateResult(store.store_no, StoreErrorKind.STORAGE_FAILURE, str(exc))
        logger.info("Saved store %s", store.store_no)
        return CreateResult(store.store_no)

    def list_all(self) -> ListResult:
        try:
            records = self.table.scan_all()
        except TableStorageError as exc:
            logger.exception("Error occurred while retrieving store data.")
            return ListResult(error=StoreErrorKind.STORAGE_FAILURE, message=str(exc))
        return ListResult(stores=[decode_store(record) for record in records])

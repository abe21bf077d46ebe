"""Utility script to create the entity table schema."""
from __future__ import annotations

from store_api.core.config import get_settings
from store_api.core.log import configure_logging
from store_api.repositories.table_storage import TableClient, TableStorageError
from store_api.db import get_engine


def create_all() -> TableClient:
    settings = get_settings()
    configure_logging(settings.log_level)
    table = TableClient(get_engine(settings.storage_connection_string), settings.table_name)
    table.create_if_not_exists()
    return table


if __name__ == "__main__":
    try:
        table = create_all()
        print(f"Table '{table.table_name}' is ready.")
    except (TableStorageError, RuntimeError) as exc:
        raise SystemExit(f"Failed to create tables: {exc}") from exc

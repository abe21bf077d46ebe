"""
Smoke tests for the entity table against a temporary SQLite database.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest
from sqlalchemy import select

# Make the store_api package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from store_api.core import config as core_config  # noqa: E402
from store_api.db import models  # noqa: E402
from store_api.db import session as db_session  # noqa: E402
from store_api.repositories.table_storage import (  # noqa: E402
    EntityAlreadyExistsError,
    TableClient,
    TableStorageError,
)


@pytest.fixture()
def engine(tmp_path, monkeypatch):
    """Point the backend at a temporary SQLite file and reset cached settings/engines."""
    db_file = tmp_path / "tables.db"
    monkeypatch.setenv("STORAGE_ACCOUNT_CONNECTION_STRING", f"sqlite:///{db_file}")
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]

    engine = db_session.get_engine(core_config.get_settings().storage_connection_string)

    yield engine

    engine.dispose()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]
    core_config.get_settings.cache_clear()


@pytest.fixture()
def table(engine):
    client = TableClient(engine, "stores")
    client.create_if_not_exists()
    return client


def test_create_if_not_exists_is_idempotent(engine):
    client = TableClient(engine, "stores")
    client.create_if_not_exists()
    client.create_if_not_exists()
    assert client.scan_all() == []


def test_insert_query_and_scan(table):
    table.insert({"PartitionKey": "1", "RowKey": "One", "Name": "One", "Active": True, "Lon": 1.5})
    table.insert({"PartitionKey": "2", "RowKey": "Two", "Name": "Two"})

    found = table.query(partition_key="1")
    assert found == [{"PartitionKey": "1", "RowKey": "One", "Name": "One", "Active": True, "Lon": 1.5}]
    assert table.query(partition_key="3") == []
    assert sorted(r["PartitionKey"] for r in table.scan_all()) == ["1", "2"]
    assert len(table.query(limit=1)) == 1


def test_insert_rejects_duplicate_partition_key_and_keeps_first(table, engine):
    table.insert({"PartitionKey": "100", "RowKey": "Central", "Name": "Central"})

    with pytest.raises(EntityAlreadyExistsError) as excinfo:
        table.insert({"PartitionKey": "100", "RowKey": "Other", "Name": "Other"})

    assert excinfo.value.partition_key == "100"
    records = table.query(partition_key="100")
    assert len(records) == 1
    assert records[0]["Name"] == "Central"
    with db_session.get_session(engine) as session:
        rows = session.execute(select(models.TableEntity)).scalars().all()
    assert len(rows) == 1


def test_tables_are_isolated_by_name(engine):
    stores = TableClient(engine, "stores")
    archive = TableClient(engine, "stores_archive")
    stores.create_if_not_exists()

    stores.insert({"PartitionKey": "1", "Name": "Live"})
    archive.insert({"PartitionKey": "1", "Name": "Archived"})

    assert [r["Name"] for r in stores.scan_all()] == ["Live"]
    assert [r["Name"] for r in archive.scan_all()] == ["Archived"]


def test_insert_requires_partition_key(table):
    with pytest.raises(TableStorageError):
        table.insert({"Name": "Nameless"})
    assert table.scan_all() == []


def test_query_without_provisioned_table_raises_storage_error(engine):
    client = TableClient(engine, "stores")
    with pytest.raises(TableStorageError):
        client.scan_all()


def test_missing_connection_string_fails_fast():
    db_session.get_engine.cache_clear()
    with pytest.raises(RuntimeError, match="connection string is not configured"):
        db_session.get_engine("")


def test_create_tables_script_provisions_configured_table(engine, monkeypatch):
    from store_api.db import create_tables

    monkeypatch.setenv("STORE_TABLE_NAME", "shops")
    core_config.get_settings.cache_clear()

    table = create_tables.create_all()

    assert table.table_name == "shops"
    assert table.engine is engine
    assert table.scan_all() == []


def test_non_key_constraint_failure_is_storage_error_not_duplicate(table, monkeypatch):
    build = table._new_entity

    def without_row_key(partition_key, row_key, properties):
        entity = build(partition_key, row_key, properties)
        entity.row_key = None
        return entity

    monkeypatch.setattr(table, "_new_entity", without_row_key)

    with pytest.raises(TableStorageError) as excinfo:
        table.insert({"PartitionKey": "1", "RowKey": "One"})

    assert not isinstance(excinfo.value, EntityAlreadyExistsError)
    assert table.scan_all() == []

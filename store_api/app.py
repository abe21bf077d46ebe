"""FastAPI application exposing the store resource."""
from __future__ import annotations

from typing import Optional

from fastapi import FastAPI

from store_api.core.config import Settings, get_settings
from store_api.core.log import configure_logging, get_logger
from store_api.db import get_engine
from store_api.repositories.store_repository import StoreRepository
from store_api.repositories.table_storage import TableClient
from store_api.routers import store as store_router

logger = get_logger(__name__)


def build_store_repository(settings: Settings) -> StoreRepository:
    """Create the shared table handle, provision the table and wrap it in a repository."""
    table = TableClient(get_engine(settings.storage_connection_string), settings.table_name)
    table.create_if_not_exists()
    return StoreRepository(table)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Factory compatible with uvicorn (`uvicorn store_api.app:create_app --factory`)."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Store API")
    app.state.settings = settings
    app.state.store_repository = build_store_repository(settings)
    app.include_router(store_router.router)
    logger.info("Store API ready (table=%s, env=%s)", settings.table_name, settings.app_env)
    return app

"""Engine/session helpers for the table backend."""
from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


@lru_cache
def get_engine(url: str) -> Engine:
    """Return the pooled engine for a connection string (one per process and URL)."""
    url = (url or "").strip()
    if not url:
        raise RuntimeError("Storage account connection string is not configured.")
    if url.startswith("sqlite"):
        # requests are served from FastAPI's threadpool
        return create_engine(url, future=True, connect_args={"check_same_thread": False})
    return create_engine(url, future=True, pool_pre_ping=True)


@lru_cache
def _get_sessionmaker(engine: Engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


@contextmanager
def get_session(engine: Engine) -> Session:
    session: Session = _get_sessionmaker(engine)()
    try:
        yield session
    finally:
        session.close()

"""Table backend: engine/session helpers and the entity model."""

from .session import Base, get_engine, get_session
from .models import TableEntity

__all__ = ["Base", "TableEntity", "get_engine", "get_session"]

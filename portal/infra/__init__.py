"""Infrastructure layer - Database and persistence"""

from .db import DatabaseEngine, KeyValueModel, get_engine, init_db
from .kv_store import KeyValueStore

__all__ = ["DatabaseEngine", "KeyValueModel", "get_engine", "init_db", "KeyValueStore"]

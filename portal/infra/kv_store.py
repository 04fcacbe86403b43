"""
Key-Value Store Adapter.

Architecture Decision: Why a key-value table?
The portal's records are a handful of JSON documents (the account list, the
item catalog, the checkbox map, the audit log). Storing each document under
one key keeps every service simple: read the document, change it in memory,
write it back. Multi-document updates go through set_many() so they commit
together.
"""

import json
import logging
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portal.domain.errors import PersistenceError
from portal.infra.db import KeyValueModel, get_engine

logger = logging.getLogger(__name__)


class KeyValueStore:
    """
    Async string store with JSON helpers.

    Wraps every SQLAlchemy failure in PersistenceError so callers only deal
    with portal errors.
    """

    def __init__(self, session: Optional[AsyncSession] = None):
        self.session = session

    async def _get_session(self) -> AsyncSession:
        """Get session - either injected or create new one"""
        if self.session:
            return self.session
        engine = get_engine()
        return engine.get_session()

    async def get(self, key: str) -> Optional[str]:
        """Get the raw value for a key, or None if it was never set"""
        session = await self._get_session()
        try:
            async with session:
                result = await session.execute(
                    select(KeyValueModel.value).where(KeyValueModel.key == key)
                )
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to read '{key}': {e}") from e

    async def set(self, key: str, value: str) -> None:
        """Store a raw value, replacing any previous one"""
        await self.set_many({key: value})

    async def set_many(self, values: Dict[str, str]) -> None:
        """
        Store several raw values in one transaction.

        Either every key is written or, on failure, none is.
        """
        session = await self._get_session()
        now = datetime.now()
        try:
            async with session:
                try:
                    for key, value in values.items():
                        await session.merge(KeyValueModel(key=key, value=value, updated_at=now))
                    await session.commit()
                except SQLAlchemyError:
                    await session.rollback()
                    raise
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to write {sorted(values)}: {e}") from e

    async def remove(self, key: str) -> None:
        """Delete a key. Removing a missing key is not an error."""
        session = await self._get_session()
        try:
            async with session:
                await session.execute(delete(KeyValueModel).where(KeyValueModel.key == key))
                await session.commit()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to remove '{key}': {e}") from e

    async def get_json(self, key: str, default: Any = None) -> Any:
        """
        Get a decoded JSON value.

        Args:
            key: Storage key
            default: Returned when the key is absent

        Raises:
            PersistenceError: the stored text is not valid JSON
        """
        raw = await self.get(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistenceError(f"Corrupt JSON under '{key}': {e}") from e

    async def set_json(self, key: str, value: Any) -> None:
        """Encode a value as JSON and store it"""
        await self.set(key, json.dumps(value))

    async def set_many_json(self, values: Dict[str, Any]) -> None:
        """Encode several values as JSON and store them in one transaction"""
        await self.set_many({key: json.dumps(value) for key, value in values.items()})

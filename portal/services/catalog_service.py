"""
Catalog Service - Serves the work items assigned to each user.

The catalog is generated once from the demo templates, persisted, and read
back unchanged on every later call.
"""

import asyncio
import datetime
import logging
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from portal.domain.demo_data import (
    CATEGORIES, DEMO_OWNERS, ITEMS_PER_OWNER, PRIORITY_CYCLE, TASK_TEMPLATES,
)
from portal.domain.errors import PersistenceError
from portal.domain.models import PortalOptions, WorkItem
from portal.infra.config import get_settings
from portal.infra.kv_store import KeyValueStore
from portal.services import latency
from portal.services.latency import SimulatedLatency

logger = logging.getLogger(__name__)

DATA_KEY = "data_portal_mock_data"

_catalog = TypeAdapter(List[WorkItem])


def generate_catalog(now: Optional[datetime.datetime] = None) -> List[WorkItem]:
    """
    Build the demo catalog.

    Each demo owner gets ITEMS_PER_OWNER consecutive templates. Item ids are
    "<local part of the email>_<n>", n starting at 1. Due dates are spread
    every three days starting ten days before `now`.
    """
    now = now or datetime.datetime.now()
    items: List[WorkItem] = []

    for owner_index, owner_email in enumerate(DEMO_OWNERS):
        start = owner_index * ITEMS_PER_OWNER
        templates = TASK_TEMPLATES[start:start + ITEMS_PER_OWNER]
        prefix = owner_email.split('@')[0]

        for index, (title, description) in enumerate(templates):
            items.append(WorkItem(
                id=f"{prefix}_{index + 1}",
                title=title,
                description=description,
                category=CATEGORIES[index % len(CATEGORIES)],
                priority=PRIORITY_CYCLE[index % len(PRIORITY_CYCLE)],
                due_date=now + datetime.timedelta(days=index * 3 - 10),
                owner_email=owner_email,
            ))

    return items


class CatalogService:
    """Read access to the work item catalog"""

    def __init__(self, store: Optional[KeyValueStore] = None,
                 options: Optional[PortalOptions] = None):
        self.store = store or KeyValueStore()
        self.options = options or get_settings().options
        self.latency = SimulatedLatency(self.options.latency_scale)
        self._lock = asyncio.Lock()

    async def _load_catalog(self) -> List[WorkItem]:
        """Read the catalog, generating and storing it on first use"""
        async with self._lock:
            data = await self.store.get_json(DATA_KEY)
            if data is None:
                items = generate_catalog()
                await self.store.set_json(DATA_KEY, [item.model_dump(mode="json") for item in items])
                logger.info(f"Generated catalog with {len(items)} items")
                return items

        try:
            return _catalog.validate_python(data)
        except ValidationError as e:
            raise PersistenceError(f"Corrupt item catalog: {e}") from e

    async def get_user_items(self, email: str) -> List[WorkItem]:
        """Get the items owned by `email` (empty for unknown users)"""
        logger.info(f"Fetching data for user: {email}")
        await self.latency.wait(latency.USER_ITEMS_DELAY)

        items = [item for item in await self._load_catalog() if item.owner_email == email]

        logger.info(f"Found {len(items)} records for {email}")
        return items

    async def get_all_items(self) -> List[WorkItem]:
        logger.info("Fetching all data")
        await self.latency.wait(latency.ALL_ITEMS_DELAY)
        return await self._load_catalog()

    async def run_query(self, query_text: str, email: str) -> List[WorkItem]:
        """
        Placeholder for a real query backend.

        The query text is only logged; the result is the user's items.
        """
        logger.info(f"Executing custom query for {email}: {query_text}")
        return await self.get_user_items(email)

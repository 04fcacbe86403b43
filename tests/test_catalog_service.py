"""
Tests for the work item catalog.
"""

import datetime

import pytest

from portal.domain.demo_data import DEMO_OWNERS
from portal.domain.models import Priority
from portal.services.catalog_service import CatalogService, DATA_KEY, generate_catalog


@pytest.fixture
def catalog(store, options):
    return CatalogService(store, options)


class TestGenerateCatalog:
    def test_five_items_per_owner(self):
        items = generate_catalog()
        assert len(items) == 15
        for owner in DEMO_OWNERS:
            assert len([i for i in items if i.owner_email == owner]) == 5

    def test_ids_categories_and_priorities(self):
        items = [i for i in generate_catalog() if i.owner_email == "sarah@company.com"]
        assert [i.id for i in items] == [f"sarah_{n}" for n in range(1, 6)]
        assert [i.category for i in items] == [
            "Documentation", "Development", "Testing", "Review", "Planning",
        ]
        assert [i.priority for i in items] == [
            Priority.LOW, Priority.MEDIUM, Priority.HIGH, Priority.LOW, Priority.MEDIUM,
        ]
        assert items[0].title == "Client Presentation"

    def test_due_dates_every_three_days(self):
        now = datetime.datetime(2026, 3, 15, 12, 0)
        items = [i for i in generate_catalog(now) if i.owner_email == "john@company.com"]
        assert [(i.due_date - now).days for i in items] == [-10, -7, -4, -1, 2]


class TestCatalogService:
    @pytest.mark.asyncio
    async def test_john_gets_five_items(self, catalog):
        items = await catalog.get_user_items("john@company.com")
        assert [i.id for i in items] == ["john_1", "john_2", "john_3", "john_4", "john_5"]
        assert all(i.owner_email == "john@company.com" for i in items)

    @pytest.mark.asyncio
    async def test_unknown_user_gets_nothing(self, catalog):
        assert await catalog.get_user_items("alice@x.com") == []

    @pytest.mark.asyncio
    async def test_union_of_owners_is_whole_catalog(self, catalog):
        union = []
        for owner in DEMO_OWNERS:
            union.extend(await catalog.get_user_items(owner))
        all_items = await catalog.get_all_items()
        assert sorted(i.id for i in union) == sorted(i.id for i in all_items)

    @pytest.mark.asyncio
    async def test_catalog_is_generated_once(self, catalog, store):
        assert await store.get(DATA_KEY) is None
        first = await catalog.get_all_items()
        stored = await store.get(DATA_KEY)
        assert stored is not None

        second = await catalog.get_all_items()
        assert first == second
        assert await store.get(DATA_KEY) == stored

    @pytest.mark.asyncio
    async def test_catalog_survives_new_service(self, catalog, store, options):
        first = await catalog.get_all_items()
        again = await CatalogService(store, options).get_all_items()
        assert [i.due_date for i in first] == [i.due_date for i in again]

    @pytest.mark.asyncio
    async def test_run_query_ignores_text(self, catalog):
        result = await catalog.run_query("SELECT * FROM anything WHERE 1=0", "mike@company.com")
        assert result == await catalog.get_user_items("mike@company.com")

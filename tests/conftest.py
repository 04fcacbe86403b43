"""
Pytest configuration and fixtures.
"""

import sys
from pathlib import Path
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

# Add project root
sys.path.insert(0, str(Path(__file__).parent.parent))

from portal.api import DataPortal
from portal.domain.models import PortalOptions
from portal.infra.db import Base
from portal.infra.kv_store import KeyValueStore

@pytest_asyncio.fixture
async def db_engine():
    """Create an in-memory SQLite database for testing"""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()

@pytest_asyncio.fixture
async def db_session(db_engine):
    """Create a new session for a test"""
    async_session = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session

@pytest.fixture
def options():
    """Fast options: no simulated latency, cheapest bcrypt cost"""
    return PortalOptions(latency_scale=0.0, bcrypt_rounds=4)

@pytest.fixture
def store(db_session):
    return KeyValueStore(session=db_session)

@pytest.fixture
def portal(store, options):
    return DataPortal(store=store, options=options)

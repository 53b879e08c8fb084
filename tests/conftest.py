from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from domain.models.currency import Currency
from infrastructure.persistence.database import Database
from infrastructure.persistence.repositories.currency import CurrencyRepository
from infrastructure.preferences.redis_preferences import RedisPreferences


@pytest.fixture
def fake_redis():
    """AsyncMock Redis client backed by a plain dict."""
    store: dict[str, str] = {}
    client = AsyncMock()
    client.get.side_effect = lambda key: store.get(key)

    def _set(key, value):
        store[key] = value
        return True

    client.set.side_effect = _set
    client.store = store
    return client


@pytest.fixture
def preferences(fake_redis):
    return RedisPreferences(fake_redis)


@pytest_asyncio.fixture
async def database():
    db = Database('sqlite+aiosqlite:///:memory:')
    await db.create_tables()
    yield db
    await db.close()


@pytest.fixture
def repository(database):
    return CurrencyRepository(database)


@pytest.fixture
def currencies():
    return [
        Currency(code='USD', name='US Dollar', rate=Decimal('1')),
        Currency(code='EUR', name='Euro', rate=Decimal('0.85')),
        Currency(code='NGN', name='Nigerian Naira', rate=Decimal('1530.5')),
    ]

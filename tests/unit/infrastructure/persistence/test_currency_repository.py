# nosec B101

import asyncio
from decimal import Decimal

import pytest
from sqlalchemy.pool import StaticPool

from domain.models.currency import Currency
from infrastructure.persistence.database import Database
from infrastructure.persistence.repositories.currency import CurrencyRepository


async def read_once(repository: CurrencyRepository):
    stream = repository.read_currency_data()
    try:
        return await anext(stream)
    finally:
        await stream.aclose()


@pytest.mark.asyncio
async def test_empty_cache_reads_as_empty_success(repository):
    state = await read_once(repository)

    assert state.is_success()
    assert state.get_success_data() == []


@pytest.mark.asyncio
async def test_insert_preserves_order_and_values(repository, currencies):
    for currency in currencies:
        assert (await repository.insert_currency_data(currency)).is_success()

    state = await read_once(repository)

    assert state.get_success_data() == currencies
    assert state.get_success_data()[2].rate == Decimal('1530.5')


@pytest.mark.asyncio
async def test_clean_up_then_insert_holds_only_new_generation(repository, currencies):
    old_generation = [
        Currency(code='GBP', name='British Pound', rate=Decimal('0.79')),
        Currency(code='USD', name='US Dollar', rate=Decimal('1')),
    ]
    for currency in old_generation:
        await repository.insert_currency_data(currency)

    assert (await repository.clean_up()).is_success()
    for currency in currencies:
        await repository.insert_currency_data(currency)

    state = await read_once(repository)
    assert [c.code for c in state.get_success_data()] == ['USD', 'EUR', 'NGN']


@pytest.mark.asyncio
async def test_clean_up_empties_cache(repository, currencies):
    for currency in currencies:
        await repository.insert_currency_data(currency)

    await repository.clean_up()

    assert (await read_once(repository)).get_success_data() == []


@pytest.mark.asyncio
async def test_duplicate_code_in_one_generation_is_an_error(repository, currencies):
    await repository.insert_currency_data(currencies[0])

    state = await repository.insert_currency_data(currencies[0])

    assert state.is_error()
    assert [c.code for c in (await read_once(repository)).get_success_data()] == ['USD']


@pytest.mark.asyncio
async def test_stream_emits_snapshot_after_changes(repository, currencies):
    stream = repository.read_currency_data()
    assert (await anext(stream)).get_success_data() == []

    await repository.insert_currency_data(currencies[0])
    after_insert = await asyncio.wait_for(anext(stream), timeout=1)
    assert after_insert.get_success_data() == [currencies[0]]

    await repository.clean_up()
    after_clean = await asyncio.wait_for(anext(stream), timeout=1)
    assert after_clean.get_success_data() == []

    await stream.aclose()


@pytest.mark.asyncio
async def test_database_errors_become_error_states(currencies):
    db = Database('sqlite+aiosqlite:///:memory:')  # tables never created
    repository = CurrencyRepository(db)

    read_state = await read_once(repository)
    insert_state = await repository.insert_currency_data(currencies[0])
    clean_state = await repository.clean_up()

    assert read_state.is_error()
    assert 'currency_rates' in read_state.get_error_message()
    assert insert_state.is_error()
    assert clean_state.is_error()
    await db.close()


def test_in_memory_database_uses_a_single_shared_connection():
    database = Database('sqlite+aiosqlite:///:memory:')

    assert isinstance(database.engine.sync_engine.pool, StaticPool)


def test_file_database_uses_a_connection_pool(tmp_path):
    database = Database(f'sqlite+aiosqlite:///{tmp_path / "rates.db"}')

    assert not isinstance(database.engine.sync_engine.pool, StaticPool)

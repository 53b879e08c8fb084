# nosec B101

from unittest.mock import AsyncMock

import pytest
from tenacity import wait_none

from application.services.rate_service import RateService
from domain.exceptions.currency import ProviderError


@pytest.fixture
def provider():
    mock_provider = AsyncMock()
    mock_provider.name = 'currencyapi.com'
    return mock_provider


@pytest.mark.asyncio
async def test_success_wraps_currencies(provider, currencies):
    provider.fetch_latest_rates.return_value = currencies
    service = RateService(provider)

    state = await service.get_latest_exchange_rates()

    assert state.is_success()
    assert state.get_success_data() == currencies
    provider.fetch_latest_rates.assert_awaited_once()


@pytest.mark.asyncio
async def test_provider_error_becomes_error_state(provider):
    provider.fetch_latest_rates.side_effect = ProviderError('CurrencyAPI request failed: ConnectError')
    service = RateService(provider)

    state = await service.get_latest_exchange_rates()

    assert state.is_error()
    assert 'ConnectError' in state.get_error_message()
    provider.fetch_latest_rates.assert_awaited_once()


@pytest.mark.asyncio
async def test_retries_up_to_configured_attempts(provider, currencies):
    provider.fetch_latest_rates.side_effect = [
        ProviderError('timeout'),
        ProviderError('timeout'),
        currencies,
    ]
    service = RateService(provider, attempts=3, wait=wait_none())

    state = await service.get_latest_exchange_rates()

    assert state.get_success_data() == currencies
    assert provider.fetch_latest_rates.await_count == 3


@pytest.mark.asyncio
async def test_gives_up_after_last_attempt(provider):
    provider.fetch_latest_rates.side_effect = ProviderError('HTTP error 503')
    service = RateService(provider, attempts=2, wait=wait_none())

    state = await service.get_latest_exchange_rates()

    assert state.is_error()
    assert provider.fetch_latest_rates.await_count == 2


@pytest.mark.asyncio
async def test_unexpected_errors_are_not_retried(provider):
    provider.fetch_latest_rates.side_effect = RuntimeError('bug')
    service = RateService(provider, attempts=3, wait=wait_none())

    with pytest.raises(RuntimeError):
        await service.get_latest_exchange_rates()
    assert provider.fetch_latest_rates.await_count == 1

# nosec B101

from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from domain.exceptions.currency import ProviderError
from infrastructure.providers.openexchange import OpenExchangeProvider


def client_returning(payload) -> AsyncMock:
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_response = Mock()
    mock_response.json.return_value = payload
    mock_response.raise_for_status = Mock()
    mock_client.get.return_value = mock_response
    return mock_client


@pytest.mark.asyncio
async def test_fetch_latest_rates_success():
    mock_client = client_returning({
        'disclaimer': 'Usage subject to terms',
        'base': 'USD',
        'rates': {'USD': 1, 'EUR': 0.85432, 'JPY': 149.7},
    })
    provider = OpenExchangeProvider(app_id='test_app', client=mock_client)

    currencies = await provider.fetch_latest_rates()

    assert [c.code for c in currencies] == ['USD', 'EUR', 'JPY']
    assert currencies[2].rate == Decimal('149.7')
    assert mock_client.get.call_args[0][0] == 'https://openexchangerates.org/api/latest.json'
    assert mock_client.get.call_args[1]['params'] == {'app_id': 'test_app'}


@pytest.mark.asyncio
async def test_error_payload_raises_provider_error():
    provider = OpenExchangeProvider(
        app_id='bad',
        client=client_returning({'error': True, 'status': 401, 'description': 'Invalid App ID'}),
    )

    with pytest.raises(ProviderError) as exc_info:
        await provider.fetch_latest_rates()

    assert 'Invalid App ID' in str(exc_info.value)


@pytest.mark.asyncio
async def test_non_numeric_rate_raises_provider_error():
    provider = OpenExchangeProvider(app_id='test_app', client=client_returning({'rates': {'EUR': None}}))

    with pytest.raises(ProviderError):
        await provider.fetch_latest_rates()


@pytest.mark.asyncio
async def test_invalid_json_raises_provider_error():
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_response = Mock()
    mock_response.json.side_effect = ValueError('Expecting value')
    mock_response.raise_for_status = Mock()
    mock_client.get.return_value = mock_response
    provider = OpenExchangeProvider(app_id='test_app', client=mock_client)

    with pytest.raises(ProviderError) as exc_info:
        await provider.fetch_latest_rates()

    assert 'parsing error' in str(exc_info.value)

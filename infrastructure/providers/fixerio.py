from decimal import Decimal, InvalidOperation

import httpx

from domain.exceptions.currency import ProviderError
from domain.models.currency import Currency
from domain.models.currency_names import currency_name


class FixerIOProvider:
	BASE_URL = 'http://data.fixer.io/api'

	def __init__(self, api_key: str, client: httpx.AsyncClient | None = None, timeout: int = 10):
		self.api_key = api_key
		self._client = client or httpx.AsyncClient(timeout=timeout)

	@property
	def name(self) -> str:
		return 'fixerio'

	async def _request(self, endpoint: str, params: dict) -> dict:
		params['access_key'] = self.api_key
		url = f'{self.BASE_URL}/{endpoint}'

		try:
			response = await self._client.get(url, params=params)
			response.raise_for_status()
			data = response.json()
		except httpx.HTTPStatusError as e:
			raise ProviderError(
				f'Fixer.io HTTP error {e.response.status_code}: {e.response.text[:200]}'
			) from e
		except httpx.RequestError as e:
			raise ProviderError(f'Fixer.io request failed: {e.__class__.__name__}') from e
		except Exception as e:
			raise ProviderError(f'Fixer.io response parsing error: {str(e)}') from e

		if not data.get('success', False):
			info = data.get('error', {}).get('info', 'Unknown error')
			raise ProviderError(f'Fixer.io API error: {info}')

		return data

	async def fetch_latest_rates(self) -> list[Currency]:
		data = await self._request('latest', {})
		rates = data.get('rates')
		if not isinstance(rates, dict):
			raise ProviderError('Fixer.io response has no rates')

		try:
			return [
				Currency(code=code, name=currency_name(code), rate=Decimal(str(rate)))
				for code, rate in rates.items()
			]
		except InvalidOperation as e:
			raise ProviderError('Fixer.io returned a non-numeric rate') from e

	async def close(self) -> None:
		await self._client.aclose()

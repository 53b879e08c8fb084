from decimal import Decimal, InvalidOperation


import httpx


from domain.exceptions.currency import ProviderError
from domain.models.currency import Currency
from domain.models.currency_names import currency_name


class OpenExchangeProvider:
    BASE_URL = "https://openexchangerates.org/api"

    def __init__(self, app_id: str, client: httpx.AsyncClient | None = None, timeout: int = 10):
        self.app_id = app_id
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def name(self) -> str:
        return "openexchange"

    async def _request(self, endpoint: str, params: dict) -> dict:
        params["app_id"] = self.app_id
        url = f"{self.BASE_URL}/{endpoint}"

        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                f"OpenExchange HTTP error {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.RequestError as e:
            raise ProviderError(f"OpenExchange request failed: {e.__class__.__name__}") from e
        except Exception as e:
            raise ProviderError(f"OpenExchange response parsing error: {str(e)}") from e

        if data.get("error"):
            message = data.get("description", data.get("message", "Unknown error"))
            raise ProviderError(f"OpenExchange API error: {message}")

        return data

    async def fetch_latest_rates(self) -> list[Currency]:
        data = await self._request("latest.json", {})
        rates = data.get("rates")
        if not isinstance(rates, dict):
            raise ProviderError("OpenExchange response has no rates")

        try:
            return [
                Currency(code=code, name=currency_name(code), rate=Decimal(str(rate)))
                for code, rate in rates.items()
            ]
        except InvalidOperation as e:
            raise ProviderError("OpenExchange returned a non-numeric rate") from e

    async def close(self) -> None:
        await self._client.aclose()

import contextlib
from decimal import Decimal, InvalidOperation

import httpx

from domain.exceptions.currency import ProviderError
from domain.models.currency import Currency
from domain.models.currency_names import currency_name


class CurrencyAPIProvider:
    BASE_URL = "https://api.currencyapi.com/v3"

    def __init__(self, api_key: str, client: httpx.AsyncClient | None = None, timeout: int = 10):
        self.api_key = api_key
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={"apikey": api_key},
        )

    @property
    def name(self) -> str:
        return "currencyapi.com"

    async def _request(self, endpoint: str, params: dict | None = None) -> dict:
        url = f"{self.BASE_URL}/{endpoint}"
        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
            data = response.json()

            if "error" in data:
                message = data["error"].get("message", "Unknown error")
                raise ProviderError(f"CurrencyAPI error: {message}")

            return data

        except ProviderError:
            raise
        except httpx.HTTPStatusError as e:
            msg = None
            with contextlib.suppress(Exception):
                msg = e.response.json().get("message")
            raise ProviderError(
                f"CurrencyAPI HTTP error {e.response.status_code}: {msg or e.response.text[:200]}"
            ) from e
        except httpx.RequestError as e:
            raise ProviderError(f"CurrencyAPI request failed: {e.__class__.__name__}") from e
        except Exception as e:
            raise ProviderError(f"CurrencyAPI response parsing error: {str(e)}") from e

    async def fetch_latest_rates(self) -> list[Currency]:
        data = await self._request("latest")

        try:
            return [
                Currency(
                    code=info.get("code", code),
                    name=currency_name(info.get("code", code)),
                    rate=Decimal(str(info["value"])),
                )
                for code, info in data["data"].items()
            ]
        except (KeyError, AttributeError, TypeError, InvalidOperation) as e:
            raise ProviderError("Malformed rate list in CurrencyAPI response") from e

    async def close(self) -> None:
        await self._client.aclose()

from typing import Protocol

from domain.models.currency import Currency


class ExchangeRateProvider(Protocol):
    """A remote source of the latest rates for every currency it knows."""

    @property
    def name(self) -> str:
        ...

    async def fetch_latest_rates(self) -> list[Currency]:
        """Return one fetch generation, ordered as the API lists it.

        Raises ProviderError on HTTP, network or payload errors.
        """
        ...

    async def close(self) -> None:
        ...

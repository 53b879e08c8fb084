import logging

from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from domain.exceptions.currency import ProviderError
from domain.models.currency import Currency, RequestState
from infrastructure.providers.base import ExchangeRateProvider

logger = logging.getLogger(__name__)


class RateService:
    """Remote rate service: fetches one generation of rates from a provider."""

    def __init__(
        self,
        provider: ExchangeRateProvider,
        attempts: int = 1,
        wait: wait_base | None = None,
    ):
        self.provider = provider
        self.attempts = max(attempts, 1)
        self.wait = wait or wait_exponential(multiplier=1, min=1, max=10)

    async def _fetch_with_retry(self) -> list[Currency]:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.attempts),
            wait=self.wait,
            retry=retry_if_exception_type(ProviderError),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                return await self.provider.fetch_latest_rates()
        raise ProviderError(f"No attempt made against {self.provider.name}")

    async def get_latest_exchange_rates(self) -> RequestState[list[Currency]]:
        try:
            currencies = await self._fetch_with_retry()
        except (ProviderError, RetryError) as e:
            logger.error(f"Provider {self.provider.name} failed: {e}")
            return RequestState.error(str(e))

        logger.info(f"Fetched {len(currencies)} rates from {self.provider.name}")
        return RequestState.success(currencies)

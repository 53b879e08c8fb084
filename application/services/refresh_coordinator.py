import asyncio
import logging
from collections.abc import AsyncIterator, Callable, Coroutine
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from application.services.rate_service import RateService
from application.state import ObservableState
from domain.models.currency import Currency, RateStatus, RequestState
from domain.services.date_display import display_date
from infrastructure.persistence.repositories.currency import CurrencyRepository
from infrastructure.preferences.redis_preferences import RedisPreferences

logger = logging.getLogger(__name__)

SELECTION_NOT_FOUND = "Couldn't find the selected currency."


@dataclass(frozen=True)
class RefreshRates:
    pass


@dataclass(frozen=True)
class SwitchCurrencies:
    pass


@dataclass(frozen=True)
class SaveSourceCurrencyCode:
    code: str


@dataclass(frozen=True)
class SaveTargetCurrencyCode:
    code: str


HomeUiEvent = RefreshRates | SwitchCurrencies | SaveSourceCurrencyCode | SaveTargetCurrencyCode


class RefreshCoordinator:
    """Owns the converter state and keeps the local rate cache fresh.

    On start the cached rates are served when they were fetched today;
    otherwise (or when the cache is empty) a new generation is fetched,
    written to the cache and stamped with the fetch time. The selected
    source/target currencies follow the codes persisted in preferences.

    All background work runs in tasks owned by the coordinator and is
    cancelled by ``close()``.
    """

    def __init__(
        self,
        preferences: RedisPreferences,
        repository: CurrencyRepository,
        rate_service: RateService,
        clock: Callable[[], datetime] | None = None,
    ):
        self.preferences = preferences
        self.repository = repository
        self.rate_service = rate_service
        self._clock = clock or (lambda: datetime.now(UTC))

        self.rate_status: ObservableState[RateStatus] = ObservableState(RateStatus.IDLE)
        self.source_currency: ObservableState[RequestState[Currency]] = ObservableState(
            RequestState.idle()
        )
        self.target_currency: ObservableState[RequestState[Currency]] = ObservableState(
            RequestState.idle()
        )

        self._slots = {"source": self.source_currency, "target": self.target_currency}
        self._selected_codes: dict[str, str | None] = {"source": None, "target": None}

        self._all_currencies: list[Currency] = []
        self._refresh_lock = asyncio.Lock()
        self._tasks: set[asyncio.Task] = set()
        self._started = False

    @property
    def all_currencies(self) -> list[Currency]:
        return list(self._all_currencies)

    def _now_millis(self) -> int:
        return int(self._clock().timestamp() * 1000)

    def _launch(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def start(self) -> None:
        if self._started:
            return
        self._started = True

        await self._fetch_new_rates()
        await self._observe_selection(self.preferences.read_source_currency_code(), "source")
        await self._observe_selection(self.preferences.read_target_currency_code(), "target")

    async def close(self) -> None:
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()

    def send_event(self, event: HomeUiEvent) -> asyncio.Task | None:
        if isinstance(event, RefreshRates):
            return self._launch(self._refresh_rates())
        if isinstance(event, SwitchCurrencies):
            self._switch_currencies()
            return None
        if isinstance(event, SaveSourceCurrencyCode):
            return self._launch(self.preferences.save_source_currency_code(event.code))
        if isinstance(event, SaveTargetCurrencyCode):
            return self._launch(self.preferences.save_target_currency_code(event.code))
        raise ValueError(f"Unsupported event: {event!r}")

    async def describe_last_updated(self) -> str | None:
        saved = await self.preferences.read_last_updated()
        if saved is None:
            return None
        return display_date(datetime.fromtimestamp(saved / 1000))

    def _resolve(self, code: str) -> RequestState[Currency]:
        selected = next((c for c in self._all_currencies if c.code == code), None)
        if selected is None:
            return RequestState.error(SELECTION_NOT_FOUND)
        return RequestState.success(selected)

    def _select(self, slot: str, code: str) -> None:
        self._selected_codes[slot] = code
        self._slots[slot].set(self._resolve(code))

    def _reresolve_selection(self) -> None:
        # Slots keep the code they show, so a switch survives a refresh
        for slot, code in self._selected_codes.items():
            if code is not None:
                self._slots[slot].set(self._resolve(code))

    async def _observe_selection(self, codes: AsyncIterator[str], slot: str) -> None:
        try:
            first = await anext(codes)
        except Exception as e:
            logger.exception(f"Failed to read the {slot} currency code")
            self._slots[slot].set(RequestState.error(str(e)))
            await codes.aclose()
            return

        self._select(slot, first)
        self._launch(self._follow_selection(codes, slot))

    async def _follow_selection(self, codes: AsyncIterator[str], slot: str) -> None:
        try:
            async for code in codes:
                self._select(slot, code)
        finally:
            await codes.aclose()

    async def _read_local_cache(self) -> RequestState[list[Currency]]:
        stream = self.repository.read_currency_data()
        try:
            return await anext(stream)
        finally:
            await stream.aclose()

    async def _fetch_new_rates(self) -> None:
        try:
            local_cache = await self._read_local_cache()
            if local_cache.is_success():
                data = local_cache.get_success_data()
                if data:
                    logger.info(f"Local cache holds {len(data)} currencies")
                    self._all_currencies = list(data)
                    if not await self.preferences.is_data_fresh(self._now_millis()):
                        logger.info("Cached rates are stale")
                        await self._cache_the_data()
                    else:
                        logger.info("Cached rates are fresh")
                else:
                    logger.info("Local cache is empty")
                    await self._cache_the_data()
            elif local_cache.is_error():
                logger.error(f"Error reading local cache: {local_cache.get_error_message()}")

            await self._publish_rate_status()
        except Exception:
            logger.exception("Rate refresh failed")

    async def _refresh_rates(self) -> None:
        try:
            await self._cache_the_data()
            await self._publish_rate_status()
        except Exception:
            logger.exception("Rate refresh failed")

    async def _cache_the_data(self) -> None:
        # One refresh at a time: interleaved generations would mix in the cache
        async with self._refresh_lock:
            fetched = await self.rate_service.get_latest_exchange_rates()
            if fetched.is_error():
                logger.error(f"Fetching rates failed: {fetched.get_error_message()}")
                return

            currencies = fetched.get_success_data()
            self._all_currencies = list(currencies)
            self._reresolve_selection()

            if await self._store_generation(currencies):
                await self.preferences.save_last_updated(self._clock().isoformat())

    async def _store_generation(self, currencies: list[Currency]) -> bool:
        cleaned = await self.repository.clean_up()
        if cleaned.is_error():
            logger.error(f"Could not clear local cache: {cleaned.get_error_message()}")
            return False

        for currency in currencies:
            logger.debug(f"Caching {currency.code}")
            inserted = await self.repository.insert_currency_data(currency)
            if inserted.is_error():
                logger.error(
                    f"Caching {currency.code} failed, dropping partial generation: "
                    f"{inserted.get_error_message()}"
                )
                await self.repository.clean_up()
                return False

        logger.info(f"Cached {len(currencies)} currencies")
        return True

    async def _publish_rate_status(self) -> None:
        fresh = await self.preferences.is_data_fresh(self._now_millis())
        self.rate_status.set(RateStatus.FRESH if fresh else RateStatus.STALE)

    def _switch_currencies(self) -> None:
        source = self.source_currency.value
        target = self.target_currency.value
        self.source_currency.set(target)
        self.target_currency.set(source)
        self._selected_codes["source"], self._selected_codes["target"] = (
            self._selected_codes["target"],
            self._selected_codes["source"],
        )

import asyncio
import logging
from collections import defaultdict
from collections.abc import AsyncIterator
from datetime import UTC, datetime, tzinfo

from redis import asyncio as redis

logger = logging.getLogger(__name__)


class RedisPreferences:
    """User preferences and the rate freshness record, persisted in Redis.

    Reads of the selected currency codes are reactive: a stream yields the
    stored value first and then every distinct value saved afterwards.
    """

    TIMESTAMP_KEY = "preferences:lastUpdated"
    SOURCE_CURRENCY_KEY = "preferences:sourceCurrency"
    TARGET_CURRENCY_KEY = "preferences:targetCurrency"

    def __init__(
        self,
        redis_client: redis.Redis,
        default_source_code: str = "USD",
        default_target_code: str = "EUR",
    ):
        self.redis = redis_client
        self.default_source_code = default_source_code
        self.default_target_code = default_target_code
        self._listeners: dict[str, set[asyncio.Queue]] = defaultdict(set)

    async def _get_string(self, key: str, default: str) -> str:
        value = await self.redis.get(key)
        if value is None:
            return default
        return value.decode() if isinstance(value, bytes) else value

    async def _put_string(self, key: str, value: str) -> None:
        await self.redis.set(key, value)
        for queue in self._listeners[key]:
            queue.put_nowait(value)

    async def _observe(self, key: str, default: str) -> AsyncIterator[str]:
        queue: asyncio.Queue[str] = asyncio.Queue()
        self._listeners[key].add(queue)
        try:
            last = await self._get_string(key, default)
            yield last
            while True:
                value = await queue.get()
                if value != last:
                    last = value
                    yield value
        finally:
            self._listeners[key].discard(queue)

    async def save_last_updated(self, last_updated: str) -> None:
        moment = datetime.fromisoformat(last_updated)
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=UTC)
        epoch_millis = int(moment.timestamp() * 1000)
        await self._put_string(self.TIMESTAMP_KEY, str(epoch_millis))
        logger.debug(f"Saved last updated timestamp {epoch_millis}")

    async def read_last_updated(self) -> int | None:
        value = await self._get_string(self.TIMESTAMP_KEY, "0")
        saved = int(value)
        return saved or None

    async def is_data_fresh(self, current_timestamp: int, tz: tzinfo | None = None) -> bool:
        saved_timestamp = await self.read_last_updated()
        if saved_timestamp is None:
            return False

        # tz=None converts to the machine's local time zone
        current_date = datetime.fromtimestamp(current_timestamp / 1000, tz).date()
        saved_date = datetime.fromtimestamp(saved_timestamp / 1000, tz).date()
        return current_date == saved_date

    async def save_source_currency_code(self, code: str) -> None:
        await self._put_string(self.SOURCE_CURRENCY_KEY, code.upper())

    async def save_target_currency_code(self, code: str) -> None:
        await self._put_string(self.TARGET_CURRENCY_KEY, code.upper())

    def read_source_currency_code(self) -> AsyncIterator[str]:
        return self._observe(self.SOURCE_CURRENCY_KEY, self.default_source_code)

    def read_target_currency_code(self) -> AsyncIterator[str]:
        return self._observe(self.TARGET_CURRENCY_KEY, self.default_target_code)

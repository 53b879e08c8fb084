import asyncio
import logging
from collections.abc import AsyncIterator

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.future import select

from domain.models.currency import Currency, RequestState
from infrastructure.persistence.database import Database
from infrastructure.persistence.models.currency import CurrencyRateDB

logger = logging.getLogger(__name__)


class CurrencyRepository:
	"""Local cache holding the currencies of the last successful fetch."""

	def __init__(self, database: Database):
		self.database = database
		self._listeners: set[asyncio.Queue] = set()

	def _notify(self) -> None:
		for queue in self._listeners:
			queue.put_nowait(None)

	async def _read_snapshot(self) -> RequestState[list[Currency]]:
		try:
			async with self.database.session() as session:
				result = await session.execute(
					select(CurrencyRateDB).order_by(CurrencyRateDB.position)
				)
				rows = result.scalars().all()
		except SQLAlchemyError as e:
			logger.error(f'Failed to read cached currencies: {e}')
			return RequestState.error(str(e))

		return RequestState.success(
			[Currency(code=r.code, name=r.name, rate=r.rate) for r in rows]
		)

	async def read_currency_data(self) -> AsyncIterator[RequestState[list[Currency]]]:
		"""Yield the cached snapshot now and again after every change."""
		queue: asyncio.Queue[None] = asyncio.Queue()
		self._listeners.add(queue)
		try:
			yield await self._read_snapshot()
			while True:
				await queue.get()
				yield await self._read_snapshot()
		finally:
			self._listeners.discard(queue)

	async def insert_currency_data(self, currency: Currency) -> RequestState[None]:
		try:
			async with self.database.session() as session:
				session.add(CurrencyRateDB(code=currency.code, name=currency.name, rate=currency.rate))
		except SQLAlchemyError as e:
			logger.error(f'Failed to cache {currency.code}: {e}')
			return RequestState.error(str(e))

		self._notify()
		return RequestState.success(None)

	async def clean_up(self) -> RequestState[None]:
		try:
			async with self.database.session() as session:
				await session.execute(delete(CurrencyRateDB))
		except SQLAlchemyError as e:
			logger.error(f'Failed to clear cached currencies: {e}')
			return RequestState.error(str(e))

		self._notify()
		return RequestState.success(None)

import logging
from typing import Annotated

from fastapi import Depends
from redis.asyncio import Redis

from application.services import ConversionService, RateService, RefreshCoordinator
from config.settings import Settings, get_settings
from infrastructure.persistence.database import Database
from infrastructure.persistence.repositories.currency import CurrencyRepository
from infrastructure.preferences.redis_preferences import RedisPreferences
from infrastructure.providers import (
	CurrencyAPIProvider,
	ExchangeRateProvider,
	FixerIOProvider,
	OpenExchangeProvider,
)

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	db: Database | None = None
	redis_client: Redis | None = None
	provider: ExchangeRateProvider | None = None
	coordinator: RefreshCoordinator | None = None


deps = AppDependencies()


def build_provider(settings: Settings) -> ExchangeRateProvider:
	if settings.RATE_PROVIDER == 'openexchange':
		return OpenExchangeProvider(settings.OPENEXCHANGE_APP_ID, timeout=settings.REQUEST_TIMEOUT)
	if settings.RATE_PROVIDER == 'fixerio':
		return FixerIOProvider(settings.FIXERIO_API_KEY, timeout=settings.REQUEST_TIMEOUT)
	return CurrencyAPIProvider(settings.CURRENCYAPI_API_KEY, timeout=settings.REQUEST_TIMEOUT)


def init_dependencies() -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = get_settings()

	deps.db = Database(settings.DATABASE_URL)
	deps.redis_client = Redis.from_url(settings.REDIS_URL, decode_responses=True)
	deps.provider = build_provider(settings)

	deps.coordinator = RefreshCoordinator(
		preferences=RedisPreferences(
			deps.redis_client,
			default_source_code=settings.DEFAULT_SOURCE_CURRENCY,
			default_target_code=settings.DEFAULT_TARGET_CURRENCY,
		),
		repository=CurrencyRepository(deps.db),
		rate_service=RateService(deps.provider, attempts=settings.FETCH_ATTEMPTS),
	)
	logger.info(f'Dependencies initialized with provider {deps.provider.name}')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.coordinator:
		await deps.coordinator.close()
	if deps.redis_client:
		await deps.redis_client.aclose()
	if deps.db:
		await deps.db.close()
	if deps.provider:
		await deps.provider.close()

	logger.info('Cleanup complete')


async def bootstrap() -> None:
	"""Create tables and run the coordinator's startup refresh."""
	logger.info('Bootstrapping application...')

	if deps.db is None or deps.coordinator is None:
		raise RuntimeError('Dependencies not initialized. Call init_dependencies() first.')

	await deps.db.create_tables()
	await deps.coordinator.start()

	logger.info('Bootstrap complete')


def get_coordinator() -> RefreshCoordinator:
	if deps.coordinator is None:
		raise RuntimeError('Coordinator not initialized')
	return deps.coordinator


def get_conversion_service(
	coordinator: Annotated[RefreshCoordinator, Depends(get_coordinator)],
) -> ConversionService:
	return ConversionService(coordinator=coordinator)

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	DATABASE_URL: str = 'sqlite+aiosqlite:///./currency_converter.db'

	REDIS_URL: str = 'redis://localhost:6379'

	RATE_PROVIDER: Literal['currencyapi', 'openexchange', 'fixerio'] = 'currencyapi'
	CURRENCYAPI_API_KEY: str = ''
	OPENEXCHANGE_APP_ID: str = ''
	FIXERIO_API_KEY: str = ''

	# Remote fetch
	REQUEST_TIMEOUT: int = 10
	FETCH_ATTEMPTS: int = 1

	# Selection used until the user saves one
	DEFAULT_SOURCE_CURRENCY: str = 'USD'
	DEFAULT_TARGET_CURRENCY: str = 'EUR'

	# Application
	APP_NAME: str = 'Currency Converter'
	DEBUG: bool = True
	LOG_LEVEL: str = 'INFO'
	JSON_LOGS: bool = False

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()

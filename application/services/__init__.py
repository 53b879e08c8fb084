from .conversion_service import ConversionService
from .rate_service import RateService
from .refresh_coordinator import (
	HomeUiEvent,
	RefreshCoordinator,
	RefreshRates,
	SaveSourceCurrencyCode,
	SaveTargetCurrencyCode,
	SwitchCurrencies,
)

__all__ = [
	'ConversionService',
	'HomeUiEvent',
	'RateService',
	'RefreshCoordinator',
	'RefreshRates',
	'SaveSourceCurrencyCode',
	'SaveTargetCurrencyCode',
	'SwitchCurrencies',
]

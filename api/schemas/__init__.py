from .responses import (
	ConversionResponse,
	ConverterStateResponse,
	CurrencyListResponse,
	CurrencyResponse,
	SelectionResponse,
	SelectionSavedResponse,
)

__all__ = [
	'ConversionResponse',
	'ConverterStateResponse',
	'CurrencyListResponse',
	'CurrencyResponse',
	'SelectionResponse',
	'SelectionSavedResponse',
]

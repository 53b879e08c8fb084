from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from domain.models.currency import Currency, RateStatus, RequestState


class CurrencyResponse(BaseModel):
	code: str = Field(..., description='Currency code')
	name: str = Field(..., description='Display name')
	rate: Decimal = Field(..., description='Rate against the provider base currency')

	@classmethod
	def from_domain(cls, currency: Currency) -> 'CurrencyResponse':
		return cls(code=currency.code, name=currency.name, rate=currency.rate)


class SelectionResponse(BaseModel):
	status: str = Field(..., description='idle, success or error')
	currency: CurrencyResponse | None = None
	message: str | None = None

	@classmethod
	def from_state(cls, state: RequestState[Currency]) -> 'SelectionResponse':
		if state.is_success():
			return cls(status='success', currency=CurrencyResponse.from_domain(state.get_success_data()))
		if state.is_error():
			return cls(status='error', message=state.get_error_message())
		return cls(status='idle')


class ConverterStateResponse(BaseModel):
	rate_status: RateStatus
	source_currency: SelectionResponse
	target_currency: SelectionResponse
	last_updated: str | None = Field(None, description='Date of the last successful fetch')

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'rate_status': 'fresh',
				'source_currency': {'status': 'success', 'currency': {'code': 'USD', 'name': 'US Dollar', 'rate': 1}},
				'target_currency': {'status': 'error', 'message': "Couldn't find the selected currency."},
				'last_updated': '17th October, 2026.',
			}
		}
	)


class CurrencyListResponse(BaseModel):
	currencies: list[CurrencyResponse] = Field(description='Currencies of the current fetch generation')


class SelectionSavedResponse(BaseModel):
	code: str


class ConversionResponse(BaseModel):
	from_currency: str = Field(..., description='Source currency code')
	to_currency: str = Field(..., description='Target currency code')
	original_amount: Decimal = Field(..., description='Original amount requested')
	converted_amount: Decimal = Field(..., description='Converted amount')
	exchange_rate: Decimal = Field(..., description='Exchange rate used for conversion')
	rate_status: RateStatus = Field(..., description='Freshness of the rates used')

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'from_currency': 'USD',
				'to_currency': 'EUR',
				'original_amount': 100.00,
				'converted_amount': 85.50,
				'exchange_rate': 0.8550,
				'rate_status': 'fresh',
			}
		}
	)

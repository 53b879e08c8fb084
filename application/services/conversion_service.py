from decimal import Decimal

from application.services.refresh_coordinator import RefreshCoordinator
from domain.exceptions.currency import SelectionError
from domain.models.currency import Currency, RequestState
from domain.services.rate_math import calculate_exchange_rate, convert


def _selected(state: RequestState[Currency], slot: str) -> Currency:
	if state.is_success():
		return state.get_success_data()
	if state.is_error():
		raise SelectionError(f'{slot} currency unavailable: {state.get_error_message()}')
	raise SelectionError(f'{slot} currency not selected yet')


class ConversionService:
	def __init__(self, coordinator: RefreshCoordinator):
		self.coordinator = coordinator

	def convert(self, amount: Decimal) -> dict:
		source = _selected(self.coordinator.source_currency.value, 'Source')
		target = _selected(self.coordinator.target_currency.value, 'Target')

		exchange_rate = calculate_exchange_rate(source.rate, target.rate)
		converted_amount = convert(amount, exchange_rate)

		return {
			'from_currency': source.code,
			'to_currency': target.code,
			'original_amount': amount,
			'converted_amount': converted_amount,
			'exchange_rate': exchange_rate,
			'rate_status': self.coordinator.rate_status.value,
		}

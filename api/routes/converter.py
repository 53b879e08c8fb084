from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from api.dependencies import get_conversion_service, get_coordinator
from api.schemas import (
	ConversionResponse,
	ConverterStateResponse,
	CurrencyListResponse,
	CurrencyResponse,
	SelectionResponse,
	SelectionSavedResponse,
)
from application.services import (
	ConversionService,
	RefreshCoordinator,
	RefreshRates,
	SaveSourceCurrencyCode,
	SaveTargetCurrencyCode,
	SwitchCurrencies,
)

router = APIRouter(prefix='/api', tags=['converter'])

CurrencyCode = Annotated[str, Path(min_length=3, max_length=5)]


async def _state(coordinator: RefreshCoordinator) -> ConverterStateResponse:
	return ConverterStateResponse(
		rate_status=coordinator.rate_status.value,
		source_currency=SelectionResponse.from_state(coordinator.source_currency.value),
		target_currency=SelectionResponse.from_state(coordinator.target_currency.value),
		last_updated=await coordinator.describe_last_updated(),
	)


@router.get('/state', response_model=ConverterStateResponse, summary='Current converter state')
async def get_state(
	coordinator: Annotated[RefreshCoordinator, Depends(get_coordinator)],
) -> ConverterStateResponse:
	return await _state(coordinator)


@router.get('/currencies', response_model=CurrencyListResponse, summary='List cached currencies')
async def get_currencies(
	coordinator: Annotated[RefreshCoordinator, Depends(get_coordinator)],
) -> CurrencyListResponse:
	return CurrencyListResponse(
		currencies=[CurrencyResponse.from_domain(c) for c in coordinator.all_currencies]
	)


@router.post('/refresh', response_model=ConverterStateResponse, summary='Fetch the latest rates')
async def refresh_rates(
	coordinator: Annotated[RefreshCoordinator, Depends(get_coordinator)],
) -> ConverterStateResponse:
	await coordinator.send_event(RefreshRates())
	return await _state(coordinator)


@router.post('/switch', response_model=ConverterStateResponse, summary='Swap source and target')
async def switch_currencies(
	coordinator: Annotated[RefreshCoordinator, Depends(get_coordinator)],
) -> ConverterStateResponse:
	coordinator.send_event(SwitchCurrencies())
	return await _state(coordinator)


@router.put(
	'/source/{code}',
	response_model=SelectionSavedResponse,
	status_code=status.HTTP_202_ACCEPTED,
	summary='Save the source currency',
)
async def save_source_currency(
	code: CurrencyCode,
	coordinator: Annotated[RefreshCoordinator, Depends(get_coordinator)],
) -> SelectionSavedResponse:
	code = code.upper()
	await coordinator.send_event(SaveSourceCurrencyCode(code))
	return SelectionSavedResponse(code=code)


@router.put(
	'/target/{code}',
	response_model=SelectionSavedResponse,
	status_code=status.HTTP_202_ACCEPTED,
	summary='Save the target currency',
)
async def save_target_currency(
	code: CurrencyCode,
	coordinator: Annotated[RefreshCoordinator, Depends(get_coordinator)],
) -> SelectionSavedResponse:
	code = code.upper()
	await coordinator.send_event(SaveTargetCurrencyCode(code))
	return SelectionSavedResponse(code=code)


@router.get(
	'/convert/{amount}',
	response_model=ConversionResponse,
	summary='Convert an amount between the selected currencies',
)
async def convert_amount(
	amount: Annotated[Decimal, Path()],
	service: Annotated[ConversionService, Depends(get_conversion_service)],
) -> ConversionResponse:
	return ConversionResponse(**service.convert(amount))

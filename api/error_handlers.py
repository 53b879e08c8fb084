import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from domain.exceptions.currency import InvalidRateError, ProviderError, SelectionError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(InvalidRateError)
	async def invalid_rate_handler(request: Request, exc: InvalidRateError):
		return JSONResponse(status_code=400, content={'detail': str(exc)})

	@app.exception_handler(SelectionError)
	async def selection_error_handler(request: Request, exc: SelectionError):
		return JSONResponse(status_code=409, content={'detail': str(exc)})

	@app.exception_handler(ProviderError)
	async def provider_error_handler(request: Request, exc: ProviderError):
		logger.error(f'Provider error: {exc}')
		return JSONResponse(
			status_code=503, content={'detail': 'Exchange rate service unavailable'}
		)

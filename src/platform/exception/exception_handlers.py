from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import BusyError, CustomBaseError
from src.platform.logging.loguru_io import Logger

# Type alias for exception handlers (compatible with Starlette's expected signature)
ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]


async def custom_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, CustomBaseError) else CustomBaseError(str(exc), 500)
    headers = None
    if isinstance(error, BusyError):
        headers = {'Retry-After': str(error.retry_after)}
    return JSONResponse(
        status_code=error.status_code, content={'detail': error.message}, headers=headers
    )


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, RequestValidationError) else RequestValidationError([])
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'detail': _jsonable_errors(error)},
    )


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    Logger.base.opt(exception=exc).error(
        f'💥 [HTTP] Unhandled {type(exc).__name__} on {request.method} {request.url.path}'
    )
    detail = 'Internal server error'
    if settings.DEBUG:
        detail = f'{detail}: {type(exc).__name__}: {exc}'
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={'detail': detail},
    )


def _jsonable_errors(error: RequestValidationError) -> list[dict[str, Any]]:
    # pydantic puts the raised exception object in ctx, which is not JSON serializable
    errors = []
    for item in error.errors():
        item = dict(item)
        if 'ctx' in item:
            item['ctx'] = {k: str(v) for k, v in item['ctx'].items()}
        errors.append(item)
    return errors


EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    CustomBaseError: custom_error_handler,
    RequestValidationError: validation_error_handler,
    Exception: general_500_exception_handler,  # Catch-all for unhandled exceptions
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)

from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from src.platform.exception.exceptions import CustomBaseError, StorageUnavailableError
from src.platform.logging.loguru_io import Logger

# Type alias for exception handlers (compatible with Starlette's expected signature)
ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]

# Retry-After hint on seat store outages
STORAGE_RETRY_AFTER_SECONDS = 5


async def custom_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, CustomBaseError) else CustomBaseError(str(exc))
    return JSONResponse(status_code=error.status_code, content={'detail': error.message})


async def storage_unavailable_handler(request: Request, exc: Exception) -> JSONResponse:
    message = exc.message if isinstance(exc, StorageUnavailableError) else str(exc)
    Logger.base.warning(f'💾 [SEAT-STORE] {request.method} {request.url.path} refused: {message}')
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={'detail': message},
        headers={'Retry-After': str(STORAGE_RETRY_AFTER_SECONDS)},
    )


async def value_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={'detail': str(exc)})


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, RequestValidationError) else RequestValidationError([])
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'detail': error.errors()},
    )


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    Logger.base.exception(f'Unhandled error on {request.method} {request.url.path}: {exc}')
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={'detail': 'Internal server error'},
    )


# Exception handler mapping
EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    StorageUnavailableError: storage_unavailable_handler,
    CustomBaseError: custom_error_handler,
    ValueError: value_error_handler,
    RequestValidationError: validation_error_handler,
    Exception: general_500_exception_handler,  # Catch-all for unhandled exceptions
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)

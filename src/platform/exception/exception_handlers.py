"""
Maps raised errors to `{"message": ...}` JSON bodies.

Expected failures (CustomBaseError) keep their own status; FastAPI's request
validation and stray ValueErrors are client errors; anything else is a 500
whose details stay in the log.
"""

from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger


ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]

INTERNAL_ERROR_MESSAGE = 'Internal server error'


def message_response(*, status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'message': message})


async def custom_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, CustomBaseError) else CustomBaseError(str(exc))
    return message_response(status_code=error.status_code, message=error.message)


async def value_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return message_response(status_code=status.HTTP_400_BAD_REQUEST, message=str(exc))


def _describe(err: dict[str, Any]) -> str:
    location = '.'.join(str(part) for part in err.get('loc', ()))
    return f'{location}: {err["msg"]}' if location else err['msg']


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, RequestValidationError) else RequestValidationError([])
    message = '; '.join(_describe(err) for err in error.errors()) or 'Invalid request'
    Logger.base.warning(f'⚠️ [HTTP] {request.method} {request.url.path}: {message}')
    return message_response(status_code=status.HTTP_400_BAD_REQUEST, message=message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    Logger.base.opt(exception=exc).error(
        f'💥 [HTTP] {request.method} {request.url.path} failed: {type(exc).__name__}'
    )
    return message_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, message=INTERNAL_ERROR_MESSAGE
    )


EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    CustomBaseError: custom_error_handler,
    ValueError: value_error_handler,
    RequestValidationError: validation_error_handler,
    Exception: unhandled_error_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)

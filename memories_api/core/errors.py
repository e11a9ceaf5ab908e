"""Error taxonomy shared by services and the HTTP layer.

Every error carries the status code and message it is rendered with; the
handlers registered in :func:`register_exception_handlers` turn them into
``{"message": ...}`` bodies.
"""
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = 'Internal server error'

    def __init__(self, message: Optional[str] = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = 'Invalid token'


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = 'Unauthorized'


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = 'Not found'


class ConflictError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = 'Already exists'


def _format_location(loc) -> str:
    # drop the leading "body"/"path"/"query" segment
    parts = [str(item) for item in loc[1:]] if len(loc) > 1 else [str(item) for item in loc]
    return '.'.join(parts)


def validation_issues(exc: RequestValidationError) -> list[dict[str, str]]:
    return [
        {'field': _format_location(error.get('loc', ())), 'message': error.get('msg', '')}
        for error in exc.errors()
    ]


async def _app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    headers = {'WWW-Authenticate': 'Bearer'} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(status_code=exc.status_code, content={'message': exc.message}, headers=headers)


async def _validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'message': 'Validation error', 'issues': validation_issues(exc)},
    )


async def _database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.opt(exception=exc).error('db.error', path=request.url.path, method=request.method)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={'message': 'Internal server error'},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, _app_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, _database_error_handler)

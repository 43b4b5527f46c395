"""Map domain errors to HTTP responses."""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from tutorlink.core.errors import InvalidArgumentError, NotFoundError, TutorlinkError, UnauthorizedError

_STATUS_CODES: dict[type[TutorlinkError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidArgumentError: status.HTTP_400_BAD_REQUEST,
    UnauthorizedError: status.HTTP_403_FORBIDDEN,
}


async def tutorlink_error_handler(request: Request, exc: TutorlinkError) -> JSONResponse:
    status_code = next(
        (code for error_type, code in _STATUS_CODES.items() if isinstance(exc, error_type)),
        status.HTTP_400_BAD_REQUEST,
    )
    logger.debug(f"{request.method} {request.url.path} -> {status_code}: {exc.message}")
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TutorlinkError, tutorlink_error_handler)

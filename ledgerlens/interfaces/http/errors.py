"""Translate core errors into JSON responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ledgerlens.domain.common.exceptions import (
    ChainModuleNotFoundError,
    LedgerLensError,
    VerificationError,
)
from ledgerlens.schemas import ErrorResponse, VerificationErrorResponse

logger = logging.getLogger(__name__)


class UnknownVersionError(Exception):
    """Raised when the path carries an API version this server does not serve."""


async def _unknown_version(request: Request, exc: UnknownVersionError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=ErrorResponse(error="Unknown Version").model_dump(),
    )


async def _verification_failed(request: Request, exc: VerificationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=VerificationErrorResponse(error=str(exc)).model_dump(),
    )


async def _module_not_found(request: Request, exc: ChainModuleNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=ErrorResponse(error=str(exc)).model_dump(),
    )


async def _core_error(request: Request, exc: LedgerLensError) -> JSONResponse:
    logger.error("%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error=str(exc)).model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(UnknownVersionError, _unknown_version)
    app.add_exception_handler(VerificationError, _verification_failed)
    app.add_exception_handler(ChainModuleNotFoundError, _module_not_found)
    app.add_exception_handler(LedgerLensError, _core_error)


__all__ = ["UnknownVersionError", "register_exception_handlers"]

"""
Exception handlers rendering domain errors as JSON.

Every GroundOpsError becomes ``{"kind": ..., "detail": ...}`` with the
error's HTTP status. Request validation failures are reported as 400
validation_error with the field errors attached.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.exceptions import GroundOpsError, ValidationError

logger = logging.getLogger(__name__)


async def ground_ops_error_handler(request: Request, exc: GroundOpsError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.kind}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.kind}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    error = ValidationError("Invalid request data", details={"fields": jsonable_encoder(exc.errors())})
    logger.info(f"{request.method} {request.url.path} rejected: invalid request data")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GroundOpsError, ground_ops_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

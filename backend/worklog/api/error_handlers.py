"""Global exception handlers mapping domain errors onto HTTP responses.

NotFoundError -> 404, ValidationError -> 400 with the field map,
ServerError -> 500, TransportError -> 503. Anything else is a 500 with a
generic message.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from worklog.core.observability import get_logger
from worklog.domain.shared.exceptions import (
    NotFoundError,
    ServerError,
    TransportError,
    ValidationError,
)

logger = get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        logger.info("Not found", path=request.url.path, details=exc.details)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content=exc.to_dict()
        )

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        logger.info("Validation failed", path=request.url.path, errors=exc.errors)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content=exc.to_dict()
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ):
        errors = {}
        for error in exc.errors():
            # Drop the leading "body"/"query"/"path" segment
            loc = [str(part) for part in error["loc"][1:]] or [str(error["loc"][0])]
            errors[".".join(loc)] = error["msg"]
        logger.info("Request validation failed", path=request.url.path, errors=errors)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Validation Error", "errors": errors},
        )

    @app.exception_handler(ServerError)
    async def server_error_handler(request: Request, exc: ServerError):
        logger.error("Server error", path=request.url.path, details=exc.details)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=exc.to_dict()
        )

    @app.exception_handler(TransportError)
    async def transport_error_handler(request: Request, exc: TransportError):
        logger.error("Transport error", path=request.url.path, error=exc.message)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"message": "Service Unavailable"},
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception", path=request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal Server Error"},
        )

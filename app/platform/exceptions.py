import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.features.auth.services.identity_provider import IdentityProviderError
from app.features.evaluation.exceptions import FetchError
from app.platform.response import api_response


def add_exception_handlers(app):
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return api_response(message=str(exc.detail) or "Error", status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return api_response(
            message="Validation failed",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            data={"errors": exc.errors()},
        )

    @app.exception_handler(IdentityProviderError)
    async def identity_provider_exception_handler(request: Request, exc: IdentityProviderError):
        return api_response(
            message=exc.message,
            status_code=exc.status_code or status.HTTP_400_BAD_REQUEST,
        )

    @app.exception_handler(FetchError)
    async def fetch_exception_handler(request: Request, exc: FetchError):
        return api_response(
            message=str(exc),
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            data={"domain": exc.domain, "date_of_scan": exc.date_of_scan},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logging.exception(f"Unhandled exception: {exc}")
        return api_response(
            message="Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

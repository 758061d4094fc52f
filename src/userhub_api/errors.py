"""Error-to-status mapping and exception handlers."""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from userhub_api.middleware import get_cors_headers
from userhub_api.models.response import envelope_response, new_response
from userhub_common.errors import ErrorKind, ServiceError

logger = logging.getLogger(__name__)

# Unprocessable request body
BINDING_ERROR_STATUS = 422

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_code_for(error: Exception) -> int:
    """Map an error to an HTTP status code by its kind."""
    if isinstance(error, ServiceError):
        return STATUS_BY_KIND.get(error.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def kind_for_status(code: int) -> str:
    """Name an HTTP status the way error kinds are named, e.g. 405 -> method_not_allowed."""
    try:
        return HTTPStatus(code).phrase.lower().replace(" ", "_").replace("-", "_")
    except ValueError:
        return "http_error"


def register_exception_handlers(app: FastAPI, ui_url: str | None = None, environment: str = "development") -> None:
    """Attach envelope-producing exception handlers to the app."""

    @app.exception_handler(RequestValidationError)
    async def binding_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Malformed or invalid request bodies never reach the service."""
        code = BINDING_ERROR_STATUS
        logger.info("Rejected %s %s: %d binding error(s)", request.method, request.url.path, len(exc.errors()))
        return envelope_response(code, new_response(code, errors=jsonable_encoder(exc.errors())))

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
        code = status_code_for(exc)
        logger.info("%s %s failed with %s: %s", request.method, request.url.path, exc.kind.value, exc.message)
        headers = {"WWW-Authenticate": "Bearer"} if code == status.HTTP_401_UNAUTHORIZED else None
        return envelope_response(code, new_response(code, errors=exc.to_dict()), headers=headers)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Routing errors such as unknown paths or methods."""
        code = exc.status_code
        logger.info("%s %s answered %d: %s", request.method, request.url.path, code, exc.detail)
        envelope = new_response(code, errors={"kind": kind_for_status(code), "message": str(exc.detail)})
        return envelope_response(code, envelope, headers=exc.headers)

    # Ensures CORS headers are present on unexpected errors too
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled exception: %s", exc, exc_info=True)

        code = status.HTTP_500_INTERNAL_SERVER_ERROR
        cors_headers = get_cors_headers(request.headers.get("origin"), ui_url=ui_url, environment=environment)
        envelope = new_response(code, errors={"kind": ErrorKind.INTERNAL.value, "message": "internal server error"})
        return envelope_response(code, envelope, headers=cors_headers)

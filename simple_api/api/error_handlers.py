"""Error Handlers - global exception handlers for the user API.

Invariants:
    - SimpleApiError → its http_status with {"error", "message"}
    - RequestValidationError → 400 malformed_request (bad JSON or wrong body shape)
    - Routing errors (unknown path, wrong method) → structured JSON, never an empty body
    - Exception (catch-all) → 500 internal_error, never leaks internal details
    - The catch-all runs outside CORSMiddleware, so it sets the CORS header itself

Design Decisions:
    - Four-layer handler: domain, request validation, routing, catch-all
    - Malformed JSON normalized to the structured envelope instead of a raw
      parser diagnostic, so every failure has a machine code
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from simple_api.core.errors import MalformedRequestError, SimpleApiError

logger = logging.getLogger(__name__)

# FastAPI raises HTTPException(400) for bodies it cannot decode (e.g. bad UTF-8)
_ROUTING_ERRORS = {
    status.HTTP_400_BAD_REQUEST: ("malformed_request", "Invalid JSON format"),
    status.HTTP_404_NOT_FOUND: ("not_found", "Endpoint not found"),
    status.HTTP_405_METHOD_NOT_ALLOWED: ("method_not_allowed", "Method not allowed"),
}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_routing_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(SimpleApiError)
    async def domain_error_handler(request: Request, exc: SimpleApiError):
        """Handle all domain/infrastructure errors."""
        level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
        logger.log(
            level,
            f"{type(exc).__name__}: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle request parsing errors as malformed_request."""
        logger.warning(
            f"Malformed request on {request.url.path}: {exc.errors()}",
            extra={"error_code": "malformed_request", "path": request.url.path},
        )
        error = build_malformed_request_error(exc)
        return JSONResponse(
            status_code=error.http_status, content=error.to_response(),
        )


def _register_routing_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def routing_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        code, message = _ROUTING_ERRORS.get(
            exc.status_code, ("http_error", str(exc.detail)),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": code, "message": message},
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path, "method": request.method},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "internal_error",
                "message": "An unexpected error occurred",
            },
            headers=_cors_headers(request),
        )


def _cors_headers(request: Request) -> dict[str, str]:
    """CORS headers for responses rendered outside CORSMiddleware (500s)."""
    settings = getattr(request.app.state, "settings", None)
    origins = settings.cors_origins if settings else ["*"]
    origin = request.headers.get("origin")
    if "*" in origins:
        return {"Access-Control-Allow-Origin": "*"}
    if origin and origin in origins:
        return {"Access-Control-Allow-Origin": origin, "Vary": "Origin"}
    return {}


def build_malformed_request_error(
    exc: RequestValidationError,
) -> MalformedRequestError:
    """Translate Pydantic/JSON decode errors into MalformedRequestError."""
    errors = exc.errors()
    if any(e["type"] == "json_invalid" for e in errors):
        return MalformedRequestError("Invalid JSON format")
    return MalformedRequestError(
        "Request body does not match the expected shape",
        details=[
            {
                "field": ".".join(
                    str(loc) for loc in e["loc"] if loc != "body"
                ),
                "message": e["msg"],
            }
            for e in errors
        ],
    )

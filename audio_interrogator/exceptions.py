"""Exception handlers producing RFC 9457 problem+json responses."""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .error_codes import ErrorCategory
from .models import ErrorResponse, InnerError
from .services.errors import AudioInterrogatorError

logger = logging.getLogger(__name__)

PROBLEM_JSON_MEDIA_TYPE = "application/problem+json"


def _problem(
    status_code: int,
    detail: str,
    error_code: str,
    title: str,
    category: str | None = None,
    inner_error: InnerError | None = None,
) -> JSONResponse:
    """Build a problem+json response; DEVICE_NOT_FOUND -> /errors/device-not-found."""
    body = ErrorResponse(
        type="/errors/" + error_code.lower().replace("_", "-"),
        title=title,
        status=status_code,
        detail=detail,
        error_code=error_code,
        category=category,
        inner_error=inner_error,
    )
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        media_type=PROBLEM_JSON_MEDIA_TYPE,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register the problem+json handlers on the app."""

    @app.exception_handler(AudioInterrogatorError)
    async def audio_interrogator_error_handler(
        request: Request, exc: AudioInterrogatorError
    ) -> JSONResponse:
        inner_error = InnerError(**exc.inner_error) if exc.inner_error else None
        return _problem(
            exc.http_status,
            exc.message,
            exc.error_code,
            exc.title,
            category=exc.category,
            inner_error=inner_error,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Routing errors (unknown path, wrong method)."""
        return _problem(
            exc.status_code,
            str(exc.detail),
            f"HTTP_{exc.status_code}",
            HTTPStatus(exc.status_code).phrase,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        detail = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        return _problem(
            422,
            detail,
            "VALIDATION_ERROR",
            "Validation Error",
            category=ErrorCategory.VALIDATION.value,
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception("Unhandled error on %s", request.url.path)
        return _problem(
            500,
            "Internal server error",
            "INTERNAL_ERROR",
            "Internal Server Error",
            category=ErrorCategory.INTERNAL.value,
        )

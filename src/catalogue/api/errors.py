"""Map catalogue outcomes onto structured HTTP error responses.

Every error body has the same shape::

    {"kind": "NotFound", "error": {"product": ["Product 42 not found"]}}
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import ValidationError
from protean.integrations.fastapi import register_exception_handlers

from catalogue.exceptions import (
    CatalogueError,
    DuplicateReviewError,
    ProductNotFoundError,
    StorageConflictError,
    StorageUnavailableError,
)
from catalogue.utils.logging import get_logger

logger = get_logger(__name__)

_STATUS_BY_ERROR = {
    ProductNotFoundError: 404,
    DuplicateReviewError: 400,
    StorageConflictError: 503,
    StorageUnavailableError: 503,
}


def _body(kind: str, messages) -> dict:
    return {"kind": kind, "error": messages}


async def _catalogue_error(request: Request, exc: CatalogueError) -> JSONResponse:
    status = _STATUS_BY_ERROR.get(type(exc), 500)
    if status >= 500:
        logger.error("request_failed", path=request.url.path, kind=exc.kind, error=exc.messages)
    return JSONResponse(status_code=status, content=_body(exc.kind, exc.messages))


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content=_body("ValidationError", exc.messages))


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages: dict[str, list[str]] = {}
    for err in exc.errors():
        # Skip the "body"/"query" prefix so the key is the offending field
        field = ".".join(str(part) for part in err.get("loc", [])[1:]) or "request"
        messages.setdefault(field, []).append(err.get("msg", "Invalid value"))
    return JSONResponse(status_code=400, content=_body("ValidationError", messages))


def register_error_handlers(app: FastAPI) -> None:
    """Install protean's default handlers, then the catalogue-specific ones on top."""
    register_exception_handlers(app)
    for error_cls in _STATUS_BY_ERROR:
        app.add_exception_handler(error_cls, _catalogue_error)
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)

"""
Error Handlers - Panel Evaluation Engine
panel_eval/routers/errors.py

Maps domain exceptions and request validation failures to the standard
ErrorResponse envelope. Register with register_exception_handlers(app).
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from panel_eval.core.exceptions import (
    AuthorizationError,
    ConfigurationError,
    ConflictError,
    EntityNotFoundException,
    EvaluationValidationError,
    InvalidCredential,
    PanelEvalError,
    RepositoryException,
    Unauthenticated,
    VoteNotRecorded,
)
from panel_eval.models.responses import ErrorResponse

logger = logging.getLogger(__name__)


DEFAULT_MESSAGES = {
    "missing": "Field '{field}' is required",
    "float_type": "Field '{field}' must be a number",
    "float_parsing": "Field '{field}' must be a valid number",
    "string_type": "Field '{field}' must be a string",
    "string_too_short": "Field '{field}' is too short",
    "string_too_long": "Field '{field}' is too long",
    "bool_type": "Field '{field}' must be a boolean",
    "bool_parsing": "Field '{field}' must be a boolean",
    "dict_type": "Field '{field}' must be an object",
    "enum": "Field '{field}' has an invalid value",
    "value_error": "Field '{field}' has an invalid value",
    "json_invalid": "Malformed JSON request body",
    "extra_forbidden": "Unknown field '{field}' is not allowed",
}


def get_validation_message(field: str, error_type: str) -> str:
    for key, template in DEFAULT_MESSAGES.items():
        if key in error_type:
            return template.format(field=field)
    return f"Invalid value for field '{field}'"


def error_body(error_code: str, message: str, details: Optional[dict] = None) -> dict:
    return ErrorResponse(
        error_code=error_code,
        message=message,
        details=details,
        timestamp=datetime.now(timezone.utc),
    ).model_dump(mode="json")


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()

    if not errors:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=error_body("VALIDATION_ERROR", "Request validation failed"),
        )

    err = errors[0]
    error_type = err.get("type", "")
    loc = err.get("loc", [])

    if "json_invalid" in error_type:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body("INVALID_REQUEST", "Malformed JSON request body"),
        )

    field = ".".join(str(l) for l in loc if l != "body")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_body(
            "VALIDATION_ERROR",
            get_validation_message(field, error_type),
            {"field": field, "type": error_type} if field else None,
        ),
    )


def _status_for(exc: PanelEvalError) -> int:
    if isinstance(exc, EvaluationValidationError):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    if isinstance(exc, (Unauthenticated, InvalidCredential)):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, AuthorizationError):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, ConflictError):
        return status.HTTP_409_CONFLICT
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def panel_eval_exception_handler(request: Request, exc: PanelEvalError):
    status_code = _status_for(exc)
    if isinstance(exc, ConfigurationError):
        logger.error("configuration error while serving %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status_code,
            content=error_body("INTERNAL_SERVER_ERROR", "Unexpected server error"),
        )
    # authorization errors expose the reason only
    details = None if isinstance(exc, AuthorizationError) else exc.details
    return JSONResponse(
        status_code=status_code,
        content=error_body(exc.error_code, exc.message, details),
    )


async def not_found_exception_handler(request: Request, exc: EntityNotFoundException):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=error_body(
            f"{exc.entity_type.upper()}_NOT_FOUND",
            f"{exc.entity_type} not found",
        ),
    )


async def repository_exception_handler(request: Request, exc: RepositoryException):
    logger.error("record store failure while serving %s: %s", request.url.path, exc)
    if isinstance(exc, VoteNotRecorded):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=error_body(
                "VOTE_NOT_RECORDED",
                "Decision recorded but its vote could not be stored",
                {"vendor_id": exc.vendor_id, "final_decision": exc.final_decision},
            ),
        )
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=error_body("STORE_UNAVAILABLE", "Record store unavailable"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(PanelEvalError, panel_eval_exception_handler)
    app.add_exception_handler(EntityNotFoundException, not_found_exception_handler)
    app.add_exception_handler(RepositoryException, repository_exception_handler)

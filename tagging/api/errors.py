"""
Обработчики ошибок (Exception Handlers) для API.

Сервисы бросают доменные исключения (tagging.core.exceptions),
здесь они превращаются в HTTP ответы единого формата ErrorResponse.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..core.exceptions import AlreadyExistsError, NotFoundError, TaggingError, ValidationError
from .schemas import ErrorBody, ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


def _error_response(status_code: int, code: str, message: str, details=None) -> JSONResponse:
    body = ErrorResponse(error=ErrorBody(code=code, message=message, details=details))
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def tagging_error_handler(request: Request, exc: TaggingError) -> JSONResponse:
    """
    Обработчик доменных ошибок.

    NotFoundError -> 404, AlreadyExistsError -> 400 ALREADY_EXISTS,
    ValidationError -> 400 VALIDATION_ERROR.
    """
    if isinstance(exc, NotFoundError):
        status_code, code = status.HTTP_404_NOT_FOUND, "NOT_FOUND"
    elif isinstance(exc, AlreadyExistsError):
        status_code, code = status.HTTP_400_BAD_REQUEST, "ALREADY_EXISTS"
    elif isinstance(exc, ValidationError):
        status_code, code = status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR"
    else:
        status_code, code = status.HTTP_400_BAD_REQUEST, "TAGGING_ERROR"

    logger.warning(f"API Error: {code} - {exc}")
    return _error_response(status_code, code, str(exc))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Обработчик для ошибок валидации Pydantic (422).

    {"detail": [{"loc": ["body", "name"], "msg": "..."}]}
    превращается в
    {"error": {"code": "VALIDATION_ERROR", "details": [{"field": "name", ...}]}}
    """
    logger.warning(f"Validation Error: {exc.errors()}")

    details = []
    for error in exc.errors():
        field_path = error.get("loc", [])
        field_name = field_path[-1] if field_path else "unknown"

        # Если поле в body, убираем "body" из пути
        if len(field_path) > 1 and field_path[0] == "body":
            field_name = ".".join(str(p) for p in field_path[1:])

        details.append(ErrorDetail(field=str(field_name), message=error.get("msg", "Invalid value")))

    return _error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        "Ошибка валидации входных данных",
        details,
    )


def register_error_handlers(app: FastAPI) -> None:
    """Регистрирует все error handlers в приложении FastAPI."""
    app.add_exception_handler(TaggingError, tagging_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    logger.info("Error handlers registered")

"""
Исключения приложения и их обработчики для FastAPI.

Все ошибки бизнес-логики наследуются от AppException и превращаются
в JSON-ответ единого формата:

    {"detail": {"message": "...", "type": "...", "loc": [...]}}
"""

import traceback
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .logging import api_log as log


class AppException(Exception):
    """
    Базовое исключение приложения.

    Attributes:
        status_code (int): HTTP статус ответа.
        message (str): Сообщение для клиента.
        error_type (str): Машиночитаемый тип ошибки.
        loc (list[str] | None): Место ошибки (например, ["body", "email"]).
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Внутренняя ошибка сервера."
    default_error_type: str = "internal_error"

    def __init__(
        self,
        message: str | None = None,
        error_type: str | None = None,
        loc: list[str] | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.error_type = error_type or self.default_error_type
        self.loc = loc
        super().__init__(self.message)

    def to_detail(self) -> dict[str, Any]:
        """Возвращает тело ошибки для JSON-ответа."""
        detail: dict[str, Any] = {"message": self.message, "type": self.error_type}
        if self.loc:
            detail["loc"] = self.loc
        return detail


class BadRequestException(AppException):
    """Ошибка валидации или нарушение бизнес-правила (400)."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Некорректный запрос."
    default_error_type = "bad_request"


class UnauthorizedException(AppException):
    """Ошибка аутентификации (401)."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Требуется аутентификация."
    default_error_type = "unauthorized"


class ForbiddenException(AppException):
    """Доступ запрещен, например к чужому ресурсу (403)."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Доступ запрещен."
    default_error_type = "forbidden"


class NotFoundException(AppException):
    """Ресурс не найден (404)."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Ресурс не найден."
    default_error_type = "not_found"


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Обработчик исключений приложения."""
    log.info(f"{request.method} {request.url.path} -> {exc.status_code} ({exc.error_type}): {exc.message}")

    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None

    return JSONResponse(status_code=exc.status_code, content={"detail": exc.to_detail()}, headers=headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Обработчик ошибок валидации запроса.

    Возвращает 400 (а не стандартный для FastAPI 422) с первой ошибкой в `message`
    и полным списком ошибок в `errors`.
    """
    errors = exc.errors()
    first_error = errors[0] if errors else {}
    loc = [str(part) for part in first_error.get("loc", ())]

    log.info(f"{request.method} {request.url.path} -> 400 (validation_error): {errors}")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": {
                "message": first_error.get("msg", "Ошибка валидации запроса."),
                "type": "validation_error",
                "loc": loc,
                "errors": [
                    {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg")}
                    for error in errors
                ],
            }
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Обработчик HTTPException (например, 404 на несуществующий маршрут, 405)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": {"message": str(exc.detail), "type": "http_error"}},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Обработчик непредвиденных исключений (500).

    Сообщение исключения передается клиенту, трейсбек - только вне продакшена.
    """
    log.error(f"Необработанное исключение при {request.method} {request.url.path}: {exc}", exc_info=True)

    detail: dict[str, Any] = {"message": str(exc) or exc.__class__.__name__, "type": "internal_error"}

    if not settings.PRODUCTION:
        detail["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": detail})


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Регистрирует обработчики исключений в приложении.

    Args:
        app (FastAPI): Экземпляр приложения FastAPI.
    """
    app.add_exception_handler(AppException, app_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_exception_handler)

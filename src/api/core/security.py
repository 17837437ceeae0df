"""
Утилиты безопасности: JWT (PyJWT) и хеширование паролей (passlib + bcrypt).
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError
from passlib.context import CryptContext
from pydantic import ValidationError

from src.api.core.config import settings
from src.api.core.exceptions import UnauthorizedException
from src.api.core.logging import api_log as log
from src.api.schemas.auth_schema import TokenPayload

# Контекст хеширования паролей
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    """Возвращает bcrypt-хеш пароля."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Проверяет пароль по сохраненному хешу."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """
    Создает JWT токен доступа.

    Args:
        data (dict): Данные для кодирования в payload токена (например, {'user_id': user.id}).
        expires_delta (timedelta | None): Время жизни токена. Если None, используется значение из настроек.

    Returns:
        str: Сгенерированный JWT токен.
    """
    to_encode = data.copy()

    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    )

    # 'exp' должно быть Unix timestamp (int)
    to_encode["exp"] = int(expire.timestamp())

    log.debug(f"Создание JWT токена для payload {data} со сроком до {expire.isoformat()}")

    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def verify_and_decode_token(token: str) -> TokenPayload:
    """
    Проверяет и декодирует JWT токен, возвращая его payload.

    Args:
        token (str): JWT токен для проверки.

    Returns:
        TokenPayload: Pydantic модель с данными из payload токена.

    Raises:
        UnauthorizedException: Если токен невалиден, истек или payload некорректен.
    """
    try:
        # PyJWT проверяет подпись и срок действия (exp)
        payload_dict = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        token_payload = TokenPayload(**payload_dict)

    except ExpiredSignatureError:
        log.warning("Срок действия JWT токена истек.")
        raise UnauthorizedException(message="Срок действия токена истек.", error_type="token_expired") from None

    except InvalidTokenError as exc:
        log.warning(f"Невалидный токен: {exc}")
        raise UnauthorizedException(message="Невалидный токен.", error_type="invalid_token") from exc

    except ValidationError as exc:
        log.warning(f"Ошибка валидации payload токена: {exc.errors()}")
        raise UnauthorizedException(
            message="Некорректные данные в токене.", error_type="invalid_token_payload"
        ) from exc

    return token_payload

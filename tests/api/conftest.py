from datetime import date, datetime, timezone
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.core.database import get_db_session
from src.api.core.security import create_access_token, get_password_hash
from src.api.main import app
from src.api.models import User
from src.api.utils import date_utils

# --- ФИКСТУРЫ, СПЕЦИФИЧНЫЕ ДЛЯ ТЕСТИРОВАНИЯ API ---

TEST_USER_PASSWORD = "secret123"

# "Сейчас" для API-тестов: среда, середина дня по UTC
FROZEN_NOW = datetime(2024, 3, 13, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def frozen_clock(monkeypatch: pytest.MonkeyPatch) -> datetime:
    """Фиксирует текущее время сервисов, чтобы "сегодня" в тесте и на сервере совпадало."""
    monkeypatch.setattr(date_utils, "utc_now", lambda: FROZEN_NOW)
    return FROZEN_NOW


@pytest.fixture
def today(frozen_clock: datetime) -> date:
    return frozen_clock.date()


@pytest_asyncio.fixture
async def test_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Создает и предоставляет тестовый клиент FastAPI для каждого API-теста.

    Зависимость get_db_session переопределяется сессией из фикстуры `db_session`.
    """

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db_session] = override_get_db_session

    # raise_app_exceptions=False: ответ 500 отдается клиенту, а не пробрасывается в тест
    transport = ASGITransport(app=app, raise_app_exceptions=False)

    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    del app.dependency_overrides[get_db_session]


@pytest_asyncio.fixture
async def registered_user(test_client: AsyncClient) -> dict:
    """Регистрирует пользователя через API и возвращает тело ответа (профиль + токен)."""
    payload = {"name": "Alice", "email": "alice@example.com", "password": TEST_USER_PASSWORD}

    response = await test_client.post("/api/auth/register", json=payload)
    assert response.status_code == 201, response.text

    return response.json()


@pytest_asyncio.fixture
async def user_auth_headers(registered_user: dict) -> dict[str, str]:
    return {"Authorization": f"Bearer {registered_user['access_token']}"}


@pytest_asyncio.fixture
async def another_user(db_session: AsyncSession) -> User:
    """Второй пользователь, созданный напрямую в БД."""
    user = User(name="Bob", email="bob@example.com", hashed_password=get_password_hash("bob-password"))
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture
async def another_user_auth_headers(another_user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(data={'user_id': another_user.id})}"}

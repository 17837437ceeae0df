from datetime import date

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette import status

from src.api.models import Habit, HabitCategory, HabitLog, User

HABIT_PAYLOAD = {
    "name": "Drink Water",
    "category": "Health",
    "description": "2 liters per day",
    "frequency": "Daily",
    "reminder_enabled": True,
    "reminder_time": "09:00",
    "reminder_days": ["Mon", "Wed"],
}


async def create_habit(test_client: AsyncClient, headers: dict[str, str], **overrides) -> dict:
    response = await test_client.post("/api/habits/", json={**HABIT_PAYLOAD, **overrides}, headers=headers)
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()


async def test_create_habit(test_client: AsyncClient, user_auth_headers: dict[str, str], db_session: AsyncSession):
    """Тест создания новой привычки."""
    response = await test_client.post("/api/habits/", json=HABIT_PAYLOAD, headers=user_auth_headers)

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["name"] == "Drink Water"
    assert data["category"] == "Health"
    assert data["frequency"] == "Daily"
    assert data["current_streak"] == 0
    assert data["longest_streak"] == 0
    assert data["reminder_time"] == "09:00:00"
    assert data["reminder_days"] == ["Mon", "Wed"]
    assert data["start_date"]

    # Проверяем в БД
    habit = (await db_session.execute(select(Habit).where(Habit.name == "Drink Water"))).scalar_one_or_none()
    assert habit is not None
    assert habit.category == HabitCategory.HEALTH


async def test_create_habit_requires_category(test_client: AsyncClient, user_auth_headers: dict[str, str]):
    payload = {key: value for key, value in HABIT_PAYLOAD.items() if key != "category"}

    response = await test_client.post("/api/habits/", json=payload, headers=user_auth_headers)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"]["loc"] == ["body", "category"]


async def test_create_custom_habit_requires_days(test_client: AsyncClient, user_auth_headers: dict[str, str]):
    response = await test_client.post(
        "/api/habits/", json={**HABIT_PAYLOAD, "frequency": "custom"}, headers=user_auth_headers
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST

    habit = await create_habit(test_client, user_auth_headers, frequency="custom", custom_days=["Tue", "Thu"])
    assert habit["custom_days"] == ["Tue", "Thu"]


async def test_get_habits_list_newest_first(test_client: AsyncClient, user_auth_headers: dict[str, str]):
    """Тест получения списка привычек (сначала пуст, затем новые привычки первыми)."""
    response = await test_client.get("/api/habits/", headers=user_auth_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == []

    first = await create_habit(test_client, user_auth_headers, name="First")
    second = await create_habit(test_client, user_auth_headers, name="Second")

    response = await test_client.get("/api/habits/", headers=user_auth_headers)
    assert [habit["id"] for habit in response.json()] == [second["id"], first["id"]]


async def test_get_habit_by_id(test_client: AsyncClient, user_auth_headers: dict[str, str]):
    habit = await create_habit(test_client, user_auth_headers)

    response = await test_client.get(f"/api/habits/{habit['id']}", headers=user_auth_headers)

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["name"] == "Drink Water"


async def test_update_habit_partial(test_client: AsyncClient, user_auth_headers: dict[str, str]):
    habit = await create_habit(test_client, user_auth_headers)

    response = await test_client.put(
        f"/api/habits/{habit['id']}",
        json={"name": "Drink more water", "reminder_time": None, "description": None},
        headers=user_auth_headers,
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["name"] == "Drink more water"
    assert data["reminder_time"] is None
    # null для обязательного поля игнорируется
    assert data["description"] == "2 liters per day"
    assert data["category"] == "Health"


async def test_update_habit_to_custom_without_days_returns_400(
    test_client: AsyncClient, user_auth_headers: dict[str, str]
):
    habit = await create_habit(test_client, user_auth_headers)

    response = await test_client.put(
        f"/api/habits/{habit['id']}", json={"frequency": "custom"}, headers=user_auth_headers
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"]["type"] == "custom_days_required"


async def test_update_missing_habit_returns_404(test_client: AsyncClient, user_auth_headers: dict[str, str]):
    response = await test_client.put("/api/habits/9999", json={"name": "Ghost"}, headers=user_auth_headers)

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"]["type"] == "habit_not_found"


@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE"])
@pytest.mark.parametrize("habit_id", [10**19, 2**31, 0])
async def test_habit_id_out_of_integer_range_returns_400(
    test_client: AsyncClient, user_auth_headers: dict[str, str], method: str, habit_id: int
):
    """ID вне диапазона колонки Integer отклоняется валидацией."""
    payload = {"name": "Ghost"} if method == "PUT" else None

    response = await test_client.request(method, f"/api/habits/{habit_id}", json=payload, headers=user_auth_headers)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"]["loc"] == ["path", "habit_id"]


async def test_delete_habit_removes_its_logs(
    test_client: AsyncClient, user_auth_headers: dict[str, str], db_session: AsyncSession, today: date
):
    """Тест удаления привычки вместе с отметками."""
    habit = await create_habit(test_client, user_auth_headers, name="To Delete")
    log_response = await test_client.post(
        "/api/logs/", json={"habit_id": habit["id"], "date": today.isoformat()}, headers=user_auth_headers
    )
    assert log_response.status_code == status.HTTP_201_CREATED

    delete_response = await test_client.delete(f"/api/habits/{habit['id']}", headers=user_auth_headers)
    assert delete_response.status_code == status.HTTP_204_NO_CONTENT

    get_response = await test_client.get(f"/api/habits/{habit['id']}", headers=user_auth_headers)
    assert get_response.status_code == status.HTTP_404_NOT_FOUND

    logs = (await db_session.execute(select(HabitLog).where(HabitLog.habit_id == habit["id"]))).scalars().all()
    assert logs == []


async def test_security_cannot_access_others_habit(
    test_client: AsyncClient,
    user_auth_headers: dict[str, str],
    another_user: User,
    db_session: AsyncSession,
):
    """
    Security Test: Пользователь А не может прочитать, изменить или удалить привычку Пользователя Б.
    """
    habit = Habit(user_id=another_user.id, name="Secret Habit", category=HabitCategory.PERSONAL)
    db_session.add(habit)
    await db_session.commit()
    await db_session.refresh(habit)
    habit_id = habit.id

    get_response = await test_client.get(f"/api/habits/{habit_id}", headers=user_auth_headers)
    put_response = await test_client.put(f"/api/habits/{habit_id}", json={"name": "Mine"}, headers=user_auth_headers)
    delete_response = await test_client.delete(f"/api/habits/{habit_id}", headers=user_auth_headers)

    assert get_response.status_code == status.HTTP_403_FORBIDDEN
    assert put_response.status_code == status.HTTP_403_FORBIDDEN
    assert delete_response.status_code == status.HTTP_403_FORBIDDEN

    # Убедимся, что привычка все еще в БД и не изменилась
    stored = (
        await db_session.execute(select(Habit).where(Habit.id == habit_id).execution_options(populate_existing=True))
    ).scalar_one()
    assert stored.name == "Secret Habit"

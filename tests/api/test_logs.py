from datetime import date, timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette import status

from src.api.models import Habit, HabitCategory, HabitLog, User


async def create_habit(
    test_client: AsyncClient, headers: dict[str, str], name: str = "Read", **extra_fields: object
) -> int:
    payload = {"name": name, "category": "Learning", **extra_fields}
    response = await test_client.post("/api/habits/", json=payload, headers=headers)
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()["id"]


async def log_completion(
    test_client: AsyncClient, headers: dict[str, str], habit_id: int, log_date: date, completed: bool = True
):
    return await test_client.post(
        "/api/logs/",
        json={"habit_id": habit_id, "date": log_date.isoformat(), "completed": completed},
        headers=headers,
    )


async def count_logs(db_session: AsyncSession, habit_id: int) -> int:
    statement = select(func.count()).select_from(HabitLog).where(HabitLog.habit_id == habit_id)
    return (await db_session.execute(statement)).scalar_one()


async def test_create_log_returns_201_and_streaks(
    test_client: AsyncClient, user_auth_headers: dict[str, str], today: date
):
    habit_id = await create_habit(test_client, user_auth_headers)

    response = await log_completion(test_client, user_auth_headers, habit_id, today)

    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["already_completed"] is False
    assert data["log"]["habit_id"] == habit_id
    assert data["log"]["completed"] is True
    assert data["streaks"] == {"current_streak": 1, "longest_streak": 1}


async def test_three_consecutive_days_give_streak_of_three(
    test_client: AsyncClient, user_auth_headers: dict[str, str], today: date
):
    habit_id = await create_habit(test_client, user_auth_headers)

    for days_ago in (2, 1, 0):
        response = await log_completion(test_client, user_auth_headers, habit_id, today - timedelta(days=days_ago))
        assert response.status_code == status.HTTP_201_CREATED

    assert response.json()["streaks"] == {"current_streak": 3, "longest_streak": 3}

    # Кэш серий в привычке обновлен
    habit_response = await test_client.get(f"/api/habits/{habit_id}", headers=user_auth_headers)
    assert habit_response.json()["current_streak"] == 3
    assert habit_response.json()["longest_streak"] == 3


async def test_gap_breaks_current_streak(test_client: AsyncClient, user_auth_headers: dict[str, str], today: date):
    habit_id = await create_habit(test_client, user_auth_headers)

    await log_completion(test_client, user_auth_headers, habit_id, today - timedelta(days=2))
    response = await log_completion(test_client, user_auth_headers, habit_id, today)

    assert response.json()["streaks"] == {"current_streak": 1, "longest_streak": 1}


@pytest.mark.parametrize(
    "frequency_fields",
    [{"frequency": "Weekly"}, {"frequency": "custom", "custom_days": ["Wed"]}],
    ids=["weekly", "custom"],
)
async def test_non_daily_habit_week_apart_logs_do_not_chain(
    test_client: AsyncClient, user_auth_headers: dict[str, str], today: date, frequency_fields: dict
):
    """Серия считается по календарным дням и для Weekly/custom: отметки через неделю не складываются."""
    habit_id = await create_habit(test_client, user_auth_headers, name="Long run", **frequency_fields)

    await log_completion(test_client, user_auth_headers, habit_id, today - timedelta(days=7))
    response = await log_completion(test_client, user_auth_headers, habit_id, today)

    assert response.json()["streaks"] == {"current_streak": 1, "longest_streak": 1}


@pytest.mark.parametrize(
    "frequency_fields",
    [{"frequency": "Weekly"}, {"frequency": "custom", "custom_days": ["Wed"]}],
    ids=["weekly", "custom"],
)
async def test_non_daily_habit_consecutive_days_chain(
    test_client: AsyncClient, user_auth_headers: dict[str, str], today: date, frequency_fields: dict
):
    habit_id = await create_habit(test_client, user_auth_headers, name="Long run", **frequency_fields)

    await log_completion(test_client, user_auth_headers, habit_id, today - timedelta(days=1))
    response = await log_completion(test_client, user_auth_headers, habit_id, today)

    assert response.json()["streaks"] == {"current_streak": 2, "longest_streak": 2}

    progress = await test_client.get(f"/api/logs/{habit_id}", headers=user_auth_headers)
    assert progress.json()["frequency"] == frequency_fields["frequency"]
    assert progress.json()["current_streak"] == 2


async def test_duplicate_log_returns_already_completed(
    test_client: AsyncClient, user_auth_headers: dict[str, str], db_session: AsyncSession, today: date
):
    habit_id = await create_habit(test_client, user_auth_headers)

    first = await log_completion(test_client, user_auth_headers, habit_id, today)
    second = await log_completion(test_client, user_auth_headers, habit_id, today)

    assert first.status_code == status.HTTP_201_CREATED
    assert second.status_code == status.HTTP_200_OK
    assert second.json()["already_completed"] is True
    assert second.json()["message"] == "Habit already marked as completed for this date"
    assert second.json()["streaks"] is None
    assert second.json()["log"]["id"] == first.json()["log"]["id"]

    # Вторая запись не создана
    assert await count_logs(db_session, habit_id) == 1


async def test_not_completed_log_can_be_completed_later(
    test_client: AsyncClient, user_auth_headers: dict[str, str], db_session: AsyncSession, today: date
):
    habit_id = await create_habit(test_client, user_auth_headers)

    skipped = await log_completion(test_client, user_auth_headers, habit_id, today, completed=False)
    assert skipped.status_code == status.HTTP_201_CREATED
    assert skipped.json()["streaks"] == {"current_streak": 0, "longest_streak": 0}

    completed = await log_completion(test_client, user_auth_headers, habit_id, today)

    assert completed.status_code == status.HTTP_201_CREATED
    data = completed.json()
    assert data["already_completed"] is False
    assert data["message"] == "Habit marked as completed"
    assert data["log"]["id"] == skipped.json()["log"]["id"]
    assert data["log"]["completed"] is True
    assert data["streaks"] == {"current_streak": 1, "longest_streak": 1}
    assert await count_logs(db_session, habit_id) == 1


async def test_repeated_not_completed_log_is_reported_as_such(
    test_client: AsyncClient, user_auth_headers: dict[str, str], today: date
):
    habit_id = await create_habit(test_client, user_auth_headers)

    await log_completion(test_client, user_auth_headers, habit_id, today, completed=False)
    response = await log_completion(test_client, user_auth_headers, habit_id, today, completed=False)

    assert response.status_code == status.HTTP_200_OK
    assert response.json()["already_completed"] is True
    assert response.json()["message"] == "Habit already logged as not completed for this date"
    assert response.json()["log"]["completed"] is False


async def test_log_date_with_time_part_is_truncated(
    test_client: AsyncClient, user_auth_headers: dict[str, str], today: date
):
    habit_id = await create_habit(test_client, user_auth_headers)
    yesterday = today - timedelta(days=1)

    response = await test_client.post(
        "/api/logs/",
        json={"habit_id": habit_id, "date": f"{yesterday.isoformat()}T23:15:00Z"},
        headers=user_auth_headers,
    )

    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["log"]["date"] == yesterday.isoformat()


async def test_future_log_date_returns_400(test_client: AsyncClient, user_auth_headers: dict[str, str], today: date):
    habit_id = await create_habit(test_client, user_auth_headers)

    response = await log_completion(test_client, user_auth_headers, habit_id, today + timedelta(days=2))

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"]["type"] == "log_date_in_future"


async def test_log_requires_habit_id_and_date(
    test_client: AsyncClient, user_auth_headers: dict[str, str], today: date
):
    response = await test_client.post("/api/logs/", json={"date": today.isoformat()}, headers=user_auth_headers)

    assert response.status_code == status.HTTP_400_BAD_REQUEST


async def test_log_habit_id_out_of_integer_range_returns_400(
    test_client: AsyncClient, user_auth_headers: dict[str, str], today: date
):
    response = await log_completion(test_client, user_auth_headers, 10**19, today)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"]["loc"] == ["body", "habit_id"]


async def test_progress_habit_id_out_of_integer_range_returns_400(
    test_client: AsyncClient, user_auth_headers: dict[str, str]
):
    response = await test_client.get(f"/api/logs/{2**31}", headers=user_auth_headers)

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"]["loc"] == ["path", "habit_id"]


async def test_log_for_missing_habit_returns_404(
    test_client: AsyncClient, user_auth_headers: dict[str, str], today: date
):
    response = await log_completion(test_client, user_auth_headers, 9999, today)

    assert response.status_code == status.HTTP_404_NOT_FOUND


async def test_log_for_others_habit_returns_403(
    test_client: AsyncClient,
    user_auth_headers: dict[str, str],
    another_user: User,
    db_session: AsyncSession,
    today: date,
):
    habit = Habit(user_id=another_user.id, name="Not yours", category=HabitCategory.WORK)
    db_session.add(habit)
    await db_session.commit()
    await db_session.refresh(habit)

    post_response = await log_completion(test_client, user_auth_headers, habit.id, today)
    get_response = await test_client.get(f"/api/logs/{habit.id}", headers=user_auth_headers)

    assert post_response.status_code == status.HTTP_403_FORBIDDEN
    assert get_response.status_code == status.HTTP_403_FORBIDDEN


async def test_get_habit_logs_recomputes_streaks(
    test_client: AsyncClient,
    user_auth_headers: dict[str, str],
    registered_user: dict,
    db_session: AsyncSession,
    today: date,
):
    """Отметки, добавленные в обход API, учитываются при запросе прогресса привычки."""
    habit_id = await create_habit(test_client, user_auth_headers)

    for days_ago in (0, 1, 3, 4, 5):
        db_session.add(
            HabitLog(habit_id=habit_id, user_id=registered_user["id"], date=today - timedelta(days=days_ago))
        )
    await db_session.commit()

    response = await test_client.get(f"/api/logs/{habit_id}", headers=user_auth_headers)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["habit_name"] == "Read"
    assert data["current_streak"] == 2
    assert data["longest_streak"] == 3
    assert data["total_completed"] == 5
    # Новые отметки первыми
    assert [item["date"] for item in data["logs"]][:2] == [today.isoformat(), (today - timedelta(days=1)).isoformat()]

    # Пересчитанные серии сохранены в привычке
    habit_response = await test_client.get(f"/api/habits/{habit_id}", headers=user_auth_headers)
    assert habit_response.json()["current_streak"] == 2
    assert habit_response.json()["longest_streak"] == 3

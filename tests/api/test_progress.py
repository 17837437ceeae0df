from datetime import date, timedelta

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from starlette import status

from src.api.models import Habit, HabitCategory, HabitLog, User
from src.api.utils.progress_utils import get_week_bounds


async def add_habit(db_session: AsyncSession, user_id: int, name: str) -> Habit:
    habit = Habit(user_id=user_id, name=name, category=HabitCategory.FITNESS)
    db_session.add(habit)
    await db_session.commit()
    await db_session.refresh(habit)
    return habit


def add_logs(db_session: AsyncSession, habit: Habit, *dates: date, completed: bool = True) -> None:
    for log_date in dates:
        db_session.add(HabitLog(habit_id=habit.id, user_id=habit.user_id, date=log_date, completed=completed))


async def test_weekly_progress_without_habits(test_client: AsyncClient, user_auth_headers: dict[str, str]):
    response = await test_client.get("/api/progress/weekly", headers=user_auth_headers)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["total_habits"] == 0
    assert data["completion_percentage"] == 0
    assert data["daily_data"] == []
    assert data["insights"] is None
    assert data["message"] == "No habits created yet"


async def test_weekly_progress_two_habits_five_completions(
    test_client: AsyncClient,
    user_auth_headers: dict[str, str],
    registered_user: dict,
    db_session: AsyncSession,
    today: date,
):
    """2 привычки и 5 выполнений за неделю: round(5 / 14 * 100) = 36%."""
    monday, sunday = get_week_bounds(today)
    exercise = await add_habit(db_session, registered_user["id"], "Exercise")
    stretch = await add_habit(db_session, registered_user["id"], "Stretch")

    add_logs(db_session, exercise, monday, monday + timedelta(days=1), monday + timedelta(days=2))
    add_logs(db_session, stretch, monday, monday + timedelta(days=1))
    # Не учитываются: прошлая неделя и невыполненная отметка
    add_logs(db_session, stretch, monday - timedelta(days=1))
    add_logs(db_session, stretch, monday + timedelta(days=3), completed=False)
    await db_session.commit()

    response = await test_client.get("/api/progress/weekly", headers=user_auth_headers)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["week_start"] == monday.isoformat()
    assert data["week_end"] == sunday.isoformat()
    assert data["total_habits"] == 2
    assert data["total_completions"] == 5
    assert data["days_active"] == 3
    assert data["completion_percentage"] == 36
    assert [day["day"] for day in data["daily_data"]] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    assert [day["percentage"] for day in data["daily_data"]] == [100, 100, 50, 0, 0, 0, 0]
    assert data["insights"]["best_day"]["day"] == "Mon"
    assert data["insights"]["consistency"] == "Good"
    assert data["message"] is None


async def test_monthly_progress(
    test_client: AsyncClient,
    user_auth_headers: dict[str, str],
    registered_user: dict,
    db_session: AsyncSession,
    today: date,
):
    first_day = today.replace(day=1)
    habit = await add_habit(db_session, registered_user["id"], "Run")
    add_logs(db_session, habit, first_day, first_day + timedelta(days=1))
    await db_session.commit()

    response = await test_client.get("/api/progress/monthly", headers=user_auth_headers)

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    days_in_month = len(data["daily_data"])
    assert data["month_start"] == first_day.isoformat()
    assert data["month_name"] == first_day.strftime("%B")
    assert data["daily_data"][-1]["day"] == days_in_month
    assert data["total_completions"] == 2
    assert data["days_active"] == 2
    assert data["weekly_data"][0] == {"week": 1, "completions": 2, "percentage": 29, "days": 7}
    assert sum(week["days"] for week in data["weekly_data"]) == days_in_month
    assert data["insights"]["best_week"] == "Week 1"
    assert data["insights"]["best_week_percentage"] == 29
    assert data["insights"]["consistency"] == "Needs Improvement"


async def test_monthly_progress_without_habits(test_client: AsyncClient, user_auth_headers: dict[str, str]):
    response = await test_client.get("/api/progress/monthly", headers=user_auth_headers)

    data = response.json()
    assert data["weekly_data"] == []
    assert data["insights"] is None
    assert data["message"] == "No habits created yet"


async def test_calendar_returns_month_logs(
    test_client: AsyncClient,
    user_auth_headers: dict[str, str],
    registered_user: dict,
    db_session: AsyncSession,
):
    habit = await add_habit(db_session, registered_user["id"], "Meditate")
    add_logs(db_session, habit, date(2024, 3, 1), date(2024, 3, 31), date(2024, 4, 1))
    await db_session.commit()

    response = await test_client.get(
        "/api/progress/calendar", params={"year": 2024, "month": 3}, headers=user_auth_headers
    )

    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["year"] == 2024
    assert data["month"] == 3
    assert data["month_name"] == "March"
    assert [item["name"] for item in data["habits"]] == ["Meditate"]
    assert [item["date"] for item in data["logs"]] == ["2024-03-01", "2024-03-31"]


async def test_calendar_invalid_month_returns_400(test_client: AsyncClient, user_auth_headers: dict[str, str]):
    response = await test_client.get("/api/progress/calendar", params={"month": 13}, headers=user_auth_headers)

    assert response.status_code == status.HTTP_400_BAD_REQUEST


async def test_progress_ignores_other_users_logs(
    test_client: AsyncClient,
    user_auth_headers: dict[str, str],
    registered_user: dict,
    another_user: User,
    db_session: AsyncSession,
    today: date,
):
    await add_habit(db_session, registered_user["id"], "Mine")
    foreign_habit = await add_habit(db_session, another_user.id, "Theirs")
    add_logs(db_session, foreign_habit, today)
    await db_session.commit()

    response = await test_client.get("/api/progress/weekly", headers=user_auth_headers)

    assert response.json()["total_habits"] == 1
    assert response.json()["total_completions"] == 0

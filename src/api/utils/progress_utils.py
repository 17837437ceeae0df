"""Арифметика статистики прогресса: диапазоны дат, проценты, оценки регулярности."""

import calendar
from collections import Counter
from datetime import date, timedelta
from typing import Iterable, Sequence

WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def rounded_percentage(part: int, whole: int) -> int:
    """
    Возвращает round(part / whole * 100) с округлением половины вверх (5/14 -> 36).

    Для whole <= 0 возвращает 0.
    """
    if whole <= 0:
        return 0
    # Целочисленная арифметика: floor(part * 100 / whole + 0.5)
    return (200 * part + whole) // (2 * whole)


def get_week_bounds(today: date) -> tuple[date, date]:
    """Возвращает понедельник и воскресенье недели, в которую входит `today`."""
    monday = today - timedelta(days=today.weekday())
    return monday, monday + timedelta(days=6)


def get_month_bounds(year: int, month: int) -> tuple[date, date]:
    """Возвращает первый и последний день месяца."""
    days_in_month = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, days_in_month)


def get_month_name(month: int) -> str:
    """Название месяца на английском ("January")."""
    return calendar.month_name[month]


def iter_days(start: date, end: date) -> list[date]:
    """Список дат от start до end включительно."""
    return [start + timedelta(days=offset) for offset in range((end - start).days + 1)]


def count_completions_by_date(completed_dates: Iterable[date]) -> Counter[date]:
    """Количество выполненных отметок на каждую дату."""
    return Counter(completed_dates)


def weekly_consistency(days_active: int) -> str:
    """Оценка регулярности за неделю по количеству активных дней."""
    if days_active >= 5:
        return "Excellent"
    if days_active >= 3:
        return "Good"
    return "Needs Improvement"


def monthly_consistency(completion_percentage: int) -> str:
    """Оценка регулярности за месяц по общему проценту выполнения."""
    if completion_percentage >= 80:
        return "Excellent"
    if completion_percentage >= 60:
        return "Good"
    if completion_percentage >= 40:
        return "Fair"
    return "Needs Improvement"


def split_into_weeks(daily_completions: Sequence[int], total_habits: int) -> list[dict[str, int]]:
    """
    Делит месяц на недели по 7 дней начиная с 1-го числа.

    Args:
        daily_completions (Sequence[int]): Выполнения по дням месяца по порядку.
        total_habits (int): Количество привычек пользователя.

    Returns:
        list[dict[str, int]]: Недели с полями week, completions, percentage, days.
    """
    weeks = []

    for week_number, offset in enumerate(range(0, len(daily_completions), 7), start=1):
        chunk = daily_completions[offset : offset + 7]
        completions = sum(chunk)
        weeks.append(
            {
                "week": week_number,
                "completions": completions,
                "percentage": rounded_percentage(completions, total_habits * len(chunk)),
                "days": len(chunk),
            }
        )

    return weeks

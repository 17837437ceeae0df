"""Расчет серий (стриков) выполнения привычки по датам выполненных отметок."""

from datetime import date, timedelta
from typing import Iterable, NamedTuple


class Streaks(NamedTuple):
    """Текущая и максимальная серия выполнений."""

    current_streak: int
    longest_streak: int


def calculate_current_streak(completed_dates: Iterable[date], today: date) -> int:
    """
    Считает серию дней подряд, заканчивающуюся сегодняшним днем.

    Даты перебираются по убыванию, начиная с `today`: каждая следующая дата должна
    быть ровно на день раньше предыдущей. Первое несовпадение прерывает серию,
    поэтому без отметки за сегодня серия равна 0.

    Args:
        completed_dates (Iterable[date]): Даты выполненных отметок.
        today (date): Дата "сегодня" для пользователя.

    Returns:
        int: Длина текущей серии.
    """
    current_streak = 0
    expected_date = today

    for completed_date in sorted(set(completed_dates), reverse=True):
        if completed_date != expected_date:
            break
        current_streak += 1
        expected_date -= timedelta(days=1)

    return current_streak


def calculate_longest_streak(completed_dates: Iterable[date]) -> int:
    """
    Находит самую длинную серию календарных дней подряд.

    Args:
        completed_dates (Iterable[date]): Даты выполненных отметок.

    Returns:
        int: Длина максимальной серии (0, если отметок нет).
    """
    longest_streak = 0
    run_length = 0
    previous_date: date | None = None

    for completed_date in sorted(set(completed_dates)):
        if previous_date is not None and (completed_date - previous_date).days == 1:
            run_length += 1
        else:
            run_length = 1

        longest_streak = max(longest_streak, run_length)
        previous_date = completed_date

    return longest_streak


def calculate_streaks(completed_dates: Iterable[date], today: date) -> Streaks:
    """
    Считает текущую и максимальную серию выполнений.

    Серия всегда измеряется в календарных днях, в том числе для привычек
    с периодичностью Weekly и custom.

    Args:
        completed_dates (Iterable[date]): Даты выполненных отметок одной привычки.
        today (date): Дата "сегодня" для пользователя.

    Returns:
        Streaks: (current_streak, longest_streak).
    """
    dates = set(completed_dates)

    if not dates:
        return Streaks(current_streak=0, longest_streak=0)

    return Streaks(
        current_streak=calculate_current_streak(dates, today),
        longest_streak=calculate_longest_streak(dates),
    )

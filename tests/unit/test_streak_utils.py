from datetime import date, timedelta

import pytest

from src.api.utils.streak_utils import Streaks, calculate_current_streak, calculate_longest_streak, calculate_streaks

TODAY = date(2024, 3, 15)


def days_ago(*offsets: int) -> list[date]:
    return [TODAY - timedelta(days=offset) for offset in offsets]


def test_no_dates_gives_zero_streaks():
    assert calculate_streaks([], TODAY) == Streaks(current_streak=0, longest_streak=0)


def test_three_consecutive_days_ending_today():
    assert calculate_streaks(days_ago(0, 1, 2), TODAY) == Streaks(current_streak=3, longest_streak=3)


def test_gap_breaks_current_streak():
    assert calculate_streaks(days_ago(0, 2), TODAY) == Streaks(current_streak=1, longest_streak=1)


def test_current_streak_is_zero_without_today():
    # Вчерашняя серия не считается текущей
    assert calculate_current_streak(days_ago(1, 2, 3), TODAY) == 0
    assert calculate_longest_streak(days_ago(1, 2, 3)) == 3


def test_duplicate_dates_are_counted_once():
    assert calculate_streaks(days_ago(0, 0, 1, 1), TODAY) == Streaks(current_streak=2, longest_streak=2)


def test_future_date_breaks_current_streak():
    dates = [TODAY + timedelta(days=1), *days_ago(0, 1)]

    assert calculate_current_streak(dates, TODAY) == 0


@pytest.mark.parametrize(
    ("offsets", "expected"),
    [
        ((0,), 1),
        ((10, 9, 8, 7, 0, 1), 4),
        ((0, 1, 5, 6, 7), 3),
        ((3, 5, 7), 1),
    ],
)
def test_longest_streak(offsets: tuple[int, ...], expected: int):
    assert calculate_longest_streak(days_ago(*offsets)) == expected


def test_longest_streak_crosses_month_boundary():
    dates = [date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]

    assert calculate_longest_streak(dates) == 3

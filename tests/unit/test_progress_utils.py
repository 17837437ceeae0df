from datetime import date

import pytest

from src.api.utils.progress_utils import (
    count_completions_by_date,
    get_month_bounds,
    get_month_name,
    get_week_bounds,
    iter_days,
    monthly_consistency,
    rounded_percentage,
    split_into_weeks,
    weekly_consistency,
)


@pytest.mark.parametrize(
    ("part", "whole", "expected"),
    [
        (5, 14, 36),
        (1, 8, 13),  # 12.5 округляется вверх
        (1, 3, 33),
        (2, 3, 67),
        (7, 7, 100),
        (0, 7, 0),
        (3, 0, 0),
    ],
)
def test_rounded_percentage(part: int, whole: int, expected: int):
    assert rounded_percentage(part, whole) == expected


def test_week_bounds_start_on_monday():
    # 2024-03-13 - среда
    assert get_week_bounds(date(2024, 3, 13)) == (date(2024, 3, 11), date(2024, 3, 17))
    assert get_week_bounds(date(2024, 3, 11)) == (date(2024, 3, 11), date(2024, 3, 17))
    assert get_week_bounds(date(2024, 3, 17)) == (date(2024, 3, 11), date(2024, 3, 17))


def test_month_bounds_and_name():
    assert get_month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
    assert get_month_bounds(2023, 12) == (date(2023, 12, 1), date(2023, 12, 31))
    assert get_month_name(3) == "March"


def test_iter_days_is_inclusive():
    days = iter_days(date(2024, 3, 30), date(2024, 4, 2))

    assert days == [date(2024, 3, 30), date(2024, 3, 31), date(2024, 4, 1), date(2024, 4, 2)]


def test_count_completions_by_date():
    counts = count_completions_by_date([date(2024, 3, 1), date(2024, 3, 1), date(2024, 3, 2)])

    assert counts[date(2024, 3, 1)] == 2
    assert counts[date(2024, 3, 3)] == 0


@pytest.mark.parametrize(
    ("days_active", "expected"),
    [(7, "Excellent"), (5, "Excellent"), (4, "Good"), (3, "Good"), (2, "Needs Improvement"), (0, "Needs Improvement")],
)
def test_weekly_consistency(days_active: int, expected: str):
    assert weekly_consistency(days_active) == expected


@pytest.mark.parametrize(
    ("percentage", "expected"),
    [(80, "Excellent"), (79, "Good"), (60, "Good"), (40, "Fair"), (39, "Needs Improvement"), (0, "Needs Improvement")],
)
def test_monthly_consistency(percentage: int, expected: str):
    assert monthly_consistency(percentage) == expected


def test_split_into_weeks_keeps_short_last_week():
    # Февраль 2024: 29 дней -> 7, 7, 7, 7, 1
    daily_completions = [1] * 29

    weeks = split_into_weeks(daily_completions, total_habits=2)

    assert [week["days"] for week in weeks] == [7, 7, 7, 7, 1]
    assert [week["week"] for week in weeks] == [1, 2, 3, 4, 5]
    assert weeks[0] == {"week": 1, "completions": 7, "percentage": 50, "days": 7}
    assert weeks[-1] == {"week": 5, "completions": 1, "percentage": 50, "days": 1}


def test_split_into_weeks_without_habits():
    weeks = split_into_weeks([0] * 30, total_habits=0)

    assert all(week["percentage"] == 0 for week in weeks)
    assert len(weeks) == 5

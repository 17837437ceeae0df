import pytest

from src.api.utils.gamification_utils import calculate_level, calculate_xp_to_next_level


@pytest.mark.parametrize(
    ("xp", "expected_level", "expected_to_next"),
    [
        (0, 1, 100),
        (99, 1, 1),
        (100, 2, 100),
        (250, 3, 50),
        (1000, 11, 100),
    ],
)
def test_level_and_xp_to_next_level(xp: int, expected_level: int, expected_to_next: int):
    level = calculate_level(xp, 100)

    assert level == expected_level
    assert calculate_xp_to_next_level(xp, level, 100) == expected_to_next


def test_custom_xp_per_level():
    assert calculate_level(120, 50) == 3
    assert calculate_xp_to_next_level(120, 3, 50) == 30

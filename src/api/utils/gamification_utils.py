"""Правила уровней опыта (XP)."""


def calculate_level(xp: int, xp_per_level: int) -> int:
    """Уровень = floor(xp / xp_per_level) + 1."""
    return xp // xp_per_level + 1


def calculate_xp_to_next_level(xp: int, level: int, xp_per_level: int) -> int:
    """Сколько XP осталось до следующего уровня."""
    return level * xp_per_level - xp

from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

PROJECT_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def alembic_config(tmp_path: Path) -> Config:
    """Конфигурация Alembic с отдельной файловой базой SQLite."""
    config = Config(str(PROJECT_ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    config.set_main_option("sqlalchemy.url", f"sqlite:///{tmp_path / 'migrations.db'}")
    return config


def test_upgrade_and_downgrade(alembic_config: Config):
    database_url = alembic_config.get_main_option("sqlalchemy.url")

    command.upgrade(alembic_config, "head")

    engine = create_engine(database_url)
    try:
        inspector = inspect(engine)
        assert {"users", "habits", "habit_logs"} <= set(inspector.get_table_names())

        unique_constraints = {constraint["name"] for constraint in inspector.get_unique_constraints("habit_logs")}
        assert "uq_habit_log_per_day" in unique_constraints

        habit_columns = {column["name"] for column in inspector.get_columns("habits")}
        assert {"current_streak", "longest_streak", "custom_days", "reminder_time"} <= habit_columns
    finally:
        engine.dispose()

    command.downgrade(alembic_config, "base")

    engine = create_engine(database_url)
    try:
        assert "habits" not in inspect(engine).get_table_names()
    finally:
        engine.dispose()

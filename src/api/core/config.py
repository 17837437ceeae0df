"""Настройки HabitQuest API (переменные окружения и файл .env)."""

from urllib.parse import quote_plus

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Настройки сервиса.

    Значения без Field задаются в коде, остальные можно переопределить
    через окружение (имена без учета регистра).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    PROJECT_NAME: str = "HabitQuest API"
    API_VERSION: str = "0.1.0"

    # PostgreSQL
    DB_HOST: str = Field(default="db", description="Хост PostgreSQL (имя сервиса в docker-compose)")
    DB_PORT: int = Field(default=5432, description="Порт PostgreSQL")
    DB_NAME: str = Field(default="habit_quest_db", description="Имя базы данных")
    DB_USER: str = Field(default="habit_quest_user", description="Пользователь базы данных")
    DB_PASSWORD: str = Field(..., description="Пароль пользователя базы данных")

    # DEVELOPMENT=True для локальной разработки и тестов
    DEVELOPMENT: bool = Field(default=False, description="Режим разработки")

    # JWT
    JWT_SECRET_KEY: str = Field(..., description="Ключ подписи токенов доступа")
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60 * 24 * 30, description="Время жизни токена (30 дней)")

    CORS_ORIGINS: list[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"],
        description="Адреса фронтенда, которым разрешены запросы",
    )

    # Геймификация
    XP_PER_LEVEL: int = Field(default=100, gt=0, description="Сколько XP нужно на один уровень")

    LOG_LEVEL: str = Field(default="INFO", description="Минимальный уровень логов")
    LOG_TO_FILE: bool = Field(default=True, description="Дублировать логи в файлы logs/")

    SENTRY_DSN: str | None = Field(default=None, description="DSN проекта Sentry. Пусто - мониторинг выключен.")

    @property
    def PRODUCTION(self) -> bool:
        return not self.DEVELOPMENT

    @computed_field(repr=False)  # type: ignore[prop-decorator]
    @property
    def DATABASE_URL(self) -> str:
        """URL подключения SQLAlchemy (драйвер psycopg 3)."""
        # Пароль может содержать '@', ':' и '/'
        user = quote_plus(self.DB_USER)
        password = quote_plus(self.DB_PASSWORD)
        return f"postgresql+psycopg://{user}:{password}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"


settings = Settings()  # type: ignore[call-arg]

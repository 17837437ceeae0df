"""Loguru для API и миграций: общие sinks и перехват стандартного logging."""

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger as root_logger
from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from loguru import Logger

DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{extra[service_name]}</magenta> | "
    "<cyan>{name}:{function}:{line}</cyan> - <level>{message}</level>"
)


class LogConfig(BaseModel):
    """Параметры sinks Loguru."""

    level: str = Field(default="INFO", description="Минимальный уровень записей")
    format: str = Field(default=DEFAULT_FORMAT, description="Шаблон строки лога")
    serialize: bool = Field(default=False, description="Писать записи как JSON")
    enable_file_logging: bool = Field(default=True, description="Дублировать записи в файл")
    log_dir: str = Field(default="logs", description="Каталог лог-файлов")
    rotation: str = Field(default="10 MB", description="Размер файла, после которого начинается новый")
    retention: str = Field(default="7 days", description="Сколько хранить старые файлы")


def setup_logger(
    service_name: str,
    log_config: LogConfig | None = None,
    log_level_override: str | None = None,
) -> "Logger":
    """
    Пересоздает sinks Loguru и возвращает логгер с привязанным service_name.

    Ранее добавленные sinks удаляются, поэтому повторный вызов (например,
    при повторном импорте в тестах) не дублирует записи.

    Args:
        service_name: Имя, которое попадает в каждую запись ("API", "Alembic").
        log_config: Параметры sinks. По умолчанию LogConfig().
        log_level_override: Уровень, заменяющий log_config.level.

    Returns:
        Логгер Loguru с `extra["service_name"]`.
    """
    config = log_config or LogConfig()
    level = (log_level_override or config.level).upper()

    root_logger.remove()
    service_logger = root_logger.bind(service_name=service_name)

    service_logger.add(sys.stderr, level=level, format=config.format, serialize=config.serialize, colorize=True)

    if config.enable_file_logging:
        log_dir = Path(config.log_dir)
        try:
            log_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            service_logger.warning(f"Каталог логов '{log_dir}' недоступен ({exc}), запись в файл отключена.")
        else:
            service_logger.add(
                log_dir / f"{service_name.lower()}_{{time:YYYY-MM-DD}}.log",
                level=level,
                format=config.format,
                serialize=config.serialize,
                rotation=config.rotation,
                retention=config.retention,
                encoding="utf-8",
            )

    service_logger.debug(f"Логирование '{service_name}' настроено, уровень {level}.")
    return service_logger


class InterceptHandler(logging.Handler):
    """Передает записи стандартного logging в Loguru с сохранением места вызова."""

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self.service_name = service_name

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = root_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Пропускаем кадры самого модуля logging
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        root_logger.bind(service_name=self.service_name).opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def intercept_standard_logging(service_name: str, level: int = logging.INFO) -> None:
    """
    Заменяет обработчики корневого logging на InterceptHandler.

    Логгер sqlalchemy.engine понижается до WARNING.
    """
    logging.basicConfig(handlers=[InterceptHandler(service_name)], level=level, force=True)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


__all__ = ["LogConfig", "setup_logger", "InterceptHandler", "intercept_standard_logging"]

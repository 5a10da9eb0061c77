"""
Структурированное логирование для pnp_model

Обеспечивает:
- Структурированные логи в JSON или консольном формате
- Контекстные логгеры для записей модели (package_id, pipeline_id)
- Настройку через переменные окружения PNP_LOG_LEVEL / PNP_LOG_FORMAT
"""

import os
import sys
import logging
from typing import Any, Optional, TextIO

import structlog
from structlog.stdlib import BoundLogger

from pnp_model.config.settings import ModelSettings


_max_string_length = 2000


class ModelLoggerConfig:
    """Конфигурация логгера модели"""

    def __init__(
        self,
        level: str = "INFO",
        format: str = "json",  # json, console, text
        output: TextIO = sys.stdout,
        include_caller: bool = False,
        include_timestamp: bool = True,
        include_level: bool = True,
        max_string_length: int = 2000,
    ):
        self.level = level.upper()
        self.format = format.lower()
        self.output = output
        self.include_caller = include_caller
        self.include_timestamp = include_timestamp
        self.include_level = include_level
        self.max_string_length = max_string_length

    @classmethod
    def from_settings(cls, settings: ModelSettings, **overrides) -> "ModelLoggerConfig":
        """Конфигурация логгера из настроек модели"""
        return cls(level=settings.log_level, format=settings.log_format, **overrides)


def truncate_long_values(logger, method_name, event_dict):
    """Процессор для обрезания длинных значений"""

    max_length = _max_string_length

    def truncate_value(value: Any) -> Any:
        if isinstance(value, str) and len(value) > max_length:
            return value[:max_length] + "... [TRUNCATED]"
        elif isinstance(value, dict):
            return {k: truncate_value(v) for k, v in value.items()}
        elif isinstance(value, list):
            return [truncate_value(item) for item in value]
        return value

    return {k: truncate_value(v) for k, v in event_dict.items()}


def add_model_context(logger, method_name, event_dict):
    """Процессор для добавления контекста процесса"""
    event_dict["process_id"] = os.getpid()
    event_dict["model_version"] = "0.1.0"
    return event_dict


def setup_logging(
    config: Optional[ModelLoggerConfig] = None,
    settings: Optional[ModelSettings] = None,
) -> None:
    """
    Настройка системы логирования

    Args:
        config: Конфигурация логгера, имеет приоритет над settings
        settings: Настройки модели, если None - ModelSettings.from_env()
    """

    if config is None:
        config = ModelLoggerConfig.from_settings(settings or ModelSettings.from_env())

    global _max_string_length
    _max_string_length = config.max_string_length

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        add_model_context,
    ]

    if config.include_level:
        processors.append(structlog.stdlib.add_log_level)

    if config.include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if config.include_caller:
        processors.append(
            structlog.processors.CallsiteParameterAdder(
                parameters=[
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            )
        )

    processors.append(structlog.processors.format_exc_info)
    processors.append(truncate_long_values)

    # Финальный рендерер в зависимости от формата
    if config.format == "json":
        processors.append(structlog.processors.JSONRenderer())
    elif config.format == "console":
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:  # text format
        processors.append(structlog.processors.LogfmtRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        level=getattr(logging, config.level), stream=config.output, format="%(message)s"
    )


def get_logger(name: Optional[str] = None, **initial_values) -> BoundLogger:
    """
    Получение логгера с начальным контекстом

    Args:
        name: Имя логгера
        **initial_values: Начальные значения контекста

    Returns:
        Настроенный BoundLogger
    """

    logger = structlog.get_logger(name)

    if initial_values:
        logger = logger.bind(**initial_values)

    return logger


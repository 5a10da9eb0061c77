"""
Настройки модели конфигурации
"""

import os
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogLevel(str, Enum):
    """Уровни логирования"""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ModelSettings(BaseModel):
    """Настройки, общие для всех записей одной конфигурации"""

    model_config = ConfigDict(
        validate_assignment=True,
        use_enum_values=True,
    )

    # Логирование
    log_level: LogLevel = Field(LogLevel.INFO, description="Уровень логирования")
    log_format: str = Field("json", description="Формат логов: json, console, text")

    # Диагностика устаревших ссылок на nozzle tip
    report_stale_references: bool = Field(
        True, description="Писать предупреждение при пропуске неразрешенного id"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v):
        if isinstance(v, str):
            valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
            if v.upper() not in valid_levels:
                raise ValueError(f"log_level must be one of: {valid_levels}")
            return v.upper()
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in {"json", "console", "text"}:
            raise ValueError("log_format must be one of: json, console, text")
        return v

    @classmethod
    def from_env(cls) -> "ModelSettings":
        """Чтение настроек из переменных окружения PNP_*"""
        values = {}
        if os.getenv("PNP_LOG_LEVEL"):
            values["log_level"] = os.environ["PNP_LOG_LEVEL"]
        if os.getenv("PNP_LOG_FORMAT"):
            values["log_format"] = os.environ["PNP_LOG_FORMAT"]
        if os.getenv("PNP_REPORT_STALE_REFERENCES"):
            values["report_stale_references"] = os.environ[
                "PNP_REPORT_STALE_REFERENCES"
            ].lower() in ("1", "true", "yes", "on")
        return cls(**values)

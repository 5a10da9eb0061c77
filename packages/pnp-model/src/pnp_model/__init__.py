# packages/pnp-model/src/pnp_model/__init__.py

"""
PnP Model - записи конфигурации pick-and-place машины

Основные компоненты:
- Package: описание типа компонента с синхронизацией id и живых ссылок
- Pipeline: именованный конвейер обработки изображения
- Configuration: реестр, разрешающий nozzle tip и настройки зрения
- YAML сериализация снимков на основе Pydantic
- Структурированные логи через structlog
"""

__version__ = "0.1.0"

from pnp_model.exceptions.errors import (
    PnpModelError,
    ConfigurationLoadError,
    RecordValidationError,
    DuplicateIdError,
)
from pnp_model.config import (
    LogLevel,
    ModelSettings,
    ConfigurationYAMLParser,
    parse_configuration,
    dump_configuration,
    parse_packages,
    dump_packages,
    load_configuration,
)
from pnp_model.models import (
    ListenerHandle,
    PropertyChangeEvent,
    Footprint,
    LengthUnit,
    Pad,
    NozzleTip,
    AbstractVisionSettings,
    BottomVisionSettings,
    CvPipeline,
    CvStage,
    ConfigurationRecord,
    NozzleTipRecord,
    PackageRecord,
    PartRecord,
    PipelineRecord,
    NozzleTipCacheState,
    Package,
    Pipeline,
    Part,
)
from pnp_model.registry import Configuration, Machine
from pnp_model.observability.logging import setup_logging, get_logger

__all__ = [
    "__version__",
    # Исключения
    "PnpModelError",
    "ConfigurationLoadError",
    "RecordValidationError",
    "DuplicateIdError",
    # Конфигурация
    "LogLevel",
    "ModelSettings",
    "ConfigurationYAMLParser",
    "parse_configuration",
    "dump_configuration",
    "parse_packages",
    "dump_packages",
    "load_configuration",
    # Записи
    "ListenerHandle",
    "PropertyChangeEvent",
    "Footprint",
    "LengthUnit",
    "Pad",
    "NozzleTip",
    "AbstractVisionSettings",
    "BottomVisionSettings",
    "CvPipeline",
    "CvStage",
    "ConfigurationRecord",
    "NozzleTipRecord",
    "PackageRecord",
    "PartRecord",
    "PipelineRecord",
    "NozzleTipCacheState",
    "Package",
    "Pipeline",
    "Part",
    # Реестр
    "Configuration",
    "Machine",
    # Observability
    "setup_logging",
    "get_logger",
]

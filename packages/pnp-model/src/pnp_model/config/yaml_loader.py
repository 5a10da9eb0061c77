# packages/pnp-model/src/pnp_model/config/yaml_loader.py

"""
YAML сериализация снимков конфигурации

Работает только со строками: чтение и запись файлов остаются за
вызывающим кодом.

Поддерживает:
- Парсинг полного снимка конфигурации (ConfigurationRecord)
- Парсинг и запись списка компонентов (PackageRecord)
- Загрузку снимка в Configuration с уведомлением слушателей
"""

from typing import Any, Dict, List, Optional, Sequence

import yaml
import structlog
from pydantic import ValidationError

from pnp_model.config.settings import ModelSettings
from pnp_model.exceptions.errors import ConfigurationLoadError, create_validation_error
from pnp_model.models.records import ConfigurationRecord, PackageRecord
from pnp_model.registry.configuration import Configuration

logger = structlog.get_logger(__name__)


def _format_validation_errors(error: ValidationError) -> List[str]:
    return [
        f"{'.'.join(str(part) for part in item['loc'])}: {item['msg']}"
        for item in error.errors()
    ]


class ConfigurationYAMLParser:
    """Парсер YAML снимков конфигурации"""

    def _load_yaml(self, yaml_content: str) -> Any:
        try:
            raw_data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigurationLoadError(f"Ошибка парсинга YAML: {e}") from e

        if raw_data is None:
            raise ConfigurationLoadError("YAML документ пуст")

        return raw_data

    def parse_string(self, yaml_content: str) -> ConfigurationRecord:
        """
        Парсинг строки с YAML снимком конфигурации

        Args:
            yaml_content: YAML контент как строка

        Returns:
            ConfigurationRecord: Провалидированный снимок

        Raises:
            ConfigurationLoadError: Невалидный YAML или пустой документ
            RecordValidationError: Данные не соответствуют схеме
        """
        raw_data = self._load_yaml(yaml_content)

        if not isinstance(raw_data, dict):
            raise ConfigurationLoadError("Снимок конфигурации должен быть объектом")

        try:
            return ConfigurationRecord.model_validate(raw_data)
        except ValidationError as e:
            raise create_validation_error(
                "Снимок конфигурации не прошел валидацию",
                _format_validation_errors(e),
            ) from e

    def parse_packages(self, yaml_content: str) -> List[PackageRecord]:
        """
        Парсинг списка компонентов

        Принимает либо список записей, либо объект с ключом 'packages'.
        """
        raw_data = self._load_yaml(yaml_content)

        if isinstance(raw_data, dict):
            if "packages" not in raw_data:
                raise ConfigurationLoadError("Ожидается ключ 'packages'")
            raw_data = raw_data["packages"] or []

        if not isinstance(raw_data, list):
            raise ConfigurationLoadError("Список компонентов должен быть массивом")

        records = []
        errors: List[str] = []
        for index, item in enumerate(raw_data):
            try:
                records.append(PackageRecord.model_validate(item))
            except ValidationError as e:
                errors.extend(
                    f"packages[{index}].{message}"
                    for message in _format_validation_errors(e)
                )

        if errors:
            raise create_validation_error("Компоненты не прошли валидацию", errors)

        return records

    def dump(self, record: ConfigurationRecord) -> str:
        """Запись снимка в YAML строку"""
        return yaml.safe_dump(record.to_data(), sort_keys=False, allow_unicode=True)

    def dump_packages(self, records: Sequence[PackageRecord]) -> str:
        data: Dict[str, Any] = {"packages": [record.to_data() for record in records]}
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


def parse_configuration(yaml_content: str) -> ConfigurationRecord:
    """Парсинг YAML снимка конфигурации"""
    return ConfigurationYAMLParser().parse_string(yaml_content)


def dump_configuration(record: ConfigurationRecord) -> str:
    return ConfigurationYAMLParser().dump(record)


def parse_packages(yaml_content: str) -> List[PackageRecord]:
    return ConfigurationYAMLParser().parse_packages(yaml_content)


def dump_packages(records: Sequence[PackageRecord]) -> str:
    return ConfigurationYAMLParser().dump_packages(records)


def load_configuration(
    yaml_content: str,
    configuration: Optional[Configuration] = None,
    settings: Optional[ModelSettings] = None,
) -> Configuration:
    """
    Загрузка YAML снимка в конфигурацию

    Args:
        yaml_content: YAML снимок
        configuration: Существующая конфигурация для перезагрузки; если None,
            создается новая
        settings: Настройки для новой конфигурации

    Returns:
        Загруженная конфигурация (слушатели уже уведомлены)
    """
    record = parse_configuration(yaml_content)

    if configuration is None:
        configuration = Configuration(settings=settings)

    configuration.load(record)

    logger.debug("Configuration loaded from YAML", packages=len(record.packages))
    return configuration

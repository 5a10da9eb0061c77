# packages/pnp-model/src/pnp_model/config/__init__.py

"""
Configuration package для pnp_model

Включает:
- ModelSettings: настройки модели
- YAML сериализацию снимков конфигурации и списков компонентов
"""

from pnp_model.config.settings import LogLevel, ModelSettings
from pnp_model.config.yaml_loader import (
    ConfigurationYAMLParser,
    parse_configuration,
    dump_configuration,
    parse_packages,
    dump_packages,
    load_configuration,
)

__all__ = [
    "LogLevel",
    "ModelSettings",
    "ConfigurationYAMLParser",
    "parse_configuration",
    "dump_configuration",
    "parse_packages",
    "dump_packages",
    "load_configuration",
]

"""
Registry package: конфигурация машины и каталог nozzle tip
"""

from pnp_model.registry.configuration import (
    Configuration,
    ConfigurationListener,
    Machine,
)

__all__ = ["Configuration", "ConfigurationListener", "Machine"]

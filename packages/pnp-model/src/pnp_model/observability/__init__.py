"""
Observability для pnp_model: структурированные логи
"""

from pnp_model.observability.logging import (
    ModelLoggerConfig,
    setup_logging,
    get_logger,
)

__all__ = [
    "ModelLoggerConfig",
    "setup_logging",
    "get_logger",
]

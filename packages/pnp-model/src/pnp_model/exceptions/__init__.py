"""
Исключения pnp_model
"""

from pnp_model.exceptions.errors import (
    PnpModelError,
    ConfigurationLoadError,
    RecordValidationError,
    DuplicateIdError,
    create_duplicate_error,
    create_validation_error,
)

__all__ = [
    "PnpModelError",
    "ConfigurationLoadError",
    "RecordValidationError",
    "DuplicateIdError",
    "create_duplicate_error",
    "create_validation_error",
]

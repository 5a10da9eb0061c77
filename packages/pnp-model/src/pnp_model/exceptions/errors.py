"""
Исключения для модели конфигурации машины

Сами записи (Package, Pipeline) исключений не выбрасывают: отсутствующие
ссылки пропускаются или заменяются значениями по умолчанию. Исключения
используются только на границе загрузки и регистрации объектов.
"""

from typing import Optional, Dict, Any, List


class PnpModelError(Exception):
    """Базовое исключение для всех ошибок модели"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class ConfigurationLoadError(PnpModelError):
    """Ошибка загрузки снимка конфигурации"""

    pass


class RecordValidationError(PnpModelError):
    """Ошибка валидации сохраненной записи"""

    def __init__(
        self,
        message: str,
        validation_errors: Optional[List[str]] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.validation_errors = validation_errors or []


class DuplicateIdError(PnpModelError):
    """Объект с таким id уже зарегистрирован"""

    def __init__(
        self,
        message: str,
        object_type: Optional[str] = None,
        object_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.object_type = object_type
        self.object_id = object_id


def create_duplicate_error(object_type: str, object_id: str) -> DuplicateIdError:
    """Создание ошибки дублирования id"""
    return DuplicateIdError(
        f"{object_type} с id '{object_id}' уже зарегистрирован",
        object_type=object_type,
        object_id=object_id,
        details={"object_type": object_type, "object_id": object_id},
    )


def create_validation_error(message: str, errors: List[str]) -> RecordValidationError:
    """Создание ошибки валидации с детальным списком ошибок"""
    return RecordValidationError(
        message, validation_errors=errors, details={"error_count": len(errors)}
    )

"""
Базовые классы для записей модели: уведомления об изменении свойств
и подписки с явной отменой
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

import structlog

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PropertyChangeEvent:
    """Событие изменения свойства записи"""

    source: Any
    property_name: str
    old_value: Any
    new_value: Any


PropertyChangeListener = Callable[[PropertyChangeEvent], None]


class ListenerHandle:
    """
    Подписка на события, владельцем которой является вызывающий код.

    dispose() снимает подписку; повторный вызов ничего не делает.
    """

    def __init__(self, listeners: List[Callable], callback: Callable):
        self._listeners = listeners
        self._callback = callback
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Отменить подписку"""
        if self._disposed:
            return
        self._disposed = True
        # Удаляем именно этот экземпляр: один callback может быть подписан несколько раз
        for index, callback in enumerate(self._listeners):
            if callback is self._callback:
                del self._listeners[index]
                break

    def __enter__(self) -> "ListenerHandle":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()


class ModelObject:
    """Базовая запись модели с поддержкой слушателей изменений свойств"""

    def __init__(self):
        self._property_change_listeners: List[PropertyChangeListener] = []

    def add_property_change_listener(
        self, listener: PropertyChangeListener
    ) -> ListenerHandle:
        """
        Подписка на изменения свойств записи

        Args:
            listener: Функция, принимающая PropertyChangeEvent

        Returns:
            ListenerHandle для отмены подписки
        """
        self._property_change_listeners.append(listener)
        return ListenerHandle(self._property_change_listeners, listener)

    def fire_property_change(
        self, property_name: str, old_value: Any, new_value: Any
    ) -> PropertyChangeEvent:
        """
        Уведомление слушателей об изменении свойства.

        Событие отправляется всегда, даже если значение не изменилось:
        каждый вызов сеттера дает ровно одно уведомление.
        """
        event = PropertyChangeEvent(self, property_name, old_value, new_value)
        for listener in list(self._property_change_listeners):
            try:
                listener(event)
            except Exception as e:
                logger.warning(
                    "Property change listener failed",
                    property_name=property_name,
                    error=str(e),
                )
        return event


class Identifiable(ABC):
    """Запись с устойчивым строковым идентификатором"""

    @abstractmethod
    def get_id(self) -> Optional[str]:
        pass

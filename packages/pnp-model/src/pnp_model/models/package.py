# packages/pnp-model/src/pnp_model/models/package.py

"""
Package - описание типа компонента

Запись хранит геометрию (footprint), параметры захвата и установки,
список совместимых nozzle tip и ссылку на настройки нижней камеры.

Синхронизация ссылок:
- compatible_nozzle_tip_ids сохраняется и является источником истины;
  живые объекты NozzleTip разрешаются через каталог машины при первом
  обращении и кэшируются до следующей загрузки конфигурации
- bottom_vision_id сохраняется, а объект настроек разрешается при загрузке
  конфигурации и снова превращается в id в persist() перед сериализацией
"""

from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

import structlog

from pnp_model.models.records import PACKAGE_RECORD_VERSION, PackageRecord
from pnp_model.models.base import Identifiable, ListenerHandle, ModelObject
from pnp_model.models.footprint import Footprint
from pnp_model.models.nozzle_tip import NozzleTip
from pnp_model.models.vision import AbstractVisionSettings, CvPipeline

if TYPE_CHECKING:
    from pnp_model.registry.configuration import Configuration

logger = structlog.get_logger(__name__)


class NozzleTipCacheState(str, Enum):
    """Состояние кэша совместимых nozzle tip"""

    UNRESOLVED = "unresolved"
    RESOLVED = "resolved"


class Package(ModelObject, Identifiable):
    """Описание типа компонента"""

    version = PACKAGE_RECORD_VERSION

    def __init__(
        self,
        id: Optional[str],
        configuration: "Configuration",
        record: Optional[PackageRecord] = None,
    ):
        super().__init__()
        self._id = id
        self.configuration = configuration

        self._description: Optional[str] = None
        self._tape_specification: Optional[str] = None
        # None - уровень не задавался и не попадет в запись
        self._pick_vacuum_level: Optional[float] = None
        self._place_blow_off_level: Optional[float] = None
        self._footprint = Footprint()
        self._footprint_assigned = False

        self._compatible_nozzle_tip_ids: List[str] = []
        self._compatible_nozzle_tips: Dict[str, NozzleTip] = {}
        self._nozzle_tip_state = NozzleTipCacheState.UNRESOLVED
        self._stale_nozzle_tip_ids: List[str] = []

        self._bottom_vision_id: Optional[str] = None
        self._vision_settings: Optional[AbstractVisionSettings] = None

        if record is not None:
            self._apply_record(record)

        # Подписка после заполнения полей: загруженная конфигурация
        # вызывает слушателя сразу
        self._configuration_listener: Optional[ListenerHandle] = (
            configuration.add_listener(self.configuration_loaded)
        )

    @classmethod
    def from_record(
        cls, record: PackageRecord, configuration: "Configuration"
    ) -> "Package":
        """
        Создание записи из сохраненного представления

        Настройки зрения разрешаются при событии загрузки конфигурации. Если
        конфигурация уже загружена, разрешение выполняется сразу.
        """
        return cls(record.id, configuration, record=record)

    def _apply_record(self, record: PackageRecord) -> None:
        self._description = record.description
        self._tape_specification = record.tape_specification
        self._pick_vacuum_level = record.pick_vacuum_level
        self._place_blow_off_level = record.place_blow_off_level
        if record.footprint is not None:
            self._footprint = record.footprint.model_copy(deep=True)
            self._footprint_assigned = True
        self._compatible_nozzle_tip_ids = list(record.compatible_nozzle_tip_ids or [])
        self._bottom_vision_id = record.bottom_vision_id

    def to_record(self) -> PackageRecord:
        """Сохраненное представление; вызывает persist() перед сборкой"""
        self.persist()

        footprint = None
        if self._footprint_assigned or not self._footprint.is_empty():
            footprint = self._footprint.model_copy(deep=True)

        return PackageRecord(
            id=self._id,
            version=self.version,
            description=self._description,
            tape_specification=self._tape_specification,
            pick_vacuum_level=self._pick_vacuum_level,
            place_blow_off_level=self._place_blow_off_level,
            footprint=footprint,
            compatible_nozzle_tip_ids=list(self._compatible_nozzle_tip_ids) or None,
            bottom_vision_id=self._bottom_vision_id,
        )

    def persist(self) -> None:
        """Получить bottom_vision_id из разрешенных настроек перед сериализацией"""
        self._bottom_vision_id = (
            None if self._vision_settings is None else self._vision_settings.get_id()
        )

    def configuration_loaded(self, configuration: "Configuration") -> None:
        """
        Обработчик загрузки конфигурации

        Разрешает настройки зрения по bottom_vision_id, при неудаче берет
        настройки по умолчанию. Кэш nozzle tip сбрасывается, чтобы
        следующее обращение разрешило id по новому каталогу.
        """
        vision_settings = configuration.get_vision_settings(self._bottom_vision_id)

        if vision_settings is None:
            vision_settings = configuration.get_default_vision_settings()
            logger.debug(
                "Using default vision settings",
                package_id=self._id,
                bottom_vision_id=self._bottom_vision_id,
                default_id=vision_settings.get_id() if vision_settings else None,
            )

        self._vision_settings = vision_settings
        self._invalidate_compatible_nozzle_tips()

    def close(self) -> None:
        """Отписаться от событий загрузки конфигурации"""
        if self._configuration_listener is not None:
            self._configuration_listener.dispose()
            self._configuration_listener = None

    def get_id(self) -> Optional[str]:
        return self._id

    def set_id(self, id: str) -> None:
        """
        Внимание: нельзя вызывать после добавления Package в конфигурацию,
        индекс конфигурации останется со старым id. Используется только при
        создании нового компонента.
        """
        old_value = self._id
        self._id = id
        self.fire_property_change("id", old_value, id)

    def get_description(self) -> Optional[str]:
        return self._description

    def set_description(self, description: Optional[str]) -> None:
        old_value = self._description
        self._description = description
        self.fire_property_change("description", old_value, description)

    def get_tape_specification(self) -> Optional[str]:
        return self._tape_specification

    def set_tape_specification(self, tape_specification: Optional[str]) -> None:
        old_value = self._tape_specification
        self._tape_specification = tape_specification
        self.fire_property_change("tape_specification", old_value, tape_specification)

    def get_pick_vacuum_level(self) -> float:
        return self._pick_vacuum_level or 0.0

    def set_pick_vacuum_level(self, level: float) -> None:
        old_value = self.get_pick_vacuum_level()
        self._pick_vacuum_level = float(level)
        self.fire_property_change("pick_vacuum_level", old_value, self._pick_vacuum_level)

    def get_place_blow_off_level(self) -> float:
        return self._place_blow_off_level or 0.0

    def set_place_blow_off_level(self, level: float) -> None:
        old_value = self.get_place_blow_off_level()
        self._place_blow_off_level = float(level)
        self.fire_property_change(
            "place_blow_off_level", old_value, self._place_blow_off_level
        )

    def get_footprint(self) -> Footprint:
        return self._footprint

    def set_footprint(self, footprint: Footprint) -> None:
        old_value = self._footprint
        self._footprint = footprint
        self._footprint_assigned = True
        self.fire_property_change("footprint", old_value, footprint)

    def get_compatible_nozzle_tip_ids(self) -> List[str]:
        """Сохраняемый список id совместимых nozzle tip (копия)"""
        return list(self._compatible_nozzle_tip_ids)

    def get_nozzle_tip_cache_state(self) -> NozzleTipCacheState:
        return self._nozzle_tip_state

    def get_stale_nozzle_tip_ids(self) -> List[str]:
        """Id, пропущенные при последнем разрешении кэша"""
        return list(self._stale_nozzle_tip_ids)

    def get_compatible_nozzle_tips(self) -> Tuple[NozzleTip, ...]:
        """
        Совместимые nozzle tip в порядке сохраненного списка id

        При первом обращении id разрешаются через каталог машины.
        Неразрешенные id пропускаются и попадают в get_stale_nozzle_tip_ids().
        """
        if self._nozzle_tip_state is NozzleTipCacheState.UNRESOLVED:
            self._resolve_compatible_nozzle_tips()
        return tuple(self._compatible_nozzle_tips.values())

    def add_compatible_nozzle_tip(self, nozzle_tip: NozzleTip) -> None:
        self.get_compatible_nozzle_tips()
        self._compatible_nozzle_tips.setdefault(nozzle_tip.get_id(), nozzle_tip)
        self._sync_compatible_nozzle_tip_ids()
        self.fire_property_change(
            "compatible_nozzle_tips", None, self.get_compatible_nozzle_tips()
        )

    def remove_compatible_nozzle_tip(self, nozzle_tip: NozzleTip) -> None:
        self.get_compatible_nozzle_tips()
        self._compatible_nozzle_tips.pop(nozzle_tip.get_id(), None)
        self._sync_compatible_nozzle_tip_ids()
        self.fire_property_change(
            "compatible_nozzle_tips", None, self.get_compatible_nozzle_tips()
        )

    def get_bottom_vision_id(self) -> Optional[str]:
        return self._bottom_vision_id

    def get_vision_settings(self) -> Optional[AbstractVisionSettings]:
        return self._vision_settings

    def get_cv_pipeline(self) -> Optional[CvPipeline]:
        if self._vision_settings is None:
            return None
        return self._vision_settings.get_cv_pipeline()

    def set_vision_settings(
        self, vision_settings: Optional[AbstractVisionSettings]
    ) -> None:
        old_value = self._vision_settings
        self._vision_settings = vision_settings
        self._update_parts()
        self.fire_property_change("vision_settings", old_value, vision_settings)

    def _update_parts(self) -> None:
        """Передать настройки зрения всем деталям с этим компонентом"""
        for part in self.configuration.get_parts():
            package = part.get_package()
            if package is not None and package.get_id() == self._id:
                self.configuration.assign_vision_settings_to_part(
                    part, self._vision_settings
                )

    def _resolve_compatible_nozzle_tips(self) -> None:
        machine = self.configuration.get_machine()
        resolved: Dict[str, NozzleTip] = {}
        stale: List[str] = []

        for nozzle_tip_id in self._compatible_nozzle_tip_ids:
            nozzle_tip = machine.get_nozzle_tip(nozzle_tip_id)
            if nozzle_tip is None:
                stale.append(nozzle_tip_id)
                continue
            resolved.setdefault(nozzle_tip.get_id(), nozzle_tip)

        if stale and self.configuration.settings.report_stale_references:
            logger.warning(
                "Stale nozzle tip reference",
                package_id=self._id,
                nozzle_tip_ids=stale,
            )

        self._compatible_nozzle_tips = resolved
        self._stale_nozzle_tip_ids = stale
        self._nozzle_tip_state = NozzleTipCacheState.RESOLVED

    def _invalidate_compatible_nozzle_tips(self) -> None:
        self._compatible_nozzle_tips = {}
        self._stale_nozzle_tip_ids = []
        self._nozzle_tip_state = NozzleTipCacheState.UNRESOLVED

    def _sync_compatible_nozzle_tip_ids(self) -> None:
        self._compatible_nozzle_tip_ids[:] = list(self._compatible_nozzle_tips.keys())

    def __str__(self) -> str:
        return f"id {self._id}"

    def __repr__(self) -> str:
        return f"Package(id={self._id!r})"

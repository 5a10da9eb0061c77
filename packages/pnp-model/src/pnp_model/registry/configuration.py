# packages/pnp-model/src/pnp_model/registry/configuration.py

"""
Конфигурация - реестр всех записей машины

Хранит:
- Каталог nozzle tip машины
- Настройки зрения и настройки по умолчанию
- Компоненты (Package), детали (Part) и именованные конвейеры (Pipeline)

Слушатели загрузки вызываются синхронно в потоке, выполнившем load().
Блокировок нет: вызывающий код сам сериализует доступ.
"""

from typing import Any, Callable, Dict, List, Optional, Tuple

import structlog

from pnp_model.config.settings import ModelSettings
from pnp_model.exceptions.errors import ConfigurationLoadError, create_duplicate_error
from pnp_model.models.base import ListenerHandle
from pnp_model.models.nozzle_tip import NozzleTip
from pnp_model.models.package import Package
from pnp_model.models.part import Part
from pnp_model.models.pipeline import Pipeline
from pnp_model.models.records import ConfigurationRecord, NozzleTipRecord
from pnp_model.models.vision import (
    STOCK_BOTTOM_ID,
    AbstractVisionSettings,
    BottomVisionSettings,
    create_stock_bottom_vision_settings,
)

ConfigurationListener = Callable[["Configuration"], None]


def _register(catalog: Dict[str, Any], object_type: str, object_id: str, value: Any):
    if object_id in catalog:
        raise create_duplicate_error(object_type, object_id)
    catalog[object_id] = value


class Machine:
    """Каталог nozzle tip машины"""

    def __init__(self):
        self._nozzle_tips: Dict[str, NozzleTip] = {}

    def add_nozzle_tip(self, nozzle_tip: NozzleTip) -> None:
        if nozzle_tip.get_id() in self._nozzle_tips:
            raise create_duplicate_error("NozzleTip", nozzle_tip.get_id())
        self._nozzle_tips[nozzle_tip.get_id()] = nozzle_tip

    def remove_nozzle_tip(self, nozzle_tip: NozzleTip) -> None:
        self._nozzle_tips.pop(nozzle_tip.get_id(), None)

    def get_nozzle_tip(self, nozzle_tip_id: Optional[str]) -> Optional[NozzleTip]:
        if nozzle_tip_id is None:
            return None
        return self._nozzle_tips.get(nozzle_tip_id)

    def get_nozzle_tips(self) -> List[NozzleTip]:
        return list(self._nozzle_tips.values())


class Configuration:
    """
    Реестр конфигурации машины

    Передается в записи явно. Каждый Package подписывается на загрузку
    через add_listener() и получает ListenerHandle для отписки.
    """

    def __init__(self, settings: Optional[ModelSettings] = None):
        self.settings = settings or ModelSettings()

        self._machine = Machine()
        self._vision_settings: Dict[str, AbstractVisionSettings] = {}
        self._default_vision_settings_id: Optional[str] = None
        self._packages: Dict[str, Package] = {}
        self._parts: Dict[str, Part] = {}
        self._pipelines: Dict[str, Pipeline] = {}

        self._listeners: List[ConfigurationListener] = []
        self._loaded = False

        self.logger = structlog.get_logger(component="configuration")

        self.set_default_vision_settings(create_stock_bottom_vision_settings())

    # Слушатели

    def add_listener(self, listener: ConfigurationListener) -> ListenerHandle:
        """
        Подписка на загрузку конфигурации

        Если конфигурация уже загружена, слушатель вызывается сразу,
        а затем при каждой следующей загрузке.

        Returns:
            ListenerHandle для отписки
        """
        self._listeners.append(listener)
        handle = ListenerHandle(self._listeners, listener)

        if self._loaded:
            self._notify(listener)

        return handle

    def get_listener_count(self) -> int:
        return len(self._listeners)

    def is_loaded(self) -> bool:
        return self._loaded

    def fire_configuration_loaded(self) -> None:
        """Уведомить всех слушателей о загрузке текущего снимка"""
        for listener in list(self._listeners):
            self._notify(listener)

        self.logger.info(
            "Configuration loaded",
            listeners=len(self._listeners),
            packages=len(self._packages),
            parts=len(self._parts),
        )

    def _notify(self, listener: ConfigurationListener) -> None:
        try:
            listener(self)
        except Exception as e:
            self.logger.warning(
                "Configuration listener failed",
                listener=getattr(listener, "__qualname__", repr(listener)),
                error=str(e),
            )

    # Загрузка снимка

    def load(self, record: ConfigurationRecord) -> None:
        """
        Загрузка снимка конфигурации

        Новые каталоги собираются отдельно и подменяют текущие только после
        успешной сборки: старые Package отписываются, затем слушатели
        уведомляются. При ошибке текущий снимок остается нетронутым, а уже
        созданные Package нового снимка отписываются.

        Raises:
            DuplicateIdError: Повторяющиеся id в снимке
            ConfigurationLoadError: Деталь ссылается на неизвестный компонент
        """
        self.logger.info(
            "Loading configuration",
            nozzle_tips=len(record.nozzle_tips),
            vision_settings=len(record.vision_settings),
            packages=len(record.packages),
            parts=len(record.parts),
        )

        was_loaded = self._loaded
        # Новые Package не должны разрешаться по старому снимку
        self._loaded = False
        packages: Dict[str, Package] = {}

        try:
            machine, vision_settings, default_id, pipelines, parts = (
                self._build_snapshot(record, packages)
            )
        except Exception as e:
            for package in packages.values():
                package.close()
            self._loaded = was_loaded
            self.logger.error(
                "Configuration load failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise

        for package in self._packages.values():
            package.close()

        self._machine = machine
        self._vision_settings = vision_settings
        self._default_vision_settings_id = default_id
        self._pipelines = pipelines
        self._packages = packages
        self._parts = parts

        self._loaded = True
        self.fire_configuration_loaded()

    def _build_snapshot(
        self, record: ConfigurationRecord, packages: Dict[str, Package]
    ) -> Tuple[
        Machine,
        Dict[str, AbstractVisionSettings],
        str,
        Dict[str, Pipeline],
        Dict[str, Part],
    ]:
        """Сборка каталогов снимка; packages заполняется по мере создания"""
        machine = Machine()
        for nozzle_tip_record in record.nozzle_tips:
            machine.add_nozzle_tip(
                NozzleTip(nozzle_tip_record.id, name=nozzle_tip_record.name)
            )

        vision_settings: Dict[str, AbstractVisionSettings] = {}
        for settings in record.vision_settings:
            _register(
                vision_settings,
                "VisionSettings",
                settings.id,
                settings.model_copy(deep=True),
            )

        default_id = record.default_vision_settings_id
        if default_id is None:
            if STOCK_BOTTOM_ID not in vision_settings:
                vision_settings[STOCK_BOTTOM_ID] = create_stock_bottom_vision_settings()
            default_id = STOCK_BOTTOM_ID

        pipelines: Dict[str, Pipeline] = {}
        for pipeline_record in record.pipelines:
            _register(
                pipelines,
                "Pipeline",
                pipeline_record.id,
                Pipeline.from_record(pipeline_record),
            )

        for package_record in record.packages:
            package = Package.from_record(package_record, self)
            if package_record.id in packages:
                package.close()
                raise create_duplicate_error("Package", package_record.id)
            packages[package_record.id] = package

        parts: Dict[str, Part] = {}
        for part_record in record.parts:
            package = None
            if part_record.package_id is not None:
                package = packages.get(part_record.package_id)
                if package is None:
                    raise ConfigurationLoadError(
                        f"Деталь '{part_record.id}' ссылается на неизвестный компонент",
                        details={
                            "part_id": part_record.id,
                            "package_id": part_record.package_id,
                        },
                    )
            part = Part(part_record.id, package=package, name=part_record.name)
            part.set_vision_settings(vision_settings.get(part_record.bottom_vision_id))
            _register(parts, "Part", part_record.id, part)

        return machine, vision_settings, default_id, pipelines, parts

    def to_record(self) -> ConfigurationRecord:
        """Снимок текущего состояния; Package.persist() вызывается для каждого"""
        return ConfigurationRecord(
            nozzle_tips=[
                NozzleTipRecord(id=tip.get_id(), name=tip.name)
                for tip in self._machine.get_nozzle_tips()
            ],
            vision_settings=[
                settings.model_copy(deep=True)
                for settings in self._vision_settings.values()
                if isinstance(settings, BottomVisionSettings)
            ],
            default_vision_settings_id=self._default_vision_settings_id,
            pipelines=[pipeline.to_record() for pipeline in self._pipelines.values()],
            packages=[package.to_record() for package in self._packages.values()],
            parts=[part.to_record() for part in self._parts.values()],
        )

    # Каталоги

    def get_machine(self) -> Machine:
        return self._machine

    def get_vision_settings(
        self, vision_settings_id: Optional[str]
    ) -> Optional[AbstractVisionSettings]:
        if vision_settings_id is None:
            return None
        return self._vision_settings.get(vision_settings_id)

    def get_all_vision_settings(self) -> List[AbstractVisionSettings]:
        return list(self._vision_settings.values())

    def add_vision_settings(self, vision_settings: AbstractVisionSettings) -> None:
        if vision_settings.get_id() in self._vision_settings:
            raise create_duplicate_error("VisionSettings", vision_settings.get_id())
        self._vision_settings[vision_settings.get_id()] = vision_settings

    def get_default_vision_settings(self) -> Optional[AbstractVisionSettings]:
        return self.get_vision_settings(self._default_vision_settings_id)

    def set_default_vision_settings(
        self, vision_settings: AbstractVisionSettings
    ) -> None:
        """Сделать настройки умолчанием, добавив их при необходимости"""
        if vision_settings.get_id() not in self._vision_settings:
            self.add_vision_settings(vision_settings)
        self._default_vision_settings_id = vision_settings.get_id()

    def get_packages(self) -> List[Package]:
        return list(self._packages.values())

    def get_package(self, package_id: Optional[str]) -> Optional[Package]:
        if package_id is None:
            return None
        return self._packages.get(package_id)

    def add_package(self, package: Package) -> None:
        """Зарегистрировать компонент; отклоненный компонент отписывается"""
        if package.get_id() in self._packages:
            package.close()
            raise create_duplicate_error("Package", package.get_id())
        self._packages[package.get_id()] = package

    def remove_package(self, package: Package) -> None:
        """Удалить компонент и отписать его от загрузок"""
        if self._packages.get(package.get_id()) is package:
            del self._packages[package.get_id()]
        package.close()

    def get_parts(self) -> List[Part]:
        return list(self._parts.values())

    def get_part(self, part_id: Optional[str]) -> Optional[Part]:
        if part_id is None:
            return None
        return self._parts.get(part_id)

    def add_part(self, part: Part) -> None:
        if part.get_id() in self._parts:
            raise create_duplicate_error("Part", part.get_id())
        self._parts[part.get_id()] = part

    def get_pipelines(self) -> List[Pipeline]:
        return list(self._pipelines.values())

    def get_pipeline(self, pipeline_id: Optional[str]) -> Optional[Pipeline]:
        if pipeline_id is None:
            return None
        return self._pipelines.get(pipeline_id)

    def add_pipeline(self, pipeline: Pipeline) -> None:
        if pipeline.get_id() in self._pipelines:
            raise create_duplicate_error("Pipeline", pipeline.get_id())
        self._pipelines[pipeline.get_id()] = pipeline

    def assign_vision_settings_to_part(
        self, part: Part, vision_settings: Optional[AbstractVisionSettings]
    ) -> None:
        """Назначить детали настройки зрения"""
        part.set_vision_settings(vision_settings)
        self.logger.debug(
            "Vision settings assigned to part",
            part_id=part.get_id(),
            vision_settings_id=vision_settings.get_id() if vision_settings else None,
        )

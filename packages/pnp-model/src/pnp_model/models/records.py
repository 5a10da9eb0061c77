# packages/pnp-model/src/pnp_model/models/records.py

"""
Pydantic модели сохраненного представления конфигурации

Включает:
- PackageRecord: сохраненная запись компонента
- PipelineRecord: именованный конвейер зрения
- NozzleTipRecord, PartRecord: записи каталога машины
- ConfigurationRecord: полный снимок конфигурации

Необязательные поля, которые не были заданы, хранятся как None и
не попадают в вывод (to_data использует exclude_none).
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from pnp_model.models.footprint import Footprint
from pnp_model.models.vision import BottomVisionSettings, CvPipeline

PACKAGE_RECORD_VERSION = 1.1


class _Record(BaseModel):
    model_config = ConfigDict(extra="forbid")

    def to_data(self) -> Dict[str, Any]:
        """Словарь для сериализации без незаданных полей"""
        return self.model_dump(mode="json", exclude_none=True)


class NozzleTipRecord(_Record):
    """Сохраненный nozzle tip"""

    id: str = Field(..., min_length=1, description="Идентификатор")
    name: Optional[str] = Field(None, description="Имя")


class PackageRecord(_Record):
    """Сохраненная запись компонента (Package)"""

    id: str = Field(..., min_length=1, description="Идентификатор компонента")
    version: float = Field(PACKAGE_RECORD_VERSION, description="Ревизия формата")
    description: Optional[str] = Field(None, description="Описание")
    tape_specification: Optional[str] = Field(None, description="Спецификация ленты")
    pick_vacuum_level: Optional[float] = Field(None, description="Уровень вакуума")
    place_blow_off_level: Optional[float] = Field(None, description="Уровень продувки")
    footprint: Optional[Footprint] = Field(None, description="Посадочное место")
    compatible_nozzle_tip_ids: Optional[List[str]] = Field(
        None, description="Совместимые nozzle tip, в порядке сохранения"
    )
    bottom_vision_id: Optional[str] = Field(
        None, description="Id настроек нижней камеры"
    )

    @field_validator("compatible_nozzle_tip_ids")
    @classmethod
    def validate_nozzle_tip_ids(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        if any(not isinstance(tip_id, str) or not tip_id for tip_id in v):
            raise ValueError("Id nozzle tip должны быть непустыми строками")
        return v


class PipelineRecord(_Record):
    """Сохраненный именованный конвейер"""

    id: str = Field(..., min_length=1, description="Идентификатор")
    name: Optional[str] = Field(None, description="Имя")
    cv_pipeline: CvPipeline = Field(..., description="Конвейер обработки")


class PartRecord(_Record):
    """Сохраненная деталь, ссылающаяся на Package"""

    id: str = Field(..., min_length=1, description="Идентификатор детали")
    name: Optional[str] = Field(None, description="Имя")
    package_id: Optional[str] = Field(None, description="Id компонента")
    bottom_vision_id: Optional[str] = Field(None, description="Id настроек зрения")


class ConfigurationRecord(_Record):
    """Полный снимок конфигурации"""

    nozzle_tips: List[NozzleTipRecord] = Field(default_factory=list)
    vision_settings: List[BottomVisionSettings] = Field(default_factory=list)
    default_vision_settings_id: Optional[str] = Field(
        None, description="Id настроек зрения по умолчанию"
    )
    pipelines: List[PipelineRecord] = Field(default_factory=list)
    packages: List[PackageRecord] = Field(default_factory=list)
    parts: List[PartRecord] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_default_vision_settings(self) -> "ConfigurationRecord":
        """Настройки по умолчанию должны быть объявлены в снимке"""
        default_id = self.default_vision_settings_id
        if default_id is not None:
            known = {settings.id for settings in self.vision_settings}
            if default_id not in known:
                raise ValueError(
                    f"Настройки зрения по умолчанию '{default_id}' не объявлены"
                )
        return self

"""
Модели настроек технического зрения

Включает:
- CvStage / CvPipeline: описание конвейера обработки изображения
- AbstractVisionSettings: именованный набор настроек с конвейером
- BottomVisionSettings: настройки нижней камеры
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CvStage(BaseModel):
    """Стадия конвейера обработки изображения"""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., description="Имя стадии")
    type: str = Field(..., description="Тип стадии")
    enabled: bool = Field(True, description="Включена ли стадия")
    settings: Dict[str, Any] = Field(
        default_factory=dict, description="Параметры стадии"
    )

    @field_validator("name", "type")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Имя и тип стадии должны быть непустыми строками")
        return v.strip()


class CvPipeline(BaseModel):
    """Конвейер обработки изображения - упорядоченный список стадий"""

    model_config = ConfigDict(extra="forbid")

    stages: List[CvStage] = Field(default_factory=list, description="Стадии")

    @field_validator("stages")
    @classmethod
    def validate_unique_names(cls, v: List[CvStage]) -> List[CvStage]:
        names = [stage.name for stage in v]
        if len(names) != len(set(names)):
            raise ValueError("Имена стадий конвейера должны быть уникальны")
        return v

    def get_stage(self, name: str) -> Optional[CvStage]:
        """Получить стадию по имени"""
        for stage in self.stages:
            if stage.name == name:
                return stage
        return None

    def get_enabled_stages(self) -> List[CvStage]:
        return [stage for stage in self.stages if stage.enabled]


class AbstractVisionSettings(BaseModel):
    """Именованный набор настроек зрения"""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    id: str = Field(..., description="Идентификатор настроек")
    name: Optional[str] = Field(None, description="Отображаемое имя")
    enabled: bool = Field(True, description="Включено ли распознавание")
    cv_pipeline: CvPipeline = Field(
        default_factory=CvPipeline, description="Конвейер обработки"
    )

    def get_id(self) -> str:
        return self.id

    def get_cv_pipeline(self) -> CvPipeline:
        return self.cv_pipeline


class BottomVisionSettings(AbstractVisionSettings):
    """Настройки распознавания компонента нижней камерой"""

    type: Literal["bottom"] = "bottom"
    pre_rotate: bool = Field(False, description="Поворачивать до распознавания")
    max_rotation: Literal["Adjust", "Full"] = Field(
        "Adjust", description="Допустимый диапазон поворота"
    )


# Встроенные настройки, используемые если снимок не объявил своих
STOCK_BOTTOM_ID = "BVS_Stock"


def create_stock_bottom_vision_settings() -> BottomVisionSettings:
    """Настройки нижней камеры по умолчанию"""
    return BottomVisionSettings(
        id=STOCK_BOTTOM_ID,
        name="- Stock Bottom Vision Settings -",
        cv_pipeline=CvPipeline(
            stages=[
                CvStage(name="image", type="ImageCapture"),
                CvStage(
                    name="threshold",
                    type="Threshold",
                    settings={"threshold": 100, "auto": False},
                ),
                CvStage(name="contours", type="FindContours"),
                CvStage(name="result", type="MinAreaRect"),
            ]
        ),
    )

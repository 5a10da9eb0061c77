"""
Посадочное место (footprint) компонента
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LengthUnit(str, Enum):
    """Единицы длины геометрии"""

    MILLIMETERS = "Millimeters"
    CENTIMETERS = "Centimeters"
    METERS = "Meters"
    INCHES = "Inches"
    FEET = "Feet"
    MILS = "Mils"
    MICRONS = "Microns"


class Pad(BaseModel):
    """Контактная площадка footprint"""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, description="Имя площадки")
    x: float = Field(0.0, description="Смещение центра по X")
    y: float = Field(0.0, description="Смещение центра по Y")
    width: float = Field(0.0, description="Ширина")
    height: float = Field(0.0, description="Высота")
    rotation: float = Field(0.0, description="Поворот в градусах")
    roundness: float = Field(0.0, ge=0.0, le=100.0, description="Скругление, %")


class Footprint(BaseModel):
    """Геометрия корпуса и площадок, принадлежит записи Package"""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    units: LengthUnit = Field(LengthUnit.MILLIMETERS, description="Единицы длины")
    body_width: float = Field(0.0, description="Ширина корпуса")
    body_height: float = Field(0.0, description="Высота корпуса")
    pads: List[Pad] = Field(default_factory=list, description="Площадки")

    @field_validator("pads")
    @classmethod
    def validate_pads(cls, v: List[Pad]) -> List[Pad]:
        names = [pad.name for pad in v if pad.name]
        if len(names) != len(set(names)):
            raise ValueError("Имена площадок должны быть уникальны")
        return v

    def is_empty(self) -> bool:
        """Footprint без корпуса и площадок"""
        return not self.pads and self.body_width == 0.0 and self.body_height == 0.0

"""
Part - деталь, ссылающаяся на описание компонента (Package)
"""

from typing import TYPE_CHECKING, Optional

from pnp_model.models.base import Identifiable, ModelObject
from pnp_model.models.records import PartRecord
from pnp_model.models.vision import AbstractVisionSettings

if TYPE_CHECKING:
    from pnp_model.models.package import Package


class Part(ModelObject, Identifiable):
    """Деталь с компонентом и собственной ссылкой на настройки зрения"""

    def __init__(
        self,
        id: str,
        package: Optional["Package"] = None,
        name: Optional[str] = None,
    ):
        super().__init__()
        self._id = id
        self._name = name
        self._package = package
        self._vision_settings: Optional[AbstractVisionSettings] = None

    def to_record(self) -> PartRecord:
        return PartRecord(
            id=self._id,
            name=self._name,
            package_id=self._package.get_id() if self._package else None,
            bottom_vision_id=(
                self._vision_settings.get_id() if self._vision_settings else None
            ),
        )

    def get_id(self) -> str:
        return self._id

    def get_name(self) -> Optional[str]:
        return self._name

    def get_package(self) -> Optional["Package"]:
        return self._package

    def set_package(self, package: Optional["Package"]) -> None:
        old_value = self._package
        self._package = package
        self.fire_property_change("package", old_value, package)

    def get_vision_settings(self) -> Optional[AbstractVisionSettings]:
        return self._vision_settings

    def set_vision_settings(
        self, vision_settings: Optional[AbstractVisionSettings]
    ) -> None:
        old_value = self._vision_settings
        self._vision_settings = vision_settings
        self.fire_property_change("vision_settings", old_value, vision_settings)

    def __repr__(self) -> str:
        return f"Part(id={self._id!r})"

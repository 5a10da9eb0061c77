"""
Записи модели конфигурации машины
"""

from pnp_model.models.base import (
    Identifiable,
    ListenerHandle,
    ModelObject,
    PropertyChangeEvent,
)
from pnp_model.models.footprint import Footprint, LengthUnit, Pad
from pnp_model.models.nozzle_tip import NozzleTip
from pnp_model.models.vision import (
    STOCK_BOTTOM_ID,
    AbstractVisionSettings,
    BottomVisionSettings,
    CvPipeline,
    CvStage,
    create_stock_bottom_vision_settings,
)
from pnp_model.models.records import (
    PACKAGE_RECORD_VERSION,
    ConfigurationRecord,
    NozzleTipRecord,
    PackageRecord,
    PartRecord,
    PipelineRecord,
)
from pnp_model.models.package import NozzleTipCacheState, Package
from pnp_model.models.pipeline import Pipeline
from pnp_model.models.part import Part

__all__ = [
    "Identifiable",
    "ListenerHandle",
    "ModelObject",
    "PropertyChangeEvent",
    "Footprint",
    "LengthUnit",
    "Pad",
    "NozzleTip",
    "STOCK_BOTTOM_ID",
    "AbstractVisionSettings",
    "BottomVisionSettings",
    "CvPipeline",
    "CvStage",
    "create_stock_bottom_vision_settings",
    "PACKAGE_RECORD_VERSION",
    "ConfigurationRecord",
    "NozzleTipRecord",
    "PackageRecord",
    "PartRecord",
    "PipelineRecord",
    "NozzleTipCacheState",
    "Package",
    "Pipeline",
    "Part",
]

"""
Pipeline - именованный конвейер обработки изображения
"""

from typing import Optional

from pnp_model.models.base import Identifiable, ModelObject
from pnp_model.models.records import PipelineRecord
from pnp_model.models.vision import CvPipeline


class Pipeline(ModelObject, Identifiable):
    """Идентифицируемая именованная обертка над CvPipeline"""

    def __init__(
        self,
        id: str,
        name: Optional[str] = None,
        cv_pipeline: Optional[CvPipeline] = None,
    ):
        super().__init__()
        self._id = id
        self._name = name
        self._cv_pipeline = cv_pipeline if cv_pipeline is not None else CvPipeline()

    @classmethod
    def from_record(cls, record: PipelineRecord) -> "Pipeline":
        return cls(
            record.id,
            name=record.name,
            cv_pipeline=record.cv_pipeline.model_copy(deep=True),
        )

    def to_record(self) -> PipelineRecord:
        return PipelineRecord(
            id=self._id,
            name=self._name,
            cv_pipeline=self._cv_pipeline.model_copy(deep=True),
        )

    def get_id(self) -> str:
        return self._id

    def get_name(self) -> Optional[str]:
        return self._name

    def get_cv_pipeline(self) -> CvPipeline:
        return self._cv_pipeline

    def set_cv_pipeline(self, cv_pipeline: CvPipeline) -> None:
        self._cv_pipeline = cv_pipeline

    def __repr__(self) -> str:
        return f"Pipeline(id={self._id!r}, name={self._name!r})"

"""
Nozzle tip - совместимый с компонентом сменный наконечник
"""

from typing import Optional

from pnp_model.models.base import Identifiable


class NozzleTip(Identifiable):
    """Наконечник из каталога машины. Равенство и хэш - по id."""

    def __init__(self, id: str, name: Optional[str] = None):
        self.id = id
        self.name = name

    def get_id(self) -> str:
        return self.id

    def get_name(self) -> str:
        return self.name or self.id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NozzleTip):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"NozzleTip(id={self.id!r})"

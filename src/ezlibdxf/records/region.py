from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from ..record import TagList
from .modeler import ModelerGeometry


@dataclass
class Region(ModelerGeometry):
    DXF_NAME: ClassVar[str] = "REGION"
    SUBCLASS_MARKERS: ClassVar[tuple[str, ...]] = ("AcDbEntity", "AcDbModelerGeometry")

    def _export(self, tags: TagList) -> None:
        self._export_header(tags)
        tags.subclass("AcDbModelerGeometry")
        self._export_modeler_data(tags)

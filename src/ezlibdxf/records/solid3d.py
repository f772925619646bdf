from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from ..record import Field, TagList
from ..versions import AcadVersion
from .modeler import ModelerGeometry


@dataclass
class Solid3d(ModelerGeometry):
    DXF_NAME: ClassVar[str] = "3DSOLID"
    FIELDS: ClassVar[tuple[Field, ...]] = ModelerGeometry.FIELDS + (
        Field(350, "history", min_version=AcadVersion.R2008),
    )
    SUBCLASS_MARKERS: ClassVar[tuple[str, ...]] = (
        "AcDbEntity",
        "AcDbModelerGeometry",
        "AcDb3dSolid",
    )
    HAS_LINEWEIGHT: ClassVar[bool] = True
    HAS_GRAPHICS_DATA: ClassVar[bool] = True

    history: str = ""

    def _export(self, tags: TagList) -> None:
        self._export_header(tags)
        tags.subclass("AcDbModelerGeometry")
        tags.subclass("AcDb3dSolid", AcadVersion.R2008)
        self._export_modeler_data(tags)
        if tags.version >= AcadVersion.R2008:
            tags.add(350, self.history)

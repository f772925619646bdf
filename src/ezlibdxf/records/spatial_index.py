from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from ..record import Field, TagList
from ..versions import AcadVersion
from .dxf_object import OBJECT_FIELDS, DxfObject


@dataclass
class SpatialIndex(DxfObject):
    """Spatial index object; only its time stamp (a Julian date) is kept."""

    DXF_NAME: ClassVar[str] = "SPATIAL_INDEX"
    FIELDS: ClassVar[tuple[Field, ...]] = OBJECT_FIELDS + (Field(40, "time_stamp"),)
    SUBCLASS_MARKERS: ClassVar[tuple[str, ...]] = ("AcDbIndex", "AcDbSpatialIndex")
    MIN_VERSION: ClassVar[AcadVersion] = AcadVersion.R14

    time_stamp: float = 0.0

    def _export(self, tags: TagList) -> None:
        self._export_object_header(tags)
        tags.subclass("AcDbIndex")
        tags.add(40, float(self.time_stamp))
        tags.subclass("AcDbSpatialIndex")

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from ..record import Field, ReadState, TagList
from ..stream import TagReader
from ..versions import AcadVersion
from .table_entry import TABLE_ENTRY_FIELDS, TableEntry

LAYER_DEFAULT_LINETYPE = "CONTINUOUS"
LAYER_DEFAULT_COLOR = 7

FLAG_FROZEN = 1
FLAG_FROZEN_IN_NEW_VIEWPORTS = 2
FLAG_LOCKED = 4


@dataclass
class Layer(TableEntry):
    DXF_NAME: ClassVar[str] = "LAYER"
    FIELDS: ClassVar[tuple[Field, ...]] = TABLE_ENTRY_FIELDS + (
        Field(2, "layer_name"),
        Field(6, "linetype"),
        Field(62, "color"),
        Field(290, "plotting_flag", "int", min_version=AcadVersion.R2000),
        Field(347, "material", min_version=AcadVersion.R2008),
        Field(370, "lineweight", min_version=AcadVersion.R2000),
        Field(390, "plot_style_name", min_version=AcadVersion.R2000),
    )
    SUBCLASS_MARKERS: ClassVar[tuple[str, ...]] = (
        "AcDbSymbolTableRecord",
        "AcDbLayerTableRecord",
    )
    ENTRY_SUBCLASS: ClassVar[str] = "AcDbLayerTableRecord"

    layer_name: str = ""
    linetype: str = LAYER_DEFAULT_LINETYPE
    color: int = LAYER_DEFAULT_COLOR
    plotting_flag: int = 1
    material: str = ""
    lineweight: int = -3
    plot_style_name: str = ""

    @property
    def is_frozen(self) -> bool:
        return bool(self.flag & FLAG_FROZEN)

    @property
    def is_frozen_in_new_viewports(self) -> bool:
        return bool(self.flag & FLAG_FROZEN_IN_NEW_VIEWPORTS)

    @property
    def is_locked(self) -> bool:
        return bool(self.flag & FLAG_LOCKED)

    @property
    def is_off(self) -> bool:
        return self.color < 0

    def _finish_read(self, reader: TagReader, state: ReadState) -> None:
        if not self.linetype:
            self.linetype = LAYER_DEFAULT_LINETYPE

    def _validate(self, version: AcadVersion) -> None:
        if not self.layer_name:
            self._reject("empty layer name")

    def _export(self, tags: TagList) -> None:
        self._export_entry_header(tags)
        tags.add(2, self.layer_name)
        tags.add(70, int(self.flag))
        tags.add(62, int(self.color))
        tags.add(6, self._repaired("linetype", LAYER_DEFAULT_LINETYPE))
        if tags.version >= AcadVersion.R2000:
            tags.add(290, int(self.plotting_flag))
            tags.add(370, int(self.lineweight))
            if self.plot_style_name:
                tags.add(390, self.plot_style_name)
        if tags.version >= AcadVersion.R2008 and self.material:
            tags.add(347, self.material)

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from ..record import Field, ReadState, Record, TagList
from ..stream import TagReader
from ..tags import DEFAULT_LAYER
from ..versions import AcadVersion


@dataclass
class Endblk(Record):
    """End of a block definition; only carries a handle, a layer and its owner."""

    DXF_NAME: ClassVar[str] = "ENDBLK"
    FIELDS: ClassVar[tuple[Field, ...]] = (
        Field(5, "id_code", "hex"),
        Field(8, "layer"),
        Field(330, "dictionary_owner_soft"),
    )
    SUBCLASS_MARKERS: ClassVar[tuple[str, ...]] = ("AcDbEntity", "AcDbBlockEnd")

    id_code: int | None = None
    layer: str = DEFAULT_LAYER
    dictionary_owner_soft: str = ""

    def _finish_read(self, reader: TagReader, state: ReadState) -> None:
        if not self.layer:
            self.layer = DEFAULT_LAYER

    def _export(self, tags: TagList) -> None:
        tags.add(0, self.dxftype)
        if tags.version < AcadVersion.R13:
            return
        tags.handle(self.id_code)
        if self.dictionary_owner_soft:
            tags.add(330, self.dictionary_owner_soft)
        tags.subclass("AcDbEntity")
        tags.add(8, self._repaired("layer", DEFAULT_LAYER))
        tags.subclass("AcDbBlockEnd")

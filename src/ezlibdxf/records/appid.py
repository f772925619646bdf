from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from ..record import Field, TagList
from ..versions import AcadVersion
from .table_entry import TABLE_ENTRY_FIELDS, TableEntry

# Do not save extended data of this application on R12 export.
FLAG_NO_SAVE_XDATA = 1


@dataclass
class Appid(TableEntry):
    """A registered application name (APPID symbol table entry)."""

    DXF_NAME: ClassVar[str] = "APPID"
    FIELDS: ClassVar[tuple[Field, ...]] = TABLE_ENTRY_FIELDS + (Field(2, "application_name"),)
    SUBCLASS_MARKERS: ClassVar[tuple[str, ...]] = (
        "AcDbSymbolTableRecord",
        "AcDbRegAppTableRecord",
    )
    ENTRY_SUBCLASS: ClassVar[str] = "AcDbRegAppTableRecord"

    application_name: str = ""

    @property
    def is_no_save_xdata(self) -> bool:
        return bool(self.flag & FLAG_NO_SAVE_XDATA)

    def _validate(self, version: AcadVersion) -> None:
        if not self.application_name:
            self._reject("empty application name")

    def _export(self, tags: TagList) -> None:
        self._export_entry_header(tags)
        tags.add(2, self.application_name)
        tags.add(70, int(self.flag))

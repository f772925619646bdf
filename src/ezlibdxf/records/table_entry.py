from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from ..record import Field, Record, TagList

# Standard flag bits of symbol table entries (group 70).
FLAG_XREF_DEPENDENT = 16
FLAG_XREF_RESOLVED = 32
FLAG_REFERENCED = 64

TABLE_ENTRY_FIELDS: tuple[Field, ...] = (
    Field(5, "id_code", "hex"),
    Field(70, "flag"),
    Field(330, "dictionary_owner_soft"),
    Field(360, "dictionary_owner_hard"),
)


@dataclass
class TableEntry(Record):
    ENTRY_SUBCLASS: ClassVar[str] = ""

    id_code: int | None = None
    flag: int = 0
    dictionary_owner_soft: str = ""
    dictionary_owner_hard: str = ""

    @property
    def is_xreferenced(self) -> bool:
        return bool(self.flag & FLAG_XREF_DEPENDENT)

    @property
    def is_xresolved(self) -> bool:
        return bool(self.flag & FLAG_XREF_RESOLVED)

    @property
    def is_referenced(self) -> bool:
        return bool(self.flag & FLAG_REFERENCED)

    def _export_entry_header(self, tags: TagList) -> None:
        tags.add(0, self.dxftype)
        tags.handle(self.id_code)
        tags.app_groups(self.dictionary_owner_soft, self.dictionary_owner_hard)
        tags.subclass("AcDbSymbolTableRecord")
        tags.subclass(self.ENTRY_SUBCLASS)

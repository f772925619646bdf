from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import ClassVar, Iterable

from ..errors import ErrorKind, NullArgumentError
from ..record import Field, Record, TagList
from ..stream import TagReader, TagWriter
from ..versions import AcadVersion
from .appid import Appid
from .layer import Layer
from .table_entry import TableEntry

logger = logging.getLogger(__name__)

TABLE_ENTRY_TYPES: dict[str, type[TableEntry]] = {
    Appid.DXF_NAME: Appid,
    Layer.DXF_NAME: Layer,
}


@dataclass
class Table(Record):
    """A symbol table: a TABLE header, its entries and the closing ENDTAB."""

    DXF_NAME: ClassVar[str] = "TABLE"
    FIELDS: ClassVar[tuple[Field, ...]] = (
        Field(2, "table_name"),
        Field(5, "id_code", "hex"),
        Field(70, "max_table_entries"),
        Field(330, "dictionary_owner_soft"),
        Field(360, "dictionary_owner_hard"),
    )
    SUBCLASS_MARKERS: ClassVar[tuple[str, ...]] = ("AcDbSymbolTable",)

    table_name: str = ""
    id_code: int | None = None
    max_table_entries: int = 0
    dictionary_owner_soft: str = ""
    dictionary_owner_hard: str = ""
    entries: list[TableEntry] = field(default_factory=list)

    def add(self, entry: TableEntry) -> TableEntry:
        if entry is None:
            raise NullArgumentError("cannot add a missing table entry")
        self.entries.append(entry)
        return entry

    def read(self, reader: TagReader) -> "Table":
        super().read(reader)
        self.read_entries(reader)
        return self

    def read_entries(self, reader: TagReader) -> list[TableEntry]:
        while True:
            tag = reader.read_tag()
            if tag is None or (tag.code == 0 and not tag.value.strip()):
                reader.report(
                    ErrorKind.VALIDATION_FAILURE,
                    f"missing ENDTAB for the {self.table_name or '?'} table",
                )
                return self.entries
            if tag.code != 0:
                reader.report(
                    ErrorKind.UNKNOWN_TAG,
                    f"unexpected group code {tag.code} between {self.table_name} table entries",
                    code=tag.code,
                    line=tag.line,
                )
                continue
            name = tag.value.strip()
            if name == "ENDTAB":
                reader.skip_record()
                return self.entries
            entry_type = TABLE_ENTRY_TYPES.get(name)
            if entry_type is None:
                logger.debug("skipping unsupported %s table entry", name)
                reader.skip_record()
                continue
            self.entries.append(entry_type().read(reader))

    def _validate(self, version: AcadVersion) -> None:
        if not self.table_name:
            self._reject("empty table name")

    def _export(self, tags: TagList) -> None:
        tags.add(0, self.dxftype)
        tags.add(2, self.table_name)
        if tags.version >= AcadVersion.R13:
            tags.handle(self.id_code)
            tags.app_groups("", self.dictionary_owner_hard)
            if self.dictionary_owner_soft:
                tags.add(330, self.dictionary_owner_soft)
        tags.subclass("AcDbSymbolTable")
        tags.add(70, max(int(self.max_table_entries), len(self.entries)))
        for entry in self.entries:
            tags.extend(entry.export_tags(tags.version, tags.options))
        tags.add(0, "ENDTAB")

    @staticmethod
    def write_endtable(writer: TagWriter) -> None:
        writer.write_tag(0, "ENDTAB")


def write_tables(writer: TagWriter, tables: Iterable[Table]) -> None:
    """Write a complete TABLES section."""
    writer.write_tags([(0, "SECTION"), (2, "TABLES")])
    for table in tables:
        table.write(writer)
    writer.write_tag(0, "ENDSEC")

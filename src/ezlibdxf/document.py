from __future__ import annotations

import dataclasses
import fnmatch
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Iterable, Iterator

from .config import DEFAULT_OPTIONS, WriterOptions
from .entity import Entity
from .errors import Diagnostic, ErrorKind, NullArgumentError, ValidationFailure
from .record import Record
from .records import (
    Arc,
    Circle,
    DxfObject,
    Endblk,
    Imagedef,
    Line3d,
    Region,
    Solid,
    Solid3d,
    SpatialFilter,
    SpatialIndex,
    TABLE_ENTRY_TYPES,
    Table,
    TableEntry,
)
from .stream import TagReader, TagWriter, open_reader
from .tags import MODELSPACE, PAPERSPACE
from .versions import AcadVersion

logger = logging.getLogger(__name__)

RECORD_TYPES: dict[str, type[Record]] = {
    "3DLINE": Line3d,
    "LINE": Line3d,
    "3DSOLID": Solid3d,
    "ARC": Arc,
    "CIRCLE": Circle,
    "SOLID": Solid,
    "REGION": Region,
    "ENDBLK": Endblk,
    "SPATIAL_FILTER": SpatialFilter,
    "SPATIAL_INDEX": SpatialIndex,
    "IMAGEDEF": Imagedef,
}
SUPPORTED_RECORD_TYPES = (
    "3DLINE",
    "3DSOLID",
    "ARC",
    "CIRCLE",
    "SOLID",
    "REGION",
    "ENDBLK",
    "SPATIAL_FILTER",
    "SPATIAL_INDEX",
    "IMAGEDEF",
    "TABLE",
    *TABLE_ENTRY_TYPES,
)

TYPE_ALIASES = {"LINE": "3DLINE"}

DEFAULT_WRITE_VERSION = AcadVersion.R2000


def iter_records(reader: TagReader) -> Iterator[Record]:
    """Yield every supported record of a DXF tag stream in file order."""
    for _section, record in _iter_section_records(reader):
        yield record


def read(path: str | Path, version: AcadVersion | str | None = None) -> "Document":
    with open_reader(path, version=version) as reader:
        return _read_document(reader, str(path))


def read_stream(
    stream: IO[str],
    filename: str = "<stream>",
    version: AcadVersion | str | None = None,
) -> "Document":
    return _read_document(TagReader(stream, filename=filename, version=version), filename)


def _read_document(reader: TagReader, path: str) -> "Document":
    records: list[Record] = []
    blocks: list[Record] = []
    for section, record in _iter_section_records(reader):
        if section == "BLOCKS":
            blocks.append(record)
        else:
            records.append(record)
    logger.debug(
        "read %d records and %d block records from %s (%d diagnostics)",
        len(records),
        len(blocks),
        path,
        len(reader.diagnostics),
    )
    return Document(
        path=path,
        version=reader.version,
        records=records,
        blocks=blocks,
        diagnostics=list(reader.diagnostics),
    )


def _iter_section_records(reader: TagReader) -> Iterator[tuple[str | None, Record]]:
    if reader is None:
        raise NullArgumentError("a reader is required")
    section: str | None = None
    while True:
        tag = reader.read_tag()
        if tag is None:
            return
        if tag.code == 999:
            logger.info("DXF comment: %s", tag.value)
            continue
        if tag.code != 0:
            if section == "HEADER":
                if tag.code == 9 and tag.value.strip() == "$ACADVER":
                    _read_acadver(reader)
                continue
            reader.report(
                ErrorKind.UNKNOWN_TAG,
                f"unexpected group code {tag.code} outside of a record",
                code=tag.code,
                line=tag.line,
            )
            continue

        name = tag.value.strip()
        if name == "EOF":
            return
        if name == "SECTION":
            section = _read_section_name(reader)
            continue
        if name == "ENDSEC":
            section = None
            continue
        if section == "HEADER":
            continue
        if name == "TABLE":
            yield section, Table().read(reader)
            continue
        record_type = RECORD_TYPES.get(name)
        if record_type is None:
            logger.debug("skipping unsupported %s record in line %d", name or "?", tag.line)
            reader.skip_record()
            continue
        yield section, record_type().read(reader)


def _read_section_name(reader: TagReader) -> str | None:
    tag = reader.read_tag()
    if tag is None:
        return None
    if tag.code != 2:
        reader.report(ErrorKind.VALIDATION_FAILURE, "SECTION without a name", code=tag.code)
        reader.push_back(tag)
        return None
    return tag.value.strip().upper()


def _read_acadver(reader: TagReader) -> None:
    tag = reader.read_tag()
    if tag is None:
        return
    if tag.code != 1:
        reader.push_back(tag)
        return
    try:
        detected = AcadVersion.from_acadver(tag.value)
    except ValueError as exc:
        reader.report(ErrorKind.VALIDATION_FAILURE, str(exc), code=1, line=tag.line)
        return
    if reader.version is None:
        reader.version = detected
    elif reader.version != detected:
        logger.info(
            "file declares %s, reading as %s",
            detected.name,
            reader.version.name,
        )


@dataclass
class Document:
    path: str | None = None
    version: AcadVersion | None = None
    records: list[Record] = field(default_factory=list)
    blocks: list[Record] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def tables(self) -> list[Table]:
        return [record for record in self.records if isinstance(record, Table)]

    @property
    def entities(self) -> list[Entity]:
        return [record for record in self.records if isinstance(record, Entity)]

    @property
    def objects(self) -> list[DxfObject]:
        return [record for record in self.records if isinstance(record, DxfObject)]

    def table(self, name: str) -> Table | None:
        wanted = name.strip().upper()
        for table in self.tables:
            if table.table_name.upper() == wanted:
                return table
        return None

    def iter_all(self) -> Iterator[Record]:
        """Every record, with table entries following their table."""
        for record in [*self.records, *self.blocks]:
            yield record
            if isinstance(record, Table):
                yield from record.entries

    def query(self, types: str | Iterable[str] | None = None) -> Iterator[Record]:
        selected = set(_normalize_types(types))
        for record in self.iter_all():
            if record.dxftype in selected:
                yield record

    def modelspace(self) -> "Layout":
        return Layout(self, "MODELSPACE")

    def paperspace(self) -> "Layout":
        return Layout(self, "PAPERSPACE")

    def write(
        self,
        output_path: str | Path,
        version: AcadVersion | str | None = None,
        options: WriterOptions = DEFAULT_OPTIONS,
    ) -> "WriteResult":
        target = AcadVersion.parse(version) if version is not None else (self.version or DEFAULT_WRITE_VERSION)
        out_path = Path(output_path)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        if self.blocks:
            logger.debug("not writing %d block records", len(self.blocks))
        with out_path.open("w", encoding="utf-8", newline="\n") as stream:
            result = write_document(stream, self.records, target, options)
        return dataclasses.replace(result, output_path=str(out_path))

    def plot(self, *args, **kwargs):
        from .render import plot

        return plot(self, *args, **kwargs)

    def export_dxf(self, output_path: str, **kwargs):
        from .convert import to_dxf

        return to_dxf(self, output_path, **kwargs)


@dataclass(frozen=True)
class Layout:
    doc: Document
    name: str

    def iter_entities(self, types: str | Iterable[str] | None = None) -> Iterator[Entity]:
        return self.query(types)

    def query(self, types: str | Iterable[str] | None = None) -> Iterator[Entity]:
        space = PAPERSPACE if self.name == "PAPERSPACE" else MODELSPACE
        selected = set(_normalize_types(types))
        for entity in self.doc.entities:
            if entity.paperspace == space and entity.dxftype in selected:
                yield entity

    def plot(self, *args, **kwargs):
        from .render import plot

        return plot(self, *args, **kwargs)

    def export_dxf(self, output_path: str, **kwargs):
        from .convert import to_dxf

        return to_dxf(self, output_path, **kwargs)


def _normalize_types(types: str | Iterable[str] | None) -> list[str]:
    default_types = list(SUPPORTED_RECORD_TYPES)
    if types is None:
        return default_types
    if isinstance(types, str):
        tokens = re.split(r"[,\s]+", types.strip())
    else:
        tokens = list(types)

    normalized = [token.strip().upper() for token in tokens if token and token.strip()]
    normalized = [TYPE_ALIASES.get(token, token) for token in normalized]
    if not normalized:
        return default_types

    if any(token in {"*", "ALL"} for token in normalized):
        return default_types

    selected: list[str] = []
    seen = set()
    for token in normalized:
        if any(ch in token for ch in "*?[]"):
            matches = [name for name in SUPPORTED_RECORD_TYPES if fnmatch.fnmatchcase(name, token)]
        elif token in SUPPORTED_RECORD_TYPES:
            matches = [token]
        else:
            matches = []
        for name in matches:
            if name not in seen:
                seen.add(name)
                selected.append(name)
    return selected


@dataclass(frozen=True)
class WriteResult:
    output_path: str | None
    target_version: str
    total_records: int
    written_records: int
    skipped_records: int
    skipped_by_type: dict[str, int]


def write_document(
    stream: IO[str],
    records: Iterable[Record],
    version: AcadVersion | str = DEFAULT_WRITE_VERSION,
    options: WriterOptions = DEFAULT_OPTIONS,
) -> WriteResult:
    """Write ``records`` as a complete DXF file.

    Records are sorted into the TABLES, BLOCKS, ENTITIES and OBJECTS
    sections. A record that fails validation is left out and counted as
    skipped; the rest of the file is still written. Objects are only
    written for R13 and later.
    """
    writer = TagWriter(stream, version, options)
    version = writer.version
    tables: list[Table] = []
    loose_entries: dict[str, list[TableEntry]] = {}
    blocks: list[Record] = []
    entities: list[Record] = []
    objects: list[Record] = []
    for record in records:
        if record is None:
            raise NullArgumentError("cannot write a missing record")
        if isinstance(record, Table):
            tables.append(record)
        elif isinstance(record, TableEntry):
            loose_entries.setdefault(record.dxftype, []).append(record)
        elif isinstance(record, Endblk):
            blocks.append(record)
        elif isinstance(record, DxfObject):
            objects.append(record)
        else:
            entities.append(record)
    for table_name, entries in loose_entries.items():
        tables.append(Table(table_name=table_name, entries=entries))

    counter = _WriteCounter()

    writer.write_tags(
        [
            (0, "SECTION"),
            (2, "HEADER"),
            (9, "$ACADVER"),
            (1, version.acadver),
            (0, "ENDSEC"),
        ]
    )
    if tables:
        writer.write_tags([(0, "SECTION"), (2, "TABLES")])
        for table in tables:
            writer.write_tags(counter.export_table(table, version, options))
        writer.write_tag(0, "ENDSEC")
    if blocks:
        _write_section(writer, "BLOCKS", blocks, counter)
    _write_section(writer, "ENTITIES", entities, counter)
    if version >= AcadVersion.R13:
        _write_section(writer, "OBJECTS", objects, counter)
    else:
        for record in objects:
            logger.warning(
                "%s objects are not written for DXF version %s", record.dxftype, version.name
            )
            counter.skip(record)
    writer.write_tag(0, "EOF")

    return WriteResult(
        output_path=None,
        target_version=version.name,
        total_records=counter.total,
        written_records=counter.written,
        skipped_records=counter.total - counter.written,
        skipped_by_type=dict(sorted(counter.skipped_by_type.items())),
    )


def _write_section(writer: TagWriter, name: str, records: list[Record], counter: "_WriteCounter") -> None:
    writer.write_tags([(0, "SECTION"), (2, name)])
    for record in records:
        writer.write_tags(counter.export(record, writer.version, writer.options))
    writer.write_tag(0, "ENDSEC")


class _WriteCounter:
    def __init__(self) -> None:
        self.total = 0
        self.written = 0
        self.skipped_by_type: dict[str, int] = {}

    def skip(self, record: Record) -> None:
        self.total += 1
        self.skipped_by_type[record.dxftype] = self.skipped_by_type.get(record.dxftype, 0) + 1

    def export(self, record: Record, version: AcadVersion, options: WriterOptions) -> list:
        try:
            tags = record.export_tags(version, options)
        except ValidationFailure:
            self.skip(record)
            return []
        self.total += 1
        self.written += 1
        return tags

    def export_table(self, table: Table, version: AcadVersion, options: WriterOptions) -> list:
        try:
            dataclasses.replace(table, entries=[]).export_tags(version, options)
        except ValidationFailure:
            # Nothing of a rejected table reaches the output.
            for entry in table.entries:
                self.skip(entry)
            self.skip(table)
            return []
        valid = []
        for entry in table.entries:
            if self.export(entry, version, options):
                valid.append(entry)
        return self.export(dataclasses.replace(table, entries=valid), version, options)

from __future__ import annotations

import dataclasses
import io
import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import ClassVar

from . import chain
from .config import DEFAULT_OPTIONS, WriterOptions
from .errors import DxfIOError, ErrorKind, NullArgumentError, ValidationFailure
from .stream import TagReader, TagWriter
from .tags import Tag, format_handle, group_code_type, parse_value
from .versions import AcadVersion

logger = logging.getLogger(__name__)

ACAD_REACTORS = "ACAD_REACTORS"
ACAD_XDICTIONARY = "ACAD_XDICTIONARY"


@dataclass(frozen=True)
class Field:
    """One row of a record's group code dispatch table."""

    code: int
    attr: str
    kind: str | None = None
    min_version: AcadVersion | None = None

    @property
    def value_kind(self) -> str:
        return self.kind or group_code_type(self.code)

    def accepts(self, version: AcadVersion | None) -> bool:
        return version is None or self.min_version is None or version >= self.min_version

    def assign(self, record: object, raw: str) -> None:
        value = parse_value(self.value_kind, raw)
        target = record
        *path, name = self.attr.split(".")
        for part in path:
            target = getattr(target, part)
        setattr(target, name, value)


@dataclass
class ReadState:
    app_group: str | None = None
    order: int = 1
    values: dict[int, list[str]] = field(default_factory=dict)


class TagList(list):
    def __init__(self, version: AcadVersion, options: WriterOptions) -> None:
        super().__init__()
        self.version = version
        self.options = options

    def add(self, code: int, value) -> None:
        self.append((code, value))

    def add_point(self, code: int, point: tuple[float, ...]) -> None:
        for offset, value in zip((0, 10, 20), point):
            self.append((code + offset, float(value)))

    def handle(self, id_code: int | None) -> None:
        if id_code is not None:
            self.append((5, format_handle(id_code)))

    def subclass(self, marker: str, min_version: AcadVersion = AcadVersion.R13) -> None:
        if self.version >= min_version:
            self.append((100, marker))

    def app_groups(self, soft: str, hard: str) -> None:
        if self.version < AcadVersion.R14:
            return
        if soft:
            self.extend([(102, "{" + ACAD_REACTORS), (330, soft), (102, "}")])
        if hard:
            self.extend([(102, "{" + ACAD_XDICTIONARY), (360, hard), (102, "}")])


@lru_cache(maxsize=None)
def dispatch_table(record_type: type) -> dict[int, Field]:
    return {item.code: item for item in record_type.FIELDS}


@dataclass
class Record:
    DXF_NAME: ClassVar[str] = ""
    FIELDS: ClassVar[tuple[Field, ...]] = ()
    SUBCLASS_MARKERS: ClassVar[tuple[str, ...]] = ()

    next: "Record | None" = field(default=None, repr=False, compare=False)
    freed: bool = field(default=False, repr=False, compare=False)

    @property
    def dxftype(self) -> str:
        return self.DXF_NAME

    # -- reading -----------------------------------------------------------

    @classmethod
    def from_reader(cls, reader: TagReader):
        return cls().read(reader)

    @classmethod
    def from_text(cls, text: str, version: AcadVersion | str | None = None):
        """Parse one record from ``text``.

        ``text`` may start with the ``0``/type-name pair or directly with the
        record's first group code.
        """
        reader = TagReader(io.StringIO(text), version=version)
        first = reader.read_tag()
        if first is not None and first.code != 0:
            reader.push_back(first)
        return cls.from_reader(reader)

    def read(self, reader: TagReader):
        if reader is None:
            raise NullArgumentError(f"a reader is required to read a {self.dxftype} record")
        table = dispatch_table(type(self))
        state = ReadState()
        while True:
            tag = reader.read_tag()
            if tag is None:
                reader.close()
                raise DxfIOError(
                    f"unexpected end of file while reading a {self.dxftype} record "
                    f"from: {reader.filename} in line: {reader.line_number}"
                )
            if tag.code == 0:
                reader.push_back(tag)
                break
            if tag.code == 999:
                logger.info("DXF comment: %s", tag.value)
                continue
            if self._read_tag(tag, reader, state):
                continue
            descriptor = table.get(tag.code)
            if descriptor is None or not descriptor.accepts(reader.version):
                reader.report(
                    ErrorKind.UNKNOWN_TAG,
                    f"unknown group code {tag.code} found in a {self.dxftype} record",
                    code=tag.code,
                    line=tag.line,
                )
                continue
            try:
                descriptor.assign(self, tag.value)
            except ValueError:
                reader.report(
                    ErrorKind.VALIDATION_FAILURE,
                    f"invalid value {tag.value!r} for group code {tag.code} "
                    f"in a {self.dxftype} record",
                    code=tag.code,
                    line=tag.line,
                )
        self._finish_read(reader, state)
        return self

    def _read_tag(self, tag: Tag, reader: TagReader, state: ReadState) -> bool:
        if tag.code == 100:
            if self.SUBCLASS_MARKERS and tag.value.strip() not in self.SUBCLASS_MARKERS:
                reader.report(
                    ErrorKind.VALIDATION_FAILURE,
                    f"found a bad subclass marker {tag.value.strip()!r} in a {self.dxftype} record",
                    code=100,
                    line=tag.line,
                )
            return True
        if tag.code == 102:
            value = tag.value.strip()
            state.app_group = value[1:] if value.startswith("{") else None
            return True
        return False

    def _finish_read(self, reader: TagReader, state: ReadState) -> None:
        pass

    # -- writing -----------------------------------------------------------

    def export_tags(
        self,
        version: AcadVersion | str = AcadVersion.R2000,
        options: WriterOptions = DEFAULT_OPTIONS,
    ) -> list[tuple[int, object]]:
        version = AcadVersion.parse(version)
        self._validate(version)
        tags = TagList(version, options)
        self._export(tags)
        return list(tags)

    def write(self, writer: TagWriter) -> None:
        if writer is None:
            raise NullArgumentError(f"a writer is required to write a {self.dxftype} record")
        writer.write_tags(self.export_tags(writer.version, writer.options))

    def to_text(
        self,
        version: AcadVersion | str = AcadVersion.R2000,
        options: WriterOptions = DEFAULT_OPTIONS,
    ) -> str:
        buffer = io.StringIO()
        self.write(TagWriter(buffer, version, options))
        return buffer.getvalue()

    def _validate(self, version: AcadVersion) -> None:
        pass

    def _export(self, tags: TagList) -> None:
        raise NotImplementedError

    def _reject(self, reason: str) -> None:
        logger.error(
            "%s for the %s entity with id-code: %s, skipping it",
            reason,
            self.dxftype,
            self._id_label(),
        )
        raise ValidationFailure(f"{self.dxftype} {self._id_label()}: {reason}")

    def _repaired(self, attr: str, default: str) -> str:
        value = getattr(self, attr)
        if value:
            return value
        logger.warning(
            "empty %s string for the %s entity with id-code: %s, using %r",
            attr,
            self.dxftype,
            self._id_label(),
            default,
        )
        return default

    def _id_label(self) -> str:
        id_code = getattr(self, "id_code", None)
        return "none" if id_code is None else format_handle(id_code)

    # -- linked records ----------------------------------------------------

    def set_next(self, next_record: "Record | None"):
        return chain.set_next(self, next_record)

    def get_next(self) -> "Record | None":
        return chain.get_next(self)

    def get_last(self) -> "Record":
        return chain.get_last(self)

    def free(self) -> None:
        chain.free(self)

    def release(self) -> None:
        for item in dataclasses.fields(self):
            value = getattr(self, item.name)
            if isinstance(value, list):
                value.clear()
        self.freed = True

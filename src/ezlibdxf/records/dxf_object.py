from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import ClassVar

from ..record import ACAD_REACTORS, Field, ReadState, Record, TagList
from ..stream import TagReader
from ..tags import Tag
from ..versions import AcadVersion

logger = logging.getLogger(__name__)

OBJECT_FIELDS: tuple[Field, ...] = (
    Field(5, "id_code", "hex"),
    Field(330, "dictionary_owner_soft"),
    Field(360, "dictionary_owner_hard"),
)


@dataclass
class DxfObject(Record):
    """Base of the non-graphical records of the OBJECTS section."""

    MIN_VERSION: ClassVar[AcadVersion] = AcadVersion.R13

    id_code: int | None = None
    dictionary_owner_soft: str = ""
    dictionary_owner_hard: str = ""
    reactors: list[str] = field(default_factory=list)

    def reactor_handles(self) -> list[str]:
        return list(self.reactors)

    def _add_reactor(self, handle: str) -> None:
        self.reactors.append(handle)

    def _read_tag(self, tag: Tag, reader: TagReader, state: ReadState) -> bool:
        if tag.code == 330 and state.app_group == ACAD_REACTORS:
            self._add_reactor(tag.value.strip())
            return True
        return super()._read_tag(tag, reader, state)

    def _validate(self, version: AcadVersion) -> None:
        if version < self.MIN_VERSION:
            logger.warning(
                "illegal DXF version %s for this %s object with id-code: %s",
                version.name,
                self.dxftype,
                self._id_label(),
            )

    def _export_object_header(self, tags: TagList) -> None:
        tags.add(0, self.dxftype)
        tags.handle(self.id_code)
        if tags.version >= AcadVersion.R14:
            handles = [handle for handle in self.reactor_handles() if handle]
            if handles:
                tags.add(102, "{" + ACAD_REACTORS)
                for handle in handles:
                    tags.add(330, handle)
                tags.add(102, "}")
        tags.app_groups("", self.dictionary_owner_hard)
        if self.dictionary_owner_soft:
            tags.add(330, self.dictionary_owner_soft)

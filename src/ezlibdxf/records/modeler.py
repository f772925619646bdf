from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import ClassVar

from ..entity import COMMON_FIELDS, Entity
from ..point import ProprietaryData, merge_proprietary_data
from ..record import Field, ReadState, TagList
from ..stream import TagReader
from ..tags import Tag
from ..versions import AcadVersion

logger = logging.getLogger(__name__)


@dataclass
class ModelerGeometry(Entity):
    """Base of the ACIS-backed entities (3DSOLID, REGION).

    The ACIS text is split over group 1 and group 3 lines; both streams keep
    their relative position in the ``order`` of each line.
    """

    FIELDS: ClassVar[tuple[Field, ...]] = COMMON_FIELDS + (
        Field(70, "modeler_format_version_number"),
    )

    modeler_format_version_number: int = 1
    proprietary_data: list[ProprietaryData] = field(default_factory=list)
    additional_proprietary_data: list[ProprietaryData] = field(default_factory=list)

    def append_proprietary_line(self, line: str, additional: bool = False) -> ProprietaryData:
        item = ProprietaryData(line, self._next_order())
        if additional:
            self.additional_proprietary_data.append(item)
        else:
            self.proprietary_data.append(item)
        return item

    def acis_lines(self) -> list[str]:
        return [line for _code, line in self._interleaved()]

    def _next_order(self) -> int:
        orders = [item.order for item in self.proprietary_data]
        orders.extend(item.order for item in self.additional_proprietary_data)
        return max(orders, default=0) + 1

    def _interleaved(self) -> list[tuple[int, str]]:
        return merge_proprietary_data(self.proprietary_data, self.additional_proprietary_data)

    def _read_tag(self, tag: Tag, reader: TagReader, state: ReadState) -> bool:
        if tag.code in (1, 3):
            target = self.proprietary_data if tag.code == 1 else self.additional_proprietary_data
            target.append(ProprietaryData(tag.value, state.order))
            state.order += 1
            return True
        return super()._read_tag(tag, reader, state)

    def _validate(self, version: AcadVersion) -> None:
        if version < AcadVersion.R13:
            logger.warning(
                "illegal DXF version %s for this %s entity with id-code: %s",
                version.name,
                self.dxftype,
                self._id_label(),
            )

    def _export_modeler_data(self, tags: TagList) -> None:
        if tags.version >= AcadVersion.R13:
            tags.add(70, int(self.modeler_format_version_number))
        for code, line in self._interleaved():
            tags.add(code, line)

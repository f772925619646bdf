from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from .errors import ErrorKind
from .point import Point3D
from .record import Field, ReadState, Record, TagList
from .stream import TagReader
from .tags import (
    COLOR_BYLAYER,
    DEFAULT_LAYER,
    DEFAULT_LINETYPE,
    DEFAULT_LINETYPE_SCALE,
    DEFAULT_VISIBILITY,
    MODELSPACE,
    PAPERSPACE,
    Tag,
)
from .versions import AcadVersion

DEFAULT_EXTRUSION: Point3D = (0.0, 0.0, 1.0)

COMMON_FIELDS: tuple[Field, ...] = (
    Field(5, "id_code", "hex"),
    Field(6, "linetype"),
    Field(8, "layer"),
    Field(38, "elevation"),
    Field(39, "thickness"),
    Field(48, "linetype_scale"),
    Field(60, "visibility"),
    Field(62, "color"),
    Field(67, "paperspace"),
    Field(92, "graphics_data_size"),
    Field(160, "graphics_data_size"),
    Field(284, "shadow_mode", min_version=AcadVersion.R2009),
    Field(330, "dictionary_owner_soft"),
    Field(347, "material", min_version=AcadVersion.R2008),
    Field(360, "dictionary_owner_hard"),
    Field(370, "lineweight"),
    Field(390, "plot_style_name"),
    Field(420, "color_value", min_version=AcadVersion.R2004),
    Field(430, "color_name", min_version=AcadVersion.R2004),
    Field(440, "transparency", min_version=AcadVersion.R2004),
)

EXTRUSION_FIELDS: tuple[Field, ...] = (
    Field(210, "extr_x0"),
    Field(220, "extr_y0"),
    Field(230, "extr_z0"),
)


@dataclass
class Entity(Record):
    """Presentation attributes shared by every drawable record."""

    # Entities that carry these groups in their common header.
    HAS_LINEWEIGHT: ClassVar[bool] = False
    HAS_GRAPHICS_DATA: ClassVar[bool] = False

    id_code: int | None = None
    linetype: str = DEFAULT_LINETYPE
    layer: str = DEFAULT_LAYER
    elevation: float = 0.0
    thickness: float = 0.0
    linetype_scale: float = DEFAULT_LINETYPE_SCALE
    visibility: int = DEFAULT_VISIBILITY
    color: int = COLOR_BYLAYER
    paperspace: int = MODELSPACE
    graphics_data_size: int = 0
    shadow_mode: int = 0
    binary_graphics_data: list[str] = field(default_factory=list)
    dictionary_owner_soft: str = ""
    material: str = ""
    dictionary_owner_hard: str = ""
    lineweight: int = 0
    plot_style_name: str = ""
    color_value: int = 0
    color_name: str = ""
    transparency: int = 0

    @property
    def is_paperspace(self) -> bool:
        return self.paperspace == PAPERSPACE

    def to_points(self) -> list[Point3D]:
        raise NotImplementedError(f"to_points is not supported for {self.dxftype}")

    def _read_tag(self, tag: Tag, reader: TagReader, state: ReadState) -> bool:
        if tag.code == 310:
            self.binary_graphics_data.append(tag.value.strip())
            return True
        return super()._read_tag(tag, reader, state)

    def _finish_read(self, reader: TagReader, state: ReadState) -> None:
        if not self.linetype:
            self.linetype = DEFAULT_LINETYPE
        if not self.layer:
            self.layer = DEFAULT_LAYER
        if not 0 <= self.shadow_mode <= 3:
            reader.report(
                ErrorKind.VALIDATION_FAILURE,
                f"shadow mode {self.shadow_mode} out of range in a {self.dxftype} record",
                code=284,
            )
            self.shadow_mode = 0

    def _export_header(self, tags: TagList, name: str | None = None) -> None:
        version = tags.version
        options = tags.options
        tags.add(0, name or self.dxftype)
        tags.handle(self.id_code)
        tags.app_groups(self.dictionary_owner_soft, self.dictionary_owner_hard)
        tags.subclass("AcDbEntity")
        if self.paperspace == PAPERSPACE and version >= AcadVersion.R13:
            tags.add(67, PAPERSPACE)
        tags.add(8, self._repaired("layer", DEFAULT_LAYER))
        linetype = self._repaired("linetype", DEFAULT_LINETYPE)
        if linetype != DEFAULT_LINETYPE:
            tags.add(6, linetype)
        if version <= AcadVersion.R11 and options.flatland and self.elevation != 0.0:
            tags.add(38, float(self.elevation))
        if version >= AcadVersion.R2008 and self.material:
            tags.add(347, self.material)
        if self.color != COLOR_BYLAYER:
            tags.add(62, int(self.color))
        if self.HAS_LINEWEIGHT and version >= AcadVersion.R2002:
            tags.add(370, int(self.lineweight))
        if version >= AcadVersion.R13:
            if self.linetype_scale != DEFAULT_LINETYPE_SCALE:
                tags.add(48, float(self.linetype_scale))
            if self.visibility != DEFAULT_VISIBILITY:
                tags.add(60, int(self.visibility))
        if self.HAS_GRAPHICS_DATA and version >= AcadVersion.R2000:
            tags.add(options.graphics_data_size_code, int(self.graphics_data_size))
            for chunk in self.binary_graphics_data:
                tags.add(310, chunk)
        if version >= AcadVersion.R2004:
            tags.add(420, int(self.color_value))
            tags.add(430, self.color_name)
            tags.add(440, int(self.transparency))
        if version >= AcadVersion.R2009:
            tags.add(390, self.plot_style_name)
            tags.add(284, int(self.shadow_mode))

    def _export_thickness(self, tags: TagList) -> None:
        if self.thickness != 0.0:
            tags.add(39, float(self.thickness))

    def _export_extrusion(self, tags: TagList) -> None:
        vector = (self.extr_x0, self.extr_y0, self.extr_z0)
        if tags.version >= AcadVersion.R12 and vector != DEFAULT_EXTRUSION:
            tags.add_point(210, vector)

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from ..errors import ErrorKind
from ..record import Field, ReadState, TagList
from ..stream import TagReader
from ..versions import AcadVersion
from .dxf_object import OBJECT_FIELDS, DxfObject

RESOLUTION_UNITS = {0: "none", 2: "centimeters", 5: "inch"}


@dataclass
class Imagedef(DxfObject):
    """Image definition object (the file behind IMAGE entities).

    The first reactor handle is the owning ACAD_IMAGE_DICT dictionary, the
    others point to IMAGEDEF_REACTOR objects.
    """

    DXF_NAME: ClassVar[str] = "IMAGEDEF"
    FIELDS: ClassVar[tuple[Field, ...]] = OBJECT_FIELDS + (
        Field(1, "file_name"),
        Field(10, "x0"),
        Field(20, "y0"),
        Field(11, "x1"),
        Field(21, "y1"),
        Field(90, "class_version"),
        Field(280, "image_is_loaded_flag"),
        Field(281, "resolution_units"),
    )
    SUBCLASS_MARKERS: ClassVar[tuple[str, ...]] = ("AcDbRasterImageDef",)

    file_name: str = ""
    # Image size in pixels.
    x0: float = 0.0
    y0: float = 0.0
    # Default size of one pixel in drawing units.
    x1: float = 1.0
    y1: float = 1.0
    class_version: int = 0
    image_is_loaded_flag: int = 0
    resolution_units: int = 0
    acad_image_dict_soft: str = ""
    imagedef_reactor_soft: list[str] = field(default_factory=list)

    def reactor_handles(self) -> list[str]:
        return [self.acad_image_dict_soft, *self.imagedef_reactor_soft]

    def _add_reactor(self, handle: str) -> None:
        if not self.acad_image_dict_soft:
            self.acad_image_dict_soft = handle
        else:
            self.imagedef_reactor_soft.append(handle)

    def _finish_read(self, reader: TagReader, state: ReadState) -> None:
        if self.resolution_units not in RESOLUTION_UNITS:
            reader.report(
                ErrorKind.VALIDATION_FAILURE,
                f"invalid resolution units {self.resolution_units} in an IMAGEDEF record",
                code=281,
            )
            self.resolution_units = 0
        if self.image_is_loaded_flag not in (0, 1):
            reader.report(
                ErrorKind.VALIDATION_FAILURE,
                f"invalid image-is-loaded flag {self.image_is_loaded_flag} in an IMAGEDEF record",
                code=280,
            )
            self.image_is_loaded_flag = 0

    def _validate(self, version: AcadVersion) -> None:
        super()._validate(version)
        if not self.file_name:
            self._reject("empty image file name")
        if self.resolution_units not in RESOLUTION_UNITS:
            self._reject(f"invalid resolution units {self.resolution_units}")

    def _export(self, tags: TagList) -> None:
        self._export_object_header(tags)
        tags.subclass("AcDbRasterImageDef")
        tags.add(90, int(self.class_version))
        tags.add(1, self.file_name)
        tags.add(10, float(self.x0))
        tags.add(20, float(self.y0))
        tags.add(11, float(self.x1))
        tags.add(21, float(self.y1))
        tags.add(280, int(self.image_is_loaded_flag))
        tags.add(281, int(self.resolution_units))

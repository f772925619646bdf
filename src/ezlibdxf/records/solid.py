from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from ..entity import COMMON_FIELDS, EXTRUSION_FIELDS, Entity
from ..point import Point3D
from ..record import Field, TagList


@dataclass
class Solid(Entity):
    """A filled triangle or quadrilateral.

    Corners are stored in file order; for a quadrilateral the third and
    fourth corners are swapped relative to the drawing order.
    """

    DXF_NAME: ClassVar[str] = "SOLID"
    FIELDS: ClassVar[tuple[Field, ...]] = COMMON_FIELDS + EXTRUSION_FIELDS + tuple(
        Field(code + axis_offset, f"{axis}{index}")
        for index, code in enumerate((10, 11, 12, 13))
        for axis_offset, axis in ((0, "x"), (10, "y"), (20, "z"))
    )
    SUBCLASS_MARKERS: ClassVar[tuple[str, ...]] = ("AcDbEntity", "AcDbTrace")

    x0: float = 0.0
    y0: float = 0.0
    z0: float = 0.0
    x1: float = 0.0
    y1: float = 0.0
    z1: float = 0.0
    x2: float = 0.0
    y2: float = 0.0
    z2: float = 0.0
    x3: float = 0.0
    y3: float = 0.0
    z3: float = 0.0
    extr_x0: float = 0.0
    extr_y0: float = 0.0
    extr_z0: float = 1.0

    @property
    def corners(self) -> list[Point3D]:
        return [
            (self.x0, self.y0, self.z0),
            (self.x1, self.y1, self.z1),
            (self.x2, self.y2, self.z2),
            (self.x3, self.y3, self.z3),
        ]

    def to_points(self) -> list[Point3D]:
        return self.corners

    def _export(self, tags: TagList) -> None:
        self._export_header(tags)
        tags.subclass("AcDbTrace")
        for code, corner in zip((10, 11, 12, 13), self.corners):
            tags.add_point(code, corner)
        self._export_thickness(tags)
        self._export_extrusion(tags)

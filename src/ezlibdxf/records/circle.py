from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import ClassVar

from ..entity import COMMON_FIELDS, EXTRUSION_FIELDS, Entity
from ..point import Point, Point3D
from ..record import Field, TagList
from ..versions import AcadVersion


@dataclass
class Circle(Entity):
    DXF_NAME: ClassVar[str] = "CIRCLE"
    FIELDS: ClassVar[tuple[Field, ...]] = COMMON_FIELDS + EXTRUSION_FIELDS + (
        Field(10, "p0.x"),
        Field(20, "p0.y"),
        Field(30, "p0.z"),
        Field(40, "radius"),
    )
    SUBCLASS_MARKERS: ClassVar[tuple[str, ...]] = ("AcDbEntity", "AcDbCircle")

    p0: Point = field(default_factory=Point)
    radius: float = 0.0
    extr_x0: float = 0.0
    extr_y0: float = 0.0
    extr_z0: float = 1.0

    @property
    def area(self) -> float:
        return math.pi * self.radius**2

    @property
    def circumference(self) -> float:
        return 2.0 * math.pi * self.radius

    def to_points(self) -> list[Point3D]:
        return [self.p0.as_tuple()]

    def _validate(self, version: AcadVersion) -> None:
        if self.radius == 0.0:
            self._reject("radius value equals 0.0")
        if self.radius < 0.0:
            self._reject("radius value is negative")

    def _export(self, tags: TagList) -> None:
        self._export_header(tags)
        tags.subclass("AcDbCircle")
        self._export_thickness(tags)
        tags.add_point(10, self.p0.as_tuple())
        tags.add(40, float(self.radius))
        self._export_extrusion(tags)

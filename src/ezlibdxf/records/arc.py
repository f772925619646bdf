from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import ClassVar

from ..entity import COMMON_FIELDS, EXTRUSION_FIELDS, Entity
from ..point import Point, Point3D
from ..record import Field, TagList
from ..versions import AcadVersion


@dataclass
class Arc(Entity):
    DXF_NAME: ClassVar[str] = "ARC"
    FIELDS: ClassVar[tuple[Field, ...]] = COMMON_FIELDS + EXTRUSION_FIELDS + (
        Field(10, "p0.x"),
        Field(20, "p0.y"),
        Field(30, "p0.z"),
        Field(40, "radius"),
        Field(50, "start_angle"),
        Field(51, "end_angle"),
    )
    SUBCLASS_MARKERS: ClassVar[tuple[str, ...]] = ("AcDbEntity", "AcDbCircle", "AcDbArc")

    p0: Point = field(default_factory=Point)
    radius: float = 0.0
    start_angle: float = 0.0
    end_angle: float = 0.0
    extr_x0: float = 0.0
    extr_y0: float = 0.0
    extr_z0: float = 1.0

    @property
    def sweep(self) -> float:
        """Counter-clockwise angle from start to end, in degrees."""
        sweep = (self.end_angle - self.start_angle) % 360.0
        return 360.0 if sweep == 0.0 else sweep

    @property
    def length(self) -> float:
        if self.radius <= 0.0:
            raise ValueError(f"arc length is undefined for radius {self.radius}")
        return self.radius * math.radians(self.sweep)

    def extrusion_vector_as_point(self) -> Point:
        return Point(self.extr_x0, self.extr_y0, self.extr_z0)

    def set_extrusion_vector(self, x: float, y: float, z: float) -> "Arc":
        self.extr_x0, self.extr_y0, self.extr_z0 = x, y, z
        return self

    def set_extrusion_vector_from_point(self, point: Point) -> "Arc":
        return self.set_extrusion_vector(point.x, point.y, point.z)

    def point_at(self, angle: float) -> Point3D:
        rad = math.radians(angle)
        return (
            self.p0.x + self.radius * math.cos(rad),
            self.p0.y + self.radius * math.sin(rad),
            self.p0.z,
        )

    def to_points(self) -> list[Point3D]:
        return [self.point_at(self.start_angle), self.point_at(self.end_angle)]

    def _validate(self, version: AcadVersion) -> None:
        if self.start_angle == self.end_angle:
            self._reject("start angle and end angle are identical")
        for label, angle in (("start", self.start_angle), ("end", self.end_angle)):
            if angle > 360.0:
                self._reject(f"{label} angle is greater than 360 degrees")
            if angle < 0.0:
                self._reject(f"{label} angle is lesser than 0 degrees")
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
        tags.subclass("AcDbArc")
        tags.add(50, float(self.start_angle))
        tags.add(51, float(self.end_angle))
        self._export_extrusion(tags)

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import ClassVar

from ..entity import COMMON_FIELDS, EXTRUSION_FIELDS, Entity
from ..errors import ValidationFailure
from ..point import Point, Point3D
from ..record import Field, TagList
from ..versions import AcadVersion

logger = logging.getLogger(__name__)

INHERIT_NOTHING = 0
INHERIT_FROM_P0 = 1
INHERIT_FROM_P1 = 2


@dataclass
class Line3d(Entity):
    """A 3DLINE, written as LINE for R12 and later."""

    DXF_NAME: ClassVar[str] = "3DLINE"
    FIELDS: ClassVar[tuple[Field, ...]] = COMMON_FIELDS + EXTRUSION_FIELDS + (
        Field(10, "p0.x"),
        Field(20, "p0.y"),
        Field(30, "p0.z"),
        Field(11, "p1.x"),
        Field(21, "p1.y"),
        Field(31, "p1.z"),
    )
    SUBCLASS_MARKERS: ClassVar[tuple[str, ...]] = ("AcDbEntity", "AcDbLine")
    HAS_LINEWEIGHT: ClassVar[bool] = True
    HAS_GRAPHICS_DATA: ClassVar[bool] = True

    p0: Point = field(default_factory=Point)
    p1: Point = field(default_factory=Point)
    extr_x0: float = 0.0
    extr_y0: float = 0.0
    extr_z0: float = 1.0

    @classmethod
    def create_from_points(
        cls,
        p0: Point,
        p1: Point,
        id_code: int | None = None,
        inheritance: int = INHERIT_NOTHING,
    ) -> "Line3d":
        """Build a line between two points.

        ``inheritance`` selects which point, if any, donates its presentation
        attributes (linetype, layer, thickness, color, ...) to the line.
        """
        if p0 is None or p1 is None:
            raise ValidationFailure("two points are required")
        if p0.coincides(p1):
            raise ValidationFailure("points with identical coordinates were passed")
        if inheritance not in (INHERIT_NOTHING, INHERIT_FROM_P0, INHERIT_FROM_P1):
            raise ValidationFailure(f"an illegal inherit value was passed: {inheritance}")
        if id_code is not None and id_code < 0:
            logger.warning("a negative id-code was passed: %d", id_code)
        line = cls(
            id_code=id_code,
            p0=Point(p0.x, p0.y, p0.z),
            p1=Point(p1.x, p1.y, p1.z),
        )
        donor = {INHERIT_FROM_P0: p0, INHERIT_FROM_P1: p1}.get(inheritance)
        if donor is not None:
            line.linetype = donor.linetype or line.linetype
            line.layer = donor.layer or line.layer
            line.thickness = donor.thickness
            line.linetype_scale = donor.linetype_scale
            line.visibility = donor.visibility
            line.color = donor.color
            line.paperspace = donor.paperspace
            line.dictionary_owner_soft = donor.dictionary_owner_soft
            line.dictionary_owner_hard = donor.dictionary_owner_hard
        return line

    @property
    def length(self) -> float:
        return math.dist(self.p0.as_tuple(), self.p1.as_tuple())

    def mid_point(self) -> Point:
        return Point(
            (self.p0.x + self.p1.x) / 2.0,
            (self.p0.y + self.p1.y) / 2.0,
            (self.p0.z + self.p1.z) / 2.0,
        )

    def extrusion_vector_as_point(self) -> Point:
        return Point(self.extr_x0, self.extr_y0, self.extr_z0)

    def to_points(self) -> list[Point3D]:
        return [self.p0.as_tuple(), self.p1.as_tuple()]

    def _validate(self, version: AcadVersion) -> None:
        if self.p0.coincides(self.p1):
            self._reject("start point and end point are identical")

    def _export(self, tags: TagList) -> None:
        name = "3DLINE" if tags.version <= AcadVersion.R11 else "LINE"
        self._export_header(tags, name)
        tags.subclass("AcDbLine")
        self._export_thickness(tags)
        tags.add_point(10, self.p0.as_tuple())
        tags.add_point(11, self.p1.as_tuple())
        self._export_extrusion(tags)

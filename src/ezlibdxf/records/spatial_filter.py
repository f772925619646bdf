from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

from ..errors import ErrorKind
from ..record import Field, ReadState, TagList
from ..stream import TagReader
from ..tags import Tag
from .dxf_object import OBJECT_FIELDS, DxfObject

MATRIX_SIZE = 12


def identity_matrix() -> list[float]:
    """A 4x3 identity transformation, stored row by row."""
    return [1.0, 0.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0, 1.0, 0.0]


@dataclass
class SpatialFilter(DxfObject):
    """Clip boundary of an xref or block reference.

    Group 40 is used for the front clipping distance and for both 4x3
    matrices; the values are told apart by position once the record ends.
    """

    DXF_NAME: ClassVar[str] = "SPATIAL_FILTER"
    FIELDS: ClassVar[tuple[Field, ...]] = OBJECT_FIELDS + (
        Field(70, "number_of_points"),
        Field(210, "extr_x0"),
        Field(220, "extr_y0"),
        Field(230, "extr_z0"),
        Field(11, "x1"),
        Field(21, "y1"),
        Field(31, "z1"),
        Field(71, "clip_boundary_display_flag"),
        Field(72, "front_clipping_plane_flag"),
        Field(73, "back_clipping_plane_flag"),
        Field(41, "back_clipping_plane_distance"),
    )
    SUBCLASS_MARKERS: ClassVar[tuple[str, ...]] = ("AcDbFilter", "AcDbSpatialFilter")

    points: list[tuple[float, float]] = field(default_factory=list)
    number_of_points: int = 0
    extr_x0: float = 0.0
    extr_y0: float = 0.0
    extr_z0: float = 1.0
    # Origin of the clip boundary.
    x1: float = 0.0
    y1: float = 0.0
    z1: float = 0.0
    clip_boundary_display_flag: int = 1
    front_clipping_plane_flag: int = 0
    front_clipping_plane_distance: float = 0.0
    back_clipping_plane_flag: int = 0
    back_clipping_plane_distance: float = 0.0
    inverse_block_transformation: list[float] = field(default_factory=identity_matrix)
    block_transformation: list[float] = field(default_factory=identity_matrix)

    def _read_tag(self, tag: Tag, reader: TagReader, state: ReadState) -> bool:
        if tag.code in (10, 20, 40):
            state.values.setdefault(tag.code, []).append(tag.value)
            return True
        return super()._read_tag(tag, reader, state)

    def _finish_read(self, reader: TagReader, state: ReadState) -> None:
        xs = self._floats(reader, state.values.get(10, []), 10)
        ys = self._floats(reader, state.values.get(20, []), 20)
        if len(xs) != len(ys):
            reader.report(
                ErrorKind.VALIDATION_FAILURE,
                f"{len(xs)} X and {len(ys)} Y boundary coordinates in a SPATIAL_FILTER record",
                code=10,
            )
        self.points = list(zip(xs, ys))
        if self.number_of_points != len(self.points):
            reader.report(
                ErrorKind.VALIDATION_FAILURE,
                f"number of points {self.number_of_points} does not match "
                f"{len(self.points)} boundary points in a SPATIAL_FILTER record",
                code=70,
            )
            self.number_of_points = len(self.points)

        distances = self._floats(reader, state.values.get(40, []), 40)
        if self.front_clipping_plane_flag and distances:
            self.front_clipping_plane_distance = distances.pop(0)
        if len(distances) != 2 * MATRIX_SIZE:
            reader.report(
                ErrorKind.VALIDATION_FAILURE,
                f"expected {2 * MATRIX_SIZE} matrix values, found {len(distances)} "
                f"in a SPATIAL_FILTER record",
                code=40,
            )
            return
        self.inverse_block_transformation = distances[:MATRIX_SIZE]
        self.block_transformation = distances[MATRIX_SIZE:]

    @staticmethod
    def _floats(reader: TagReader, raw_values: list[str], code: int) -> list[float]:
        values = []
        for raw in raw_values:
            try:
                values.append(float(raw))
            except ValueError:
                reader.report(
                    ErrorKind.VALIDATION_FAILURE,
                    f"invalid value {raw!r} for group code {code} in a SPATIAL_FILTER record",
                    code=code,
                )
        return values

    def _validate(self, version) -> None:
        super()._validate(version)
        if len(self.points) < 2:
            self._reject(f"a clip boundary needs at least 2 points, found {len(self.points)}")
        for name in ("inverse_block_transformation", "block_transformation"):
            if len(getattr(self, name)) != MATRIX_SIZE:
                self._reject(f"{name} must hold {MATRIX_SIZE} values")

    def _export(self, tags: TagList) -> None:
        self._export_object_header(tags)
        tags.subclass("AcDbFilter")
        tags.subclass("AcDbSpatialFilter")
        tags.add(70, len(self.points))
        for x, y in self.points:
            tags.add(10, float(x))
            tags.add(20, float(y))
        tags.add_point(210, (self.extr_x0, self.extr_y0, self.extr_z0))
        tags.add_point(11, (self.x1, self.y1, self.z1))
        tags.add(71, int(self.clip_boundary_display_flag))
        tags.add(72, int(self.front_clipping_plane_flag))
        if self.front_clipping_plane_flag:
            tags.add(40, float(self.front_clipping_plane_distance))
        tags.add(73, int(self.back_clipping_plane_flag))
        if self.back_clipping_plane_flag:
            tags.add(41, float(self.back_clipping_plane_distance))
        for value in self.inverse_block_transformation:
            tags.add(40, float(value))
        for value in self.block_transformation:
            tags.add(40, float(value))

from __future__ import annotations

from dataclasses import dataclass

from .tags import COLOR_BYLAYER, DEFAULT_LAYER, DEFAULT_LINETYPE, DEFAULT_LINETYPE_SCALE

Point3D = tuple[float, float, float]


@dataclass
class Point:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    id_code: int | None = None
    linetype: str = DEFAULT_LINETYPE
    layer: str = DEFAULT_LAYER
    thickness: float = 0.0
    linetype_scale: float = DEFAULT_LINETYPE_SCALE
    visibility: int = 0
    color: int = COLOR_BYLAYER
    paperspace: int = 0
    dictionary_owner_soft: str = ""
    dictionary_owner_hard: str = ""

    def as_tuple(self) -> Point3D:
        return (self.x, self.y, self.z)

    def coincides(self, other: "Point") -> bool:
        return self.x == other.x and self.y == other.y and self.z == other.z


@dataclass
class ProprietaryData:
    """One line of ACIS data.

    ``order`` is the 1-based position of the line among all group 1 and
    group 3 lines of its record.
    """

    line: str
    order: int


def merge_proprietary_data(
    data: list[ProprietaryData], additional: list[ProprietaryData]
) -> list[tuple[int, str]]:
    tagged = [(item.order, 1, item.line) for item in data]
    tagged.extend((item.order, 3, item.line) for item in additional)
    tagged.sort(key=lambda row: row[0])
    return [(code, line) for _order, code, line in tagged]

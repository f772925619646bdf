from __future__ import annotations

import logging
import math
from typing import Any, Iterable

from .document import Document, Layout
from .entity import Entity
from .point import Point3D
from .records import Arc, Circle, Line3d, Solid
from .tags import COLOR_BYBLOCK, COLOR_BYLAYER

logger = logging.getLogger(__name__)

DEFAULT_COLOR = "#000000"
ARC_SEGMENTS_PER_CIRCLE = 72

# AutoCAD color index, standard colors and the gray ramp.
_ACI_RGB = {
    1: (255, 0, 0),
    2: (255, 255, 0),
    3: (0, 255, 0),
    4: (0, 255, 255),
    5: (0, 0, 255),
    6: (255, 0, 255),
    # White on a dark background, drawn black on paper.
    7: (0, 0, 0),
    8: (128, 128, 128),
    9: (192, 192, 192),
    250: (51, 51, 51),
    251: (80, 80, 80),
    252: (105, 105, 105),
    253: (130, 130, 130),
    254: (190, 190, 190),
    255: (255, 255, 255),
}


def plot(
    source: Document | Layout | str,
    ax: Any = None,
    *,
    types: str | Iterable[str] | None = None,
    show: bool = True,
    title: str | None = None,
    line_width: float = 1.0,
    auto_fit: bool = True,
    equal: bool = True,
):
    if isinstance(source, str):
        from .document import read

        source = read(source)
    layout = source.modelspace() if isinstance(source, Document) else source
    return plot_layout(
        layout,
        ax=ax,
        types=types,
        show=show,
        title=title,
        line_width=line_width,
        auto_fit=auto_fit,
        equal=equal,
    )


def plot_layout(
    layout: Layout,
    ax: Any = None,
    *,
    types: str | Iterable[str] | None = None,
    show: bool = True,
    title: str | None = None,
    line_width: float = 1.0,
    auto_fit: bool = True,
    equal: bool = True,
):
    plt = _require_matplotlib()
    if ax is None:
        _fig, ax = plt.subplots()

    for entity in layout.query(types):
        color = _resolve_color(entity)
        if isinstance(entity, Line3d):
            _draw_line(ax, entity.p0.as_tuple(), entity.p1.as_tuple(), line_width, color=color)
        elif isinstance(entity, Arc):
            _draw_polyline(ax, _arc_points(entity), line_width, color=color)
        elif isinstance(entity, Circle):
            _draw_polyline(ax, _circle_points(entity), line_width, color=color)
        elif isinstance(entity, Solid):
            _draw_solid(ax, entity.corners, color=color)
        else:
            logger.debug("nothing to draw for %s", entity.dxftype)

    if auto_fit:
        ax.autoscale(True)
    if title:
        ax.set_title(title)
    if equal:
        ax.set_aspect("equal", adjustable="box")
    if show:
        plt.show()
    return ax


def _require_matplotlib():
    try:
        import matplotlib.pyplot as plt
    except Exception as exc:
        raise ImportError(
            "matplotlib is required for plotting. "
            'Install it with `pip install "ezlibdxf[plot]"`.'
        ) from exc
    return plt


def _resolve_color(entity: Entity) -> str:
    true_color = getattr(entity, "color_value", 0)
    if true_color:
        return _rgb_to_hex(_to_rgb(int(true_color)))
    aci = getattr(entity, "color", COLOR_BYLAYER)
    if aci in (COLOR_BYBLOCK, COLOR_BYLAYER):
        return DEFAULT_COLOR
    rgb = _ACI_RGB.get(abs(int(aci)))
    if rgb is None:
        return DEFAULT_COLOR
    return _rgb_to_hex(rgb)


def _to_rgb(true_color: int) -> tuple[int, int, int]:
    return (
        (true_color >> 16) & 0xFF,
        (true_color >> 8) & 0xFF,
        true_color & 0xFF,
    )


def _rgb_to_hex(rgb: tuple[int, int, int]) -> str:
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def _arc_points(arc: Arc) -> list[Point3D]:
    sweep = arc.sweep
    segments = max(2, math.ceil(ARC_SEGMENTS_PER_CIRCLE * sweep / 360.0))
    step = sweep / segments
    return [arc.point_at(arc.start_angle + step * index) for index in range(segments + 1)]


def _circle_points(circle: Circle) -> list[Point3D]:
    cx, cy, cz = circle.p0.as_tuple()
    points = []
    for index in range(ARC_SEGMENTS_PER_CIRCLE + 1):
        angle = 2.0 * math.pi * index / ARC_SEGMENTS_PER_CIRCLE
        points.append((cx + circle.radius * math.cos(angle), cy + circle.radius * math.sin(angle), cz))
    return points


def _draw_line(ax: Any, start: Point3D, end: Point3D, line_width: float, color: str | None = None) -> None:
    ax.plot([start[0], end[0]], [start[1], end[1]], linewidth=line_width, color=color)


def _draw_polyline(ax: Any, points: list[Point3D], line_width: float, color: str | None = None) -> None:
    if len(points) < 2:
        return
    ax.plot([p[0] for p in points], [p[1] for p in points], linewidth=line_width, color=color)


def _draw_solid(ax: Any, corners: list[Point3D], color: str | None = None) -> None:
    # File order is 1-2-4-3 around the outline.
    outline = [corners[0], corners[1], corners[3], corners[2]]
    ax.fill([p[0] for p in outline], [p[1] for p in outline], color=color)

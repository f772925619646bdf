from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Iterator

from .document import Document, Layout, read
from .entity import DEFAULT_EXTRUSION, Entity
from .record import Record
from .records import Appid, Arc, Circle, Layer, Line3d, Solid, TableEntry
from .tags import COLOR_BYLAYER, DEFAULT_LAYER

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConvertResult:
    source_path: str
    output_path: str
    total_records: int
    written_records: int
    skipped_records: int
    skipped_by_type: dict[str, int]


def to_dxf(
    source: str | Document | Layout,
    output_path: str,
    *,
    types: str | Iterable[str] | None = None,
    dxf_version: str = "R2010",
    strict: bool = False,
) -> ConvertResult:
    """Rebuild the records of ``source`` in a new ezdxf document and save it.

    Lines, arcs, circles and solids go to modelspace; layers and application
    ids go to the matching tables. Everything else is counted as skipped.
    """
    ezdxf = _require_ezdxf()
    source_path, doc, layout = _resolve_source(source)

    dxf_doc = ezdxf.new(dxfversion=dxf_version)
    modelspace = dxf_doc.modelspace()

    total = 0
    written = 0
    skipped_by_type: dict[str, int] = {}

    for record in _iter_convertible(doc, layout, types):
        total += 1
        if _write_record(dxf_doc, modelspace, record):
            written += 1
            continue
        skipped_by_type[record.dxftype] = skipped_by_type.get(record.dxftype, 0) + 1

    skipped = total - written
    if strict and skipped > 0:
        summary = ", ".join(
            f"{dxftype}:{count}" for dxftype, count in sorted(skipped_by_type.items())
        )
        raise ValueError(f"failed to convert {skipped} records ({summary})")

    out_path = Path(output_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    dxf_doc.saveas(str(out_path))

    return ConvertResult(
        source_path=source_path,
        output_path=str(out_path),
        total_records=total,
        written_records=written,
        skipped_records=skipped,
        skipped_by_type=dict(sorted(skipped_by_type.items())),
    )


def _require_ezdxf():
    try:
        import ezdxf
    except Exception as exc:
        raise ImportError(
            "ezdxf is required for DXF conversion. "
            'Install it with `pip install "ezlibdxf[dxf]"`.'
        ) from exc
    return ezdxf


def _resolve_source(source: str | Document | Layout) -> tuple[str, Document, Layout]:
    if isinstance(source, Layout):
        return str(source.doc.path), source.doc, source
    if isinstance(source, Document):
        return str(source.path), source, source.modelspace()
    doc = read(source)
    return str(source), doc, doc.modelspace()


def _iter_convertible(
    doc: Document,
    layout: Layout,
    types: str | Iterable[str] | None,
) -> Iterator[Record]:
    # Table entries first so that layers exist before entities refer to them.
    for record in doc.query(types):
        if isinstance(record, TableEntry):
            yield record
    yield from layout.query(types)


def _write_record(dxf_doc: Any, modelspace: Any, record: Record) -> bool:
    try:
        return _write_record_unsafe(dxf_doc, modelspace, record)
    except Exception:
        logger.debug("could not convert %s record", record.dxftype, exc_info=True)
        return False


def _write_record_unsafe(dxf_doc: Any, modelspace: Any, record: Record) -> bool:
    if isinstance(record, Layer):
        return _write_layer(dxf_doc, record)

    if isinstance(record, Appid):
        if not record.application_name:
            return False
        if record.application_name not in dxf_doc.appids:
            dxf_doc.appids.new(record.application_name)
        return True

    if not isinstance(record, Entity):
        return False
    dxfattribs = _entity_dxfattribs(record)

    if isinstance(record, Line3d):
        if record.p0.coincides(record.p1):
            return False
        modelspace.add_line(record.p0.as_tuple(), record.p1.as_tuple(), dxfattribs=dxfattribs)
        return True

    if isinstance(record, Arc):
        if record.radius <= 0.0:
            return False
        modelspace.add_arc(
            record.p0.as_tuple(),
            float(record.radius),
            float(record.start_angle),
            float(record.end_angle),
            dxfattribs=dxfattribs,
        )
        return True

    if isinstance(record, Circle):
        if record.radius <= 0.0:
            return False
        modelspace.add_circle(record.p0.as_tuple(), float(record.radius), dxfattribs=dxfattribs)
        return True

    if isinstance(record, Solid):
        modelspace.add_solid(record.corners, dxfattribs=dxfattribs)
        return True

    return False


def _write_layer(dxf_doc: Any, layer: Layer) -> bool:
    if not layer.layer_name:
        return False
    if layer.layer_name in dxf_doc.layers:
        dxf_layer = dxf_doc.layers.get(layer.layer_name)
    else:
        dxf_layer = dxf_doc.layers.add(layer.layer_name)
    color = _to_valid_aci(abs(layer.color))
    if color is not None:
        dxf_layer.color = color
    if layer.linetype in dxf_doc.linetypes:
        dxf_layer.dxf.linetype = layer.linetype
    if layer.is_off:
        dxf_layer.off()
    if layer.is_frozen:
        dxf_layer.freeze()
    if layer.is_locked:
        dxf_layer.lock()
    return True


def _entity_dxfattribs(entity: Entity) -> dict[str, Any]:
    attribs: dict[str, Any] = {"layer": entity.layer or DEFAULT_LAYER}
    color = _to_valid_aci(entity.color)
    if color is not None:
        attribs["color"] = color
    if entity.color_value:
        attribs["true_color"] = _to_valid_true_color(entity.color_value)
    if entity.thickness:
        attribs["thickness"] = float(entity.thickness)
    extrusion = _extrusion(entity)
    if extrusion is not None:
        attribs["extrusion"] = extrusion
    return attribs


def _extrusion(entity: Entity) -> tuple[float, float, float] | None:
    vector = (
        float(getattr(entity, "extr_x0", 0.0)),
        float(getattr(entity, "extr_y0", 0.0)),
        float(getattr(entity, "extr_z0", 1.0)),
    )
    if vector == DEFAULT_EXTRUSION or vector == (0.0, 0.0, 0.0):
        return None
    return vector


def _to_valid_aci(value: Any) -> int | None:
    try:
        aci = int(value)
    except Exception:
        return None
    if aci in (0, COLOR_BYLAYER, 257):
        return None
    if 1 <= aci <= 255:
        return aci
    return None


def _to_valid_true_color(value: Any) -> int | None:
    try:
        color = int(value) & 0xFFFFFF
    except Exception:
        return None
    return color

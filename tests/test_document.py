from __future__ import annotations

import io
from pathlib import Path

import pytest

import ezlibdxf
from ezlibdxf import AcadVersion, Arc, Circle, Imagedef, Layer, Line3d, Point, Solid, Table
from ezlibdxf.document import SUPPORTED_RECORD_TYPES, iter_records, write_document
from ezlibdxf.errors import ErrorKind
from ezlibdxf.stream import TagReader
from tests._dxf_helpers import (
    SAMPLE_R12,
    dxf_entities_of_type,
    dxf_text,
    group_float,
    section_names,
    tag_pairs,
    write_sample,
)


def test_read_detects_version_and_sorts_records(tmp_path: Path) -> None:
    doc = ezlibdxf.read(write_sample(tmp_path))

    assert doc.version is AcadVersion.R12
    assert [table.table_name for table in doc.tables] == ["LAYER", "APPID"]
    assert [entity.dxftype for entity in doc.entities] == ["3DLINE", "ARC", "CIRCLE", "SOLID", "3DLINE"]
    assert [record.dxftype for record in doc.blocks] == ["3DLINE", "ENDBLK"]
    assert doc.objects == []


def test_unsupported_records_are_skipped_quietly() -> None:
    doc = ezlibdxf.read_stream(io.StringIO(SAMPLE_R12))

    assert "TEXT" not in {record.dxftype for record in doc.iter_all()}
    assert doc.diagnostics == []


def test_iter_records_yields_file_order() -> None:
    reader = TagReader(io.StringIO(SAMPLE_R12))

    names = [record.dxftype for record in iter_records(reader)]

    assert names[:2] == ["TABLE", "TABLE"]
    assert names[-1] == "3DLINE"
    assert reader.version is AcadVersion.R12


def test_explicit_version_wins_over_header() -> None:
    doc = ezlibdxf.read_stream(io.StringIO(SAMPLE_R12), version="R2000")

    assert doc.version is AcadVersion.R2000


def test_unknown_acadver_is_reported() -> None:
    text = dxf_text(
        (0, "SECTION"),
        (2, "HEADER"),
        (9, "$ACADVER"),
        (1, "AC1003"),
        (0, "ENDSEC"),
        (0, "EOF"),
    )

    doc = ezlibdxf.read_stream(io.StringIO(text))

    assert doc.version is None
    assert doc.diagnostics[0].kind is ErrorKind.VALIDATION_FAILURE


def test_query_filters_by_type(tmp_path: Path) -> None:
    doc = ezlibdxf.read(write_sample(tmp_path))

    assert len(list(doc.query("LINE"))) == 3
    assert [r.dxftype for r in doc.query("arc, circle")] == ["ARC", "CIRCLE"]
    assert [r.layer_name for r in doc.query(["LAYER"])] == ["0", "WALLS"]
    assert [r.application_name for r in doc.query("APP*")] == ["ACAD"]
    assert list(doc.query("NOPE")) == []
    assert len(list(doc.query())) == len(list(doc.iter_all()))
    assert doc.table("layer").entries[1].is_off


def test_modelspace_and_paperspace(tmp_path: Path) -> None:
    doc = ezlibdxf.read(write_sample(tmp_path))

    model = list(doc.modelspace().query())
    paper = list(doc.paperspace().query("LINE"))

    assert [e.dxftype for e in model] == ["3DLINE", "ARC", "CIRCLE", "SOLID"]
    assert len(paper) == 1
    assert paper[0].p1.y == 3.0
    assert model[0].layer == "WALLS"
    assert model[0].color == 1


def test_supported_record_types_cover_tables() -> None:
    assert "LAYER" in SUPPORTED_RECORD_TYPES
    assert "APPID" in SUPPORTED_RECORD_TYPES
    assert "LINE" not in SUPPORTED_RECORD_TYPES


def test_write_document_sections_for_r12() -> None:
    buffer = io.StringIO()
    records = [
        Table(table_name="LAYER", entries=[Layer(layer_name="WALLS")]),
        Line3d(p0=Point(0.0, 0.0), p1=Point(2.0, 0.0)),
        Imagedef(file_name="photo.png"),
    ]

    result = write_document(buffer, records, AcadVersion.R12)

    text = buffer.getvalue()
    assert section_names(text) == ["HEADER", "TABLES", "ENTITIES"]
    assert "$ACADVER\n  1\nAC1009\n" in text
    assert text.endswith("  0\nEOF\n")
    assert len(dxf_entities_of_type(text, "LINE")) == 1
    assert result.total_records == 4
    assert result.written_records == 3
    assert result.skipped_by_type == {"IMAGEDEF": 1}


def test_write_document_skips_invalid_records() -> None:
    buffer = io.StringIO()
    records = [
        Line3d(p0=Point(1.0, 1.0), p1=Point(1.0, 1.0)),
        Arc(p0=Point(0.0, 0.0), radius=1.0, start_angle=0.0, end_angle=180.0),
        Circle(radius=-1.0),
        Layer(),
        Imagedef(file_name="scan.tif"),
    ]

    result = write_document(buffer, records, AcadVersion.R2000)

    text = buffer.getvalue()
    assert section_names(text) == ["HEADER", "TABLES", "ENTITIES", "OBJECTS"]
    assert result.written_records == 3
    assert result.skipped_records == 3
    assert result.skipped_by_type == {"3DLINE": 1, "CIRCLE": 1, "LAYER": 1}
    assert len(dxf_entities_of_type(text, "ARC")) == 1
    assert "IMAGEDEF" in text


def test_write_document_skips_entries_of_rejected_table() -> None:
    buffer = io.StringIO()
    table = Table(table_name="", entries=[Layer(layer_name="A")])

    result = write_document(buffer, [table], AcadVersion.R2000)

    text = buffer.getvalue()
    assert "TABLE" not in [value for code, value in tag_pairs(text) if code == 0]
    assert "A" not in [value for code, value in tag_pairs(text) if code == 2]
    assert result.total_records == 2
    assert result.written_records == 0
    assert result.skipped_records == 2
    assert result.skipped_by_type == {"LAYER": 1, "TABLE": 1}


def test_write_document_rejects_missing_record() -> None:
    with pytest.raises(ezlibdxf.NullArgumentError):
        write_document(io.StringIO(), [None])


def test_document_rewrite_roundtrip(tmp_path: Path) -> None:
    doc = ezlibdxf.read(write_sample(tmp_path))
    output = tmp_path / "out" / "rewritten.dxf"

    result = doc.write(output, version="R2000")

    assert output.exists()
    assert result.output_path == str(output)
    assert result.target_version == "R2000"
    assert result.skipped_records == 0
    again = ezlibdxf.read(output)
    assert again.version is AcadVersion.R2000
    assert again.entities == doc.entities
    assert [t.entries for t in again.tables] == [t.entries for t in doc.tables]
    arc = dxf_entities_of_type(output.read_text(encoding="utf-8"), "ARC")[0]
    assert group_float(arc, 51) == 90.0


def test_write_defaults_to_document_version(tmp_path: Path) -> None:
    doc = ezlibdxf.read(write_sample(tmp_path))

    result = doc.write(tmp_path / "same.dxf")

    assert result.target_version == "R12"


def test_ezdxf_reads_r12_output(tmp_path: Path) -> None:
    ezdxf = pytest.importorskip("ezdxf")
    output = tmp_path / "r12.dxf"
    records = [
        Line3d(p0=Point(0.0, 0.0), p1=Point(3.0, 4.0), layer="WALLS"),
        Arc(p0=Point(1.0, 1.0), radius=2.0, start_angle=0.0, end_angle=45.0),
        Circle(p0=Point(5.0, 5.0), radius=1.0, color=1),
    ]
    with output.open("w", encoding="utf-8") as stream:
        write_document(stream, records, AcadVersion.R12)

    dxf_doc = ezdxf.readfile(str(output))

    msp = dxf_doc.modelspace()
    lines = msp.query("LINE")
    assert len(lines) == 1
    assert lines[0].dxf.layer == "WALLS"
    assert tuple(lines[0].dxf.end) == (3.0, 4.0, 0.0)
    assert len(msp.query("ARC")) == 1
    assert msp.query("CIRCLE")[0].dxf.color == 1

from __future__ import annotations

import io
import logging

import pytest

from ezlibdxf import AcadVersion, ErrorKind, Line3d, Point, ValidationFailure, WriterOptions
from ezlibdxf.stream import TagReader, TagWriter
from tests._dxf_helpers import dxf_text, group_codes, group_values, roundtrip


def _line(**kwargs) -> Line3d:
    return Line3d(p0=Point(1.0, 2.0, 3.0), p1=Point(4.0, 5.0, 6.0), **kwargs)


def test_reads_3dline_record() -> None:
    text = "0\n3DLINE\n5\n1A\n8\nLayer1\n10\n1.0\n20\n2.0\n30\n3.0\n11\n4.0\n21\n5.0\n31\n6.0\n0\n"

    line = Line3d.from_text(text)

    assert line.id_code == 0x1A
    assert line.layer == "Layer1"
    assert line.p0.as_tuple() == (1.0, 2.0, 3.0)
    assert line.p1.as_tuple() == (4.0, 5.0, 6.0)
    assert line.linetype == "BYLAYER"
    assert line.color == 256


def test_read_stops_at_next_record_and_pushes_it_back() -> None:
    text = dxf_text(
        (0, "LINE"),
        (8, "0"),
        (10, "0.0"),
        (11, "1.0"),
        (0, "CIRCLE"),
        (8, "0"),
    )
    reader = TagReader(io.StringIO(text))
    reader.read_tag()

    Line3d.from_reader(reader)

    next_tag = reader.read_tag()
    assert (next_tag.code, next_tag.value) == (0, "CIRCLE")


def test_empty_layer_and_linetype_fall_back_to_defaults() -> None:
    text = dxf_text((0, "LINE"), (6, ""), (8, ""), (10, "0.0"), (11, "1.0"), (0, "EOF"))

    line = Line3d.from_text(text)

    assert line.layer == "0"
    assert line.linetype == "BYLAYER"


def test_write_repairs_empty_layer_without_changing_record(caplog) -> None:
    line = _line(layer="")

    with caplog.at_level(logging.WARNING, logger="ezlibdxf.record"):
        text = line.to_text(AcadVersion.R2000)

    assert group_values(text, 8) == ["0"]
    assert line.layer == ""
    assert "empty layer string" in caplog.text


def test_unknown_group_code_is_reported_and_skipped() -> None:
    text = dxf_text(
        (0, "LINE"),
        (8, "WALLS"),
        (77, "42"),
        (10, "1.0"),
        (20, "1.0"),
        (11, "2.0"),
        (0, "EOF"),
    )
    reader = TagReader(io.StringIO(text))
    reader.read_tag()

    line = Line3d.from_reader(reader)

    assert line.layer == "WALLS"
    assert line.p0.as_tuple() == (1.0, 1.0, 0.0)
    assert line.p1.x == 2.0
    assert [(d.kind, d.code) for d in reader.diagnostics] == [(ErrorKind.UNKNOWN_TAG, 77)]


def test_comment_inside_record_is_logged(caplog) -> None:
    text = dxf_text((0, "LINE"), (999, "hello"), (10, "1.0"), (11, "2.0"), (0, "EOF"))

    with caplog.at_level(logging.INFO, logger="ezlibdxf.record"):
        line = Line3d.from_text(text)

    assert line.p1.x == 2.0
    assert "DXF comment: hello" in caplog.text


def test_version_gated_group_is_reported_for_old_files() -> None:
    text = dxf_text((0, "LINE"), (347, "4F"), (10, "1.0"), (11, "2.0"), (0, "EOF"))
    reader = TagReader(io.StringIO(text), version="R2000")
    reader.read_tag()

    line = Line3d.from_reader(reader)

    assert line.material == ""
    assert reader.diagnostics[0].code == 347


def test_identical_points_fail_without_writing_anything() -> None:
    buffer = io.StringIO()
    line = Line3d(p0=Point(1.0, 1.0, 1.0), p1=Point(1.0, 1.0, 1.0))

    with pytest.raises(ValidationFailure):
        line.write(TagWriter(buffer, AcadVersion.R2000))

    assert buffer.getvalue() == ""


def test_written_as_3dline_up_to_r11_and_line_after() -> None:
    line = _line()

    assert line.to_text(AcadVersion.R11).splitlines()[:2] == ["  0", "3DLINE"]
    assert line.to_text(AcadVersion.R12).splitlines()[:2] == ["  0", "LINE"]
    assert line.to_text(AcadVersion.R2000).splitlines()[:2] == ["  0", "LINE"]


def test_r2000_output_layout() -> None:
    text = _line(id_code=0x2B).to_text(AcadVersion.R2000)

    assert group_codes(text) == [0, 5, 100, 8, 92, 100, 10, 20, 30, 11, 21, 31]
    assert group_values(text, 5) == ["2B"]
    assert group_values(text, 100) == ["AcDbEntity", "AcDbLine"]
    assert group_values(text, 10) == ["1.000000"]


def test_r12_output_has_no_subclass_markers() -> None:
    codes = group_codes(_line().to_text(AcadVersion.R12))

    assert 100 not in codes
    assert 92 not in codes
    assert 370 not in codes


def test_string_fields_keep_surrounding_spaces() -> None:
    line = _line(layer="Walls ", color_name=" red", dictionary_owner_soft="1E")

    again = roundtrip(line, AcadVersion.R2004)

    assert again.layer == "Walls "
    assert again.color_name == " red"
    assert again == line


def test_paperspace_flag_only_from_r13() -> None:
    line = _line(paperspace=1)

    assert 67 not in group_codes(line.to_text(AcadVersion.R12))
    assert group_values(line.to_text(AcadVersion.R2000), 67) == ["1"]


def test_lineweight_only_from_r2002() -> None:
    line = _line(lineweight=25)

    assert 370 not in group_codes(line.to_text(AcadVersion.R2000))
    assert group_values(line.to_text(AcadVersion.R2004), 370) == ["25"]


def test_graphics_data_size_uses_configured_code_only() -> None:
    line = _line(graphics_data_size=4, binary_graphics_data=["DEADBEEF"])

    codes_92 = group_codes(line.to_text(AcadVersion.R2000))
    codes_160 = group_codes(
        line.to_text(AcadVersion.R2000, WriterOptions(graphics_data_size_code=160))
    )

    assert 92 in codes_92 and 160 not in codes_92
    assert 160 in codes_160 and 92 not in codes_160
    assert 310 in codes_160


def test_invalid_graphics_data_size_code_is_rejected() -> None:
    with pytest.raises(ValueError):
        WriterOptions(graphics_data_size_code=93)


def test_flatland_elevation_only_for_r11() -> None:
    line = _line(elevation=5.0)
    flatland = WriterOptions(flatland=True)

    assert group_values(line.to_text(AcadVersion.R11, flatland), 38) == ["5.000000"]
    assert 38 not in group_codes(line.to_text(AcadVersion.R11))
    assert 38 not in group_codes(line.to_text(AcadVersion.R12, flatland))


def test_extrusion_written_only_when_not_default() -> None:
    assert 210 not in group_codes(_line().to_text(AcadVersion.R2000))

    tilted = _line(extr_x0=0.0, extr_y0=1.0, extr_z0=0.0)
    text = tilted.to_text(AcadVersion.R2000)

    assert group_values(text, 220) == ["1.000000"]
    assert 210 not in group_codes(tilted.to_text(AcadVersion.R11))


def test_writing_twice_gives_identical_output() -> None:
    line = _line(layer="", color=3)

    assert line.to_text(AcadVersion.R2010) == line.to_text(AcadVersion.R2010)


@pytest.mark.parametrize("version", [AcadVersion.R12, AcadVersion.R2000, AcadVersion.R2010])
def test_roundtrip(version: AcadVersion) -> None:
    line = _line(id_code=0x10, layer="WALLS", linetype="DASHED", color=5, thickness=2.0)

    assert roundtrip(line, version) == line


def test_create_from_points_inherits_attributes() -> None:
    p0 = Point(0.0, 0.0, 0.0, layer="A", color=1)
    p1 = Point(3.0, 4.0, 0.0, layer="B", color=2)

    plain = Line3d.create_from_points(p0, p1, id_code=7)
    from_p1 = Line3d.create_from_points(p0, p1, inheritance=2)

    assert plain.layer == "0"
    assert plain.id_code == 7
    assert from_p1.layer == "B"
    assert from_p1.color == 2
    assert from_p1.length == 5.0
    assert from_p1.mid_point().as_tuple() == (1.5, 2.0, 0.0)


def test_create_from_points_rejects_bad_input() -> None:
    with pytest.raises(ValidationFailure):
        Line3d.create_from_points(Point(1.0, 1.0), Point(1.0, 1.0))
    with pytest.raises(ValidationFailure):
        Line3d.create_from_points(Point(0.0, 0.0), Point(1.0, 1.0), inheritance=3)

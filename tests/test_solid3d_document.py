from __future__ import annotations

import logging

from ezlibdxf import AcadVersion, Region, Solid3d
from tests._dxf_helpers import dxf_text, group_codes, group_values, roundtrip


def _acis_text(name: str = "3DSOLID") -> str:
    return dxf_text(
        (0, name),
        (5, "2D"),
        (100, "AcDbEntity"),
        (8, "BODIES"),
        (100, "AcDbModelerGeometry"),
        (70, "1"),
        (1, "400 0 1 0"),
        (3, "continued"),
        (1, "body $-1"),
        (3, "end"),
        (0, "EOF"),
    )


def test_reads_interleaved_acis_lines() -> None:
    solid = Solid3d.from_text(_acis_text())

    assert solid.id_code == 0x2D
    assert solid.layer == "BODIES"
    assert [item.order for item in solid.proprietary_data] == [1, 3]
    assert [item.order for item in solid.additional_proprietary_data] == [2, 4]
    assert solid.acis_lines() == ["400 0 1 0", "continued", "body $-1", "end"]


def test_writes_acis_lines_in_original_order() -> None:
    solid = Solid3d.from_text(_acis_text())

    text = solid.to_text(AcadVersion.R2000)

    codes = group_codes(text)
    assert codes[codes.index(70):] == [70, 1, 3, 1, 3]
    assert group_values(text, 100) == ["AcDbEntity", "AcDbModelerGeometry"]


def test_history_and_subclass_from_r2008() -> None:
    solid = Solid3d.from_text(_acis_text())
    solid.history = "4A"

    text = solid.to_text(AcadVersion.R2010)

    assert group_values(text, 100) == ["AcDbEntity", "AcDbModelerGeometry", "AcDb3dSolid"]
    assert group_values(text, 350) == ["4A"]
    assert group_codes(text)[-1] == 350


def test_append_proprietary_line_continues_order() -> None:
    solid = Solid3d()
    solid.append_proprietary_line("first")
    solid.append_proprietary_line("second", additional=True)
    solid.append_proprietary_line("third")

    assert solid.acis_lines() == ["first", "second", "third"]
    assert group_codes(solid.to_text(AcadVersion.R2000))[-3:] == [1, 3, 1]


def test_old_versions_only_warn(caplog) -> None:
    solid = Solid3d.from_text(_acis_text())

    with caplog.at_level(logging.WARNING, logger="ezlibdxf.records.modeler"):
        text = solid.to_text(AcadVersion.R12)

    assert "illegal DXF version R12" in caplog.text
    assert 70 not in group_codes(text)
    assert group_values(text, 1) == ["400 0 1 0", "body $-1"]


def test_solid3d_roundtrip() -> None:
    solid = Solid3d.from_text(_acis_text())
    solid.history = "10"

    assert roundtrip(solid, AcadVersion.R2013) == solid


def test_region_roundtrip() -> None:
    region = Region.from_text(_acis_text("REGION"))

    text = region.to_text(AcadVersion.R2000)

    assert text.splitlines()[:2] == ["  0", "REGION"]
    assert 350 not in group_codes(text)
    assert roundtrip(region) == region

from __future__ import annotations

import io
import logging

import pytest

from ezlibdxf import AcadVersion, ErrorKind, Imagedef, SpatialFilter, SpatialIndex, ValidationFailure
from ezlibdxf.records.spatial_filter import identity_matrix
from ezlibdxf.stream import TagReader
from tests._dxf_helpers import dxf_text, group_codes, group_values, roundtrip

IMAGEDEF = dxf_text(
    (0, "IMAGEDEF"),
    (5, "2F"),
    (102, "{ACAD_REACTORS"),
    (330, "2E"),
    (330, "30"),
    (102, "}"),
    (330, "2E"),
    (100, "AcDbRasterImageDef"),
    (90, "0"),
    (1, "photo.png"),
    (10, "640.0"),
    (20, "480.0"),
    (11, "0.5"),
    (21, "0.5"),
    (280, "1"),
    (281, "2"),
    (0, "EOF"),
)


def _filter_text(*, front: bool) -> str:
    pairs = [
        (0, "SPATIAL_FILTER"),
        (5, "A0"),
        (100, "AcDbFilter"),
        (100, "AcDbSpatialFilter"),
        (70, "3"),
        (10, "0.0"),
        (20, "0.0"),
        (10, "10.0"),
        (20, "0.0"),
        (10, "10.0"),
        (20, "5.0"),
        (210, "0.0"),
        (220, "0.0"),
        (230, "1.0"),
        (11, "1.0"),
        (21, "2.0"),
        (31, "0.0"),
        (71, "1"),
        (72, "1" if front else "0"),
    ]
    if front:
        pairs.append((40, "2.5"))
    pairs.append((73, "0"))
    pairs.extend((40, str(value)) for value in identity_matrix())
    pairs.extend((40, str(value * 2.0)) for value in identity_matrix())
    pairs.append((0, "EOF"))
    return dxf_text(*pairs)


def test_reads_imagedef_and_its_reactors() -> None:
    imagedef = Imagedef.from_text(IMAGEDEF)

    assert imagedef.id_code == 0x2F
    assert imagedef.acad_image_dict_soft == "2E"
    assert imagedef.imagedef_reactor_soft == ["30"]
    assert imagedef.dictionary_owner_soft == "2E"
    assert imagedef.file_name == "photo.png"
    assert (imagedef.x0, imagedef.y0) == (640.0, 480.0)
    assert (imagedef.x1, imagedef.y1) == (0.5, 0.5)
    assert imagedef.image_is_loaded_flag == 1
    assert imagedef.resolution_units == 2


def test_imagedef_r2000_layout_and_roundtrip() -> None:
    imagedef = Imagedef.from_text(IMAGEDEF)

    text = imagedef.to_text(AcadVersion.R2000)

    assert group_codes(text)[:7] == [0, 5, 102, 330, 330, 102, 330]
    assert group_values(text, 100) == ["AcDbRasterImageDef"]
    assert group_codes(text)[-8:] == [90, 1, 10, 20, 11, 21, 280, 281]
    assert roundtrip(imagedef) == imagedef


def test_imagedef_reactors_are_not_written_before_r14() -> None:
    text = Imagedef.from_text(IMAGEDEF).to_text(AcadVersion.R13)

    assert 102 not in group_codes(text)
    assert group_values(text, 330) == ["2E"]


def test_imagedef_invalid_resolution_units_are_reset() -> None:
    text = IMAGEDEF.replace("281\n2\n", "281\n3\n")
    reader = TagReader(io.StringIO(text))
    reader.read_tag()

    imagedef = Imagedef.from_reader(reader)

    assert imagedef.resolution_units == 0
    assert [d.code for d in reader.diagnostics] == [281]


def test_imagedef_requires_file_name() -> None:
    with pytest.raises(ValidationFailure, match="file name"):
        Imagedef().to_text()


def test_objects_warn_for_old_versions(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="ezlibdxf.records.dxf_object"):
        SpatialIndex(time_stamp=2451545.0).to_text(AcadVersion.R13)

    assert "illegal DXF version R13" in caplog.text


def test_spatial_index_layout() -> None:
    index = SpatialIndex(id_code=0x40, time_stamp=2451545.5)

    text = index.to_text(AcadVersion.R2000)

    assert group_values(text, 100) == ["AcDbIndex", "AcDbSpatialIndex"]
    assert group_values(text, 40) == ["2451545.500000"]
    assert roundtrip(index) == index


def test_spatial_filter_distributes_group_40_values() -> None:
    spatial_filter = SpatialFilter.from_text(_filter_text(front=True))

    assert spatial_filter.points == [(0.0, 0.0), (10.0, 0.0), (10.0, 5.0)]
    assert spatial_filter.number_of_points == 3
    assert (spatial_filter.x1, spatial_filter.y1) == (1.0, 2.0)
    assert spatial_filter.front_clipping_plane_distance == 2.5
    assert spatial_filter.inverse_block_transformation == identity_matrix()
    assert spatial_filter.block_transformation == [value * 2.0 for value in identity_matrix()]


def test_spatial_filter_without_front_plane() -> None:
    spatial_filter = SpatialFilter.from_text(_filter_text(front=False))

    assert spatial_filter.front_clipping_plane_distance == 0.0
    assert spatial_filter.inverse_block_transformation == identity_matrix()


def test_spatial_filter_roundtrip() -> None:
    spatial_filter = SpatialFilter.from_text(_filter_text(front=True))

    text = spatial_filter.to_text(AcadVersion.R2000)

    assert group_values(text, 100) == ["AcDbFilter", "AcDbSpatialFilter"]
    assert group_values(text, 40)[0] == "2.500000"
    assert len(group_values(text, 40)) == 25
    assert roundtrip(spatial_filter) == spatial_filter


def test_spatial_filter_point_count_mismatch_is_reported() -> None:
    text = _filter_text(front=False).replace("70\n3\n", "70\n5\n")
    reader = TagReader(io.StringIO(text))
    reader.read_tag()

    spatial_filter = SpatialFilter.from_reader(reader)

    assert spatial_filter.number_of_points == 3
    assert reader.diagnostics[0].kind is ErrorKind.VALIDATION_FAILURE
    assert reader.diagnostics[0].code == 70


def test_spatial_filter_needs_two_points() -> None:
    with pytest.raises(ValidationFailure, match="at least 2 points"):
        SpatialFilter(points=[(0.0, 0.0)]).to_text()

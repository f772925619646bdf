from typing import Sequence

from .config import WriterOptions
from .convert import ConvertResult, to_dxf
from .document import Document, Layout, WriteResult, iter_records, read, read_stream, write_document
from .entity import Entity
from .errors import (
    ChainLinkError,
    Diagnostic,
    DxfError,
    DxfIOError,
    ErrorKind,
    NullArgumentError,
    ValidationFailure,
)
from .point import Point
from .records import (
    Appid,
    Arc,
    Circle,
    Endblk,
    Imagedef,
    Layer,
    Line3d,
    Region,
    Solid,
    Solid3d,
    SpatialFilter,
    SpatialIndex,
    Table,
)
from .render import plot
from .stream import TagReader, TagWriter, open_reader
from .versions import AcadVersion

__all__ = [
    "read",
    "read_stream",
    "iter_records",
    "write_document",
    "Document",
    "Layout",
    "WriteResult",
    "Entity",
    "Point",
    "Appid",
    "Arc",
    "Circle",
    "Endblk",
    "Imagedef",
    "Layer",
    "Line3d",
    "Region",
    "Solid",
    "Solid3d",
    "SpatialFilter",
    "SpatialIndex",
    "Table",
    "TagReader",
    "TagWriter",
    "open_reader",
    "AcadVersion",
    "WriterOptions",
    "ErrorKind",
    "Diagnostic",
    "DxfError",
    "DxfIOError",
    "NullArgumentError",
    "ValidationFailure",
    "ChainLinkError",
    "plot",
    "to_dxf",
    "ConvertResult",
]


def main(argv: Sequence[str] | None = None) -> int:
    from ezlibdxf.cli import main as cli_main

    return cli_main(argv)

from .appid import Appid
from .arc import Arc
from .circle import Circle
from .dxf_object import DxfObject
from .endblk import Endblk
from .imagedef import Imagedef
from .layer import Layer
from .line3d import Line3d
from .modeler import ModelerGeometry
from .region import Region
from .solid import Solid
from .solid3d import Solid3d
from .spatial_filter import SpatialFilter
from .spatial_index import SpatialIndex
from .table import TABLE_ENTRY_TYPES, Table, write_tables
from .table_entry import TableEntry

__all__ = [
    "Appid",
    "Arc",
    "Circle",
    "DxfObject",
    "Endblk",
    "Imagedef",
    "Layer",
    "Line3d",
    "ModelerGeometry",
    "Region",
    "Solid",
    "Solid3d",
    "SpatialFilter",
    "SpatialIndex",
    "TABLE_ENTRY_TYPES",
    "Table",
    "TableEntry",
    "write_tables",
]

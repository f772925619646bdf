import sys

import ezlibdxf
from ezlibdxf import AcadVersion, Arc, Layer, Line3d, Point, Table


records = [
    Table(table_name="LAYER", entries=[Layer(layer_name="WALLS", color=1)]),
    Line3d.create_from_points(Point(0.0, 0.0), Point(10.0, 0.0)),
    Arc(p0=Point(10.0, 5.0), radius=5.0, start_angle=270.0, end_angle=90.0, layer="WALLS"),
]

result = ezlibdxf.write_document(sys.stdout, records, AcadVersion.R12)
print(result, file=sys.stderr)

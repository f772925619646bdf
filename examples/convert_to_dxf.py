import ezlibdxf


result = ezlibdxf.to_dxf(
    "examples/data/floor_plan_r12.dxf",
    "/tmp/floor_plan_r2010.dxf",
    types="LINE ARC LAYER",
    dxf_version="R2010",
)
print(result)

from __future__ import annotations

import argparse
import logging
import sys
from collections import Counter
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Sequence

from .config import GRAPHICS_DATA_SIZE_CODES, WriterOptions
from .convert import to_dxf
from .document import SUPPORTED_RECORD_TYPES, read
from .errors import ErrorKind
from .versions import AcadVersion

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _package_version() -> str:
    try:
        return version("ezlibdxf")
    except PackageNotFoundError:
        return "0.0.0"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ezlibdxf",
        description="Inspect, rewrite, and convert ASCII DXF files.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_package_version()}",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=_LOG_LEVELS,
        type=str.upper,
        help="Logging level for reader and writer diagnostics (default: WARNING).",
    )
    subparsers = parser.add_subparsers(dest="command")

    inspect_parser = subparsers.add_parser("inspect", help="Show basic DXF information.")
    inspect_parser.add_argument("path", help="Path to DXF file.")
    inspect_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show more unknown group codes.",
    )

    rewrite_parser = subparsers.add_parser(
        "rewrite",
        help="Read a DXF file and write it again with the native writer.",
    )
    rewrite_parser.add_argument("input_path", help="Path to input DXF file.")
    rewrite_parser.add_argument("output_path", help="Path to output DXF file.")
    rewrite_parser.add_argument(
        "--dxf-version",
        default="R2000",
        help="Output DXF version, e.g. R12/R14/R2000/R2010.",
    )
    rewrite_parser.add_argument(
        "--flatland",
        action="store_true",
        help="Write the legacy elevation group for R11 and older.",
    )
    rewrite_parser.add_argument(
        "--graphics-data-size-code",
        type=int,
        choices=GRAPHICS_DATA_SIZE_CODES,
        default=92,
        help="Group code used for the proxy graphics byte count.",
    )

    convert_parser = subparsers.add_parser(
        "convert",
        help="Convert DXF records with ezdxf as the writing backend.",
    )
    convert_parser.add_argument("input_path", help="Path to DXF file.")
    convert_parser.add_argument("output_path", help="Path to output DXF file.")
    convert_parser.add_argument(
        "--types",
        default=None,
        help='Record filter passed to query(), e.g. "LINE ARC LAYER".',
    )
    convert_parser.add_argument(
        "--dxf-version",
        default="R2010",
        help="DXF version for ezdxf.new(), e.g. R2000/R2010/R2018.",
    )
    convert_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail if any record cannot be converted.",
    )
    return parser


def _run_inspect(path: str, *, verbose: bool = False) -> int:
    file_path = Path(path)
    if not file_path.exists():
        print(f"error: file not found: {file_path}", file=sys.stderr)
        return 2

    try:
        doc = read(str(file_path))
    except Exception as exc:
        print(f"error: failed to read DXF: {exc}", file=sys.stderr)
        return 2

    counts: Counter[str] = Counter(record.dxftype for record in doc.iter_all())
    print(f"file: {file_path}")
    print(f"version: {doc.version.name if doc.version is not None else 'unknown'}")
    print(f"total_records: {sum(counts.values())}")
    for dxftype in SUPPORTED_RECORD_TYPES:
        count = counts.get(dxftype, 0)
        if count > 0:
            print(f"{dxftype}: {count}")

    extents = _modelspace_extents(doc)
    if extents is not None:
        (min_x, min_y), (max_x, max_y) = extents
        print(f"extents: ({min_x:g}, {min_y:g}) - ({max_x:g}, {max_y:g})")

    by_kind: Counter[str] = Counter(diagnostic.kind.value for diagnostic in doc.diagnostics)
    for kind, count in sorted(by_kind.items()):
        print(f"diagnostics[{kind}]: {count}")
    unknown_codes: Counter[int] = Counter(
        diagnostic.code
        for diagnostic in doc.diagnostics
        if diagnostic.kind is ErrorKind.UNKNOWN_TAG and diagnostic.code is not None
    )
    if unknown_codes:
        top_n = 10 if verbose else 3
        top_codes = ", ".join(f"{code}:{count}" for code, count in unknown_codes.most_common(top_n))
        print(f"unknown_group_codes: {top_codes}")
    return 0


def _modelspace_extents(doc) -> tuple[tuple[float, float], tuple[float, float]] | None:
    xs: list[float] = []
    ys: list[float] = []
    for entity in doc.modelspace().query():
        try:
            points = entity.to_points()
        except NotImplementedError:
            continue
        xs.extend(point[0] for point in points)
        ys.extend(point[1] for point in points)
    if not xs:
        return None
    return (min(xs), min(ys)), (max(xs), max(ys))


def _run_rewrite(
    input_path: str,
    output_path: str,
    *,
    dxf_version: str = "R2000",
    flatland: bool = False,
    graphics_data_size_code: int = 92,
) -> int:
    dxf_path = Path(input_path)
    if not dxf_path.exists():
        print(f"error: file not found: {dxf_path}", file=sys.stderr)
        return 2

    try:
        target = AcadVersion.parse(dxf_version)
        options = WriterOptions(flatland=flatland, graphics_data_size_code=graphics_data_size_code)
        result = read(str(dxf_path)).write(output_path, version=target, options=options)
    except Exception as exc:
        print(f"error: failed to rewrite DXF: {exc}", file=sys.stderr)
        return 2

    print(f"input: {dxf_path}")
    print(f"output: {result.output_path}")
    print(f"target_version: {result.target_version}")
    print(f"total_records: {result.total_records}")
    print(f"written_records: {result.written_records}")
    print(f"skipped_records: {result.skipped_records}")
    for dxftype, count in result.skipped_by_type.items():
        print(f"skipped[{dxftype}]: {count}")
    return 0


def _run_convert(
    input_path: str,
    output_path: str,
    *,
    types: str | None = None,
    dxf_version: str = "R2010",
    strict: bool = False,
) -> int:
    dxf_path = Path(input_path)
    if not dxf_path.exists():
        print(f"error: file not found: {dxf_path}", file=sys.stderr)
        return 2

    try:
        result = to_dxf(
            str(dxf_path),
            output_path,
            types=types,
            dxf_version=dxf_version,
            strict=strict,
        )
    except Exception as exc:
        print(f"error: failed to convert DXF: {exc}", file=sys.stderr)
        return 2

    print(f"input: {result.source_path}")
    print(f"output: {result.output_path}")
    print(f"total_records: {result.total_records}")
    print(f"written_records: {result.written_records}")
    print(f"skipped_records: {result.skipped_records}")
    for dxftype, count in result.skipped_by_type.items():
        print(f"skipped[{dxftype}]: {count}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "inspect":
        return _run_inspect(args.path, verbose=bool(args.verbose))
    if args.command == "rewrite":
        return _run_rewrite(
            args.input_path,
            args.output_path,
            dxf_version=args.dxf_version,
            flatland=bool(args.flatland),
            graphics_data_size_code=int(args.graphics_data_size_code),
        )
    if args.command == "convert":
        return _run_convert(
            args.input_path,
            args.output_path,
            types=args.types,
            dxf_version=args.dxf_version,
            strict=bool(args.strict),
        )

    parser.print_help()
    return 0

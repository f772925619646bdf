from __future__ import annotations

from typing import NamedTuple

DEFAULT_LAYER = "0"
DEFAULT_LINETYPE = "BYLAYER"
DEFAULT_LINETYPE_SCALE = 1.0
DEFAULT_VISIBILITY = 0
COLOR_BYBLOCK = 0
COLOR_BYLAYER = 256
MODELSPACE = 0
PAPERSPACE = 1

# Inclusive (first, last, kind) ranges of the ASCII DXF group codes.
_GROUP_CODE_RANGES: tuple[tuple[int, int, str], ...] = (
    (0, 9, "str"),
    (10, 59, "float"),
    (60, 79, "int"),
    (90, 99, "int"),
    (100, 102, "str"),
    (105, 105, "handle"),
    (110, 149, "float"),
    (160, 169, "int"),
    (170, 179, "int"),
    (210, 239, "float"),
    (270, 289, "int"),
    (290, 299, "bool"),
    (300, 319, "str"),
    (320, 369, "handle"),
    (370, 389, "int"),
    (390, 399, "handle"),
    (400, 409, "int"),
    (410, 419, "str"),
    (420, 429, "int"),
    (430, 439, "str"),
    (440, 449, "int"),
    (450, 459, "int"),
    (460, 469, "float"),
    (470, 479, "str"),
    (999, 999, "str"),
    (1000, 1009, "str"),
    (1010, 1059, "float"),
    (1060, 1071, "int"),
)


class Tag(NamedTuple):
    code: int
    value: str
    line: int = 0


def group_code_type(code: int) -> str:
    for first, last, kind in _GROUP_CODE_RANGES:
        if first <= code <= last:
            return kind
    return "str"


def parse_value(kind: str, raw: str):
    if kind == "str":
        return raw
    text = raw.strip()
    if kind == "float":
        return float(text)
    if kind == "int":
        return int(text)
    if kind == "bool":
        return int(text) != 0
    if kind == "hex":
        return int(text, 16)
    # Handle references stay as hex text.
    return text


def format_value(value) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float):
        return f"{value:f}"
    if isinstance(value, int):
        return f"{value:d}"
    return str(value)


def format_handle(handle: int) -> str:
    return f"{handle:X}"


def format_group_code(code: int) -> str:
    return f"{code:>3}"

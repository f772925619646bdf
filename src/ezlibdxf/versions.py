from __future__ import annotations

from enum import IntEnum


class AcadVersion(IntEnum):
    R10 = 10
    R11 = 11
    R12 = 12
    R13 = 13
    R14 = 14
    R2000 = 15
    R2002 = 16
    R2004 = 17
    R2005 = 18
    R2006 = 19
    R2007 = 20
    R2008 = 21
    R2009 = 22
    R2010 = 23
    R2013 = 24
    R2018 = 25

    @classmethod
    def parse(cls, value: "AcadVersion | str | int") -> "AcadVersion":
        if isinstance(value, AcadVersion):
            return value
        if isinstance(value, int):
            name = f"R{value}"
        else:
            name = str(value).strip().upper()
            if name.startswith("AC"):
                return cls.from_acadver(name)
            if not name.startswith("R"):
                name = f"R{name}"
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"unsupported DXF version: {value!r}") from None

    @classmethod
    def from_acadver(cls, code: str) -> "AcadVersion":
        try:
            return _ACADVER_TO_VERSION[code.strip().upper()]
        except KeyError:
            raise ValueError(f"unsupported $ACADVER: {code!r}") from None

    @property
    def acadver(self) -> str:
        # R11 and R12 share the same header code.
        if self is AcadVersion.R11:
            return "AC1009"
        for code, version in reversed(_ACADVER_TO_VERSION.items()):
            if version <= self:
                return code
        return "AC1006"


_ACADVER_TO_VERSION = {
    "AC1006": AcadVersion.R10,
    "AC1009": AcadVersion.R12,
    "AC1012": AcadVersion.R13,
    "AC1014": AcadVersion.R14,
    "AC1015": AcadVersion.R2000,
    "AC1018": AcadVersion.R2004,
    "AC1021": AcadVersion.R2007,
    "AC1024": AcadVersion.R2010,
    "AC1027": AcadVersion.R2013,
    "AC1032": AcadVersion.R2018,
}

SUPPORTED_ACADVER = tuple(_ACADVER_TO_VERSION)

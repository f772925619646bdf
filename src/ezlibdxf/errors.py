from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    NULL_ARGUMENT = "null-argument"
    IO_ERROR = "io-error"
    VALIDATION_FAILURE = "validation-failure"
    UNKNOWN_TAG = "unknown-tag"


class DxfError(Exception):
    kind = ErrorKind.VALIDATION_FAILURE


class NullArgumentError(DxfError, ValueError):
    kind = ErrorKind.NULL_ARGUMENT


class DxfIOError(DxfError, OSError):
    kind = ErrorKind.IO_ERROR


class ValidationFailure(DxfError, ValueError):
    kind = ErrorKind.VALIDATION_FAILURE


class ChainLinkError(ValidationFailure):
    pass


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal problem found while reading a tag stream."""

    kind: ErrorKind
    line_number: int
    code: int | None
    message: str

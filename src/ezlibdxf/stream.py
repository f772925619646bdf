from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterable, Iterator

from .config import DEFAULT_OPTIONS, WriterOptions
from .errors import Diagnostic, DxfIOError, ErrorKind, NullArgumentError
from .tags import Tag, format_group_code, format_value
from .versions import AcadVersion

logger = logging.getLogger(__name__)


class TagReader:
    """Reads (group code, value) line pairs from an ASCII DXF stream.

    One reader is one parse session: it owns the line counter, the detected
    format version and the diagnostics collected by every record read through
    it. A single tag can be pushed back so that the code 0 ending a record is
    seen again by the caller as the next record's type marker.
    """

    def __init__(
        self,
        stream: IO[str],
        filename: str = "<stream>",
        version: AcadVersion | str | None = None,
    ) -> None:
        if stream is None:
            raise NullArgumentError("a stream is required")
        self.stream = stream
        self.filename = filename
        self.version = AcadVersion.parse(version) if version is not None else None
        self.line_number = 0
        self.diagnostics: list[Diagnostic] = []
        self._saved: Tag | None = None

    def read_tag(self) -> Tag | None:
        if self._saved is not None:
            tag = self._saved
            self._saved = None
            return tag

        code_line = self._readline()
        if not code_line:
            return None
        self.line_number += 1
        try:
            code = int(code_line.strip())
        except ValueError:
            raise DxfIOError(
                f"invalid group code {code_line.strip()!r} in {self.filename} "
                f"line {self.line_number}"
            ) from None
        line = self.line_number

        value_line = self._readline()
        if not value_line:
            if code == 0:
                return Tag(0, "", line)
            raise DxfIOError(
                f"missing value for group code {code} in {self.filename} line {line}"
            )
        self.line_number += 1
        return Tag(code, value_line.rstrip("\r\n"), line)

    def push_back(self, tag: Tag) -> None:
        if self._saved is not None:
            raise RuntimeError("only one tag can be pushed back")
        self._saved = tag

    def peek_tag(self) -> Tag | None:
        tag = self.read_tag()
        if tag is not None:
            self.push_back(tag)
        return tag

    def skip_record(self) -> int:
        skipped = 0
        while True:
            tag = self.read_tag()
            if tag is None:
                return skipped
            if tag.code == 0:
                self.push_back(tag)
                return skipped
            skipped += 1

    def report(
        self,
        kind: ErrorKind,
        message: str,
        *,
        code: int | None = None,
        line: int | None = None,
    ) -> None:
        line_number = self.line_number if line is None else line
        self.diagnostics.append(Diagnostic(kind, line_number, code, message))
        logger.warning("%s in: %s in line: %d.", message, self.filename, line_number)

    def close(self) -> None:
        self.stream.close()

    def _readline(self) -> str:
        try:
            return self.stream.readline()
        except OSError as exc:
            self.stream.close()
            raise DxfIOError(
                f"error while reading from: {self.filename} in line: {self.line_number}"
            ) from exc


class TagWriter:
    def __init__(
        self,
        stream: IO[str],
        version: AcadVersion | str = AcadVersion.R2000,
        options: WriterOptions = DEFAULT_OPTIONS,
    ) -> None:
        if stream is None:
            raise NullArgumentError("a stream is required")
        self.stream = stream
        self.version = AcadVersion.parse(version)
        self.options = options
        self.line_number = 0

    def write_tag(self, code: int, value) -> None:
        self.write_tags([(code, value)])

    def write_tags(self, tags: Iterable[tuple[int, object]]) -> None:
        chunks: list[str] = []
        for code, value in tags:
            chunks.append(f"{format_group_code(code)}\n{format_value(value)}\n")
        if not chunks:
            return
        try:
            self.stream.write("".join(chunks))
        except OSError as exc:
            raise DxfIOError(f"error while writing tags: {exc}") from exc
        self.line_number += 2 * len(chunks)


@contextmanager
def open_reader(path: str | Path, version: AcadVersion | str | None = None) -> Iterator[TagReader]:
    file_path = Path(path)
    try:
        stream = file_path.open("r", encoding="utf-8", errors="replace", newline=None)
    except OSError as exc:
        raise DxfIOError(f"could not open {file_path}: {exc}") from exc
    reader = TagReader(stream, filename=str(file_path), version=version)
    try:
        yield reader
    finally:
        if not stream.closed:
            stream.close()

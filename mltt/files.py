"""A database of source files with line tracking."""

from __future__ import annotations

import re
from bisect import bisect_left
from dataclasses import dataclass
from functools import cached_property
from typing import Optional

from mltt.span import Location, Span, column_from_bytes, column_to_byte_index


@dataclass(frozen=True, order=True)
class FileId:
    """A handle that points to a file in a :class:`Files` database."""

    index: int

    def __str__(self) -> str:
        return f"#{self.index}"


@dataclass(frozen=True)
class File:
    """A source file stored in the database."""

    id: FileId
    name: str
    contents: str
    line_starts: tuple[int, ...]

    @cached_property
    def _bytes(self) -> bytes:
        return self.contents.encode("utf-8")

    def span(self) -> Span[FileId]:
        """The span covering the whole file."""
        return Span.from_str(self.id, self.contents)


class Files:
    """A database of source files."""

    def __init__(self) -> None:
        self._files: list[File] = []

    def add(self, name: str, contents: str) -> FileId:
        """Add a file, returning the handle that refers to it."""
        file_id = FileId(len(self._files))
        data = contents.encode("utf-8")
        line_starts = (
            0,
            *(match.end() for match in re.finditer(b"\n", data)),
            len(data),
        )
        self._files.append(File(file_id, str(name), contents, line_starts))
        return file_id

    def __getitem__(self, file_id: FileId) -> File:
        return self._files[file_id.index]

    def byte_index(self, file_id: FileId, line: int, column: int) -> Optional[int]:
        file = self[file_id]
        if not 0 <= line < len(file.line_starts):
            return None
        return column_to_byte_index(column, file.contents, file.line_starts[line])

    def line_span(self, file_id: FileId, line: int) -> Optional[Span[FileId]]:
        starts = self[file_id].line_starts
        if not 0 <= line < len(starts) - 1:
            return None
        return Span(file_id, starts[line], starts[line + 1])

    def location(self, file_id: FileId, byte: int) -> Optional[Location]:
        if byte < 0:
            return None
        file = self[file_id]
        starts = file.line_starts
        line = bisect_left(starts, byte)
        if line < len(starts) and starts[line] == byte:
            return Location(line=line, column=0, byte=byte)
        line -= 1
        column = column_from_bytes(file.contents, starts[line], byte)
        if column is None:
            return None
        return Location(line=line, column=column, byte=byte)

    def source(self, span: Span[FileId]) -> Optional[str]:
        """The text covered by ``span``, or ``None`` if it is not valid for the file."""
        data = self[span.source]._bytes
        if span.end > len(data):
            return None
        try:
            return data[span.start:span.end].decode("utf-8")
        except UnicodeDecodeError:
            return None

    def file_name(self, file_id: FileId) -> str:
        return self[file_id].name

    def byte_span(self, file_id: FileId, from_index: int, to_index: int) -> Optional[Span[FileId]]:
        span = Span(file_id, from_index, to_index)
        return span if self[file_id].span().contains(span) else None
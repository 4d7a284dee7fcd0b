"""Byte spans, source locations and conversions between byte and column indices."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

import regex

_GRAPHEME = regex.compile(r"\X")

S = TypeVar("S")
T = TypeVar("T")


def _single_char(ch: str) -> str:
    if len(ch) != 1:
        raise ValueError(f"expected a single character, got {ch!r}")
    return ch


def char_len_utf8(ch: str) -> int:
    """Number of bytes the character takes up in UTF-8."""
    return len(_single_char(ch).encode("utf-8"))


def char_len_utf16(ch: str) -> int:
    """Number of 16-bit code units the character takes up in UTF-16."""
    return len(_single_char(ch).encode("utf-16-le")) // 2


def _graphemes(text: str) -> list[str]:
    return _GRAPHEME.findall(text)


def column_from_bytes(src: str, line_start_byte: int, column_byte: int) -> Optional[int]:
    """Count the grapheme clusters between two byte offsets of ``src``.

    Returns ``None`` when the offsets are out of range or do not fall on
    character boundaries.
    """
    data = src.encode("utf-8")
    if not 0 <= line_start_byte <= column_byte <= len(data):
        return None
    try:
        line_src = data[line_start_byte:column_byte].decode("utf-8")
    except UnicodeDecodeError:
        return None
    return len(_graphemes(line_src))


def column_to_byte_size(column: int, line_src: str) -> int:
    """Number of bytes taken up by the first ``column`` grapheme clusters of a line."""
    return sum(len(g.encode("utf-8")) for g in _graphemes(line_src)[:column])


def column_to_byte_index(column: int, src: str, line_start_byte: int) -> int:
    """Byte offset of ``column`` on the line of ``src`` starting at ``line_start_byte``."""
    data = src.encode("utf-8")
    try:
        rest = data[line_start_byte:].decode("utf-8")
    except UnicodeDecodeError as error:
        raise ValueError(f"byte {line_start_byte} is not on a character boundary") from error
    return line_start_byte + column_to_byte_size(column, rest)


@dataclass(frozen=True, order=True, repr=False)
class Span(Generic[S]):
    """A half-open range of bytes ``[start, end)`` within a source."""

    source: S
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid span bounds [{self.start}, {self.end})")

    @classmethod
    def initial(cls, source: S) -> Span[S]:
        """An empty span at the start of a source."""
        return cls(source, 0, 0)

    @classmethod
    def from_str(cls, source: S, text: str) -> Span[S]:
        """A span covering the whole of ``text``."""
        return cls(source, 0, len(text.encode("utf-8")))

    def merge(self, other: Span[S]) -> Span[S]:
        return Span(self.source, self.start, other.end)

    def with_source(self, source: T) -> Span[T]:
        return Span(source, self.start, self.end)

    def with_start(self, start: int) -> Span[S]:
        return Span(self.source, start, self.end)

    def with_end(self, end: int) -> Span[S]:
        return Span(self.source, self.start, end)

    def start_span(self) -> Span[S]:
        return self.with_end(self.start)

    def end_span(self) -> Span[S]:
        return self.with_start(self.end)

    def contains(self, span: Span[S]) -> bool:
        return self.source == span.source and self.start >= span.start and self.end < span.end

    def contains_index(self, index: int) -> bool:
        return self.start <= index < self.end

    def __len__(self) -> int:
        return self.end - self.start

    def __repr__(self) -> str:
        return f"{self.source!r}:[{self.start}, {self.end})"


@dataclass(frozen=True, order=True)
class Location:
    """A position in a source file as line, column and byte indices."""

    line: int
    column: int
    byte: int
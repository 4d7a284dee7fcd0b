"""Tokens produced by the lexer."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from mltt.files import FileId
from mltt.span import Span


class DelimKind(enum.Enum):
    """A kind of delimiter."""

    PAREN = enum.auto()
    BRACE = enum.auto()
    BRACKET = enum.auto()


class TokenKind(enum.Enum):
    """The kind of a token."""

    ERROR = enum.auto()

    WHITESPACE = enum.auto()
    LINE_COMMENT = enum.auto()
    LINE_DOC = enum.auto()

    KEYWORD = enum.auto()
    SYMBOL = enum.auto()
    IDENTIFIER = enum.auto()
    STRING_LITERAL = enum.auto()
    CHAR_LITERAL = enum.auto()
    INT_LITERAL = enum.auto()
    FLOAT_LITERAL = enum.auto()

    CARET = enum.auto()
    COLON = enum.auto()
    DOT = enum.auto()
    EQUALS = enum.auto()
    QUESTION = enum.auto()
    R_ARROW = enum.auto()
    R_FAT_ARROW = enum.auto()

    COMMA = enum.auto()
    SEMICOLON = enum.auto()

    OPEN_PAREN = enum.auto()
    CLOSE_PAREN = enum.auto()
    OPEN_BRACE = enum.auto()
    CLOSE_BRACE = enum.auto()
    OPEN_BRACKET = enum.auto()
    CLOSE_BRACKET = enum.auto()


@dataclass(frozen=True)
class SpannedString:
    """A slice of source text together with where it starts."""

    source: FileId
    start: int
    slice: str

    def span(self) -> Span[FileId]:
        return Span(self.source, self.start, self.start + len(self.slice.encode("utf-8")))


@dataclass(frozen=True, repr=False)
class Token:
    """A token in a source file."""

    kind: TokenKind
    src: SpannedString

    def span(self) -> Span[FileId]:
        return self.src.span()

    def is_whitespace(self) -> bool:
        return self.kind in (TokenKind.WHITESPACE, TokenKind.LINE_COMMENT)

    def is_keyword(self, slice_: str) -> bool:
        return self.kind is TokenKind.KEYWORD and self.src.slice == slice_

    def __repr__(self) -> str:
        return f"{self.kind.name}@{self.src!r}"
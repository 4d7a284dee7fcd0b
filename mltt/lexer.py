"""A lexer that turns source files into a stream of tokens."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from mltt.files import File, FileId
from mltt.span import Span, char_len_utf8
from mltt.token import SpannedString, Token, TokenKind

logger = logging.getLogger(__name__)

KEYWORDS: frozenset[str] = frozenset(
    {
        "case",
        "else",
        "if",
        "in",
        "let",
        "then",
        "Type",
        "Fun",
        "fun",
        "primitive",
        "Record",
        "record",
    }
)

_WHITESPACE = frozenset(
    "\u0009\u000a\u000b\u000c\u000d\u0020\u0085\u200e\u200f\u2028\u2029"
)
_SYMBOLS = frozenset("&!:.=\\/><-|+*^")
_IDENT_START = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_")
_DEC_DIGITS = frozenset("0123456789")
_IDENT_CONTINUE = _IDENT_START | _DEC_DIGITS | {"-"}
_BIN_DIGITS = frozenset("01")
_OCT_DIGITS = frozenset("01234567")
_HEX_DIGITS = _DEC_DIGITS | frozenset("abcdefABCDEF")

_SINGLE_CHAR_TOKENS = {
    ",": TokenKind.COMMA,
    ";": TokenKind.SEMICOLON,
    "?": TokenKind.QUESTION,
    "(": TokenKind.OPEN_PAREN,
    ")": TokenKind.CLOSE_PAREN,
    "{": TokenKind.OPEN_BRACE,
    "}": TokenKind.CLOSE_BRACE,
    "[": TokenKind.OPEN_BRACKET,
    "]": TokenKind.CLOSE_BRACKET,
}

_SYMBOL_TOKENS = {
    "^": TokenKind.CARET,
    ":": TokenKind.COLON,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    "=": TokenKind.EQUALS,
    "->": TokenKind.R_ARROW,
    "=>": TokenKind.R_FAT_ARROW,
}


@dataclass(frozen=True)
class Diagnostic:
    """An error reported while lexing, with the span it refers to."""

    message: str
    span: Span[FileId]


class _LexError(Exception):
    def __init__(self, diagnostic: Diagnostic) -> None:
        super().__init__(diagnostic.message)
        self.diagnostic = diagnostic


class Lexer:
    """An iterator over a source file that yields tokens.

    Problems found along the way are collected as diagnostics rather than
    stopping the lexer; the offending text is emitted as an error token.
    """

    def __init__(self, file: File) -> None:
        self._file = file
        self._text = file.contents
        self._pos = 0
        self._token_start_char = 0
        self._token_start = 0
        self._token_end = 0
        self._diagnostics: list[Diagnostic] = []

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        """The diagnostics emitted so far."""
        return tuple(self._diagnostics)

    def take_diagnostics(self) -> list[Diagnostic]:
        """Remove and return the diagnostics emitted so far."""
        taken, self._diagnostics = self._diagnostics, []
        return taken

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        kind = self._consume_token()
        if kind is None:
            logger.debug("eof")
            raise StopIteration
        token = self._emit(kind)
        logger.debug("emit %r", token)
        return token

    # -- helpers -----------------------------------------------------------

    def _add_diagnostic(self, diagnostic: Diagnostic) -> None:
        logger.debug("diagnostic added: %s", diagnostic.message)
        self._diagnostics.append(diagnostic)

    def _error(self, message: str) -> Diagnostic:
        return Diagnostic(message, self._token_span())

    def _token_span(self) -> Span[FileId]:
        return Span(self._file.id, self._token_start, self._token_end)

    def _token_slice(self) -> str:
        return self._text[self._token_start_char:self._pos]

    def _eof_span(self) -> Span[FileId]:
        return self._file.span().end_span()

    def _emit(self, kind: TokenKind) -> Token:
        src = SpannedString(self._file.id, self._token_start, self._token_slice())
        self._token_start = self._token_end
        self._token_start_char = self._pos
        return Token(kind, src)

    def _peek(self) -> Optional[str]:
        return self._text[self._pos] if self._pos < len(self._text) else None

    def _advance(self) -> Optional[str]:
        ch = self._peek()
        if ch is not None:
            self._pos += 1
            self._token_end += char_len_utf8(ch)
        return ch

    def _expect_advance(self) -> str:
        ch = self._advance()
        if ch is None:
            raise _LexError(Diagnostic("unexpected end of file", self._eof_span()))
        return ch

    def _skip_while(self, keep_going: Callable[[str], bool]) -> None:
        while (ch := self._peek()) is not None and keep_going(ch):
            self._advance()

    def _skip_if(self, predicate: Callable[[str], bool]) -> bool:
        ch = self._peek()
        if ch is not None and predicate(ch):
            self._advance()
            return True
        return False

    # -- tokens ------------------------------------------------------------

    def _consume_token(self) -> Optional[TokenKind]:
        ch = self._advance()
        if ch is None:
            return None
        if ch in _SINGLE_CHAR_TOKENS:
            return _SINGLE_CHAR_TOKENS[ch]
        if ch == '"':
            return self._consume_string_literal()
        if ch == "'":
            return self._consume_char_literal()
        if ch == "0":
            return self._consume_zero_number()
        if ch in _DEC_DIGITS:
            return self._consume_dec_literal()
        if ch in _WHITESPACE:
            self._skip_while(_WHITESPACE.__contains__)
            return TokenKind.WHITESPACE
        if ch in _SYMBOLS:
            return self._consume_symbol()
        if ch in _IDENT_START:
            return self._consume_identifier()
        self._add_diagnostic(self._error(f"unexpected character `{ch}`"))
        return TokenKind.ERROR

    def _skip_line(self) -> None:
        self._skip_while(lambda ch: ch != "\n")

    def _consume_symbol(self) -> TokenKind:
        self._skip_while(_SYMBOLS.__contains__)
        text = self._token_slice()
        if text in _SYMBOL_TOKENS:
            return _SYMBOL_TOKENS[text]
        if text == "-":
            return self._consume_neg_number()
        if text.startswith("|||"):
            self._skip_line()
            return TokenKind.LINE_DOC
        if text.startswith("--"):
            self._skip_line()
            return TokenKind.LINE_COMMENT
        return TokenKind.SYMBOL

    def _consume_identifier(self) -> TokenKind:
        self._skip_while(_IDENT_CONTINUE.__contains__)
        if self._token_slice() in KEYWORDS:
            return TokenKind.KEYWORD
        return TokenKind.IDENTIFIER

    # -- escapes -----------------------------------------------------------

    def _skip_ascii_char_code(self) -> None:
        if self._expect_advance() not in _OCT_DIGITS:
            raise _LexError(self._error("invalid ASCII character code"))
        if self._expect_advance() not in _HEX_DIGITS:
            raise _LexError(self._error("invalid ASCII character code"))

    def _skip_unicode_char_code(self) -> None:
        if self._expect_advance() != "{":
            raise _LexError(self._error("invalid unicode character code"))
        digits = 0
        while (ch := self._expect_advance()) != "}":
            if ch == "_":
                continue
            if ch in _HEX_DIGITS:
                digits += 1
                continue
            raise _LexError(self._error("invalid unicode character code"))
        if not 1 <= digits <= 6:
            raise _LexError(self._error("expected 1 to 6 hexadecimal digits"))

    def _skip_escape(self) -> None:
        ch = self._expect_advance()
        if ch in "'\"\\nrt0":
            return
        if ch == "x":
            self._skip_ascii_char_code()
        elif ch == "u":
            self._skip_unicode_char_code()
        else:
            raise _LexError(self._error(f"unknown escape code `\\{ch}`"))

    def _try_skip_escape(self) -> bool:
        """Skip an escape, recording a diagnostic and returning False on failure."""
        try:
            self._skip_escape()
        except _LexError as error:
            self._add_diagnostic(error.diagnostic)
            return False
        return True

    def _consume_string_literal(self) -> TokenKind:
        is_escape_error = False
        while (ch := self._advance()) is not None:
            if ch == "\\":
                if not self._try_skip_escape():
                    is_escape_error = True
            elif ch == '"':
                return TokenKind.ERROR if is_escape_error else TokenKind.STRING_LITERAL
        self._add_diagnostic(self._error("unterminated string literal"))
        return TokenKind.ERROR

    def _consume_char_literal(self) -> TokenKind:
        is_escape_error = False
        codepoints = 0
        while (ch := self._advance()) is not None:
            if ch == "\\":
                if not self._try_skip_escape():
                    is_escape_error = True
            elif ch == "'":
                if is_escape_error:
                    return TokenKind.ERROR
                if codepoints == 1:
                    return TokenKind.CHAR_LITERAL
                self._add_diagnostic(
                    self._error("character literals must contain exactly one codepoint")
                )
                return TokenKind.ERROR
            codepoints += 1
        self._add_diagnostic(self._error("unterminated character literal"))
        return TokenKind.ERROR

    # -- numbers -----------------------------------------------------------

    def _skip_separated_digits(self, digits_set: frozenset[str]) -> int:
        digits = 0
        while True:
            if self._skip_if(digits_set.__contains__):
                digits += 1
            elif not self._skip_if(lambda ch: ch == "_"):
                return digits

    def _consume_neg_number(self) -> TokenKind:
        try:
            ch = self._expect_advance()
        except _LexError as error:
            self._add_diagnostic(error.diagnostic)
            return TokenKind.ERROR
        if ch == "0":
            return self._consume_zero_number()
        if ch in _DEC_DIGITS:
            return self._consume_dec_literal()
        self._add_diagnostic(self._error(f"unexpected character `{ch}`"))
        return TokenKind.ERROR

    def _consume_zero_number(self) -> TokenKind:
        if self._skip_if(lambda ch: ch == "b"):
            return self._consume_radix_literal("binary", _BIN_DIGITS)
        if self._skip_if(lambda ch: ch == "o"):
            return self._consume_radix_literal("octal", _OCT_DIGITS)
        if self._skip_if(lambda ch: ch == "x"):
            return self._consume_radix_literal("hexadecimal", _HEX_DIGITS)
        return self._consume_dec_literal()

    def _consume_radix_literal(self, radix_name: str, digits_set: frozenset[str]) -> TokenKind:
        if self._skip_separated_digits(digits_set) == 0:
            self._add_diagnostic(self._error(f"no valid digits found in {radix_name} literal"))
            return TokenKind.ERROR
        return TokenKind.INT_LITERAL

    def _skip_float_exponent(self) -> bool:
        """Skip an exponent if present, returning whether one was found."""
        if not self._skip_if(lambda ch: ch in "eE"):
            return False
        self._skip_if(lambda ch: ch in "-+")
        if self._skip_separated_digits(_DEC_DIGITS) == 0:
            raise _LexError(self._error("no valid digits found in exponent"))
        return True

    def _consume_dec_literal(self) -> TokenKind:
        # At least one digit was consumed before getting here.
        self._skip_separated_digits(_DEC_DIGITS)
        try:
            if self._skip_if(lambda ch: ch == "."):
                # The fractional part must start with a digit, ruling out `0._1`.
                if self._skip_if(_DEC_DIGITS.__contains__):
                    self._skip_separated_digits(_DEC_DIGITS)
                    self._skip_float_exponent()
                    return TokenKind.FLOAT_LITERAL
                if self._skip_float_exponent():
                    return TokenKind.FLOAT_LITERAL
                self._add_diagnostic(
                    self._error("expected a digit or exponent after the decimal place")
                )
                return TokenKind.ERROR
            if self._skip_float_exponent():
                return TokenKind.FLOAT_LITERAL
            return TokenKind.INT_LITERAL
        except _LexError as error:
            self._add_diagnostic(error.diagnostic)
            return TokenKind.ERROR


def tokenize(file: File) -> tuple[list[Token], list[Diagnostic]]:
    """Lex a whole file, returning its tokens and the diagnostics produced."""
    lexer = Lexer(file)
    tokens = list(lexer)
    return tokens, lexer.take_diagnostics()
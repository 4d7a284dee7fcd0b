import pytest

from mltt.files import FileId
from mltt.span import Span
from mltt.token import SpannedString, Token, TokenKind

FILE = FileId(0)


def make(kind, start, text):
    return Token(kind, SpannedString(FILE, start, text))


def test_spanned_string_span_counts_bytes():
    text = "h\u00e9"
    src = SpannedString(FILE, 3, text)
    assert src.span() == Span(FILE, 3, 3 + len(text.encode("utf-8")))


def test_token_span_matches_source():
    token = make(TokenKind.IDENTIFIER, 4, "var")
    assert token.span() == token.src.span()
    assert token.span().start == 4


@pytest.mark.parametrize(
    "kind, expected",
    [
        (TokenKind.WHITESPACE, True),
        (TokenKind.LINE_COMMENT, True),
        (TokenKind.LINE_DOC, False),
        (TokenKind.IDENTIFIER, False),
    ],
)
def test_is_whitespace(kind, expected):
    assert make(kind, 0, "x").is_whitespace() is expected


def test_is_keyword():
    keyword = make(TokenKind.KEYWORD, 0, "let")
    assert keyword.is_keyword("let") is True
    assert keyword.is_keyword("in") is False
    assert make(TokenKind.IDENTIFIER, 0, "let").is_keyword("let") is False


def test_token_equality():
    assert make(TokenKind.COLON, 1, ":") == make(TokenKind.COLON, 1, ":")
    assert make(TokenKind.COLON, 1, ":") != make(TokenKind.COLON, 2, ":")


def test_token_repr_starts_with_kind():
    token = make(TokenKind.SEMICOLON, 0, ";")
    assert repr(token).startswith("SEMICOLON@")
    assert repr(token.src) in repr(token)
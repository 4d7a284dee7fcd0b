# mltt

Source-position tracking and a lexer for the MLTT language.

The package has four modules:

- `mltt.span`: `Span`, a half-open byte range `[start, end)` in some source,
  and `Location`, a line, column and byte position. It also has helpers for
  converting between columns and byte offsets: `column_from_bytes`,
  `column_to_byte_size` and `column_to_byte_index`. It also has
  `char_len_utf8` and `char_len_utf16`, which give the encoded length of a
  character.
- `mltt.files`: `Files`, a database of source files. Each file added gets a
  `FileId`. The database maps between byte offsets, lines and columns.
- `mltt.token`: `TokenKind`, `DelimKind`, `SpannedString` (a slice of source
  text with its starting byte) and `Token`.
- `mltt.lexer`: `Lexer`, which turns a `File` into a stream of `Token`s. It
  also has `tokenize`, which lexes a whole file in one call, and the
  `KEYWORDS` set. Lexing errors are collected as `Diagnostic`s, each holding
  a `message` and a `span`. Errors do not stop the lexer; the text that
  caused an error is emitted as a `TokenKind.ERROR` token.

## Installation

```
pip install .
```

## Usage

```python
from mltt.files import Files
from mltt.lexer import Lexer, tokenize

files = Files()
file_id = files.add("example", "let x = 0x1F; in x")

lexer = Lexer(files[file_id])
for token in lexer:
    if not token.is_whitespace():
        print(token.kind, token.src.slice, token.span())

for diagnostic in lexer.take_diagnostics():
    print(diagnostic.message, diagnostic.span)

# Or get the tokens and the diagnostics together:
tokens, diagnostics = tokenize(files[file_id])
```

`Lexer.diagnostics` returns the diagnostics collected so far without
removing them. `take_diagnostics()` returns them and clears the list.

Whitespace and `--` line comments come out as tokens of their own
(`WHITESPACE`, `LINE_COMMENT`). `Token.is_whitespace()` is true for both.
`|||` doc comments come out as `LINE_DOC`.

## Positions within a file

```python
from mltt.files import Files

files = Files()
file_id = files.add("test", "foo\nbar\r\n\nbaz")

files[file_id].line_starts                 # (0, 4, 9, 10, 13)
files.location(file_id, 7)                 # Location(line=1, column=3, byte=7)
files.line_span(file_id, 1)                # the span of "bar\r\n"
files.source(files.line_span(file_id, 1))  # "bar\r\n"
files.byte_index(file_id, 1, 2)            # 6
```

Offsets are UTF-8 byte offsets. Columns are counted in grapheme clusters, so
a character built from several code points counts as one column.

`location`, `line_span`, `byte_index` and `source` return `None` when the
position or span is outside the file. `location` and `source` also return
`None` when the position or span does not fall on a character boundary.

## What this package does not do

The package stops at tokens. It has no parser, no type checker or evaluator,
and no command-line program. It does not render diagnostics as formatted
reports; a `Diagnostic` is only a message and a span.

## Running the tests

```
pip install .[test]
pytest
```
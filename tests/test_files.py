import pytest

from mltt.files import FileId, Files
from mltt.span import Location, Span

SOURCE = "foo\nbar\r\n\nbaz"


@pytest.fixture
def loaded():
    files = Files()
    file_id = files.add("test", SOURCE)
    return files, file_id


def test_line_starts(loaded):
    files, file_id = loaded
    assert files[file_id].line_starts == (0, 4, 9, 10, 13)


def test_location(loaded):
    files, file_id = loaded
    assert files.location(file_id, 0) == Location(line=0, column=0, byte=0)
    assert files.location(file_id, 7) == Location(line=1, column=3, byte=7)
    assert files.location(file_id, 8) == Location(line=1, column=4, byte=8)
    assert files.location(file_id, 9) == Location(line=2, column=0, byte=9)
    assert files.location(file_id, 100) is None


def test_line_span_sources(loaded):
    files, file_id = loaded
    sources = []
    for line in range(5):
        span = files.line_span(file_id, line)
        sources.append(None if span is None else files.source(span))
    assert sources == ["foo\n", "bar\r\n", "\n", "baz", None]


def test_file_id_display():
    files = Files()
    files.add("a", "")
    second = files.add("b", "")
    assert str(second) == "#1"
    assert second == FileId(1)


def test_file_name_and_contents(loaded):
    files, file_id = loaded
    assert files.file_name(file_id) == "test"
    assert files[file_id].contents == SOURCE
    assert files[file_id].id == file_id


def test_file_span_covers_contents(loaded):
    files, file_id = loaded
    span = files[file_id].span()
    assert files.source(span) == SOURCE


@pytest.mark.parametrize("byte", [0, 1, 2, 3, 4, 5, 6, 7, 9, 10, 11, 12, 13])
def test_byte_index_round_trips_location(loaded, byte):
    files, file_id = loaded
    loc = files.location(file_id, byte)
    assert files.byte_index(file_id, loc.line, loc.column) == byte


def test_byte_index_unknown_line(loaded):
    files, file_id = loaded
    assert files.byte_index(file_id, 10, 0) is None


def test_source_rejects_non_boundary():
    files = Files()
    file_id = files.add("u", "\u00e9")
    assert files.source(Span(file_id, 0, 1)) is None
    assert files.source(Span(file_id, 0, 2)) == "\u00e9"


def test_byte_span(loaded):
    files, file_id = loaded
    assert files.byte_span(file_id, 0, 20) == Span(file_id, 0, 20)
    assert files.byte_span(file_id, 0, 5) is None


def test_unknown_file_raises():
    files = Files()
    with pytest.raises(IndexError):
        files[FileId(3)]
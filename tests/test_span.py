import pytest

from covibe.span import BytePos, FileId, LineCol, Span, Spanned


def test_byte_pos():
    pos = BytePos(10)
    assert pos.advance(5) == BytePos(15)
    assert pos.advance_by_str("hello") == BytePos(15)
    assert int(pos) == 10


def test_byte_pos_advance_by_multibyte_str():
    assert BytePos(0).advance_by_str("世") == BytePos(3)


def test_byte_pos_rejects_negative():
    with pytest.raises(ValueError):
        BytePos(-1)


def test_line_col_display():
    lc = LineCol(0, 0)
    assert lc.display_line() == 1
    assert lc.display_column() == 1
    assert str(lc) == "1:1"

    assert str(LineCol(5, 10)) == "6:11"


def test_span_creation():
    span = Span(BytePos(10), BytePos(20))
    assert span.start == BytePos(10)
    assert span.end == BytePos(20)
    assert span.length() == 10
    assert not span.is_empty()

    empty = Span.at(BytePos(15))
    assert empty.is_empty()
    assert empty.length() == 0


def test_span_default_file_is_invalid():
    assert Span.from_offsets(1, 2).file == FileId.INVALID


def test_span_contains():
    span = Span(BytePos(10), BytePos(20))
    assert span.contains(BytePos(10))
    assert span.contains(BytePos(15))
    assert not span.contains(BytePos(20))
    assert not span.contains(BytePos(5))
    assert not span.contains(BytePos(25))


def test_span_overlaps():
    span1 = Span(BytePos(10), BytePos(20))
    span2 = Span(BytePos(15), BytePos(25))
    span3 = Span(BytePos(20), BytePos(30))
    span4 = Span(BytePos(0), BytePos(5))

    assert span1.overlaps(span2)
    assert span2.overlaps(span1)
    assert not span1.overlaps(span3)
    assert not span1.overlaps(span4)


def test_span_merge():
    merged = Span(BytePos(10), BytePos(20)).merge(Span(BytePos(15), BytePos(30)))
    assert merged.start == BytePos(10)
    assert merged.end == BytePos(30)


def test_span_merge_different_files_raises():
    a = Span.from_offsets(0, 1).with_file_id(FileId(0))
    b = Span.from_offsets(0, 1).with_file_id(FileId(1))
    with pytest.raises(ValueError):
        a.merge(b)


def test_span_shrink():
    span = Span(BytePos(10), BytePos(20))
    assert span.shrink_start(2) == Span(BytePos(12), BytePos(20))
    assert span.shrink_end(3) == Span(BytePos(10), BytePos(17))


def test_span_shrink_end_saturates():
    assert Span.from_offsets(0, 2).shrink_end(5).end == BytePos(0)


def test_spanned_value():
    span = Span(BytePos(0), BytePos(5))
    spanned = Spanned(42, span)
    assert spanned.node == 42
    assert spanned.span == span

    mapped = spanned.map(lambda x: x * 2)
    assert mapped.node == 84
    assert mapped.span == span


def test_span_to_from():
    span = Span(BytePos(10), BytePos(20))
    assert span.to(BytePos(30)) == Span(BytePos(10), BytePos(30))
    assert span.starting_at(BytePos(5)) == Span(BytePos(5), BytePos(20))


def test_with_file_id_keeps_range():
    span = Span.from_offsets(4, 5).with_file_id(FileId(3))
    assert span.file == FileId(3)
    assert (span.start, span.end) == (BytePos(4), BytePos(5))


def test_span_text_forms():
    span = Span.from_offsets(10, 20).with_file_id(FileId(2))
    assert str(span) == "10..20"
    assert repr(span) == "Span(file=FileId(2), 10..20)"
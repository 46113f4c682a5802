import pytest

from covibe.errors import ParseError
from covibe.span import FileId, Span


def test_str_is_message():
    err = ParseError("expected identifier", Span.from_offsets(3, 7))
    assert str(err) == "expected identifier"
    assert err.message == "expected identifier"


def test_span_is_kept():
    span = Span.from_offsets(3, 7).with_file_id(FileId(2))
    err = ParseError("bad token", span)
    assert err.span == span


def test_default_span_is_invalid():
    err = ParseError("oops")
    assert err.span == Span.INVALID


def test_raise_and_catch():
    span = Span.from_offsets(1, 2)
    with pytest.raises(ParseError) as info:
        raise ParseError("unexpected token in expression", span)
    assert info.value.span == span
    assert str(info.value) == "unexpected token in expression"


def test_equality():
    span = Span.from_offsets(0, 1)
    assert ParseError("a", span) == ParseError("a", span)
    assert not ParseError("a", span) == ParseError("b", span)
    assert not ParseError("a", span) == ParseError("a", Span.from_offsets(0, 2))


def test_hashable_consistent_with_equality():
    span = Span.from_offsets(4, 9)
    errors = {ParseError("x", span), ParseError("x", span)}
    assert len(errors) == 1
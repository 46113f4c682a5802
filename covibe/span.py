"""Positions and ranges within source files."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, ClassVar, Generic, TypeVar

_U32_MAX = 0xFFFF_FFFF

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, order=True)
class FileId:
    """Unique identifier for a source file."""

    raw: int

    INVALID: ClassVar[FileId]

    def __repr__(self) -> str:
        return f"FileId({self.raw})"


FileId.INVALID = FileId(_U32_MAX)


@dataclass(frozen=True, order=True)
class BytePos:
    """A 0-indexed byte offset within a source file (not a character index)."""

    offset: int

    ZERO: ClassVar[BytePos]

    def __post_init__(self) -> None:
        if not 0 <= self.offset <= _U32_MAX:
            raise ValueError(f"byte position out of range: {self.offset}")

    def __index__(self) -> int:
        return self.offset

    def __int__(self) -> int:
        return self.offset

    def __str__(self) -> str:
        return str(self.offset)

    def advance(self, offset: int) -> BytePos:
        """Return this position moved forward by ``offset`` bytes."""
        return BytePos(self.offset + offset)

    def advance_by_str(self, text: str) -> BytePos:
        """Return this position moved forward by the UTF-8 length of ``text``."""
        return BytePos(self.offset + len(text.encode("utf-8")))


BytePos.ZERO = BytePos(0)


@dataclass(frozen=True)
class LineCol:
    """A 0-indexed line and column, displayed 1-indexed."""

    line: int
    column: int

    def display_line(self) -> int:
        return self.line + 1

    def display_column(self) -> int:
        return self.column + 1

    def __str__(self) -> str:
        return f"{self.display_line()}:{self.display_column()}"


def _as_pos(value: BytePos | int) -> BytePos:
    return value if isinstance(value, BytePos) else BytePos(int(value))


@dataclass(frozen=True)
class Span:
    """A half-open byte range ``[start, end)`` within a single file."""

    start: BytePos
    end: BytePos
    file: FileId = field(default=FileId.INVALID)

    INVALID: ClassVar[Span]

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", _as_pos(self.start))
        object.__setattr__(self, "end", _as_pos(self.end))

    @classmethod
    def from_offsets(cls, start: int, end: int) -> Span:
        return cls(BytePos(start), BytePos(end))

    @classmethod
    def at(cls, pos: BytePos) -> Span:
        """A zero-length span at ``pos``."""
        return cls(pos, pos)

    def length(self) -> int:
        return self.end.offset - self.start.offset

    def is_empty(self) -> bool:
        return self.start == self.end

    def contains(self, pos: BytePos) -> bool:
        return self.start <= pos < self.end

    def overlaps(self, other: Span) -> bool:
        return self.start < other.end and other.start < self.end

    def merge(self, other: Span) -> Span:
        """Smallest span covering both spans; they must share a file."""
        if self.file != other.file:
            raise ValueError("cannot merge spans from different files")
        return Span(min(self.start, other.start), max(self.end, other.end), self.file)

    def to(self, end: BytePos) -> Span:
        return Span(self.start, end, self.file)

    def starting_at(self, start: BytePos) -> Span:
        return Span(start, self.end, self.file)

    def shrink_start(self, amount: int) -> Span:
        return Span(self.start.advance(amount), self.end, self.file)

    def shrink_end(self, amount: int) -> Span:
        return Span(self.start, BytePos(max(self.end.offset - amount, 0)), self.file)

    def with_file_id(self, file: FileId) -> Span:
        return Span(self.start, self.end, file)

    def __repr__(self) -> str:
        return f"Span(file={self.file!r}, {self.start.offset}..{self.end.offset})"

    def __str__(self) -> str:
        return f"{self.start}..{self.end}"


Span.INVALID = Span(BytePos(0), BytePos(0), FileId.INVALID)


@dataclass(frozen=True)
class Spanned(Generic[T]):
    """A value paired with its source span."""

    node: T
    span: Span

    def map(self, func: Callable[[T], U]) -> Spanned[U]:
        return Spanned(func(self.node), self.span)
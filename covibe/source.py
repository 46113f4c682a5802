"""Source files and the map that owns them."""

from __future__ import annotations

import bisect
import os
import re
import threading
from pathlib import Path

from covibe.span import BytePos, FileId, LineCol, Span

_LINE_BREAK = re.compile(rb"\r\n|\r|\n")


class SourceFile:
    """A source file's text together with the byte offsets of its lines."""

    def __init__(self, file_id: FileId, path: str | os.PathLike[str], source: str) -> None:
        self.id = file_id
        self.path = Path(path)
        self.source = source
        self._bytes = source.encode("utf-8")
        self._line_starts = [0] + [m.end() for m in _LINE_BREAK.finditer(self._bytes)]

    def __repr__(self) -> str:
        return f"SourceFile(id={self.id!r}, path={str(self.path)!r})"

    def line_count(self) -> int:
        return len(self._line_starts)

    def line_start(self, line: int) -> BytePos | None:
        """Byte position where ``line`` (0-indexed) starts, or None."""
        if 0 <= line < len(self._line_starts):
            return BytePos(self._line_starts[line])
        return None

    def lookup_line_col(self, pos: BytePos) -> LineCol:
        """Convert a byte position to a 0-indexed line and column."""
        offset = int(pos)
        line = bisect.bisect_right(self._line_starts, offset) - 1
        if line < 0:
            return LineCol(0, 0)
        return LineCol(line, offset - self._line_starts[line])

    def source_text(self, span: Span) -> str:
        """Text covered by ``span``, clamped to the end of the file."""
        size = len(self._bytes)
        chunk = self._bytes[min(int(span.start), size):min(int(span.end), size)]
        try:
            return chunk.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ValueError(f"span {span} does not fall on character boundaries") from exc

    def line_text(self, line: int) -> str | None:
        """Text of ``line`` (0-indexed) without its trailing newline, or None."""
        if not 0 <= line < len(self._line_starts):
            return None
        start = self._line_starts[line]
        end = self._line_starts[line + 1] if line + 1 < len(self._line_starts) else len(self._bytes)
        return self._bytes[start:end].decode("utf-8").removesuffix("\n")


class SourceMap:
    """Thread-safe registry assigning a FileId to each added source file."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._files: dict[FileId, SourceFile] = {}
        self._next_id = 0

    def add_file(self, path: str | os.PathLike[str], source: str) -> FileId:
        with self._lock:
            file_id = FileId(self._next_id)
            self._next_id += 1
            self._files[file_id] = SourceFile(file_id, path, source)
            return file_id

    def get_file(self, file_id: FileId) -> SourceFile | None:
        with self._lock:
            return self._files.get(file_id)

    def file_count(self) -> int:
        with self._lock:
            return len(self._files)

    def file_ids(self) -> list[FileId]:
        with self._lock:
            return list(self._files)

    def get_file_by_path(self, path: str | os.PathLike[str]) -> SourceFile | None:
        wanted = Path(path)
        with self._lock:
            return next((f for f in self._files.values() if f.path == wanted), None)
"""Diagnostics: errors, warnings and notes reported against source code."""

from __future__ import annotations

import sys
import threading
from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Iterable, TextIO

from covibe.source import SourceFile, SourceMap
from covibe.span import FileId, Span


class Severity(IntEnum):
    """Severity of a diagnostic; lower values are more severe."""

    ERROR = 0
    WARNING = 1
    NOTE = 2
    HELP = 3

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class Label:
    """A message attached to a source location within a diagnostic.

    ``color`` is an optional colour name a front-end may use when
    presenting the label; plain-text rendering ignores it.
    """

    span: Span
    message: str | None = None
    color: str | None = None

    def with_message(self, message: str) -> Label:
        return replace(self, message=message)

    def with_color(self, color: str) -> Label:
        return replace(self, color=color)


@dataclass(frozen=True)
class _Annotation:
    line_number: int
    text: str
    offset: int
    width: int
    message: str | None


def _annotate(file: SourceFile, span: Span, message: str | None) -> _Annotation:
    position = file.lookup_line_col(span.start)
    text = file.line_text(position.line) or ""
    raw = text.encode("utf-8")
    start_col = min(position.column, len(raw))
    end_position = file.lookup_line_col(span.end)
    if end_position.line == position.line:
        end_col = min(max(end_position.column, start_col), len(raw))
    else:
        end_col = len(raw)
    offset = len(raw[:start_col].decode("utf-8", errors="ignore"))
    end = len(raw[:end_col].decode("utf-8", errors="ignore"))
    return _Annotation(position.line + 1, text, offset, max(end - offset, 1), message)


@dataclass(frozen=True)
class Diagnostic:
    """An error, warning or note with its location and extra context."""

    severity: Severity
    message: str
    file: FileId
    primary_span: Span
    labels: tuple[Label, ...] = field(default_factory=tuple)
    help_text: str | None = None
    note_text: str | None = None

    @classmethod
    def error(cls, message: str, file: FileId, span: Span) -> Diagnostic:
        return cls(Severity.ERROR, message, file, span)

    @classmethod
    def warning(cls, message: str, file: FileId, span: Span) -> Diagnostic:
        return cls(Severity.WARNING, message, file, span)

    @classmethod
    def note(cls, message: str, file: FileId, span: Span) -> Diagnostic:
        return cls(Severity.NOTE, message, file, span)

    def with_label(self, label: Label) -> Diagnostic:
        return replace(self, labels=(*self.labels, label))

    def with_labels(self, labels: Iterable[Label]) -> Diagnostic:
        return replace(self, labels=(*self.labels, *labels))

    def with_help(self, help: str) -> Diagnostic:
        return replace(self, help_text=help)

    def with_note(self, note: str) -> Diagnostic:
        return replace(self, note_text=note)

    def render(self, source_map: SourceMap) -> str:
        """Format this diagnostic as text, with source context when available."""
        file = source_map.get_file(self.file)
        if file is None:
            return f"{self.severity}: {self.message} at {self.primary_span!r}\n"

        start = file.lookup_line_col(self.primary_span.start)
        annotations = [_annotate(file, self.primary_span, self.message)]
        annotations.extend(_annotate(file, label.span, label.message) for label in self.labels)

        width = max(len(str(a.line_number)) for a in annotations)
        pad = " " * (width + 1)
        out = [
            f"{self.severity}: {self.message}",
            f"{pad}--> {file.path}:{start}",
            f"{pad}|",
        ]
        for annotation in annotations:
            out.append(f" {annotation.line_number:>{width}} | {annotation.text}".rstrip())
            marker = " " * annotation.offset + "^" * annotation.width
            if annotation.message:
                marker += f" {annotation.message}"
            out.append(f"{pad}| {marker}")
        if self.help_text is not None or self.note_text is not None:
            out.append(f"{pad}|")
        if self.help_text is not None:
            out.append(f"{pad}= help: {self.help_text}")
        if self.note_text is not None:
            out.append(f"{pad}= note: {self.note_text}")
        return "\n".join(out) + "\n"

    def emit(self, source_map: SourceMap, stream: TextIO) -> None:
        """Write the rendered diagnostic to ``stream``."""
        stream.write(self.render(source_map))


class DiagnosticEngine:
    """Thread-safe collector of diagnostics with error and warning counts."""

    def __init__(self, source_map: SourceMap) -> None:
        self.source_map = source_map
        self._lock = threading.Lock()
        self._diagnostics: list[Diagnostic] = []
        self._errors = 0
        self._warnings = 0

    @property
    def diagnostics(self) -> list[Diagnostic]:
        with self._lock:
            return list(self._diagnostics)

    def emit(self, diagnostic: Diagnostic) -> None:
        with self._lock:
            if diagnostic.severity is Severity.ERROR:
                self._errors += 1
            elif diagnostic.severity is Severity.WARNING:
                self._warnings += 1
            self._diagnostics.append(diagnostic)

    def error(self, message: str, file: FileId, span: Span) -> None:
        self.emit(Diagnostic.error(message, file, span))

    def warning(self, message: str, file: FileId, span: Span) -> None:
        self.emit(Diagnostic.warning(message, file, span))

    def note(self, message: str, file: FileId, span: Span) -> None:
        self.emit(Diagnostic.note(message, file, span))

    def error_count(self) -> int:
        with self._lock:
            return self._errors

    def warning_count(self) -> int:
        with self._lock:
            return self._warnings

    def has_errors(self) -> bool:
        return self.error_count() > 0

    def print_all(self, stream: TextIO | None = None) -> None:
        """Write every collected diagnostic to ``stream`` (stderr by default)."""
        target = sys.stderr if stream is None else stream
        for diagnostic in self.diagnostics:
            diagnostic.emit(self.source_map, target)

    def clear(self) -> None:
        with self._lock:
            self._diagnostics.clear()
            self._errors = 0
            self._warnings = 0
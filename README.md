# covibe

Building blocks for a compiler front end for the CoVibe language. The package
records where each piece of source text came from. It also reports problems
against that text.

## Modules

- `covibe.span` holds byte positions and ranges:
  - `FileId` identifies a file. `FileId.INVALID` is the sentinel value.
  - `BytePos` is a byte offset. It has `advance` and `advance_by_str`, which
    uses the UTF-8 length of the string.
  - `LineCol` is a 0-indexed line and column. It prints 1-indexed, as `line:col`.
  - `Span` is a half-open range `[start, end)` in a file. It offers
    `from_offsets`, `at`, `length`, `is_empty`, `contains`, `overlaps`, `merge`,
    `to`, `starting_at`, `shrink_start`, `shrink_end` and `with_file_id`.
    `merge` raises `ValueError` for spans from different files.
  - `Spanned` pairs a value with its span. `map` transforms the value and keeps
    the span.
- `covibe.source` holds file contents:
  - `SourceFile` stores a file's text and line starts. It recognises `\n`,
    `\r\n` and `\r` as line breaks. Its methods are `line_count`, `line_start`,
    `lookup_line_col`, `source_text` and `line_text`.
  - `SourceMap` is a thread-safe registry. Its methods are `add_file`,
    `get_file`, `file_count`, `file_ids` and `get_file_by_path`.
- `covibe.interner` interns strings:
  - `Interner` maps strings to `Symbol`s and back. Its methods are `intern`,
    `resolve`, `resolve_str` and `intern_batch`. It supports `len()` and `in`.
    Common keywords are interned in advance. `resolve_str` returns `""` for an
    unknown symbol, such as `Symbol.INVALID`.
  - `KnownSymbols.from_interner` looks up the symbols of frequently used
    keywords once.
- `covibe.errors` holds `ParseError`, an exception that carries a message and a
  `Span`.
- `covibe.diagnostic` collects and renders diagnostics:
  - `Severity` has the values `ERROR`, `WARNING`, `NOTE` and `HELP`.
  - `Label` marks an extra source location. It has an optional message and an
    optional colour name. Plain-text rendering ignores the colour.
  - `Diagnostic` is immutable. It is built with `error`, `warning` or `note`.
    Extra context is added with `with_label`, `with_labels`, `with_help` and
    `with_note`. It is turned into text with `render`, or written to a stream
    with `emit`.
  - `DiagnosticEngine` collects diagnostics and counts errors and warnings. Its
    methods are `emit`, `error`, `warning`, `note`, `error_count`,
    `warning_count`, `has_errors`, `print_all` (to stderr by default) and
    `clear`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
import sys

from covibe.diagnostic import Diagnostic, DiagnosticEngine
from covibe.source import SourceMap
from covibe.span import BytePos, Span

sources = SourceMap()
file_id = sources.add_file("example.cvb", "let x = 42;\nlet y = x + 1;")

source = sources.get_file(file_id)
print(source.lookup_line_col(BytePos(16)))   # 2:5

engine = DiagnosticEngine(sources)
span = Span.from_offsets(4, 5).with_file_id(file_id)
engine.emit(
    Diagnostic.error("variable 'x' is already defined", file_id, span)
    .with_help("use a different name or remove the duplicate definition")
)
print(engine.error_count(), engine.has_errors())   # 1 True
engine.print_all(sys.stderr)
```

Interning strings:

```python
from covibe.interner import Interner, KnownSymbols

interner = Interner()
hello = interner.intern("hello")
assert interner.intern("hello") == hello
assert interner.resolve_str(hello) == "hello"

known = KnownSymbols.from_interner(interner)
assert interner.resolve_str(known.kw_fn) == "fn"
```

## What it does not do

The package has no lexer, parser, type checker or code generator. It provides no
command-line tool. It supplies the pieces those stages use:

- spans and source files;
- interned symbols;
- `ParseError`;
- diagnostics.

It cannot read or compile CoVibe programs by itself.
"""String interning: map identifier text to small, cheaply compared symbols."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import ClassVar, Iterable

_U32_MAX = 0xFFFF_FFFF

COMMON_KEYWORDS: tuple[str, ...] = (
    # Keywords
    "fn", "let", "mut", "const", "if", "else", "elif", "for", "while",
    "loop", "break", "continue", "return", "match", "case", "in", "as",
    "type", "struct", "enum", "trait", "impl", "where", "pub", "use",
    "mod", "extern", "unsafe", "async", "await", "spawn", "select",
    "defer", "comptime", "macro", "import", "export",
    # Primitive types
    "int", "i8", "i16", "i32", "i64", "i128",
    "uint", "u8", "u16", "u32", "u64", "u128",
    "float", "f32", "f64", "bool", "char", "str", "string",
    "void", "never",
    # Literals
    "true", "false", "null", "none", "some",
    # Special identifiers
    "self", "Self", "super", "main",
)


@dataclass(frozen=True, order=True)
class Symbol:
    """Identifier of an interned string; compares in constant time."""

    raw: int

    INVALID: ClassVar[Symbol]

    def __repr__(self) -> str:
        return f"Symbol({self.raw})"

    def __str__(self) -> str:
        return f"#{self.raw}"


Symbol.INVALID = Symbol(_U32_MAX)


class Interner:
    """Thread-safe two-way mapping between strings and symbols.

    Common keywords are interned up front.  Interned strings stay valid for
    the lifetime of the interner.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_text: dict[str, Symbol] = {}
        self._texts: list[str] = []
        for keyword in COMMON_KEYWORDS:
            self._intern_fresh(keyword)

    def _intern_fresh(self, text: str) -> Symbol:
        symbol = Symbol(len(self._texts))
        self._texts.append(text)
        self._by_text[text] = symbol
        return symbol

    def intern(self, text: str) -> Symbol:
        """Return the symbol for ``text``, creating one if needed."""
        symbol = self._by_text.get(text)
        if symbol is not None:
            return symbol
        with self._lock:
            symbol = self._by_text.get(text)
            if symbol is not None:
                return symbol
            return self._intern_fresh(text)

    def resolve(self, symbol: Symbol) -> str | None:
        """Return the text of ``symbol``, or None if it is unknown."""
        with self._lock:
            if 0 <= symbol.raw < len(self._texts):
                return self._texts[symbol.raw]
            return None

    def resolve_str(self, symbol: Symbol) -> str:
        """Return the text of ``symbol``, or an empty string if it is unknown."""
        text = self.resolve(symbol)
        return "" if text is None else text

    def intern_batch(self, strings: Iterable[str]) -> None:
        """Intern every string in ``strings``."""
        with self._lock:
            for text in strings:
                if text not in self._by_text:
                    self._intern_fresh(text)

    def __len__(self) -> int:
        with self._lock:
            return len(self._texts)

    def __contains__(self, text: object) -> bool:
        return text in self._by_text


@dataclass(frozen=True)
class KnownSymbols:
    """Symbols of frequently used keywords, resolved once."""

    kw_fn: Symbol
    kw_let: Symbol
    kw_mut: Symbol
    kw_const: Symbol
    kw_if: Symbol
    kw_else: Symbol
    kw_for: Symbol
    kw_while: Symbol
    kw_return: Symbol
    kw_match: Symbol
    kw_struct: Symbol
    kw_enum: Symbol
    kw_trait: Symbol
    kw_impl: Symbol
    kw_true: Symbol
    kw_false: Symbol
    kw_self: Symbol
    kw_Self: Symbol

    @classmethod
    def from_interner(cls, interner: Interner) -> KnownSymbols:
        return cls(
            kw_fn=interner.intern("fn"),
            kw_let=interner.intern("let"),
            kw_mut=interner.intern("mut"),
            kw_const=interner.intern("const"),
            kw_if=interner.intern("if"),
            kw_else=interner.intern("else"),
            kw_for=interner.intern("for"),
            kw_while=interner.intern("while"),
            kw_return=interner.intern("return"),
            kw_match=interner.intern("match"),
            kw_struct=interner.intern("struct"),
            kw_enum=interner.intern("enum"),
            kw_trait=interner.intern("trait"),
            kw_impl=interner.intern("impl"),
            kw_true=interner.intern("true"),
            kw_false=interner.intern("false"),
            kw_self=interner.intern("self"),
            kw_Self=interner.intern("Self"),
        )
"""Console symbols with emoji/ASCII fallbacks.

Usage:
    symbols = SymbolsFormatter()
    print(symbols.Sparkles)  # "✨" or "*"
"""

import platform
import sys
from dataclasses import dataclass
from functools import cached_property

EMOJI_ENCODINGS = ("utf-8", "utf8", "utf-16", "utf16")


@dataclass(frozen=True)
class Symbol:
    """A symbol with emoji and ASCII fallback."""

    emoji: str
    ascii: str


class Symbols:
    """Every symbol perfume prints, as class attributes."""

    Cross = Symbol("❌", "x")
    Warning = Symbol("⚠️", "!")

    # listings and saved files
    Book = Symbol("📚", ">")
    Save = Symbol("💾", ">")

    # ledger lookups: existing offset, new offset
    Recycle = Symbol("♻️", "=")
    Sparkles = Symbol("✨", "*")

    Arrow = Symbol("→", "->")


class SymbolsFormatter:
    """Resolves ``Symbols`` attributes to emoji or ASCII text.

    Emoji is disabled when no_color=True, on Windows consoles, and when
    stdout does not use a Unicode encoding.
    """

    def __init__(self, no_color: bool = False):
        self._no_color = no_color

    @cached_property
    def supports_emoji(self) -> bool:
        if self._no_color or platform.system() == "Windows":
            return False
        encoding = getattr(sys.stdout, "encoding", None)
        if not encoding:
            return False
        return any(enc in encoding.lower() for enc in EMOJI_ENCODINGS)

    def get(self, symbol: Symbol) -> str:
        """Resolve a symbol to emoji or ASCII based on support."""
        return symbol.emoji if self.supports_emoji else symbol.ascii

    def __getattr__(self, name: str) -> str:
        symbol = getattr(Symbols, name, None)
        if not isinstance(symbol, Symbol):
            raise AttributeError(f"Unknown symbol '{name}'")
        return self.get(symbol)

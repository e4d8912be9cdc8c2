"""Formatters package for perfume output formatting.

The main entry point is `OutputFormatter` which creates and manages all sub-formatters.

Usage:
    output = OutputFormatter(no_color=False)
    output.print(output.identity.format_name(identity.friendly_name))
"""

from .output import OutputFormatter
from .symbols import Symbols, SymbolsFormatter
from .identity import IdentityFormatter

__all__ = [
    "OutputFormatter",
    "Symbols",
    "SymbolsFormatter",
    "IdentityFormatter",
]

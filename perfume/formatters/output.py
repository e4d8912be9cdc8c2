"""Output formatter - the main entry point for all formatting operations.

The OutputFormatter creates a Rich console with no_color support, and
sub-formatters return Rich Text objects that are printed through it.

Usage:
    output = OutputFormatter(no_color=False)
    output.print(output.identity.format_line(identifier, identity))
"""

from typing import Optional, Union

from rich.console import Console
from rich.text import Text

from .identity import IdentityFormatter
from .symbols import SymbolsFormatter


class OutputFormatter:
    """Central formatter that manages the Rich console and sub-formatters.

    Attributes:
        symbols: SymbolsFormatter for emoji/ASCII symbols
        identity: IdentityFormatter for friendly names and storage records
    """

    def __init__(self, no_color: bool, console: Optional[Console] = None):
        """Initialize the output formatter with all sub-formatters.

        Args:
            no_color: If True, disable all colors and styling in output
            console: Console to print through (a new one is created if omitted)
        """
        self._console = console or Console(
            no_color=no_color,
            force_terminal=None,
            highlight=False,
        )

        # symbols first as others depend on it
        self._symbols = SymbolsFormatter(no_color=no_color)
        self._identity = IdentityFormatter(symbols=self._symbols)

    @property
    def symbols(self) -> SymbolsFormatter:
        """Get the symbols formatter for emoji/ASCII symbol access."""
        return self._symbols

    @property
    def identity(self) -> IdentityFormatter:
        """Get the identity formatter."""
        return self._identity

    def print(self, message: Union[str, Text]) -> None:
        """Print message using Rich console.

        Args:
            message: Message to print (string with Rich markup or Rich Text)
        """
        self._console.print(message, highlight=False)

    def print_raw(self, message: str) -> None:
        """Print message without any Rich processing.

        Use for machine-readable output such as JSON.
        """
        self._console.print(message, markup=False, highlight=False, soft_wrap=True)

    def print_warning(self, message: str) -> None:
        """Print a warning message."""
        line = Text()
        line.append(f"{self._symbols.Warning} ", style="yellow")
        line.append("Warning: ", style="bold yellow")
        line.append(message)
        self._console.print(line, highlight=False)

    def print_error(self, label: str, message: str) -> None:
        """Print an error message with a bold label, e.g. "Storage error:"."""
        line = Text()
        line.append(f"{self._symbols.Cross} ")
        line.append(f"{label}: ", style="bold red")
        line.append(message)
        self._console.print(line, highlight=False)

"""Raw allocation logger for simple text-based reporting.

Used in verbose mode. Prints each offset lookup to the console using
OutputFormatter.
"""

from rich.markup import escape

from ..formatters import OutputFormatter
from .allocation_logger import AllocationLogger


class AllocationLoggerRaw(AllocationLogger):
    """Prints allocation events through OutputFormatter.

    Rich console handles no_color mode automatically.
    """

    def __init__(self, output: OutputFormatter):
        self._output = output

    def mark_hit(self, blob_key: str, offset: int) -> None:
        sym = self._output.symbols
        self._output.print(
            f"{sym.Recycle} [dim]found:[/dim] [bold cyan]{blob_key}[/bold cyan] "
            f"[dim]offset[/dim] {offset}"
        )

    def mark_allocated(self, blob_key: str, offset: int, line_count: int) -> None:
        sym = self._output.symbols
        self._output.print(
            f"{sym.Sparkles} [dim]allocated:[/dim] [bold cyan]{blob_key}[/bold cyan] "
            f"[dim]offset[/dim] {offset} [dim]({line_count} lines)[/dim]"
        )

    def mark_failed(self, blob_key: str, error: Exception) -> None:
        sym = self._output.symbols
        self._output.print(
            f"{sym.Cross} [bold red]failed:[/bold red] [bold cyan]{blob_key}[/bold cyan] "
            f"[dim]({escape(str(error))})[/dim]"
        )

"""Identity formatting utilities with Rich styling support.

All formatting methods return Rich Text objects; the Rich console that
prints them handles no_color mode.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.text import Text

from .symbols import SymbolsFormatter

if TYPE_CHECKING:
    from ..identity.models import Identity

SHORT_DIGEST_LENGTH = 8


class IdentityFormatter:
    """Formats identities and storage records for display."""

    # word styles in friendly-name order: prefix, color, animal
    WORD_STYLES = ("bold magenta", "bold yellow", "bold green")

    def __init__(self, symbols: SymbolsFormatter):
        self._symbols = symbols

    def format_name(self, friendly_name: str) -> Text:
        """Style each word of a friendly name separately."""
        text = Text()
        for i, word in enumerate(friendly_name.split("-")):
            if i:
                text.append("-", style="dim")
            text.append(word, style=self.WORD_STYLES[min(i, len(self.WORD_STYLES) - 1)])
        return text

    def format_storage(self, identity: Identity) -> Text:
        """Format the storage record as ``domain/key:digest-prefix...``."""
        storage = identity.storage
        text = Text()
        text.append(identity.domain, style="cyan")
        text.append("/", style="dim")
        text.append(storage.key.value, style="bold cyan")
        text.append(":", style="dim")
        text.append(storage.digest.value[:SHORT_DIGEST_LENGTH], style="dim")
        text.append("...", style="dim")
        return text

    def format_line(self, identifier: str, identity: Identity, show_storage: bool = False) -> Text:
        """Format ``identifier -> friendly-name`` with optional storage details."""
        line = Text()
        line.append(identifier)
        line.append(f" {self._symbols.Arrow} ", style="dim")
        line.append_text(self.format_name(identity.friendly_name))
        if show_storage:
            line.append(" (", style="dim")
            line.append_text(self.format_storage(identity))
            line.append(")", style="dim")
        return line

"""Helpers for reading word list files (one word per line)."""

from pathlib import Path


def read_words(path: Path) -> list[str]:
    """Return the non-empty, stripped lines of a word list file."""
    with Path(path).open(encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip()]

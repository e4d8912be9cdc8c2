"""Project root discovery."""

from pathlib import Path
from typing import Optional

PROJECT_MARKERS = (".perfume", ".git")


def find_project_root(start: Optional[Path] = None) -> Path:
    """Walk up from ``start`` to the nearest directory holding a project marker.

    Falls back to ``start`` (the current directory by default) when no
    marker is found.
    """
    start = (start or Path.cwd()).resolve()
    for candidate in (start, *start.parents):
        if any((candidate / marker).exists() for marker in PROJECT_MARKERS):
            return candidate
    return start

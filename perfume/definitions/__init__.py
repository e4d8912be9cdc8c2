"""Population definitions loaded from markdown files."""

from .models import ParsedDocument, PopulationDefinition, SourceLocation
from .loader import build_bridge, load_population, resolve_secret

__all__ = [
    "ParsedDocument",
    "PopulationDefinition",
    "SourceLocation",
    "build_bridge",
    "load_population",
    "resolve_secret",
]

"""Model classes for population definition files."""

from dataclasses import dataclass
from typing import Optional

ENV_PREFIX = "env."


@dataclass(frozen=True)
class SourceLocation:
    """Source location in a markdown file."""

    file_path: str
    line_number: int
    section_name: str

    def __str__(self) -> str:
        return f"{self.file_path}:{self.line_number} (in '{self.section_name}')"


@dataclass(frozen=True)
class PopulationDefinition:
    """Population as declared in a definition file."""

    name: str
    """Population name, also used as the storage domain"""

    secret: str
    """Literal 32-character secret, or ``env.NAME`` to read it from the environment"""

    ingredients: str
    """Path of the compiled ingredients JSON, relative to the project root"""

    store: Optional[str]
    """Connector: ``memory:``, ``dir:<path>`` or an http(s) base URL"""

    location: SourceLocation

    @property
    def secret_env_var(self) -> Optional[str]:
        """Name of the environment variable holding the secret, if any."""
        if self.secret.startswith(ENV_PREFIX):
            return self.secret[len(ENV_PREFIX) :]
        return None


@dataclass(frozen=True)
class ParsedDocument:
    """All population definitions found in a set of files."""

    populations: dict[str, PopulationDefinition]

    def get_population(self, name: str) -> PopulationDefinition:
        """Get a population definition by name.

        Raises:
            ValueError: If no population has that name
        """
        if name not in self.populations:
            available = ", ".join(sorted(self.populations)) or "none"
            raise ValueError(f"Population '{name}' not found (available: {available})")
        return self.populations[name]

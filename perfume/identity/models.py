"""Identity model."""

from dataclasses import dataclass, field

from .storage import Storage


@dataclass(frozen=True)
class Identity:
    """A distinct value generated from a population.

    Two identities are equal when domain and friendly name match; the
    storage record only exists to keep the mapping stable.
    """

    domain: str
    """Shared by all members of a population"""

    friendly_name: str
    """Unique to this member"""

    storage: Storage = field(compare=False)
    """Needed to ensure that an identifier always maps to the same name"""

    def __str__(self) -> str:
        return f"{self.domain}:{self.friendly_name}"

"""Populations and the word tables used to render friendly names."""

import json
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Sequence

import blake3

from .errors import ConfigurationError, PopulationExhausted
from .ledger import MAX_OFFSET, OFFSET_WIDTH
from .models import Identity
from .storage import Storage, StorageState
from .types import STORAGE_KEY_COUNT, STORAGE_KEY_LENGTH, StorageKey

SECRET_LENGTH = 32
NAME_SEPARATOR = "-"


def all_storage_keys() -> list[str]:
    """Return every possible storage key in ascending order."""
    return [f"{n:0{STORAGE_KEY_LENGTH}x}" for n in range(STORAGE_KEY_COUNT)]


@dataclass(frozen=True, eq=False)
class Ingredients:
    """Word tables compiled for one population size.

    Validated on construction: the prefix table must cover every storage
    key, and the color/animal pairs must cover every offset one storage blob
    can hold at the given capacity.
    """

    capacity: int
    """Total number of identities the population was provisioned for"""

    prefixes: Mapping[str, str]
    """Storage key (3 hex characters) -> first word"""

    colors: Sequence[str]
    animals: Sequence[str]

    def __post_init__(self):
        object.__setattr__(self, "prefixes", MappingProxyType(dict(self.prefixes)))
        object.__setattr__(self, "colors", tuple(self.colors))
        object.__setattr__(self, "animals", tuple(self.animals))

        if self.capacity <= 0:
            raise ConfigurationError(f"Capacity must be positive, got {self.capacity}")

        missing = [key for key in all_storage_keys() if key not in self.prefixes]
        if missing:
            raise ConfigurationError(
                f"Prefix table is missing {len(missing)} of {STORAGE_KEY_COUNT} keys "
                f"(first missing: '{missing[0]}')"
            )

        if not self.colors or not self.animals:
            raise ConfigurationError("Colors and animals must not be empty")

        for kind, words in (
            ("prefix", self.prefixes.values()),
            ("color", self.colors),
            ("animal", self.animals),
        ):
            for word in words:
                if not isinstance(word, str) or not word or NAME_SEPARATOR in word:
                    raise ConfigurationError(
                        f"Invalid {kind} word {word!r}: expected a non-empty string "
                        f"without '{NAME_SEPARATOR}'"
                    )

        if self.combinations < self.offsets_per_key:
            raise ConfigurationError(
                f"{len(self.colors)} colors x {len(self.animals)} animals give "
                f"{self.combinations} combinations, but {self.offsets_per_key} are needed"
            )

        if self.offsets_per_key - 1 > MAX_OFFSET:
            raise ConfigurationError(
                f"Capacity {self.capacity} needs offsets up to {self.offsets_per_key - 1}, "
                f"which do not fit the {OFFSET_WIDTH}-digit ledger field"
            )

    @property
    def offsets_per_key(self) -> int:
        """Number of identities a single storage blob must be able to name."""
        return -(-self.capacity // STORAGE_KEY_COUNT)

    @property
    def combinations(self) -> int:
        return len(self.colors) * len(self.animals)

    def prefix_for(self, key: StorageKey) -> str:
        """Return the first word for a storage key.

        Raises:
            ConfigurationError: If the table has no entry for the key
        """
        try:
            return self.prefixes[key.value]
        except KeyError:
            raise ConfigurationError(
                f"Prefix table has no entry for storage key '{key.value}'"
            ) from None

    def words_for_offset(self, offset: int) -> tuple[str, str]:
        """Map an offset to its (color, animal) pair.

        The mapping is ``divmod(offset, len(animals))``; it must never change
        once names have been issued.

        Raises:
            PopulationExhausted: If the offset has no pair
        """
        if offset < 0 or offset >= self.combinations:
            raise PopulationExhausted(
                f"Offset {offset} exceeds the {self.combinations} available color/animal pairs"
            )
        color_index, animal_index = divmod(offset, len(self.animals))
        return self.colors[color_index], self.animals[animal_index]

    def to_dict(self) -> dict[str, Any]:
        return {
            "capacity": self.capacity,
            "prefixes": dict(self.prefixes),
            "colors": list(self.colors),
            "animals": list(self.animals),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Ingredients":
        """Build ingredients from their JSON representation.

        Raises:
            ConfigurationError: If fields are missing or have the wrong type
        """
        try:
            capacity = data["capacity"]
            prefixes = data["prefixes"]
            colors = data["colors"]
            animals = data["animals"]
        except KeyError as e:
            raise ConfigurationError(f"Ingredients are missing field {e}") from None

        if not isinstance(capacity, int) or not isinstance(prefixes, dict):
            raise ConfigurationError("Ingredients 'capacity' must be int and 'prefixes' an object")
        if not isinstance(colors, list) or not isinstance(animals, list):
            raise ConfigurationError("Ingredients 'colors' and 'animals' must be lists")

        return cls(capacity=capacity, prefixes=prefixes, colors=colors, animals=animals)

    @classmethod
    def load(cls, path: Path) -> "Ingredients":
        """Load ingredients written by ``perfume.codegen.ingredients``."""
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigurationError(f"Cannot read ingredients file {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"{path}: invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigurationError(f"{path}: expected a JSON object")
        return cls.from_dict(data)


@dataclass(frozen=True)
class Population:
    """A namespace of identities sharing a secret and word tables."""

    domain: str
    """Namespaces storage blobs; populations never share ledgers"""

    secret: bytes
    """32-byte key for the keyed hash"""

    ingredients: Ingredients

    def __post_init__(self):
        if not self.domain or "/" in self.domain:
            raise ConfigurationError(
                f"Domain must be non-empty and contain no '/', got '{self.domain}'"
            )
        if not isinstance(self.secret, bytes) or len(self.secret) != SECRET_LENGTH:
            raise ConfigurationError(f"Secret must be exactly {SECRET_LENGTH} bytes")

    def storage_for(self, identifier: str) -> Storage:
        """Hash ``identifier`` under the population secret."""
        hasher = blake3.blake3(identifier.encode("utf-8"), key=self.secret)
        return Storage.from_hex(hasher.hexdigest())

    def identity(self, identifier: str, store: StorageState) -> Identity:
        """Return the identity of ``identifier``, allocating an offset if needed."""
        storage = self.storage_for(identifier)
        prefix = self.ingredients.prefix_for(storage.key)
        offset = store.digest_offset(self.domain, storage)
        return self._compose(storage, prefix, offset)

    async def identity_async(self, identifier: str, store: StorageState) -> Identity:
        """The async version of ``identity``."""
        storage = self.storage_for(identifier)
        prefix = self.ingredients.prefix_for(storage.key)
        offset = await store.digest_offset_async(self.domain, storage)
        return self._compose(storage, prefix, offset)

    def _compose(self, storage: Storage, prefix: str, offset: int) -> Identity:
        color, animal = self.ingredients.words_for_offset(offset)
        return Identity(
            domain=self.domain,
            friendly_name=NAME_SEPARATOR.join((prefix, color, animal)),
            storage=storage,
        )

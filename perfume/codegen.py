"""Compile word lists into ingredients for a Population."""

import json
from enum import Enum
from pathlib import Path

from .identity.errors import ConfigurationError
from .identity.population import Ingredients, all_storage_keys
from .identity.types import STORAGE_KEY_COUNT
from .utils.shuffle import randomized
from .utils.words import read_words

# hardcoded to prevent accidental reshuffling of issued prefixes
PREFIX_SEED = 656437432927126634


class CodegenError(ConfigurationError):
    """Raised when word lists cannot produce the requested population."""


class PopulationSize(Enum):
    """The number of possible identities, chosen only once.

    Fixing the size up front ensures that every color is used in equal
    amount across storage blobs.
    """

    BHUTAN = 727_145
    """Up to 178 identities per storage blob"""

    BELGIUM = 11_742_796
    """Up to 2867 identities (191KB) per storage blob"""

    BRAZIL = 203_080_756
    """Up to 49581 identities (3.2MB) per storage blob"""

    @classmethod
    def from_string(cls, size_str: str) -> "PopulationSize":
        """Parse a population size from its (case-insensitive) name.

        Raises:
            ValueError: If the name is not a known size
        """
        normalized = size_str.upper().strip()
        try:
            return cls[normalized]
        except KeyError:
            valid_sizes = ", ".join(s.name.lower() for s in cls)
            raise ValueError(
                f"Invalid population size '{size_str}'. Valid sizes: {valid_sizes}"
            ) from None

    @property
    def per_key(self) -> int:
        """Number of (color, animal) pairs needed within one storage blob."""
        return -(-self.value // STORAGE_KEY_COUNT)


def ingredients(
    size: PopulationSize,
    prefixes: Path,
    colors: Path,
    animals: Path,
    output: Path,
) -> Ingredients:
    """Compile words from ``prefixes``, ``colors`` and ``animals`` into ``output``.

    Every storage key receives one prefix word; the first STORAGE_KEY_COUNT
    prefix words are shuffled with a fixed seed before assignment.

    Args:
        size: Population size to provision for
        prefixes: Word list with at least one word per storage key
        colors: Color word list
        animals: Animal word list
        output: Destination JSON file

    Returns:
        The compiled (and validated) ingredients

    Raises:
        CodegenError: If any input file has too few (or duplicate) words
    """
    prefixes, colors, animals = Path(prefixes), Path(colors), Path(animals)

    prefix_words = read_words(prefixes)
    if len(prefix_words) < STORAGE_KEY_COUNT:
        raise CodegenError(
            f"insufficient seed words. {prefixes} ({len(prefix_words)} words). "
            f"{len(prefix_words)} words available, but {STORAGE_KEY_COUNT} needed"
        )

    color_words = read_words(colors)
    animal_words = read_words(animals)
    available = len(color_words) * len(animal_words)
    if size.per_key > available:
        raise CodegenError(
            f"insufficient seed words. {colors} ({len(color_words)} words), "
            f"{animals} ({len(animal_words)} words). "
            f"{available} combinations available, but {size.per_key} needed"
        )

    for path, words in ((colors, color_words), (animals, animal_words)):
        if len(set(words)) != len(words):
            raise CodegenError(f"{path} contains duplicate words")

    hex_keys = all_storage_keys()
    prefix_words = randomized(prefix_words[: len(hex_keys)], PREFIX_SEED)
    if len(prefix_words) != len(hex_keys):
        raise CodegenError(
            f"{prefixes}: the first {len(hex_keys)} words must be unique"
        )

    table = Ingredients(
        capacity=size.value,
        prefixes=dict(zip(hex_keys, prefix_words)),
        colors=color_words,
        animals=animal_words,
    )

    output = Path(output)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(table.to_dict(), indent=1), encoding="utf-8")

    return table

"""Pytest configuration and shared fixtures."""

import json
from pathlib import Path

import pytest

from perfume.bridges.memory_bridge import MemoryBridge
from perfume.identity.population import Ingredients, Population, all_storage_keys
from perfume.identity.storage import RemoteStore, Storage
from perfume.identity.types import StorageDigest, StorageKey

SECRET = b"0123456789abcdef0123456789abcdef"
COLORS = ["red", "blue", "green"]
ANIMALS = ["cat", "dog"]
# six offsets per storage key, exactly the number of color/animal pairs
CAPACITY = 4096 * 6


def make_storage(key: str, digest_char: str) -> Storage:
    """Build a Storage record with a digest made of one repeated character."""
    return Storage(key=StorageKey(key), digest=StorageDigest(digest_char * 61))


@pytest.fixture
def prefixes() -> dict[str, str]:
    """Prefix table with one word per storage key, e.g. '3fa' -> 'p3fa'."""
    return {key: f"p{key}" for key in all_storage_keys()}


@pytest.fixture
def ingredients(prefixes: dict[str, str]) -> Ingredients:
    return Ingredients(capacity=CAPACITY, prefixes=prefixes, colors=COLORS, animals=ANIMALS)


@pytest.fixture
def population(ingredients: Ingredients) -> Population:
    return Population(domain="bt", secret=SECRET, ingredients=ingredients)


@pytest.fixture
def bridge() -> MemoryBridge:
    return MemoryBridge()


@pytest.fixture
def store(bridge: MemoryBridge) -> RemoteStore:
    return RemoteStore(bridge)


@pytest.fixture
def ingredients_file(tmp_path: Path, ingredients: Ingredients) -> Path:
    """Ingredients written to data/ingredients.json under tmp_path."""
    path = tmp_path / "data" / "ingredients.json"
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps(ingredients.to_dict()), encoding="utf-8")
    return path

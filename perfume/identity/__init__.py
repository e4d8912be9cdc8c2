"""Persistent friendly-name generator."""

from .errors import ConfigurationError, PopulationExhausted, StorageFailure
from .types import STORAGE_DIGEST_LENGTH, STORAGE_KEY_LENGTH, StorageDigest, StorageKey
from .ledger import Ledger, LedgerLine
from .storage import RemoteStore, Storage, StorageState
from .models import Identity
from .population import Ingredients, Population

__all__ = [
    "ConfigurationError",
    "PopulationExhausted",
    "StorageFailure",
    "STORAGE_DIGEST_LENGTH",
    "STORAGE_KEY_LENGTH",
    "StorageDigest",
    "StorageKey",
    "Ledger",
    "LedgerLine",
    "RemoteStore",
    "Storage",
    "StorageState",
    "Identity",
    "Ingredients",
    "Population",
]

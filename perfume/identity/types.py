"""Widths and hex value types shared by the identity modules."""

from ..utils.hex_string import hex_string_type

# first 3 of the 64 hex characters of a keyed hash select a storage blob
STORAGE_KEY_LENGTH = 3
STORAGE_DIGEST_LENGTH = 61
HASH_HEX_LENGTH = STORAGE_KEY_LENGTH + STORAGE_DIGEST_LENGTH

# number of distinct storage blobs per domain
STORAGE_KEY_COUNT = 16**STORAGE_KEY_LENGTH


class StorageKey(hex_string_type(STORAGE_KEY_LENGTH)):
    """Selects a storage blob and the first word of a friendly name."""

    __slots__ = ()


class StorageDigest(hex_string_type(STORAGE_DIGEST_LENGTH)):
    """Identifies an identity within its storage blob."""

    __slots__ = ()

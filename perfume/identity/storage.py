"""Persistent digest offsets backed by whole-blob storage."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Union

from ..bridges.bridge import ConnectionBridge
from ..utils.hex_string import InvalidEncoding
from .allocation_logger import AllocationLogger, NullAllocationLogger
from .errors import StorageFailure
from .ledger import Ledger
from .types import HASH_HEX_LENGTH, STORAGE_KEY_LENGTH, StorageDigest, StorageKey


@dataclass(frozen=True)
class Storage:
    """Persisted identity data needed to look up a digest offset."""

    key: StorageKey
    """Selects the storage blob and the first word of a friendly name"""

    digest: StorageDigest
    """Per-identity hash, mapped to the last two words of a friendly name"""

    @classmethod
    def from_hex(cls, raw: Union[bytes, str]) -> "Storage":
        """Split a full hex-encoded hash into key and digest.

        Raises:
            InvalidEncoding: If ``raw`` is not HASH_HEX_LENGTH hex characters
        """
        if len(raw) != HASH_HEX_LENGTH:
            raise InvalidEncoding(
                f"Expected {HASH_HEX_LENGTH} hex characters, got {len(raw)}"
            )
        return cls(
            key=StorageKey(raw[:STORAGE_KEY_LENGTH]),
            digest=StorageDigest(raw[STORAGE_KEY_LENGTH:]),
        )

    def blob_key(self, domain: str) -> str:
        """Return the connector key of the blob holding this digest."""
        return f"{domain}/{self.key}"


class StorageState(ABC):
    """Persistence scheme for Storage objects.

    Defines a chronological ordering of Storage objects based on when they
    were first stored: every digest receives a persisted offset, and for each
    domain and key the returned offsets form the sequence 0, 1, 2, ...
    """

    @abstractmethod
    def digest_offset(self, domain: str, storage: Storage) -> int:
        """Return the persisted offset of ``storage``, allocating one if needed."""
        pass

    @abstractmethod
    async def digest_offset_async(self, domain: str, storage: Storage) -> int:
        """The async version of ``digest_offset``."""
        pass


class RemoteStore(StorageState):
    """Implements StorageState with binary search over sorted ledger blobs.

    Each blob ``<domain>/<key>`` is read whole, searched, and, when the
    digest is new, written back whole with one more line. There is no
    locking: two clients allocating new digests under the same key at the
    same time can both read the same ledger and the later write wins.
    """

    def __init__(self, bridge: ConnectionBridge, logger: Optional[AllocationLogger] = None):
        self.bridge = bridge
        self.logger = logger or NullAllocationLogger()

    def digest_offset(self, domain: str, storage: Storage) -> int:
        blob_key = storage.blob_key(domain)
        try:
            stored = self.bridge.get(blob_key)
        except StorageFailure as e:
            self.logger.mark_failed(blob_key, e)
            raise

        offset, update = self._resolve(blob_key, stored, storage.digest.value)
        if update is None:
            return offset

        try:
            self.bridge.put(blob_key, update)
        except StorageFailure as e:
            self.logger.mark_failed(blob_key, e)
            raise
        self._report_allocated(blob_key, offset, update)
        return offset

    async def digest_offset_async(self, domain: str, storage: Storage) -> int:
        blob_key = storage.blob_key(domain)
        try:
            stored = await self.bridge.get_async(blob_key)
        except StorageFailure as e:
            self.logger.mark_failed(blob_key, e)
            raise

        offset, update = self._resolve(blob_key, stored, storage.digest.value)
        if update is None:
            return offset

        try:
            await self.bridge.put_async(blob_key, update)
        except StorageFailure as e:
            self.logger.mark_failed(blob_key, e)
            raise
        self._report_allocated(blob_key, offset, update)
        return offset

    def _resolve(
        self, blob_key: str, stored: Optional[bytes], digest: str
    ) -> tuple[int, Optional[bytes]]:
        """Find or allocate the offset of ``digest`` within a fetched blob.

        Returns:
            Tuple of (offset, blob to write back); the blob is None when the
            digest was already stored.
        """
        ledger = Ledger.from_blob(stored)

        found = ledger.find(digest)
        if found is not None:
            self.logger.mark_hit(blob_key, found)
            return found, None

        offset = ledger.insert(digest)
        return offset, ledger.to_blob()

    def _report_allocated(self, blob_key: str, offset: int, update: bytes) -> None:
        self.logger.mark_allocated(blob_key, offset, update.count(b"\n"))

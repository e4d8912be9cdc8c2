"""In-process connection bridge backed by a dictionary."""

import threading
from typing import Optional

from .bridge import ConnectionBridge


class MemoryBridge(ConnectionBridge):
    """Keeps blobs in memory.

    Each call is atomic on its own; a get/put cycle performed by a caller is
    not, exactly like a remote store without conditional writes.
    """

    def __init__(self, resources: Optional[dict[str, bytes]] = None):
        self._resources: dict[str, bytes] = dict(resources or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[bytes]:
        with self._lock:
            return self._resources.get(key)

    def put(self, key: str, body: bytes) -> None:
        with self._lock:
            self._resources[key] = bytes(body)

    async def get_async(self, key: str) -> Optional[bytes]:
        return self.get(key)

    async def put_async(self, key: str, body: bytes) -> None:
        self.put(key, body)

    def keys(self) -> list[str]:
        """Return stored keys in sorted order."""
        with self._lock:
            return sorted(self._resources)

"""Connection bridge abstraction for fetching and storing ledger blobs."""

import asyncio
from abc import ABC
from typing import Optional


class ConnectionBridge(ABC):
    """Whole-blob GET/PUT access to a key/value store.

    Subclasses implement at least one pair of methods: ``get`` + ``put`` or
    ``get_async`` + ``put_async``. The other pair is derived: blocking calls
    run the coroutine to completion with ``asyncio.run`` (so they must not be
    used from inside a running event loop), and coroutines run the blocking
    call in a worker thread.

    Contract for every implementation:
        - ``get`` returns None when no blob is stored under the key; that is
          not an error.
        - ``put`` replaces the whole blob.
        - A ``put`` followed by a ``get`` of the same key returns the written
          bytes exactly.
        - Transport failures are raised as ``StorageFailure``.
    """

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        has_blocking = cls._overrides("get") and cls._overrides("put")
        has_async = cls._overrides("get_async") and cls._overrides("put_async")
        if not (has_blocking or has_async):
            raise TypeError(
                f"{cls.__name__} must implement get/put or get_async/put_async"
            )

    @classmethod
    def _overrides(cls, name: str) -> bool:
        return getattr(cls, name) is not getattr(ConnectionBridge, name)

    def get(self, key: str) -> Optional[bytes]:
        """Fetch the blob stored under ``key``."""
        return asyncio.run(self.get_async(key))

    def put(self, key: str, body: bytes) -> None:
        """Store ``body`` under ``key``, replacing any previous blob."""
        asyncio.run(self.put_async(key, body))

    async def get_async(self, key: str) -> Optional[bytes]:
        """The async version of ``get``."""
        return await asyncio.to_thread(self.get, key)

    async def put_async(self, key: str, body: bytes) -> None:
        """The async version of ``put``."""
        await asyncio.to_thread(self.put, key, body)

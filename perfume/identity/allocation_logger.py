"""Allocation logger base class for offset lookup reporting.

Provides the abstract interface for reporting what an offset lookup did.
See allocation_logger_raw.py for the console implementation.
"""

from abc import ABC, abstractmethod


class AllocationLogger(ABC):
    """Abstract base class for offset allocation logging.

    Implementations decide how (and whether) events are displayed.
    """

    @abstractmethod
    def mark_hit(self, blob_key: str, offset: int) -> None:
        """Report that a digest was already stored.

        Args:
            blob_key: Storage key of the blob, e.g. "bt/3fa"
            offset: The stored offset
        """
        pass

    @abstractmethod
    def mark_allocated(self, blob_key: str, offset: int, line_count: int) -> None:
        """Report that a new offset was written.

        Args:
            blob_key: Storage key of the blob
            offset: The newly allocated offset
            line_count: Number of lines in the blob after the write
        """
        pass

    @abstractmethod
    def mark_failed(self, blob_key: str, error: Exception) -> None:
        """Report that fetching or storing the blob failed.

        Args:
            blob_key: Storage key of the blob
            error: The error that will be raised to the caller
        """
        pass


class NullAllocationLogger(AllocationLogger):
    """Discards every event."""

    def mark_hit(self, blob_key: str, offset: int) -> None:
        pass

    def mark_allocated(self, blob_key: str, offset: int, line_count: int) -> None:
        pass

    def mark_failed(self, blob_key: str, error: Exception) -> None:
        pass

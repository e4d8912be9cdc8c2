"""Connection bridge storing one file per key under a root directory."""

import os
import tempfile
from pathlib import Path, PurePosixPath
from typing import Optional

from ..identity.errors import StorageFailure
from .bridge import ConnectionBridge


class DirectoryBridge(ConnectionBridge):
    """Stores blob ``domain/key`` as the file ``<root>/domain/key``.

    Writes go to a temporary file in the target directory which then
    replaces the blob, so readers never observe a half-written ledger.
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    def _path_for(self, key: str) -> Path:
        parts = PurePosixPath(key).parts
        if not parts or key.startswith("/") or any(p in ("..", ".") for p in parts):
            raise StorageFailure(f"Invalid storage key '{key}'")
        return self.root.joinpath(*parts)

    def get(self, key: str) -> Optional[bytes]:
        path = self._path_for(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageFailure(f"Failed to read {path}: {e}") from e

    def put(self, key: str, body: bytes) -> None:
        path = self._path_for(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(body)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageFailure(f"Failed to write {path}: {e}") from e

"""Filesystem access for certificate artifacts and CA tier state."""

import fcntl
import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from .errors import FileSystemError
from .logging_config import LOGGER
from .models import TierState

PRIVATE_KEY_MODE = 0o400


class FileSystemStore:
    """Reads and writes artifacts on the local filesystem.

    OSError is re-raised as FileSystemError so callers deal with a single
    error hierarchy. Components take the store as a constructor argument,
    which lets tests swap in an in-memory double.
    """

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def mkdir(self, path: Path) -> None:
        """Create ``path`` and any missing parents."""
        if path.is_dir():
            return
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileSystemError(f"failed to create directory {path}: {e}") from e
        LOGGER.info("Directory created: %s", path)

    def read_bytes(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as e:
            raise FileSystemError(f"failed to read {path}: {e}") from e

    def write_bytes(self, path: Path, data: bytes) -> None:
        try:
            path.write_bytes(data)
        except OSError as e:
            raise FileSystemError(f"failed to write {path}: {e}") from e

    def write_private_key(self, path: Path, data: bytes) -> None:
        """Write a PEM private key readable only by its owner.

        An existing key is unlinked first, its read-only mode would
        otherwise block the overwrite.
        """
        try:
            path.unlink(missing_ok=True)
            path.write_bytes(data)
            os.chmod(path, PRIVATE_KEY_MODE)
        except OSError as e:
            raise FileSystemError(f"failed to write private key {path}: {e}") from e

    @contextmanager
    def lock(self, path: Path) -> Iterator[None]:
        """Hold an exclusive advisory lock on ``path`` for the block."""
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            handle = path.open("a")
        except OSError as e:
            raise FileSystemError(f"failed to open lock file {path}: {e}") from e
        with handle:
            fcntl.flock(handle, fcntl.LOCK_EX)
            try:
                yield
            finally:
                fcntl.flock(handle, fcntl.LOCK_UN)


def tier_state(store: FileSystemStore, key_path: Path, cert_path: Path) -> TierState:
    """PRESENT only when both the key and the certificate exist."""
    if store.exists(key_path) and store.exists(cert_path):
        return TierState.PRESENT
    return TierState.MISSING

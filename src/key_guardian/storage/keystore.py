
from __future__ import annotations

import struct
from typing import BinaryIO

import structlog

from ..crypto.rng import RandomSource
from ..utils.errors import (
    ConfigurationError,
    KeyEncryptionKeyCreateFailure,
    KeyEncryptionKeyMissing,
    UnderlyingStorageError,
)
from .base import StorageClient

logger = structlog.get_logger(__name__)

LENGTH_STRUCT = struct.Struct(">i")
DEFAULT_REPLICATION = 5


def write_key_record(handle: BinaryIO, key: bytes) -> None:
    handle.write(LENGTH_STRUCT.pack(len(key)))
    handle.write(key)


def read_key_record(handle: BinaryIO, path: str) -> bytes:
    header = handle.read(LENGTH_STRUCT.size)
    if len(header) != LENGTH_STRUCT.size:
        raise UnderlyingStorageError(path, f"Truncated key record header at {path}")
    (length,) = LENGTH_STRUCT.unpack(header)
    if length <= 0:
        raise UnderlyingStorageError(path, f"Invalid key record length {length} at {path}")
    key = handle.read(length)
    if len(key) != length:
        raise UnderlyingStorageError(path, f"Truncated key record at {path}: expected {length} bytes, found {len(key)}")
    return key


class KeyEncryptionKeyStore:
    """Provision and read the single key encryption key record on a shared store

    Layout: ``<4-byte big-endian signed length><raw key bytes>``. Nothing is
    cached; every :meth:`load` re-reads the record.
    """

    def __init__(self, storage: StorageClient, *, replication: int = DEFAULT_REPLICATION) -> None:
        self.storage = storage
        self.replication = replication

    def exists(self, path: str) -> bool:
        try:
            return self.storage.exists(path)
        except OSError as exc:
            logger.error("kek.exists_failed", path=path, error=str(exc))
            raise UnderlyingStorageError(path) from exc

    def ensure_exists(self, path: str, key_length_bits: int, random_source: RandomSource) -> bool:
        """Create the record at ``path`` unless one exists; return ``True`` if created"""
        if key_length_bits <= 0 or key_length_bits % 8:
            raise ConfigurationError(f"Key length must be a positive multiple of 8 bits, got {key_length_bits}")
        if self.exists(path):
            return False

        kek = random_source(key_length_bits // 8)
        try:
            with self.storage.create(path, replication=self.replication) as handle:
                write_key_record(handle, kek)
        except FileExistsError:
            # Another creator published first; its record is the one to use
            logger.info("kek.create_lost_race", path=path)
            return False
        except OSError as exc:
            logger.error("kek.create_failed", path=path, error=str(exc))
            raise KeyEncryptionKeyCreateFailure(path) from exc

        logger.info("kek.created", path=path, key_length=key_length_bits, replication=self.replication)
        return True

    def load(self, path: str) -> bytes:
        try:
            with self.storage.open(path) as handle:
                return read_key_record(handle, path)
        except FileNotFoundError as exc:
            raise KeyEncryptionKeyMissing(path) from exc
        except OSError as exc:
            logger.error("kek.read_failed", path=path, error=str(exc))
            raise UnderlyingStorageError(path) from exc


__all__ = [
    "DEFAULT_REPLICATION",
    "KeyEncryptionKeyStore",
    "LENGTH_STRUCT",
    "read_key_record",
    "write_key_record",
]

# Process-local storage client; records every write for inspection.
from __future__ import annotations

import contextlib
import io
import threading
from dataclasses import dataclass
from typing import BinaryIO, Dict, Iterator, List, Optional


@dataclass(slots=True)
class StoredRecord:
    data: bytes
    replication: Optional[int] = None


class MemoryStorage:
    """In-memory :class:`~key_guardian.storage.base.StorageClient`"""

    def __init__(self) -> None:
        self._records: Dict[str, StoredRecord] = {}
        self._lock = threading.Lock()
        self.writes: List[str] = []

    def exists(self, path: str) -> bool:
        with self._lock:
            return path in self._records

    @contextlib.contextmanager
    def open(self, path: str) -> Iterator[BinaryIO]:
        with self._lock:
            record = self._records.get(path)
        if record is None:
            raise FileNotFoundError(path)
        with io.BytesIO(record.data) as handle:
            yield handle

    @contextlib.contextmanager
    def create(self, path: str, *, replication: int | None = None) -> Iterator[BinaryIO]:
        with self._lock:
            self.writes.append(path)
        with io.BytesIO() as handle:
            yield handle
            data = handle.getvalue()
        with self._lock:
            if path in self._records:
                raise FileExistsError(path)
            self._records[path] = StoredRecord(data=data, replication=replication)

    def record(self, path: str) -> StoredRecord:
        with self._lock:
            return self._records[path]

    def put(self, path: str, data: bytes) -> None:
        """Overwrite a record directly, bypassing create-if-absent"""
        with self._lock:
            self._records[path] = StoredRecord(data=data)

    def paths(self) -> List[str]:
        with self._lock:
            return sorted(self._records)


__all__ = ["MemoryStorage", "StoredRecord"]

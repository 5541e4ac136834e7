
from __future__ import annotations

from typing import BinaryIO, ContextManager, Protocol, runtime_checkable


@runtime_checkable
class StorageClient(Protocol):
    """Minimal interface of the shared store holding key records

    Paths are absolute, ``/``-separated store paths. ``create`` is an atomic
    create-if-absent: the record becomes visible only when the ``with`` block
    exits cleanly, and ``FileExistsError`` is raised if another writer
    published the same path first. Implementations raise ``OSError``
    subclasses for I/O failures and ``FileNotFoundError`` from ``open`` for a
    missing record.
    """

    def exists(self, path: str) -> bool:
        ...

    def open(self, path: str) -> ContextManager[BinaryIO]:
        ...

    def create(self, path: str, *, replication: int | None = None) -> ContextManager[BinaryIO]:
        ...


__all__ = ["StorageClient"]

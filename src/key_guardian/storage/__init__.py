
from __future__ import annotations

from pathlib import Path
from urllib.parse import unquote, urlparse

from ..utils.errors import ConfigurationError
from .base import StorageClient
from .keystore import KeyEncryptionKeyStore
from .local import LocalStorage
from .memory import MemoryStorage


def build_storage(uri: str | None) -> StorageClient:
    """Create a storage client from a ``file://`` or ``memory://`` URI

    ``file:///`` (or an empty URI) selects the per-user data directory;
    ``file:///srv/keys`` roots the store at ``/srv/keys``.
    """
    if not uri:
        return LocalStorage()
    parsed = urlparse(uri)
    scheme = parsed.scheme.lower()
    if scheme == "memory":
        return MemoryStorage()
    if scheme == "file":
        if parsed.netloc and parsed.netloc != "localhost":
            raise ConfigurationError(f"Remote file URIs are not supported: {uri}")
        location = unquote(parsed.path)
        if location in ("", "/"):
            return LocalStorage()
        return LocalStorage(Path(location))
    raise ConfigurationError(f"Unsupported storage URI scheme: {uri}")


__all__ = [
    "KeyEncryptionKeyStore",
    "LocalStorage",
    "MemoryStorage",
    "StorageClient",
    "build_storage",
]


from __future__ import annotations

from .errors import (
    ConfigurationError,
    KeyEncryptionKeyCreateFailure,
    KeyEncryptionKeyMissing,
    KeyGuardianError,
    UnderlyingStorageError,
    UnwrapFailure,
    WrapFailure,
)

__all__ = [
    "ConfigurationError",
    "KeyEncryptionKeyCreateFailure",
    "KeyEncryptionKeyMissing",
    "KeyGuardianError",
    "UnderlyingStorageError",
    "UnwrapFailure",
    "WrapFailure",
]

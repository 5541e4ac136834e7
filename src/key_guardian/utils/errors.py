
from __future__ import annotations


class KeyGuardianError(Exception):
    """Base exception for Key Guardian"""


class ConfigurationError(KeyGuardianError):
    """Raised when a path, algorithm, cipher suite or key length is missing or invalid"""


class KeyEncryptionKeyMissing(KeyGuardianError):
    """Raised when no key encryption key exists at the configured location

    On the unwrap path this usually means wrapped data is unrecoverable unless
    the key encryption key can be restored from an out-of-band backup.
    """

    def __init__(self, path: str, message: str | None = None) -> None:
        self.path = path
        super().__init__(message or f"Could not find key encryption key in configured location ({path})")


class KeyEncryptionKeyCreateFailure(KeyGuardianError):
    """Raised when provisioning a new key encryption key fails"""

    def __init__(self, path: str, message: str | None = None) -> None:
        self.path = path
        super().__init__(message or f"Could not create key encryption key at {path}")


class WrapFailure(KeyGuardianError):
    """Raised when a secret key cannot be wrapped"""


class UnwrapFailure(KeyGuardianError):
    """Raised when a wrapped secret key cannot be unwrapped or fails its integrity check"""


class UnderlyingStorageError(KeyGuardianError):
    """Raised when reading or writing a key record fails at the storage layer"""

    def __init__(self, path: str, message: str | None = None) -> None:
        self.path = path
        super().__init__(message or f"Storage failure for {path}")


__all__ = [
    "KeyGuardianError",
    "ConfigurationError",
    "KeyEncryptionKeyMissing",
    "KeyEncryptionKeyCreateFailure",
    "WrapFailure",
    "UnwrapFailure",
    "UnderlyingStorageError",
]


from .utils.errors import (
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

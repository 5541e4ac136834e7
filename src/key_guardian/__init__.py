"""Envelope key encryption: wrap data keys under a stored key encryption key."""

from .bootstrap import bootstrap, parameters_for
from .config import GuardianConfig, Property, load_config
from .crypto import CipherSuiteRegistry, KeyWrapExecutor
from .exceptions import (
    ConfigurationError,
    KeyEncryptionKeyCreateFailure,
    KeyEncryptionKeyMissing,
    KeyGuardianError,
    UnderlyingStorageError,
    UnwrapFailure,
    WrapFailure,
)
from .models import CryptoParameters
from .plugins import get_secret_key_encryption_strategy
from .services import (
    DefaultSecretKeyEncryptionStrategy,
    NullSecretKeyEncryptionStrategy,
    SecretKeyEncryptionStrategy,
)
from .storage import KeyEncryptionKeyStore, LocalStorage, MemoryStorage, StorageClient, build_storage

__version__ = "0.1.0"

__all__ = [
    "CipherSuiteRegistry",
    "ConfigurationError",
    "CryptoParameters",
    "DefaultSecretKeyEncryptionStrategy",
    "GuardianConfig",
    "KeyEncryptionKeyCreateFailure",
    "KeyEncryptionKeyMissing",
    "KeyEncryptionKeyStore",
    "KeyGuardianError",
    "KeyWrapExecutor",
    "LocalStorage",
    "MemoryStorage",
    "NullSecretKeyEncryptionStrategy",
    "Property",
    "SecretKeyEncryptionStrategy",
    "StorageClient",
    "UnderlyingStorageError",
    "UnwrapFailure",
    "WrapFailure",
    "build_storage",
    "bootstrap",
    "get_secret_key_encryption_strategy",
    "load_config",
    "parameters_for",
]

from .strategy import (
    DefaultSecretKeyEncryptionStrategy,
    NullSecretKeyEncryptionStrategy,
    SecretKeyEncryptionStrategy,
)

__all__ = [
    "DefaultSecretKeyEncryptionStrategy",
    "NullSecretKeyEncryptionStrategy",
    "SecretKeyEncryptionStrategy",
]

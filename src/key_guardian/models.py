# Parameter bag passed through the key encryption strategies.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from .utils.config import Property


@dataclass(slots=True)
class CryptoParameters:
    """Mutable parameter bag owned by the caller and filled in by a strategy"""
    algorithm_name: Optional[str] = None
    cipher_suite: Optional[str] = None
    key_length: int = 128
    plaintext_key: Optional[bytes] = None
    encrypted_key: Optional[bytes] = None
    opaque_key_encryption_key_id: Optional[str] = None
    random_number_generator: Optional[str] = None
    random_number_generator_provider: Optional[str] = None
    all_options: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_options(cls, options: Mapping[str, str]) -> "CryptoParameters":
        """Build a bag with algorithm, suite, key length and RNG taken from ``options``"""
        return cls(
            algorithm_name=Property.ALGORITHM_NAME.resolve(options),
            cipher_suite=Property.CIPHER_SUITE.resolve(options),
            key_length=Property.KEY_LENGTH.resolve_int(options),
            random_number_generator=Property.SECURE_RNG.resolve(options),
            random_number_generator_provider=Property.SECURE_RNG_PROVIDER.resolve(options),
            all_options=dict(options),
        )

    def replace_plaintext_key(self, plaintext_key: bytes) -> None:
        """Load a new logical key to wrap, dropping wrapped output of an older one"""
        self.plaintext_key = plaintext_key
        self.encrypted_key = None
        self.opaque_key_encryption_key_id = None

    def replace_encrypted_key(self, encrypted_key: bytes) -> None:
        """Load a new wrapped key to unwrap, dropping plaintext of an older one"""
        self.encrypted_key = encrypted_key
        self.plaintext_key = None

    def __repr__(self) -> str:
        return (
            f"CryptoParameters(algorithm_name={self.algorithm_name!r}, "
            f"cipher_suite={self.cipher_suite!r}, key_length={self.key_length}, "
            f"plaintext_key={'<set>' if self.plaintext_key is not None else None}, "
            f"encrypted_key={'<set>' if self.encrypted_key is not None else None}, "
            f"opaque_key_encryption_key_id={self.opaque_key_encryption_key_id!r})"
        )


__all__ = ["CryptoParameters"]

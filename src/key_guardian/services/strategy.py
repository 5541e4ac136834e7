# Secret key encryption strategies: wrap/unwrap a DEK carried in CryptoParameters.
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional

import structlog

from ..crypto.keywrap import KeyWrapExecutor
from ..crypto.rng import RandomSource, resolve_random_source
from ..models import CryptoParameters
from ..paths import join_store_path
from ..storage.base import StorageClient
from ..storage.keystore import KeyEncryptionKeyStore
from ..utils.config import Property
from ..utils.errors import ConfigurationError, KeyEncryptionKeyMissing

logger = structlog.get_logger(__name__)

RandomSourceResolver = Callable[[Optional[str], Optional[str]], RandomSource]


class SecretKeyEncryptionStrategy(ABC):
    """Protects the secret key of a CryptoParameters bag before it is persisted"""

    @abstractmethod
    def encrypt_secret_key(self, params: CryptoParameters) -> CryptoParameters:
        ...

    @abstractmethod
    def decrypt_secret_key(self, params: CryptoParameters) -> CryptoParameters:
        ...


class DefaultSecretKeyEncryptionStrategy(SecretKeyEncryptionStrategy):
    """Wrap secret keys under a key encryption key kept on shared storage

    The KEK lives at ``instance.store.dir`` + ``crypto.default.key.strategy.key.location``.
    It is created on the first wrap that finds none and is never created on
    the unwrap path: a fresh KEK there would silently orphan every key wrapped
    under the lost one.
    """

    def __init__(
        self,
        storage: StorageClient,
        *,
        executor: KeyWrapExecutor | None = None,
        random_source_resolver: RandomSourceResolver = resolve_random_source,
    ) -> None:
        self.storage = storage
        self.executor = executor or KeyWrapExecutor()
        self.random_source_resolver = random_source_resolver

    def resolve_key_path(self, params: CryptoParameters) -> str:
        options = params.all_options
        key_location = Property.KEY_LOCATION.resolve(options)
        store_dir = Property.STORE_DIR.resolve(options)
        if not key_location:
            raise ConfigurationError("Key encryption key location must be non-empty")
        return join_store_path(store_dir, key_location)

    def encrypt_secret_key(self, params: CryptoParameters) -> CryptoParameters:
        path = self.resolve_key_path(params)
        if params.plaintext_key is None:
            raise ConfigurationError("No plaintext key to encrypt")
        algorithm_name = params.algorithm_name or ""
        cipher_suite = self._cipher_suite(params)
        self.executor.resolve_suite(algorithm_name, cipher_suite).check_kek_length(params.key_length)
        keystore = self._keystore(params)

        random_source = self.random_source_resolver(
            params.random_number_generator, params.random_number_generator_provider
        )
        keystore.ensure_exists(path, params.key_length, random_source)
        kek = keystore.load(path)

        params.encrypted_key = self.executor.wrap(params.plaintext_key, algorithm_name, cipher_suite, kek)
        params.opaque_key_encryption_key_id = path
        return params

    def decrypt_secret_key(self, params: CryptoParameters) -> CryptoParameters:
        path = self.resolve_key_path(params)
        if params.encrypted_key is None:
            raise ConfigurationError("No encrypted key to decrypt")
        keystore = self._keystore(params)

        if not keystore.exists(path):
            logger.error(
                "kek.missing",
                path=path,
                hint="restore the key encryption key, point the configuration at it, or discard the affected data",
            )
            raise KeyEncryptionKeyMissing(path)
        kek = keystore.load(path)

        params.plaintext_key = self.executor.unwrap(
            params.encrypted_key, params.algorithm_name or "", self._cipher_suite(params), kek
        )
        return params

    def _keystore(self, params: CryptoParameters) -> KeyEncryptionKeyStore:
        replication = Property.KEY_REPLICATION.resolve_int(params.all_options)
        return KeyEncryptionKeyStore(self.storage, replication=replication)

    @staticmethod
    def _cipher_suite(params: CryptoParameters) -> str:
        return params.cipher_suite or Property.CIPHER_SUITE.resolve(params.all_options)


class NullSecretKeyEncryptionStrategy(SecretKeyEncryptionStrategy):
    """Pass-through strategy used when secret key encryption is disabled"""

    def encrypt_secret_key(self, params: CryptoParameters) -> CryptoParameters:
        params.encrypted_key = params.plaintext_key
        return params

    def decrypt_secret_key(self, params: CryptoParameters) -> CryptoParameters:
        params.plaintext_key = params.encrypted_key
        return params


__all__ = [
    "DefaultSecretKeyEncryptionStrategy",
    "NullSecretKeyEncryptionStrategy",
    "SecretKeyEncryptionStrategy",
]

import os

import pytest

from key_guardian.models import CryptoParameters
from key_guardian.services.strategy import (
    DefaultSecretKeyEncryptionStrategy,
    NullSecretKeyEncryptionStrategy,
)
from key_guardian.storage.keystore import LENGTH_STRUCT
from key_guardian.storage.memory import MemoryStorage
from key_guardian.utils.errors import (
    ConfigurationError,
    KeyEncryptionKeyMissing,
    UnwrapFailure,
)

DEFAULT_PATH = "/key_guardian/crypto/secret/keyEncryptionKey"


def _wrap(strategy: DefaultSecretKeyEncryptionStrategy, plaintext: bytes, **fields) -> CryptoParameters:
    params = CryptoParameters(algorithm_name="AES", key_length=128, **fields)
    params.replace_plaintext_key(plaintext)
    return strategy.encrypt_secret_key(params)


def test_scenario_default_path_roundtrip(strategy: DefaultSecretKeyEncryptionStrategy) -> None:
    plaintext = os.urandom(16)
    params = CryptoParameters(algorithm_name="symmetric-128", key_length=128, plaintext_key=plaintext)

    returned = strategy.encrypt_secret_key(params)

    assert returned is params
    assert params.encrypted_key
    assert params.opaque_key_encryption_key_id == DEFAULT_PATH

    fresh = CryptoParameters(algorithm_name="symmetric-128", key_length=128, encrypted_key=params.encrypted_key)
    assert strategy.decrypt_secret_key(fresh).plaintext_key == plaintext


def test_scenario_path_gets_leading_separator(strategy: DefaultSecretKeyEncryptionStrategy) -> None:
    params = CryptoParameters(
        all_options={"instance.store.dir": "/myinstance", "crypto.default.key.strategy.key.location": "keys/kek"}
    )
    assert strategy.resolve_key_path(params) == "/myinstance/keys/kek"


def test_path_resolution_is_deterministic(strategy: DefaultSecretKeyEncryptionStrategy) -> None:
    options = {"instance.store.dir": "/a", "crypto.default.key.strategy.key.location": "/b/c"}
    first = strategy.resolve_key_path(CryptoParameters(all_options=dict(options)))
    second = strategy.resolve_key_path(CryptoParameters(all_options=dict(options)))
    assert first == second == "/a/b/c"


def test_empty_key_location_is_rejected(strategy: DefaultSecretKeyEncryptionStrategy) -> None:
    params = CryptoParameters(all_options={"crypto.default.key.strategy.key.location": ""})
    with pytest.raises(ConfigurationError):
        strategy.resolve_key_path(params)


def test_scenario_decrypt_without_kek_writes_nothing(
    strategy: DefaultSecretKeyEncryptionStrategy, storage: MemoryStorage
) -> None:
    params = CryptoParameters(algorithm_name="AES", key_length=128, encrypted_key=os.urandom(24))
    with pytest.raises(KeyEncryptionKeyMissing) as excinfo:
        strategy.decrypt_secret_key(params)
    assert excinfo.value.path == DEFAULT_PATH
    assert storage.writes == []
    assert storage.paths() == []
    assert params.plaintext_key is None


def test_encrypt_provisions_once_and_reuses(
    strategy: DefaultSecretKeyEncryptionStrategy, storage: MemoryStorage
) -> None:
    first_key, second_key = os.urandom(16), os.urandom(16)
    first = _wrap(strategy, first_key)
    second = _wrap(strategy, second_key)

    assert storage.paths() == [DEFAULT_PATH]
    assert storage.writes == [DEFAULT_PATH]
    record = storage.record(DEFAULT_PATH)
    assert LENGTH_STRUCT.unpack(record.data[:4]) == (16,)
    assert len(record.data) == 4 + 16
    assert record.replication == 5
    assert first.opaque_key_encryption_key_id == second.opaque_key_encryption_key_id

    for params, expected in ((first, first_key), (second, second_key)):
        fresh = CryptoParameters(algorithm_name="AES", encrypted_key=params.encrypted_key)
        assert strategy.decrypt_secret_key(fresh).plaintext_key == expected


def test_kek_length_follows_key_length(strategy: DefaultSecretKeyEncryptionStrategy, storage: MemoryStorage) -> None:
    params = CryptoParameters(algorithm_name="AES", key_length=256, plaintext_key=os.urandom(32))
    strategy.encrypt_secret_key(params)
    assert len(storage.record(DEFAULT_PATH).data) == 4 + 32


def test_replication_is_configurable(strategy: DefaultSecretKeyEncryptionStrategy, storage: MemoryStorage) -> None:
    _wrap(strategy, os.urandom(16), all_options={"crypto.default.key.strategy.replication": "3"})
    assert storage.record(DEFAULT_PATH).replication == 3


def test_kek_is_reread_on_every_call(strategy: DefaultSecretKeyEncryptionStrategy, storage: MemoryStorage) -> None:
    wrapped = _wrap(strategy, os.urandom(16))
    # Externally replaced record takes effect without restarting anything
    storage.put(DEFAULT_PATH, LENGTH_STRUCT.pack(16) + os.urandom(16))
    with pytest.raises(UnwrapFailure):
        strategy.decrypt_secret_key(CryptoParameters(algorithm_name="AES", encrypted_key=wrapped.encrypted_key))


def test_tampered_wrapped_key_is_rejected(strategy: DefaultSecretKeyEncryptionStrategy) -> None:
    plaintext = os.urandom(16)
    wrapped = _wrap(strategy, plaintext).encrypted_key
    tampered = bytearray(wrapped)
    tampered[5] ^= 0xFF
    with pytest.raises(UnwrapFailure):
        strategy.decrypt_secret_key(CryptoParameters(algorithm_name="AES", encrypted_key=bytes(tampered)))


def test_cipher_suite_falls_back_to_option(strategy: DefaultSecretKeyEncryptionStrategy) -> None:
    options = {"crypto.default.key.strategy.cipher.suite": "AESWrapPad"}
    plaintext = b"odd-length-key"
    wrapped = _wrap(strategy, plaintext, all_options=dict(options))
    fresh = CryptoParameters(algorithm_name="AES", encrypted_key=wrapped.encrypted_key, all_options=dict(options))
    assert strategy.decrypt_secret_key(fresh).plaintext_key == plaintext


def test_invalid_configuration_creates_no_kek(strategy: DefaultSecretKeyEncryptionStrategy, storage: MemoryStorage) -> None:
    with pytest.raises(ConfigurationError):
        strategy.encrypt_secret_key(CryptoParameters(algorithm_name="", plaintext_key=os.urandom(16)))
    with pytest.raises(ConfigurationError):
        strategy.encrypt_secret_key(
            CryptoParameters(algorithm_name="AES", cipher_suite="Blowfish", plaintext_key=os.urandom(16))
        )
    with pytest.raises(ConfigurationError):
        strategy.encrypt_secret_key(CryptoParameters(algorithm_name="AES", key_length=100, plaintext_key=os.urandom(16)))
    with pytest.raises(ConfigurationError):
        strategy.encrypt_secret_key(CryptoParameters(algorithm_name="AES"))
    assert storage.writes == []


def test_unknown_rng_is_rejected(strategy: DefaultSecretKeyEncryptionStrategy, storage: MemoryStorage) -> None:
    params = CryptoParameters(algorithm_name="AES", plaintext_key=os.urandom(16), random_number_generator="dice")
    with pytest.raises(ConfigurationError):
        strategy.encrypt_secret_key(params)
    assert storage.writes == []


def test_injected_random_source_provides_kek(storage: MemoryStorage) -> None:
    requested = []

    def resolver(rng, provider):
        def source(n: int) -> bytes:
            requested.append((rng, provider, n))
            return b"\x42" * n
        return source

    strategy = DefaultSecretKeyEncryptionStrategy(storage, random_source_resolver=resolver)
    _wrap(strategy, os.urandom(16), random_number_generator="urandom", random_number_generator_provider="os")
    assert requested == [("urandom", "os", 16)]
    assert storage.record(DEFAULT_PATH).data[4:] == b"\x42" * 16


def test_decrypt_requires_encrypted_key(strategy: DefaultSecretKeyEncryptionStrategy) -> None:
    with pytest.raises(ConfigurationError):
        strategy.decrypt_secret_key(CryptoParameters(algorithm_name="AES"))


def test_null_strategy_passes_key_through() -> None:
    strategy = NullSecretKeyEncryptionStrategy()
    params = CryptoParameters(plaintext_key=b"k" * 16)
    assert strategy.encrypt_secret_key(params).encrypted_key == b"k" * 16
    fresh = CryptoParameters(encrypted_key=b"k" * 16)
    assert strategy.decrypt_secret_key(fresh).plaintext_key == b"k" * 16


@pytest.mark.parametrize("key_length", [64, 120, 512])
def test_unusable_kek_length_is_never_provisioned(
    strategy: DefaultSecretKeyEncryptionStrategy, storage: MemoryStorage, key_length: int
) -> None:
    params = CryptoParameters(algorithm_name="AES", key_length=key_length, plaintext_key=os.urandom(16))
    with pytest.raises(ConfigurationError):
        strategy.encrypt_secret_key(params)
    assert storage.writes == []

    # A later, correctly configured call still provisions and wraps
    plaintext = os.urandom(16)
    wrapped = _wrap(strategy, plaintext)
    fresh = CryptoParameters(algorithm_name="AES", encrypted_key=wrapped.encrypted_key)
    assert strategy.decrypt_secret_key(fresh).plaintext_key == plaintext

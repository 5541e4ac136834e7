from __future__ import annotations

import pytest

from key_guardian.services.strategy import DefaultSecretKeyEncryptionStrategy
from key_guardian.storage.memory import MemoryStorage


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def strategy(storage: MemoryStorage) -> DefaultSecretKeyEncryptionStrategy:
    return DefaultSecretKeyEncryptionStrategy(storage)

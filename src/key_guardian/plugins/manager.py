from __future__ import annotations

import importlib
import inspect
from typing import Any, Callable, Dict, Mapping

from ..services.strategy import (
    DefaultSecretKeyEncryptionStrategy,
    NullSecretKeyEncryptionStrategy,
    SecretKeyEncryptionStrategy,
)
from ..storage import build_storage
from ..storage.base import StorageClient
from ..utils.config import Property
from ..utils.errors import ConfigurationError

StrategyFactory = Callable[[StorageClient], SecretKeyEncryptionStrategy]

_STRATEGIES: Dict[str, StrategyFactory] = {
    "default": lambda storage: DefaultSecretKeyEncryptionStrategy(storage),
    "null": lambda storage: NullSecretKeyEncryptionStrategy(),
}


def load_plugin(path: str, class_name: str) -> Any:
    """Dynamically load a plugin class given module path and class name.

    Example: load_plugin('key_guardian.services.strategy', 'NullSecretKeyEncryptionStrategy')
    """
    mod = importlib.import_module(path)
    return getattr(mod, class_name)


def register_strategy(name: str, factory: StrategyFactory) -> None:
    _STRATEGIES[name.lower()] = factory


def get_secret_key_encryption_strategy(
    name: str | None = None,
    *,
    storage: StorageClient | None = None,
    options: Mapping[str, str] | None = None,
) -> SecretKeyEncryptionStrategy:
    """Resolve a strategy by registry name or ``module:Class`` path

    ``name`` defaults to the ``crypto.secret.key.encryption.strategy`` option;
    ``storage`` defaults to the client described by ``instance.store.uri``.
    Plugin classes are constructed with the storage client when their
    constructor accepts one.
    """
    strategy_name = (name or Property.STRATEGY.resolve(options)).strip()
    if not strategy_name:
        raise ConfigurationError("Strategy name must be non-empty")
    if storage is None:
        storage = build_storage(Property.STORE_URI.resolve(options))

    factory = _STRATEGIES.get(strategy_name.lower())
    if factory is not None:
        return factory(storage)

    module_path, sep, class_name = strategy_name.partition(":")
    if not sep or not class_name:
        raise ConfigurationError(f"Unknown secret key encryption strategy: {strategy_name}")
    try:
        cls = load_plugin(module_path, class_name)
    except (ImportError, AttributeError) as exc:
        raise ConfigurationError(f"Could not load secret key encryption strategy {strategy_name}") from exc
    if not (isinstance(cls, type) and issubclass(cls, SecretKeyEncryptionStrategy)):
        raise ConfigurationError(f"{strategy_name} is not a SecretKeyEncryptionStrategy")
    if _accepts_storage(cls):
        return cls(storage)
    return cls()


def _accepts_storage(cls: type) -> bool:
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        return False
    try:
        signature.bind(None)
    except TypeError:
        return False
    return True


__all__ = ["get_secret_key_encryption_strategy", "load_plugin", "register_strategy"]

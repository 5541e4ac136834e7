# Entry path for embedding callers: config file -> logging -> strategy.
from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple

from .logging import configure_logging
from .models import CryptoParameters
from .plugins.manager import get_secret_key_encryption_strategy
from .services.strategy import SecretKeyEncryptionStrategy
from .storage.base import StorageClient
from .utils.config import GuardianConfig, load_config


def bootstrap(
    config_path: Optional[Path] = None,
    *,
    storage: StorageClient | None = None,
) -> Tuple[GuardianConfig, SecretKeyEncryptionStrategy]:
    """Load configuration, apply its logging level and build the configured strategy"""
    config = load_config(config_path)
    configure_logging(config.logging.normalized_level())
    strategy = get_secret_key_encryption_strategy(storage=storage, options=config.resolved_options())
    return config, strategy


def parameters_for(config: GuardianConfig) -> CryptoParameters:
    """A fresh parameter bag carrying the configured options"""
    return CryptoParameters.from_options(config.resolved_options())


__all__ = ["bootstrap", "parameters_for"]

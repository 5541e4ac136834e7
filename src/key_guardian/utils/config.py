"""Configuration loading utilities for Key Guardian."""
from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..paths import runtime_config_dir
from .errors import ConfigurationError


class Property(Enum):
    """Option keys understood by the key encryption strategies, with defaults"""

    KEY_LOCATION = ("crypto.default.key.strategy.key.location", "/crypto/secret/keyEncryptionKey")
    STORE_DIR = ("instance.store.dir", "/key_guardian")
    STORE_URI = ("instance.store.uri", "file:///")
    CIPHER_SUITE = ("crypto.default.key.strategy.cipher.suite", "AESWrap")
    ALGORITHM_NAME = ("crypto.cipher.algorithm.name", "AES")
    KEY_LENGTH = ("crypto.cipher.key.length", "128")
    SECURE_RNG = ("crypto.secure.rng", "urandom")
    SECURE_RNG_PROVIDER = ("crypto.secure.rng.provider", "os")
    KEY_REPLICATION = ("crypto.default.key.strategy.replication", "5")
    STRATEGY = ("crypto.secret.key.encryption.strategy", "default")

    def __init__(self, key: str, default: str) -> None:
        self.key = key
        self.default = default

    def resolve(self, options: Mapping[str, str] | None) -> str:
        """Return the configured value for this property, or its default"""
        value = (options or {}).get(self.key)
        if value is None:
            return self.default
        return value

    def resolve_int(self, options: Mapping[str, str] | None) -> int:
        raw = self.resolve(options)
        try:
            return int(raw)
        except (TypeError, ValueError):
            raise ConfigurationError(f"Option {self.key} must be an integer, got {raw!r}") from None

    @classmethod
    def defaults(cls) -> Dict[str, str]:
        return {prop.key: prop.default for prop in cls}


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Logging verbosity level")

    def normalized_level(self) -> str:
        return self.level.upper()


class GuardianConfig(BaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    options: Dict[str, str] = Field(default_factory=Property.defaults)

    @field_validator("options", mode="before")
    @classmethod
    def _stringify_options(cls, value: object) -> object:
        # YAML turns ``128`` and ``5`` into ints; the options mapping is str -> str
        if isinstance(value, Mapping):
            return {str(k): str(v) for k, v in value.items() if v is not None}
        return value

    def resolved_options(self) -> Dict[str, str]:
        """Defaults overlaid with the configured options"""
        merged = Property.defaults()
        merged.update(self.options)
        return merged


DEFAULT_CONFIG = GuardianConfig()


def config_search_paths(explicit: Optional[Path] = None) -> Iterable[Path]:
    if explicit:
        yield explicit
    yield Path.cwd() / ".key_guardian" / "config.yaml"
    yield runtime_config_dir() / "config.yaml"


def load_config(path: Optional[Path] = None) -> GuardianConfig:
    for candidate in config_search_paths(path):
        if candidate.is_file():
            with candidate.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle) or {}
            try:
                return GuardianConfig.model_validate(data)
            except ValidationError as exc:
                raise ConfigurationError(f"Invalid configuration in {candidate}: {exc}") from exc
    return DEFAULT_CONFIG.model_copy(deep=True)


def dump_default_config(target: Path) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(DEFAULT_CONFIG.model_dump(mode="json"), handle, sort_keys=False)


__all__ = [
    "DEFAULT_CONFIG",
    "GuardianConfig",
    "LoggingConfig",
    "Property",
    "config_search_paths",
    "dump_default_config",
    "load_config",
]

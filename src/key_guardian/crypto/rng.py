# Resolve RNG / provider selectors into a byte source.
from __future__ import annotations

import os
import secrets
from typing import Callable, Dict, Optional

from ..utils.config import Property
from ..utils.errors import ConfigurationError

RandomSource = Callable[[int], bytes]

# Legacy selectors from older configuration files map onto the OS CSPRNG.
_GENERATORS: Dict[str, RandomSource] = {
    "urandom": os.urandom,
    "secrets": secrets.token_bytes,
    "sha1prng": os.urandom,
    "nativeprng": os.urandom,
}

_PROVIDERS = {"os", "default", "sun"}


def resolve_random_source(rng: Optional[str] = None, provider: Optional[str] = None) -> RandomSource:
    """Return a cryptographically secure byte source for the given selectors"""
    rng_name = (rng or Property.SECURE_RNG.default).strip().lower()
    provider_name = (provider or Property.SECURE_RNG_PROVIDER.default).strip().lower()
    if provider_name not in _PROVIDERS:
        raise ConfigurationError(f"Unsupported random number generator provider: {provider}")
    try:
        return _GENERATORS[rng_name]
    except KeyError:
        raise ConfigurationError(f"Unsupported random number generator: {rng}") from None


__all__ = ["RandomSource", "resolve_random_source"]

from .keywrap import AES_WRAP, AES_WRAP_PAD, CipherSuite, CipherSuiteRegistry, KeyWrapExecutor
from .rng import RandomSource, resolve_random_source

__all__ = [
    "AES_WRAP",
    "AES_WRAP_PAD",
    "CipherSuite",
    "CipherSuiteRegistry",
    "KeyWrapExecutor",
    "RandomSource",
    "resolve_random_source",
]

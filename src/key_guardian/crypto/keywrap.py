
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

import structlog
from cryptography.hazmat.primitives.keywrap import (
    InvalidUnwrap,
    aes_key_unwrap,
    aes_key_unwrap_with_padding,
    aes_key_wrap,
    aes_key_wrap_with_padding,
)

from ..utils.errors import ConfigurationError, UnwrapFailure, WrapFailure

logger = structlog.get_logger(__name__)

WrapFn = Callable[[bytes, bytes], bytes]
AES_KEY_LENGTHS = frozenset({16, 24, 32})


@dataclass(frozen=True, slots=True)
class CipherSuite:
    """A dedicated key-wrapping primitive; ``wrap`` and ``unwrap`` take ``(kek, key)``"""
    name: str
    wrap: WrapFn
    unwrap: WrapFn
    aliases: tuple[str, ...] = ()
    kek_lengths: frozenset[int] = AES_KEY_LENGTHS

    def check_kek_length(self, key_length_bits: int) -> None:
        """Reject a KEK size this suite cannot key with, before any KEK is provisioned"""
        if key_length_bits % 8 or key_length_bits // 8 not in self.kek_lengths:
            valid = ", ".join(str(n * 8) for n in sorted(self.kek_lengths))
            raise ConfigurationError(
                f"{self.name} needs a key encryption key of {valid} bits, got {key_length_bits}"
            )


AES_WRAP = CipherSuite(
    name="AESWrap",
    wrap=aes_key_wrap,
    unwrap=aes_key_unwrap,
    aliases=("AES/KW/NoPadding", "RFC3394"),
)

AES_WRAP_PAD = CipherSuite(
    name="AESWrapPad",
    wrap=aes_key_wrap_with_padding,
    unwrap=aes_key_unwrap_with_padding,
    aliases=("AES/KWP/NoPadding", "RFC5649"),
)


class CipherSuiteRegistry:
    """Case-insensitive lookup of cipher-suite descriptors"""

    def __init__(self, suites: Iterable[CipherSuite] = (AES_WRAP, AES_WRAP_PAD)) -> None:
        self._suites: Dict[str, CipherSuite] = {}
        for suite in suites:
            self.register(suite)

    def register(self, suite: CipherSuite) -> None:
        for label in (suite.name, *suite.aliases):
            self._suites[label.lower()] = suite

    def get(self, descriptor: Optional[str]) -> CipherSuite:
        if not descriptor or not descriptor.strip():
            raise ConfigurationError("Cipher suite must be non-empty")
        try:
            return self._suites[descriptor.strip().lower()]
        except KeyError:
            raise ConfigurationError(f"Unsupported key wrap cipher suite: {descriptor}") from None

    def names(self) -> list[str]:
        return sorted({suite.name for suite in self._suites.values()})


class KeyWrapExecutor:
    """Wrap and unwrap key-sized secrets under a key encryption key

    The executor is stateless; every call builds the operation from the
    supplied KEK and cipher suite. Failures are raised as :class:`WrapFailure`
    or :class:`UnwrapFailure` and are never retried.
    """

    def __init__(self, registry: CipherSuiteRegistry | None = None) -> None:
        self.registry = registry or CipherSuiteRegistry()

    def wrap(self, plaintext_key: bytes, algorithm_name: str, cipher_suite: str, kek: bytes) -> bytes:
        suite = self.resolve_suite(algorithm_name, cipher_suite)
        if not plaintext_key:
            raise WrapFailure("Plaintext key must be non-empty")
        try:
            return suite.wrap(kek, plaintext_key)
        except ValueError as exc:
            logger.error("keywrap.wrap_failed", suite=suite.name, algorithm=algorithm_name, error=str(exc))
            raise WrapFailure(f"{suite.name} wrap failed for {algorithm_name} key: {exc}") from exc

    def unwrap(self, encrypted_key: bytes, algorithm_name: str, cipher_suite: str, kek: bytes) -> bytes:
        suite = self.resolve_suite(algorithm_name, cipher_suite)
        if not encrypted_key:
            raise UnwrapFailure("Wrapped key must be non-empty")
        try:
            return suite.unwrap(kek, encrypted_key)
        except (InvalidUnwrap, ValueError) as exc:
            logger.error("keywrap.unwrap_failed", suite=suite.name, algorithm=algorithm_name, error=str(exc))
            raise UnwrapFailure(f"{suite.name} unwrap failed for {algorithm_name} key") from exc

    def resolve_suite(self, algorithm_name: str, cipher_suite: str) -> CipherSuite:
        """Validate the algorithm tag and look up the cipher suite"""
        if not algorithm_name or not algorithm_name.strip():
            raise ConfigurationError("Algorithm name must be non-empty")
        return self.registry.get(cipher_suite)


__all__ = ["AES_KEY_LENGTHS", "AES_WRAP", "AES_WRAP_PAD", "CipherSuite", "CipherSuiteRegistry", "KeyWrapExecutor"]

"""Keyed verifier registry.

Verifies base64 signatures where the public key is picked per call by a
logical key id. The id -> public key mapping is supplied by the caller and
only ever read. A SignatureVerifier is built the first time an id is used and
cached for the registry's lifetime; entries are never replaced or evicted, so
rotating a key under an existing id needs a new registry.

Cache reads take no lock. A miss takes one lock from a striped table picked by
hash(key_id), re-checks the cache, builds the verifier and publishes it with
dict.setdefault so the first insert wins. Ids on different stripes never wait
on each other and the signature check itself runs outside any lock.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, List, Mapping, Optional

from .config import Settings, load_settings
from .crypto.alg_registry import DEFAULT_ALGORITHM
from .crypto.verify import DEFAULT_CHARSET, SignatureVerifier, lookup_charset
from .errors import ConfigurationError, KeyNotFoundError
from .utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class RegistryConfig:
    public_keys: Mapping[str, Any]
    algorithm: str = DEFAULT_ALGORITHM
    charset: str = DEFAULT_CHARSET
    lock_stripes: int = 16

    def __post_init__(self):
        if self.public_keys is None:
            raise ConfigurationError("public_keys mapping is required")
        if not isinstance(self.lock_stripes, int) or self.lock_stripes < 1:
            raise ConfigurationError(f"lock_stripes must be a positive int, got {self.lock_stripes!r}")
        lookup_charset(self.charset)


class KeyedVerifierRegistry:
    def __init__(self, config: RegistryConfig):
        self._config = config
        self._cache: Dict[str, SignatureVerifier] = {}
        self._stripes: List[threading.Lock] = [threading.Lock() for _ in range(config.lock_stripes)]

    @classmethod
    def from_settings(cls, public_keys: Mapping[str, Any], settings: Optional[Settings] = None) -> "KeyedVerifierRegistry":
        s = settings or load_settings()
        return cls(RegistryConfig(
            public_keys=public_keys,
            algorithm=s.algorithm,
            charset=s.charset,
            lock_stripes=s.lock_stripes,
        ))

    @property
    def config(self) -> RegistryConfig:
        return self._config

    def verify(self, key_id: str, message: str, signature_b64: str) -> bool:
        """Verify signature_b64 over message with the public key named key_id.

        Raises KeyNotFoundError when key_id is not in the mapping. Errors from
        the verifier (bad base64, unsupported algorithm, wrong key type)
        propagate unchanged.
        """
        return self._verifier_for(key_id).verify(message, signature_b64)

    def _verifier_for(self, key_id: str) -> SignatureVerifier:
        if not isinstance(key_id, str):
            raise TypeError(f"key_id must be str, got {type(key_id).__name__}")
        verifier = self._cache.get(key_id)
        if verifier is not None:
            return verifier
        public_key = self._config.public_keys.get(key_id)
        if public_key is None:
            log.warning("public key not found: key_id=%s", key_id)
            raise KeyNotFoundError(key_id)
        with self._stripe(key_id):
            verifier = self._cache.get(key_id)
            if verifier is None:
                built = SignatureVerifier(public_key, self._config.algorithm, self._config.charset)
                verifier = self._cache.setdefault(key_id, built)
                if verifier is built:
                    log.debug("built %s verifier for key_id=%s", built.algorithm, key_id)
        return verifier

    def _stripe(self, key_id: str) -> threading.Lock:
        return self._stripes[hash(key_id) % len(self._stripes)]

    def cached_key_ids(self) -> FrozenSet[str]:
        return frozenset(self._cache.copy())

    def __contains__(self, key_id: object) -> bool:
        return key_id in self._cache

    def __len__(self) -> int:
        return len(self._cache)

    def __repr__(self) -> str:
        return (
            f"KeyedVerifierRegistry(algorithm={self._config.algorithm!r}, "
            f"charset={self._config.charset!r}, cached={len(self._cache)})"
        )


__all__ = ["KeyedVerifierRegistry", "RegistryConfig"]

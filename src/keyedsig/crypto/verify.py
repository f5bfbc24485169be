"""Base64 signature verifier bound to a single public key.

A SignatureVerifier holds one public key, one algorithm and one charset for
its whole life. verify() encodes the message with the charset, decodes the
base64 signature and hands both to the algorithm registry.
"""
from __future__ import annotations

import base64
import binascii
import codecs
from typing import Any

from .alg_registry import DEFAULT_ALGORITHM, SignatureAlgorithm, resolve_algorithm
from ..errors import ConfigurationError, DecodingError, MessageEncodingError

DEFAULT_CHARSET = "UTF-8"


def lookup_charset(charset: str) -> str:
    """Return the Python codec name for a charset label such as "UTF-8"."""
    try:
        name = codecs.lookup(charset).name
        # bytes-to-bytes codecs such as "base64" or "zlib" cannot encode str
        "".encode(name)
    except (LookupError, TypeError) as e:
        raise ConfigurationError(f"unknown charset: {charset!r}") from e
    return name


def decode_signature(signature_b64: str) -> bytes:
    try:
        return base64.b64decode("".join(signature_b64.split()), validate=True)
    except (binascii.Error, ValueError, AttributeError, TypeError) as e:
        raise DecodingError("signature is not valid base64") from e


class SignatureVerifier:
    __slots__ = ("_public_key", "_algorithm", "_charset", "_codec")

    def __init__(self, public_key: Any, algorithm: str = DEFAULT_ALGORITHM, charset: str = DEFAULT_CHARSET):
        alg = resolve_algorithm(algorithm)
        alg.check_key(public_key)
        object.__setattr__(self, "_codec", lookup_charset(charset))
        object.__setattr__(self, "_public_key", public_key)
        object.__setattr__(self, "_algorithm", alg)
        object.__setattr__(self, "_charset", charset)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def public_key(self) -> Any:
        return self._public_key

    @property
    def algorithm(self) -> str:
        return self._algorithm.name

    @property
    def charset(self) -> str:
        return self._charset

    def verify(self, message: str, signature_b64: str) -> bool:
        """Check a base64 signature over message.

        Returns False only when the signature does not match. Malformed base64
        raises DecodingError and an unencodable message raises
        MessageEncodingError.
        """
        try:
            msg_bytes = message.encode(self._codec)
        except UnicodeEncodeError as e:
            raise MessageEncodingError(f"message cannot be encoded as {self._charset}") from e
        sig_bytes = decode_signature(signature_b64)
        alg: SignatureAlgorithm = self._algorithm
        return alg.verify(self._public_key, msg_bytes, sig_bytes)

    def __repr__(self) -> str:
        return f"SignatureVerifier(algorithm={self.algorithm!r}, charset={self._charset!r})"


__all__ = ["SignatureVerifier", "decode_signature", "lookup_charset", "DEFAULT_CHARSET"]

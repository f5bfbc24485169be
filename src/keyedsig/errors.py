"""Exception types raised by keyedsig.

Every error derives from SignatureError so callers can catch the whole family,
while each one also subclasses the closest builtin (KeyError, ValueError,
TypeError) for code that already handles those.

A verification that runs to completion returns a bool. These exceptions mean
the check could not be performed at all and are never turned into False.
"""
from __future__ import annotations


class SignatureError(Exception):
    """Base class for all keyedsig failures."""


class KeyNotFoundError(SignatureError, KeyError):
    """Raised when a key id has no entry in the configured public key mapping."""

    def __init__(self, key_id: str):
        self.key_id = key_id
        super().__init__(f"public key not found: key_id={key_id}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return self.args[0]


class DecodingError(SignatureError, ValueError):
    """Raised when the signature text is not valid base64."""


class MessageEncodingError(SignatureError, ValueError):
    """Raised when the message cannot be encoded with the configured charset."""


class UnsupportedAlgorithmError(SignatureError, ValueError):
    """Raised for a signature algorithm name that is not recognised."""

    def __init__(self, algorithm: str):
        self.algorithm = algorithm
        super().__init__(f"unsupported signature algorithm: {algorithm}")


class InvalidKeyError(SignatureError, TypeError):
    """Raised when a key object does not fit the signature algorithm."""


class ConfigurationError(SignatureError, ValueError):
    """Raised for an invalid registry configuration."""


__all__ = [
    "SignatureError",
    "KeyNotFoundError",
    "DecodingError",
    "MessageEncodingError",
    "UnsupportedAlgorithmError",
    "InvalidKeyError",
    "ConfigurationError",
]

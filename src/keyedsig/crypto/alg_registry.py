"""Algorithm registry for keyed signature verification.

Algorithm names follow the JCA convention used by the systems that produce
these signatures ("<digest>with<scheme>"), matched case-insensitively:

  - RSA PKCS#1 v1.5: MD5withRSA, SHA1withRSA, SHA224withRSA, SHA256withRSA,
    SHA384withRSA, SHA512withRSA
  - RSA-PSS: SHA256withRSA/PSS, SHA384withRSA/PSS, SHA512withRSA/PSS
    (MGF1 over the same digest, salt length equal to the digest length)
  - ECDSA: SHA1withECDSA, SHA256withECDSA, SHA384withECDSA, SHA512withECDSA
    (DER encoded signatures)
  - DSA: SHA1withDSA, SHA256withDSA (DER encoded signatures)
  - EdDSA: Ed25519, Ed448

The registry exposes:
  resolve_algorithm(name) -> SignatureAlgorithm
  SignatureAlgorithm.check_key(public_key) -> None, raises InvalidKeyError
  SignatureAlgorithm.verify(public_key, message, signature) -> bool

Only cryptography's InvalidSignature becomes False. Everything else that
prevents the check from running is raised.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import dsa, ec, ed448, ed25519, padding, rsa

from ..errors import InvalidKeyError, UnsupportedAlgorithmError

DEFAULT_ALGORITHM = "SHA1withRSA"

# (public_key, signature, message) -> None, raises InvalidSignature on mismatch
VerifyFn = Callable[[Any, bytes, bytes], None]


@dataclass(frozen=True)
class SignatureAlgorithm:
    name: str
    family: str
    key_types: Tuple[type, ...]
    verify_fn: VerifyFn

    def check_key(self, public_key: Any) -> None:
        if not isinstance(public_key, self.key_types):
            raise InvalidKeyError(
                f"{self.name} requires a {self.family} public key, got {type(public_key).__name__}"
            )

    def verify(self, public_key: Any, message: bytes, signature: bytes) -> bool:
        self.check_key(public_key)
        try:
            self.verify_fn(public_key, signature, message)
        except InvalidSignature:
            return False
        except UnsupportedAlgorithm as e:
            # digest or curve not available in the linked OpenSSL
            raise UnsupportedAlgorithmError(self.name) from e
        return True


def _rsa_pkcs1(digest: Callable[[], hashes.HashAlgorithm]) -> VerifyFn:
    def _verify(pk, sig, msg):
        pk.verify(sig, msg, padding.PKCS1v15(), digest())
    return _verify


def _rsa_pss(digest: Callable[[], hashes.HashAlgorithm]) -> VerifyFn:
    def _verify(pk, sig, msg):
        h = digest()
        pk.verify(sig, msg, padding.PSS(mgf=padding.MGF1(h), salt_length=h.digest_size), h)
    return _verify


def _ecdsa(digest: Callable[[], hashes.HashAlgorithm]) -> VerifyFn:
    def _verify(pk, sig, msg):
        pk.verify(sig, msg, ec.ECDSA(digest()))
    return _verify


def _dsa(digest: Callable[[], hashes.HashAlgorithm]) -> VerifyFn:
    def _verify(pk, sig, msg):
        pk.verify(sig, msg, digest())
    return _verify


def _eddsa(pk, sig, msg):
    pk.verify(sig, msg)


_RSA = ("RSA", (rsa.RSAPublicKey,))
_EC = ("EC", (ec.EllipticCurvePublicKey,))
_DSA = ("DSA", (dsa.DSAPublicKey,))

_ALGORITHMS: List[SignatureAlgorithm] = [
    SignatureAlgorithm("MD5withRSA", *_RSA, _rsa_pkcs1(hashes.MD5)),
    SignatureAlgorithm("SHA1withRSA", *_RSA, _rsa_pkcs1(hashes.SHA1)),
    SignatureAlgorithm("SHA224withRSA", *_RSA, _rsa_pkcs1(hashes.SHA224)),
    SignatureAlgorithm("SHA256withRSA", *_RSA, _rsa_pkcs1(hashes.SHA256)),
    SignatureAlgorithm("SHA384withRSA", *_RSA, _rsa_pkcs1(hashes.SHA384)),
    SignatureAlgorithm("SHA512withRSA", *_RSA, _rsa_pkcs1(hashes.SHA512)),
    SignatureAlgorithm("SHA256withRSA/PSS", *_RSA, _rsa_pss(hashes.SHA256)),
    SignatureAlgorithm("SHA384withRSA/PSS", *_RSA, _rsa_pss(hashes.SHA384)),
    SignatureAlgorithm("SHA512withRSA/PSS", *_RSA, _rsa_pss(hashes.SHA512)),
    SignatureAlgorithm("SHA1withECDSA", *_EC, _ecdsa(hashes.SHA1)),
    SignatureAlgorithm("SHA256withECDSA", *_EC, _ecdsa(hashes.SHA256)),
    SignatureAlgorithm("SHA384withECDSA", *_EC, _ecdsa(hashes.SHA384)),
    SignatureAlgorithm("SHA512withECDSA", *_EC, _ecdsa(hashes.SHA512)),
    SignatureAlgorithm("SHA1withDSA", *_DSA, _dsa(hashes.SHA1)),
    SignatureAlgorithm("SHA256withDSA", *_DSA, _dsa(hashes.SHA256)),
    SignatureAlgorithm("Ed25519", "Ed25519", (ed25519.Ed25519PublicKey,), _eddsa),
    SignatureAlgorithm("Ed448", "Ed448", (ed448.Ed448PublicKey,), _eddsa),
]

_BY_NAME: Dict[str, SignatureAlgorithm] = {a.name.lower(): a for a in _ALGORITHMS}


def resolve_algorithm(name: str) -> SignatureAlgorithm:
    if not isinstance(name, str):
        raise UnsupportedAlgorithmError(repr(name))
    alg = _BY_NAME.get(name.strip().lower())
    if alg is None:
        raise UnsupportedAlgorithmError(name)
    return alg


def supported_algorithms() -> List[str]:
    return sorted(a.name for a in _ALGORITHMS)


__all__ = ["SignatureAlgorithm", "resolve_algorithm", "supported_algorithms", "DEFAULT_ALGORITHM"]

import pytest

from cryptography.exceptions import UnsupportedAlgorithm

from keyedsig.crypto.alg_registry import SignatureAlgorithm, resolve_algorithm, supported_algorithms
from keyedsig.crypto.verify import SignatureVerifier
from keyedsig.errors import InvalidKeyError, UnsupportedAlgorithmError

from signing import dsa_key, ec_key, ed448_key, ed25519_key, flip_bit, rsa_key, sign

CASES = [
    ("SHA1withRSA", lambda: rsa_key("a")),
    ("SHA256withRSA", lambda: rsa_key("a")),
    ("SHA512withRSA", lambda: rsa_key("a")),
    ("SHA256withRSA/PSS", lambda: rsa_key("a")),
    ("SHA256withECDSA", ec_key),
    ("SHA256withDSA", dsa_key),
    ("Ed25519", ed25519_key),
    ("Ed448", ed448_key),
]


@pytest.mark.parametrize("alg,key", CASES)
def test_algorithm_accepts_valid_and_rejects_tampered(alg, key):
    sk = key()
    v = SignatureVerifier(sk.public_key(), algorithm=alg)
    sig = sign(alg, sk, "payload")
    assert v.verify("payload", sig) is True
    assert v.verify("payload.", sig) is False
    assert v.verify("payload", flip_bit(sig, 5)) is False


def test_names_are_case_insensitive():
    assert resolve_algorithm("sha256withrsa").name == "SHA256withRSA"
    assert resolve_algorithm(" ED25519 ").name == "Ed25519"


def test_unknown_name():
    with pytest.raises(UnsupportedAlgorithmError):
        resolve_algorithm("SHA3withRSA")
    with pytest.raises(UnsupportedAlgorithmError):
        resolve_algorithm(None)  # type: ignore[arg-type]


def test_supported_algorithms_listing():
    names = supported_algorithms()
    assert names == sorted(names)
    assert "SHA1withRSA" in names
    assert "SHA256withRSA/PSS" in names


def test_check_key_reports_family():
    with pytest.raises(InvalidKeyError, match="EC public key"):
        resolve_algorithm("SHA256withECDSA").check_key(rsa_key("a").public_key())


def test_pss_signature_does_not_verify_as_pkcs1():
    sk = rsa_key("a")
    pss_sig = sign("SHA256withRSA/PSS", sk, "payload")
    v = SignatureVerifier(sk.public_key(), algorithm="SHA256withRSA")
    assert v.verify("payload", pss_sig) is False


def test_backend_unsupported_digest_is_library_error():
    def no_backend(pk, sig, msg):
        raise UnsupportedAlgorithm("digest not available")

    alg = SignatureAlgorithm("SHA1withRSA", "RSA", resolve_algorithm("SHA1withRSA").key_types, no_backend)
    with pytest.raises(UnsupportedAlgorithmError) as exc:
        alg.verify(rsa_key("a").public_key(), b"payload", b"sig")
    assert exc.value.algorithm == "SHA1withRSA"
    assert isinstance(exc.value.__cause__, UnsupportedAlgorithm)

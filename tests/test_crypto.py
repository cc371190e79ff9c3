"""Usage attestation signatures."""

import pytest
import sr25519
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from ledgerlens.core.crypto import (
    AttestationVerifier,
    SignatureScheme,
    UsageAttestation,
    decode_signature,
    verify,
)
from ledgerlens.domain.common.exceptions import VerificationError
from ledgerlens.domain.common.identity import Identity

from .support import ALICE_HEX, ALICE_SS58


@pytest.fixture(scope="module")
def sr_keypair():
    return sr25519.pair_from_seed(bytes(range(32)))


@pytest.fixture(scope="module")
def sr_identity(sr_keypair):
    return Identity(sr_keypair[0])


def _flip(signature: bytes, index: int = 0) -> bytes:
    mutated = bytearray(signature)
    mutated[index] ^= 0x01
    return bytes(mutated)


def test_identity_ss58_round_trip():
    alice = Identity.from_ss58(ALICE_SS58)

    assert alice.hex() == ALICE_HEX
    assert alice.to_ss58(42) == ALICE_SS58
    assert Identity.parse(ALICE_HEX) == alice


def test_identity_rejects_bad_checksum():
    tampered = ALICE_SS58[:-1] + ("Z" if ALICE_SS58[-1] != "Z" else "Y")

    with pytest.raises(ValueError):
        Identity.from_ss58(tampered)


def test_sr25519_signature_verifies(sr_keypair, sr_identity):
    signature = sr25519.sign(sr_keypair, b"abc")

    assert verify(b"abc", sr_identity, signature, b"substrate") is True


def test_sr25519_flipped_byte_fails(sr_keypair, sr_identity):
    signature = sr25519.sign(sr_keypair, b"abc")

    assert verify(b"abc", sr_identity, _flip(signature), b"substrate") is False


def test_sr25519_other_payload_fails(sr_keypair, sr_identity):
    signature = sr25519.sign(sr_keypair, b"abc")

    assert verify(b"abd", sr_identity, signature) is False


def test_signer_given_as_address_and_signature_as_hex(sr_keypair, sr_identity):
    signature = sr25519.sign(sr_keypair, b'{"calls": 3}')

    assert verify('{"calls": 3}', sr_identity.to_ss58(), "0x" + signature.hex()) is True
    assert verify('{"calls": 3}', sr_identity.to_ss58(), signature.hex()) is True


def test_malformed_signature_is_an_error(sr_identity):
    with pytest.raises(VerificationError, match="hex"):
        verify(b"abc", sr_identity, "0xnot-hex")
    with pytest.raises(VerificationError, match="64 bytes"):
        verify(b"abc", sr_identity, "0x" + "00" * 10)


def test_malformed_address_is_an_error(sr_keypair):
    signature = sr25519.sign(sr_keypair, b"abc")

    with pytest.raises(VerificationError, match="SS58"):
        verify(b"abc", "definitely-not-an-address", signature)


def test_unsupported_context_is_an_error(sr_keypair, sr_identity):
    signature = sr25519.sign(sr_keypair, b"abc")

    with pytest.raises(VerificationError, match="context"):
        verify(b"abc", sr_identity, signature, b"other")


def test_unknown_scheme_is_an_error(sr_keypair, sr_identity):
    signature = sr25519.sign(sr_keypair, b"abc")

    with pytest.raises(VerificationError, match="scheme"):
        verify(b"abc", sr_identity, signature, scheme="ecdsa")


def test_ed25519_scheme():
    private_key = Ed25519PrivateKey.generate()
    signer = Identity(private_key.public_key().public_bytes_raw())
    signature = private_key.sign(b"abc")

    assert verify(b"abc", signer, signature, scheme="ed25519") is True
    assert verify(b"abc", signer, _flip(signature), scheme="ed25519") is False


def test_verifier_attestation(sr_keypair, sr_identity):
    verifier = AttestationVerifier()
    attestation = UsageAttestation(
        payload=b"usage",
        signer=sr_identity,
        signature=sr25519.sign(sr_keypair, b"usage"),
        scheme=SignatureScheme.SR25519,
    )

    assert verifier.verify_attestation(attestation) is True


def test_decode_signature_accepts_bytes():
    assert decode_signature(bytes(64)) == bytes(64)

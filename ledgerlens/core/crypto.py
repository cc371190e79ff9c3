"""Detached-signature verification for usage attestations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Union

import sr25519
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from ledgerlens.domain.common.exceptions import VerificationError
from ledgerlens.domain.common.identity import Identity

logger = logging.getLogger(__name__)

SIGNATURE_LENGTH = 64
SUBSTRATE_CONTEXT = b"substrate"


class SignatureScheme(str, Enum):
    SR25519 = "sr25519"
    ED25519 = "ed25519"


@dataclass(frozen=True, slots=True)
class UsageAttestation:
    payload: bytes
    signer: Identity
    signature: bytes
    scheme: SignatureScheme = SignatureScheme.SR25519


def decode_signature(signature: Union[str, bytes]) -> bytes:
    """Accept raw bytes or hex text with an optional ``0x`` prefix."""
    if isinstance(signature, (bytes, bytearray)):
        raw = bytes(signature)
    elif isinstance(signature, str):
        text = signature[2:] if signature.startswith(("0x", "0X")) else signature
        try:
            raw = bytes.fromhex(text)
        except ValueError as exc:
            raise VerificationError("signature is not valid hex") from exc
    else:
        raise VerificationError("signature must be hex text or bytes")
    if len(raw) != SIGNATURE_LENGTH:
        raise VerificationError(f"signature must be {SIGNATURE_LENGTH} bytes, got {len(raw)}")
    return raw


def decode_signer(signer: Union[str, Identity]) -> Identity:
    if isinstance(signer, Identity):
        return signer
    if not isinstance(signer, str):
        raise VerificationError("signer address must be a string")
    try:
        return Identity.from_ss58(signer)
    except ValueError as exc:
        raise VerificationError(f"invalid SS58 address: {signer!r}") from exc


def parse_scheme(scheme: Union[str, SignatureScheme, None]) -> SignatureScheme:
    if scheme is None:
        return SignatureScheme.SR25519
    try:
        return SignatureScheme(scheme)
    except ValueError as exc:
        raise VerificationError(f"unsupported signature scheme: {scheme!r}") from exc


def _verify_sr25519(payload: bytes, public_key: bytes, signature: bytes, context: bytes) -> bool:
    # The sr25519 bindings sign and verify under the fixed "substrate" context.
    if context != SUBSTRATE_CONTEXT:
        raise VerificationError(f"unsupported signing context: {context!r}")
    try:
        return bool(sr25519.verify(signature, payload, public_key))
    except (ValueError, TypeError) as exc:
        raise VerificationError("malformed sr25519 signature or public key") from exc


def _verify_ed25519(payload: bytes, public_key: bytes, signature: bytes) -> bool:
    try:
        key = Ed25519PublicKey.from_public_bytes(public_key)
    except ValueError as exc:
        raise VerificationError("malformed ed25519 public key") from exc
    try:
        key.verify(signature, payload)
    except InvalidSignature:
        return False
    return True


def verify(
    payload: Union[bytes, str],
    signer: Union[str, Identity],
    signature: Union[str, bytes],
    context: bytes = SUBSTRATE_CONTEXT,
    scheme: Union[str, SignatureScheme, None] = SignatureScheme.SR25519,
) -> bool:
    """Check a detached signature over ``payload``.

    Returns False when a well-formed signature does not match. Raises
    VerificationError when the signature, the address, the scheme or the
    signing context cannot be used at all.
    """
    message = payload.encode("utf-8") if isinstance(payload, str) else bytes(payload)
    identity = decode_signer(signer)
    raw_signature = decode_signature(signature)
    resolved = parse_scheme(scheme)
    if resolved is SignatureScheme.ED25519:
        valid = _verify_ed25519(message, identity.raw, raw_signature)
    else:
        valid = _verify_sr25519(message, identity.raw, raw_signature, context)
    logger.debug("Verified %s signature from %s: %s", resolved.value, identity.hex(), valid)
    return valid


class AttestationVerifier:
    """Verifier bound to the configured signing context and default scheme."""

    def __init__(
        self,
        context: bytes = SUBSTRATE_CONTEXT,
        default_scheme: SignatureScheme = SignatureScheme.SR25519,
    ) -> None:
        self._context = context
        self._default_scheme = default_scheme

    @property
    def default_scheme(self) -> SignatureScheme:
        return self._default_scheme

    def verify(
        self,
        payload: Union[bytes, str],
        signer: Union[str, Identity],
        signature: Union[str, bytes],
        scheme: Union[str, SignatureScheme, None] = None,
    ) -> bool:
        return verify(payload, signer, signature, self._context, scheme or self._default_scheme)

    def verify_attestation(self, attestation: UsageAttestation) -> bool:
        return self.verify(attestation.payload, attestation.signer, attestation.signature, attestation.scheme)


__all__ = [
    "AttestationVerifier",
    "SignatureScheme",
    "UsageAttestation",
    "decode_signature",
    "decode_signer",
    "parse_scheme",
    "verify",
]

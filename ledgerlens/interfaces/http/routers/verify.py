"""Usage attestation verification endpoint."""

from fastapi import APIRouter, Depends

from ledgerlens.core.crypto import AttestationVerifier, parse_scheme
from ledgerlens.interfaces.http.deps import api_version, get_verifier
from ledgerlens.schemas import (
    ErrorResponse,
    UsageVerificationRequest,
    UsageVerificationResponse,
    VerificationErrorResponse,
)

router = APIRouter(
    dependencies=[Depends(api_version)],
    responses={
        400: {"model": VerificationErrorResponse, "description": "Malformed signature, address or scheme"},
        404: {"model": ErrorResponse, "description": "Unknown API version"},
    },
)


@router.post("/verify", response_model=UsageVerificationResponse, summary="Verify a server signature over usage data")
async def verify_signature(
    payload: UsageVerificationRequest,
    verifier: AttestationVerifier = Depends(get_verifier),
) -> UsageVerificationResponse:
    scheme = parse_scheme(payload.server.scheme or verifier.default_scheme)
    valid = verifier.verify(
        payload.data,
        payload.server.address,
        payload.server.signature,
        scheme=scheme,
    )
    return UsageVerificationResponse(valid=valid, scheme=scheme.value, address=payload.server.address)

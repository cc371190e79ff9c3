"""Pydantic schemas used across the HTTP surface."""
from typing import Optional

from pydantic import BaseModel, Field


class ModuleResponse(BaseModel):
    owner: str
    id: int
    name: str
    data: Optional[str] = None
    url: Optional[str] = None
    # u128 amounts exceed JSON's safe integer range, so they travel as strings.
    collateral: str
    take: int
    tier: Optional[str] = None
    created_at: int
    last_updated: int


class ServerSignature(BaseModel):
    scheme: Optional[str] = None
    address: str = Field(..., min_length=1)
    signature: str = Field(..., min_length=1)


class UsageVerificationRequest(BaseModel):
    data: str
    server: ServerSignature


class UsageVerificationResponse(BaseModel):
    valid: bool
    scheme: str
    address: Optional[str] = None


class VerificationErrorResponse(BaseModel):
    valid: bool = False
    error: str


class ErrorResponse(BaseModel):
    error: str

"""Shared abstractions used across domain modules."""

from .exceptions import (
    ChainModuleNotFoundError,
    DecodeError,
    LedgerLensError,
    SnapshotIOError,
    TransportError,
    VerificationError,
)
from .identity import Identity
from .repository import LedgerReader, StorageEntry, StorageNamespace

__all__ = [
    "ChainModuleNotFoundError",
    "DecodeError",
    "Identity",
    "LedgerLensError",
    "LedgerReader",
    "SnapshotIOError",
    "StorageEntry",
    "StorageNamespace",
    "TransportError",
    "VerificationError",
]

"""Error kinds shared by the ledger, snapshot and attestation layers."""


class LedgerLensError(Exception):
    """Base class for all errors raised by the core."""


class TransportError(LedgerLensError):
    """Raised when the ledger node cannot be reached or a request fails."""


class DecodeError(LedgerLensError):
    """Raised when a value tree does not match the expected layout."""

    def __init__(self, reason: str, path: str = "") -> None:
        self.reason = reason
        self.path = path
        super().__init__(f"{path}: {reason}" if path else reason)


class SnapshotIOError(LedgerLensError):
    """Raised when a snapshot file cannot be read, parsed or written."""


class VerificationError(LedgerLensError):
    """Raised for malformed attestation input (signature, address, context)."""


class ChainModuleNotFoundError(LedgerLensError):
    """Raised when the requested module id is not present in storage."""

"""Simple dependency container for wiring core services."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from ledgerlens.core.config import Settings, get_settings
from ledgerlens.core.crypto import AttestationVerifier, SignatureScheme
from ledgerlens.infrastructure.ledger import LedgerSession, SubstrateLedgerReader
from ledgerlens.infrastructure.snapshots import JsonSnapshotRepository


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    session: LedgerSession
    snapshots: JsonSnapshotRepository
    verifier: AttestationVerifier

    @classmethod
    def from_settings(cls, settings: Settings) -> "ApplicationContainer":
        return cls(
            settings=settings,
            session=LedgerSession(settings.chain),
            snapshots=JsonSnapshotRepository(settings.snapshot_dir, settings.ss58_format),
            verifier=AttestationVerifier(
                context=settings.signing_context,
                default_scheme=SignatureScheme(settings.signatures.default_scheme),
            ),
        )

    def ledger_reader(self) -> SubstrateLedgerReader:
        return SubstrateLedgerReader(self.session)

    async def shutdown(self) -> None:
        """Release infrastructure singletons (ledger connection)."""
        await self.session.close()


@lru_cache()
def get_container() -> ApplicationContainer:
    return ApplicationContainer.from_settings(get_settings())


__all__ = ["ApplicationContainer", "get_container"]

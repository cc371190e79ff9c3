"""Fetch -> aggregate pipeline over the snapshot files.

The fetch phase and the aggregate phase only meet through the snapshot
files, so either can be re-run on its own.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..accounts.service import AccountService
from ..balances.models import BalanceTotals
from ..balances.service import aggregate
from ..common.repository import LedgerReader
from ..stake.service import StakeService
from .repository import SnapshotRepository

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FetchSummary:
    accounts: int
    accounts_skipped: int
    stake_edges: int
    stake_skipped: int


class SnapshotService:
    def __init__(self, reader: Optional[LedgerReader], repository: SnapshotRepository) -> None:
        self._reader = reader
        self._repository = repository

    @property
    def repository(self) -> SnapshotRepository:
        return self._repository

    def _require_reader(self) -> LedgerReader:
        if self._reader is None:
            raise RuntimeError("fetch phase requires a ledger reader")
        return self._reader

    async def fetch(self, block_hash: Optional[str] = None) -> FetchSummary:
        """Snapshot accounts and stake edges at one block into their files.

        Both collections are read before either file is written, so a failed
        read leaves the previous pair of snapshots untouched.
        """
        reader = self._require_reader()
        pinned = await reader.resolve_block_hash(block_hash)
        logger.info("Fetching snapshots at block %s", pinned)
        accounts = await AccountService(reader).fetch_accounts(pinned)
        stake = await StakeService(reader).fetch_stake(pinned)
        await self._repository.save_accounts(accounts.records)
        await self._repository.save_stake(stake.records)
        summary = FetchSummary(
            accounts=len(accounts.records),
            accounts_skipped=len(accounts.failures),
            stake_edges=len(stake.records),
            stake_skipped=len(stake.failures),
        )
        logger.info("Fetch complete: %s", summary)
        return summary

    async def aggregate(self) -> BalanceTotals:
        """Aggregate the stored snapshots and persist the totals."""
        accounts = await self._repository.load_accounts()
        stake = await self._repository.load_stake()
        balances = aggregate(accounts, stake)
        await self._repository.save_balances(balances)
        return balances

    async def snap(self, block_hash: Optional[str] = None, *, skip_fetch: bool = False) -> BalanceTotals:
        if not skip_fetch:
            await self.fetch(block_hash)
        return await self.aggregate()

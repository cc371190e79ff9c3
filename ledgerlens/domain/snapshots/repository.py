"""Repository protocol for snapshot persistence."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Protocol, Sequence

from ..accounts.models import AccountRecord
from ..balances.models import BalanceTotals
from ..common.identity import Identity
from ..stake.models import StakeEdge


class SnapshotRepository(Protocol):
    async def save(self, name: str, data: Any) -> Path:
        ...

    async def load(self, name: str) -> Any:
        ...

    async def save_accounts(self, accounts: Iterable[tuple[Identity, AccountRecord]]) -> Path:
        ...

    async def load_accounts(self) -> Sequence[tuple[Identity, AccountRecord]]:
        ...

    async def save_stake(self, edges: Iterable[StakeEdge]) -> Path:
        ...

    async def load_stake(self) -> Sequence[StakeEdge]:
        ...

    async def save_balances(self, balances: BalanceTotals) -> Path:
        ...

    async def load_balances(self) -> BalanceTotals:
        ...

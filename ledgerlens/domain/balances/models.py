"""Domain models for aggregated balances and the derived report."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from ..common.identity import Identity

BalanceTotals = Dict[Identity, int]


@dataclass(frozen=True, slots=True)
class DustSummary:
    threshold: int
    count: int
    total: int


@dataclass(frozen=True, slots=True)
class RankedBalance:
    rank: int
    identity: Identity
    amount: int
    share_percent: float


@dataclass(slots=True)
class BalanceReport:
    total_issuance: int
    holders: int
    dust: DustSummary
    top: list[RankedBalance] = field(default_factory=list)

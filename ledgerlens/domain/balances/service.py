"""Balance aggregation and the statistics derived from it.

Every account balance and every staked unit is counted exactly once and
attributed to the staking identity, so the sum of the aggregated mapping is
the total issuance. Stake received by an identity carries no weight in its
own total.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from ..accounts.models import AccountRecord
from ..common.identity import Identity
from ..stake.models import StakeEdge
from .models import BalanceReport, BalanceTotals, DustSummary, RankedBalance

logger = logging.getLogger(__name__)

EXISTENTIAL_DEPOSIT = 500
TOP_N = 10


def aggregate(
    accounts: Iterable[tuple[Identity, AccountRecord]],
    stake: Iterable[StakeEdge],
) -> BalanceTotals:
    """Merge free+reserved+frozen balances and outgoing stake per identity."""
    totals: BalanceTotals = {}
    edges = 0
    for edge in stake:
        totals[edge.source] = totals.get(edge.source, 0) + edge.amount
        edges += 1
    logger.info("%d stake entries collapsed into %d stakers", edges, len(totals))

    records = 0
    for identity, account in accounts:
        totals[identity] = totals.get(identity, 0) + account.balance.total
        records += 1
    logger.info("%d account records merged into %d balance entries", records, len(totals))
    return totals


def total_issuance(balances: BalanceTotals) -> int:
    return sum(balances.values())


def dust_accounts(balances: BalanceTotals, threshold: int = EXISTENTIAL_DEPOSIT) -> DustSummary:
    """Identities whose aggregated total is strictly below ``threshold``."""
    amounts = [amount for amount in balances.values() if amount < threshold]
    return DustSummary(threshold=threshold, count=len(amounts), total=sum(amounts))


def top_balances(balances: BalanceTotals, n: int = TOP_N) -> list[tuple[Identity, int]]:
    """Largest totals first; equal totals are ordered by identity bytes."""
    ranked = sorted(balances.items(), key=lambda item: (-item[1], item[0]))
    return ranked[:n]


def share_percent(part: int, whole: int) -> float:
    """Percentage of ``whole`` held by ``part``. Raises ZeroDivisionError when whole is 0."""
    return float(part) / float(whole) * 100.0


def to_display(amount: int, decimals: int = 9) -> float:
    return float(amount) / float(10 ** decimals)


def build_report(
    balances: BalanceTotals,
    *,
    threshold: int = EXISTENTIAL_DEPOSIT,
    top_n: int = TOP_N,
    issuance: Optional[int] = None,
) -> BalanceReport:
    issuance = total_issuance(balances) if issuance is None else issuance
    top = [
        RankedBalance(
            rank=index + 1,
            identity=identity,
            amount=amount,
            share_percent=share_percent(amount, issuance) if issuance else 0.0,
        )
        for index, (identity, amount) in enumerate(top_balances(balances, top_n))
    ]
    return BalanceReport(
        total_issuance=issuance,
        holders=len(balances),
        dust=dust_accounts(balances, threshold),
        top=top,
    )

"""Balance aggregation and reporting."""

from .models import BalanceReport, BalanceTotals, DustSummary, RankedBalance
from .service import (
    EXISTENTIAL_DEPOSIT,
    aggregate,
    build_report,
    dust_accounts,
    share_percent,
    to_display,
    top_balances,
    total_issuance,
)

__all__ = [
    "EXISTENTIAL_DEPOSIT",
    "BalanceReport",
    "BalanceTotals",
    "DustSummary",
    "RankedBalance",
    "aggregate",
    "build_report",
    "dust_accounts",
    "share_percent",
    "to_display",
    "top_balances",
    "total_issuance",
]

"""Balance aggregation and derived statistics."""

import random

import pytest

from ledgerlens.domain.accounts import AccountBalance, AccountRecord
from ledgerlens.domain.balances import (
    aggregate,
    build_report,
    dust_accounts,
    share_percent,
    to_display,
    top_balances,
    total_issuance,
)
from ledgerlens.domain.stake import StakeEdge

from .support import identity


def _account(free: int, reserved: int = 0, frozen: int = 0) -> AccountRecord:
    return AccountRecord(
        nonce=0,
        consumers=0,
        providers=1,
        sufficients=0,
        balance=AccountBalance(free=free, reserved=reserved, frozen=frozen, flags=0),
    )


def test_stake_counts_for_the_staker_only():
    id1, id2 = identity(1), identity(2)

    balances = aggregate([(id1, _account(100))], [StakeEdge(id1, id2, 50)])

    assert balances == {id1: 150}
    assert id2 not in balances


def test_account_balance_sums_free_reserved_and_frozen():
    id1 = identity(1)

    assert aggregate([(id1, _account(10, 20, 30))], []) == {id1: 60}


def test_staker_without_account_record_still_counted():
    id3, id4 = identity(3), identity(4)

    assert aggregate([], [StakeEdge(id3, id4, 7), StakeEdge(id3, id4, 8)]) == {id3: 15}


def test_aggregate_is_order_independent():
    rng = random.Random(1234)
    accounts = [(identity(i), _account(i * 10, i, i % 3)) for i in range(1, 30)]
    stake = [StakeEdge(identity(rng.randint(1, 40)), identity(rng.randint(1, 40)), rng.randint(0, 10**20)) for _ in range(60)]

    expected = aggregate(accounts, stake)
    for _ in range(5):
        shuffled_accounts = accounts[:]
        shuffled_stake = stake[:]
        rng.shuffle(shuffled_accounts)
        rng.shuffle(shuffled_stake)
        assert aggregate(shuffled_accounts, shuffled_stake) == expected


def test_issuance_equals_balances_plus_stake():
    rng = random.Random(99)
    accounts = [(identity(i), _account(rng.randint(0, 2**63), rng.randint(0, 2**63), rng.randint(0, 2**63))) for i in range(20)]
    stake = [StakeEdge(identity(rng.randint(0, 30)), identity(rng.randint(0, 30)), rng.randint(0, 2**100)) for _ in range(40)]

    balances = aggregate(accounts, stake)

    expected = sum(record.balance.total for _, record in accounts) + sum(edge.amount for edge in stake)
    assert total_issuance(balances) == expected


def test_dust_accounts_below_threshold():
    balances = {identity(1): 499, identity(2): 500, identity(3): 0, identity(4): 10_000}

    dust = dust_accounts(balances, threshold=500)

    assert dust.count == 2
    assert dust.total == 499
    assert dust.threshold == 500


def test_dust_accounts_empty():
    dust = dust_accounts({}, threshold=500)

    assert (dust.count, dust.total) == (0, 0)


def test_top_balances_descending():
    a, b, c = identity(10), identity(11), identity(12)

    ranked = top_balances({a: 300, b: 100, c: 500}, 2)

    assert [who for who, _ in ranked] == [c, a]


def test_top_balances_ties_are_ordered_by_identity():
    low, high = identity(1), identity(2)

    ranked = top_balances({high: 5, low: 5}, 2)

    assert [who for who, _ in ranked] == [low, high]


def test_share_percent_uses_float_division():
    assert share_percent(1, 3) == pytest.approx(33.3333333)
    assert share_percent(2**127, 2**128) == 50.0
    with pytest.raises(ZeroDivisionError):
        share_percent(1, 0)


def test_to_display_scales_by_decimals():
    assert to_display(1_500_000_000) == 1.5
    assert to_display(25, decimals=1) == 2.5


def test_build_report():
    a, b, c = identity(1), identity(2), identity(3)

    report = build_report({a: 300, b: 100, c: 600}, threshold=150, top_n=2)

    assert report.total_issuance == 1000
    assert report.holders == 3
    assert (report.dust.count, report.dust.total) == (1, 100)
    assert [(entry.rank, entry.identity, entry.amount) for entry in report.top] == [(1, c, 600), (2, a, 300)]
    assert report.top[0].share_percent == pytest.approx(60.0)


def test_build_report_with_zero_issuance():
    report = build_report({identity(1): 0})

    assert report.top[0].share_percent == 0.0

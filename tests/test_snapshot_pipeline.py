"""Fetch -> aggregate pipeline and the CLI around it."""

import asyncio
import json

import pytest

from ledgerlens import cli
from ledgerlens.domain.common.exceptions import TransportError
from ledgerlens.domain.common.repository import STAKE_TO, SYSTEM_ACCOUNT, StorageEntry
from ledgerlens.domain.snapshots import SnapshotService
from ledgerlens.infrastructure.snapshots import JsonSnapshotRepository

from .support import FakeLedgerReader, account_entry, account_value, identity, stake_entry


@pytest.fixture()
def reader():
    id1, id2, id3 = identity(1), identity(2), identity(3)
    return FakeLedgerReader(
        entries={
            SYSTEM_ACCOUNT: [
                account_entry(id1, 100),
                StorageEntry(raw_keys=((tuple(range(12)),),), raw_value=account_value(10**9)),
                account_entry(id2, 400, reserved=50),
                account_entry(id3, 1_000_000),
            ],
            STAKE_TO: [
                stake_entry(id1, id2, 50),
                stake_entry(id3, id2, 2_000),
                StorageEntry(raw_keys=((tuple(range(4)),), (tuple(range(4)),)), raw_value=5),
            ],
        }
    )


def test_fetch_writes_snapshots_and_skips_bad_records(reader, tmp_path):
    repository = JsonSnapshotRepository(tmp_path)
    service = SnapshotService(reader, repository)

    summary = asyncio.run(service.fetch("0xpinned"))

    assert (summary.accounts, summary.accounts_skipped) == (3, 1)
    assert (summary.stake_edges, summary.stake_skipped) == (2, 1)
    assert reader.block_hashes == ["0xpinned", "0xpinned"]
    assert len(json.loads((tmp_path / "accounts.json").read_text(encoding="utf-8"))) == 3
    assert len(json.loads((tmp_path / "stake.json").read_text(encoding="utf-8"))) == 2


def test_snap_aggregates_and_persists_totals(reader, tmp_path):
    repository = JsonSnapshotRepository(tmp_path)
    service = SnapshotService(reader, repository)

    balances = asyncio.run(service.snap())

    assert balances == {identity(1): 150, identity(2): 450, identity(3): 1_002_000}
    assert asyncio.run(repository.load_balances()) == balances


def test_aggregate_phase_runs_without_reader(reader, tmp_path):
    repository = JsonSnapshotRepository(tmp_path)
    asyncio.run(SnapshotService(reader, repository).fetch())

    balances = asyncio.run(SnapshotService(None, repository).snap(skip_fetch=True))

    assert sum(balances.values()) == 100 + 450 + 1_000_000 + 50 + 2_000


def test_transport_failure_keeps_previous_snapshot(reader, tmp_path):
    repository = JsonSnapshotRepository(tmp_path)
    asyncio.run(SnapshotService(reader, repository).fetch())
    before = (tmp_path / "accounts.json").read_text(encoding="utf-8")

    broken = FakeLedgerReader(entries={SYSTEM_ACCOUNT: [account_entry(identity(9), 1)]}, fail_with=TransportError("lost"))
    with pytest.raises(TransportError):
        asyncio.run(SnapshotService(broken, repository).fetch())

    assert (tmp_path / "accounts.json").read_text(encoding="utf-8") == before


def test_fetch_without_block_hash_pins_one_block(reader, tmp_path):
    asyncio.run(SnapshotService(reader, JsonSnapshotRepository(tmp_path)).fetch())

    assert reader.block_hashes == ["0xhead", "0xhead"]


def test_failed_stake_read_leaves_both_snapshots_untouched(reader, tmp_path):
    repository = JsonSnapshotRepository(tmp_path)
    asyncio.run(SnapshotService(reader, repository).fetch())
    before = {name: (tmp_path / name).read_text(encoding="utf-8") for name in ("accounts.json", "stake.json")}

    broken = FakeLedgerReader(
        entries={SYSTEM_ACCOUNT: [account_entry(identity(1), 999)]},
        fail_with=TransportError("lost"),
        fail_on=STAKE_TO,
    )
    with pytest.raises(TransportError):
        asyncio.run(SnapshotService(broken, repository).fetch())

    after = {name: (tmp_path / name).read_text(encoding="utf-8") for name in before}
    assert after == before


def test_cli_aggregates_existing_snapshots_and_prints_report(reader, tmp_path, capsys):
    repository = JsonSnapshotRepository(tmp_path)
    asyncio.run(SnapshotService(reader, repository).fetch())

    code = cli.main(["snap", "--skip-fetch", "--snapshot-dir", str(tmp_path), "-r", "--threshold", "200", "--top", "2"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Total Issuance: 0.0010026" in out
    assert "1 nonexistent accounts totalling 1.5e-07" in out
    lines = out.splitlines()
    top_index = lines.index("Top 2 highest total balances:")
    assert lines[top_index + 1].startswith(identity(3).to_ss58())
    assert lines[top_index + 1].endswith("(99.9402%)")


def test_cli_reports_cause_chain_on_failure(tmp_path, capsys):
    code = cli.main(["snap", "--skip-fetch", "--snapshot-dir", str(tmp_path / "empty")])

    err = capsys.readouterr().err
    assert code == 1
    assert "error: snapshot" in err
    assert "caused by: FileNotFoundError" in err

"""Command line entry point.

Examples:
    ledgerlens snap --show-report
    ledgerlens snap --skip-fetch --snapshot-dir ./snapshots -r
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO

from ledgerlens import __version__
from ledgerlens.core.config import Settings, get_settings
from ledgerlens.core.container import ApplicationContainer
from ledgerlens.core.log import configure_logging
from ledgerlens.domain.balances import BalanceReport, BalanceTotals, build_report, to_display
from ledgerlens.domain.common.exceptions import LedgerLensError
from ledgerlens.domain.snapshots import SnapshotService


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ledgerlens", description="Chain state snapshot tool")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default=None, help="logging level (default from settings)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    snap = subparsers.add_parser(
        "snap",
        help="snapshot accounts and stake, then aggregate per-identity totals",
    )
    snap.add_argument("-r", "--show-report", action="store_true", help="print issuance, dust and top balances")
    snap.add_argument("--skip-fetch", action="store_true", help="aggregate the existing snapshot files only")
    snap.add_argument("--url", default=None, help="ledger node websocket url")
    snap.add_argument("--snapshot-dir", type=Path, default=None, help="directory holding the JSON snapshots")
    snap.add_argument("--block-hash", default=None, help="read state at this block instead of the head")
    snap.add_argument("--finalized", action="store_true", help="read state at the finalized head")
    snap.add_argument("--top", type=int, default=None, help="number of balances in the ranking")
    snap.add_argument("--threshold", type=int, default=None, help="existential deposit for dust accounts")
    return parser


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    chain = settings.chain.model_copy(
        update={
            key: value
            for key, value in {
                "url": args.url,
                "block_hash": args.block_hash,
                "finalized": True if args.finalized else None,
            }.items()
            if value is not None
        }
    )
    snapshots = settings.snapshots
    if args.snapshot_dir is not None:
        snapshots = snapshots.model_copy(update={"directory": args.snapshot_dir})
    report = settings.report.model_copy(
        update={
            key: value
            for key, value in {"top_n": args.top, "existential_deposit": args.threshold}.items()
            if value is not None
        }
    )
    return settings.model_copy(update={"chain": chain, "snapshots": snapshots, "report": report})


def render_report(report: BalanceReport, settings: Settings, out: TextIO) -> None:
    decimals = settings.report.token_decimals
    ss58_format = settings.ss58_format
    print(f"Total Issuance: {to_display(report.total_issuance, decimals)}", file=out)
    print(f"Holders: {report.holders}", file=out)
    print(
        f"{report.dust.count} nonexistent accounts totalling {to_display(report.dust.total, decimals)}",
        file=out,
    )
    print(f"Top {len(report.top)} highest total balances:", file=out)
    for entry in report.top:
        print(
            f"{entry.identity.to_ss58(ss58_format)}: {to_display(entry.amount, decimals)} "
            f"({entry.share_percent:.4f}%)",
            file=out,
        )


async def run_snap(settings: Settings, *, skip_fetch: bool = False) -> BalanceTotals:
    container = ApplicationContainer.from_settings(settings)
    reader = None if skip_fetch else container.ledger_reader()
    service = SnapshotService(reader, container.snapshots)
    try:
        return await service.snap(skip_fetch=skip_fetch)
    finally:
        await container.shutdown()


def print_cause_chain(exc: BaseException, out: TextIO) -> None:
    print(f"error: {exc}", file=out)
    cause = exc.__cause__ or exc.__context__
    while cause is not None:
        print(f"  caused by: {type(cause).__name__}: {cause}", file=out)
        cause = cause.__cause__ or cause.__context__


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = _apply_overrides(get_settings(), args)
    configure_logging(args.log_level or settings.log_level)

    if args.command == "snap":
        try:
            balances = asyncio.run(run_snap(settings, skip_fetch=args.skip_fetch))
        except LedgerLensError as exc:
            print_cause_chain(exc, sys.stderr)
            return 1
        if args.show_report:
            report = build_report(
                balances,
                threshold=settings.report.existential_deposit,
                top_n=settings.report.top_n,
            )
            render_report(report, settings, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())

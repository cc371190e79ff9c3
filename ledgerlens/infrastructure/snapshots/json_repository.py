"""Flat JSON snapshot files, one per logical collection."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Iterable, List

from ledgerlens.domain.accounts.models import AccountRecord
from ledgerlens.domain.balances.models import BalanceTotals
from ledgerlens.domain.common.exceptions import SnapshotIOError
from ledgerlens.domain.common.identity import DEFAULT_SS58_FORMAT, Identity
from ledgerlens.domain.stake.models import StakeEdge

logger = logging.getLogger(__name__)

ACCOUNTS = "accounts"
STAKE = "stake"
TOTAL_BALANCES = "total_balances"

_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_\-]+$")


def _parse_identity(value: Any, where: str) -> Identity:
    if not isinstance(value, str):
        raise SnapshotIOError(f"{where}: address must be a string")
    try:
        return Identity.parse(value)
    except ValueError as exc:
        raise SnapshotIOError(f"{where}: invalid address {value!r}") from exc


def _parse_amount(value: Any, where: str) -> int:
    if isinstance(value, bool):
        raise SnapshotIOError(f"{where}: amount must be an integer")
    if isinstance(value, str) and value.isdecimal():
        return int(value)
    if isinstance(value, int) and value >= 0:
        return value
    raise SnapshotIOError(f"{where}: amount must be a non-negative integer")


class JsonSnapshotRepository:
    """Loads and persists snapshots under ``<directory>/<name>.json``.

    Writes replace the whole file through a temporary file and ``os.replace``
    so an interrupted write leaves the previous snapshot in place.
    """

    def __init__(self, directory: Path, ss58_format: int = DEFAULT_SS58_FORMAT) -> None:
        self._directory = directory
        self._ss58_format = ss58_format

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, name: str) -> Path:
        if not _NAME_PATTERN.match(name):
            raise SnapshotIOError(f"invalid snapshot name: {name!r}")
        return self._directory / f"{name}.json"

    def _write(self, name: str, data: Any) -> Path:
        target = self.path_for(name)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{name}.", suffix=".tmp", dir=self._directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(data, handle, indent=2, ensure_ascii=False)
                    handle.flush()
                    os.fsync(handle.fileno())
                os.replace(tmp_name, target)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as exc:
            raise SnapshotIOError(f"failed to write snapshot {target}") from exc
        return target

    def _read(self, name: str) -> Any:
        target = self.path_for(name)
        try:
            return json.loads(target.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise SnapshotIOError(f"snapshot {target} does not exist") from exc
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise SnapshotIOError(f"failed to read snapshot {target}") from exc

    async def save(self, name: str, data: Any) -> Path:
        path = await asyncio.to_thread(self._write, name, data)
        logger.info("Saved snapshot %s", path)
        return path

    async def load(self, name: str) -> Any:
        return await asyncio.to_thread(self._read, name)

    async def save_accounts(self, accounts: Iterable[tuple[Identity, AccountRecord]]) -> Path:
        payload = [[identity.to_ss58(self._ss58_format), record.to_mapping()] for identity, record in accounts]
        return await self.save(ACCOUNTS, payload)

    async def load_accounts(self) -> List[tuple[Identity, AccountRecord]]:
        payload = await self.load(ACCOUNTS)
        if not isinstance(payload, list):
            raise SnapshotIOError("accounts snapshot must be an array")
        accounts: List[tuple[Identity, AccountRecord]] = []
        for index, item in enumerate(payload):
            where = f"{ACCOUNTS}[{index}]"
            if not isinstance(item, list) or len(item) != 2:
                raise SnapshotIOError(f"{where}: expected [address, account] pair")
            identity = _parse_identity(item[0], where)
            try:
                record = AccountRecord.from_mapping(item[1])
            except ValueError as exc:
                raise SnapshotIOError(f"{where}: {exc}") from exc
            accounts.append((identity, record))
        return accounts

    async def save_stake(self, edges: Iterable[StakeEdge]) -> Path:
        payload = [
            [edge.source.to_ss58(self._ss58_format), edge.target.to_ss58(self._ss58_format), edge.amount]
            for edge in edges
        ]
        return await self.save(STAKE, payload)

    async def load_stake(self) -> List[StakeEdge]:
        payload = await self.load(STAKE)
        if not isinstance(payload, list):
            raise SnapshotIOError("stake snapshot must be an array")
        edges: List[StakeEdge] = []
        for index, item in enumerate(payload):
            where = f"{STAKE}[{index}]"
            if not isinstance(item, list) or len(item) != 3:
                raise SnapshotIOError(f"{where}: expected [from, to, amount] triple")
            edges.append(
                StakeEdge(
                    source=_parse_identity(item[0], where),
                    target=_parse_identity(item[1], where),
                    amount=_parse_amount(item[2], where),
                )
            )
        return edges

    async def save_balances(self, balances: BalanceTotals) -> Path:
        # Amounts are written as decimal strings so u128 values survive any JSON reader.
        payload = {identity.to_ss58(self._ss58_format): str(amount) for identity, amount in balances.items()}
        return await self.save(TOTAL_BALANCES, payload)

    async def load_balances(self) -> BalanceTotals:
        payload = await self.load(TOTAL_BALANCES)
        if not isinstance(payload, dict):
            raise SnapshotIOError("total_balances snapshot must be an object")
        balances: BalanceTotals = {}
        for address, amount in payload.items():
            where = f"{TOTAL_BALANCES}[{address}]"
            balances[_parse_identity(address, where)] = _parse_amount(amount, where)
        return balances


__all__ = [
    "ACCOUNTS",
    "STAKE",
    "TOTAL_BALANCES",
    "JsonSnapshotRepository",
]

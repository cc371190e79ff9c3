"""Shared builders and fakes for the test suite."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

from ledgerlens.domain.common.identity import Identity
from ledgerlens.domain.common.repository import StorageEntry, StorageNamespace
from ledgerlens.domain.common.value_tree import ValueTree, from_python

ALICE_SS58 = "5GrwvaEF5zXb26Fz9rcQpDWS57CtERHpNehXCPcNoHGKutQY"
ALICE_HEX = "0xd43593c715fdd31c61141abd04a99fd6822c8558854ccde39a5684e7a56da27d"


def identity(seed: int) -> Identity:
    return Identity(bytes([seed]) * 32)


def account_key(who: Identity) -> tuple:
    """Key element shape produced by the node client: ((b0, ..., b31),)."""
    return (tuple(who.raw),)


def account_value(free: int, reserved: int = 0, frozen: int = 0, *, nonce: int = 0, flags: int = 0) -> dict:
    return {
        "nonce": nonce,
        "consumers": 0,
        "providers": 1,
        "sufficients": 0,
        "data": {"free": free, "reserved": reserved, "frozen": frozen, "flags": (flags,)},
    }


def account_entry(who: Identity, free: int, reserved: int = 0, frozen: int = 0) -> StorageEntry:
    return StorageEntry(raw_keys=(account_key(who),), raw_value=account_value(free, reserved, frozen))


def stake_entry(source: Identity, target: Identity, amount: int) -> StorageEntry:
    return StorageEntry(raw_keys=(account_key(source), account_key(target)), raw_value=amount)


def module_value(module_id: int = 7, owner: Optional[Identity] = None, **overrides: Any) -> dict:
    owner = owner or Identity.from_hex(ALICE_HEX)
    value = {
        "owner": account_key(owner),
        "id": module_id,
        "name": tuple(b"weather"),
        "data": None,
        "url": tuple(b"https://weather.example"),
        "collateral": 10**20,
        "take": 5,
        "tier": "Approved",
        "created_at": 10,
        "last_updated": 12,
    }
    value.update(overrides)
    return value


class FakeLedgerReader:
    """In-memory LedgerReader."""

    def __init__(
        self,
        entries: Optional[Dict[StorageNamespace, List[StorageEntry]]] = None,
        lookups: Optional[Dict[Tuple[StorageNamespace, Tuple[Any, ...]], Any]] = None,
        fail_with: Optional[Exception] = None,
        fail_on: Optional[StorageNamespace] = None,
        head: str = "0xhead",
    ) -> None:
        self.entries = entries or {}
        self.lookups = lookups or {}
        self.fail_with = fail_with
        self.fail_on = fail_on
        self.head = head
        self.block_hashes: List[Optional[str]] = []

    async def resolve_block_hash(self, block_hash: Optional[str] = None) -> str:
        return block_hash or self.head

    async def iterate(self, namespace: StorageNamespace, key_prefix: Sequence[Any] = (), *, block_hash=None):
        self.block_hashes.append(block_hash)
        for entry in self.entries.get(namespace, []):
            yield entry
        if self.fail_with is not None and self.fail_on in (None, namespace):
            raise self.fail_with

    async def fetch(self, namespace: StorageNamespace, params: Sequence[Any], *, block_hash=None) -> Optional[ValueTree]:
        if self.fail_with is not None:
            raise self.fail_with
        value = self.lookups.get((namespace, tuple(params)))
        return None if value is None else from_python(value)

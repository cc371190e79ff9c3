"""Account snapshot use cases."""

from __future__ import annotations

from typing import Optional

from ..common.decoding import DecodeBatch, collect_decoded, identity_from_key
from ..common.identity import Identity
from ..common.repository import SYSTEM_ACCOUNT, LedgerReader, StorageEntry
from .models import AccountRecord

AccountEntry = tuple[Identity, AccountRecord]


def decode_account_entry(entry: StorageEntry) -> AccountEntry:
    identity = identity_from_key(entry.key(0), "key[0]")
    return identity, AccountRecord.from_tree(entry.value)


class AccountService:
    """Reads every system account at a single block."""

    def __init__(self, reader: LedgerReader) -> None:
        self._reader = reader

    async def fetch_accounts(self, block_hash: Optional[str] = None) -> DecodeBatch[AccountEntry]:
        entries = self._reader.iterate(SYSTEM_ACCOUNT, block_hash=block_hash)
        return await collect_decoded(entries, decode_account_entry, label="account")

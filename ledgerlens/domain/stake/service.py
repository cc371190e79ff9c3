"""Stake snapshot use cases."""

from __future__ import annotations

from typing import Optional

from ..common.decoding import DecodeBatch, collect_decoded, identity_from_key
from ..common.exceptions import DecodeError
from ..common.repository import STAKE_TO, LedgerReader, StorageEntry
from .models import StakeEdge, decode_stake_amount


def decode_stake_entry(entry: StorageEntry) -> StakeEdge:
    if len(entry.raw_keys) != 2:
        raise DecodeError(f"expected two key elements, found {len(entry.raw_keys)}", "key")
    return StakeEdge(
        source=identity_from_key(entry.key(0), "key[0]"),
        target=identity_from_key(entry.key(1), "key[1]"),
        amount=decode_stake_amount(entry.value),
    )


class StakeService:
    """Reads every ``(staker, module) -> amount`` edge at a single block."""

    def __init__(self, reader: LedgerReader) -> None:
        self._reader = reader

    async def fetch_stake(self, block_hash: Optional[str] = None) -> DecodeBatch[StakeEdge]:
        entries = self._reader.iterate(STAKE_TO, block_hash=block_hash)
        return await collect_decoded(entries, decode_stake_entry, label="stake")

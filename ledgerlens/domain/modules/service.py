"""Module lookup use cases backing the HTTP surface."""

from __future__ import annotations

from typing import Optional

from ..common.decoding import DecodeBatch, collect_decoded
from ..common.exceptions import ChainModuleNotFoundError
from ..common.repository import MODULES, LedgerReader, StorageEntry
from .models import Module


def decode_module_entry(entry: StorageEntry) -> Module:
    return Module.from_tree(entry.value)


class ModuleService:
    def __init__(self, reader: LedgerReader) -> None:
        self._reader = reader

    async def list_modules(self, block_hash: Optional[str] = None) -> DecodeBatch[Module]:
        entries = self._reader.iterate(MODULES, block_hash=block_hash)
        return await collect_decoded(entries, decode_module_entry, label="module")

    async def get_module(self, module_id: int, block_hash: Optional[str] = None) -> Module:
        """Single lookup: a malformed record raises DecodeError instead of being skipped."""
        tree = await self._reader.fetch(MODULES, [module_id], block_hash=block_hash)
        if tree is None:
            raise ChainModuleNotFoundError(f"Module {module_id} not found")
        return Module.from_tree(tree)

"""Read-side abstractions over the ledger node's key-value storage."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, AsyncIterator, Optional, Protocol, Sequence

from .value_tree import ValueTree, from_python


@dataclass(frozen=True, slots=True)
class StorageNamespace:
    """A storage map addressed by pallet and item name."""

    module: str
    storage: str
    key_arity: int = 1

    def __str__(self) -> str:
        return f"{self.module}.{self.storage}"


SYSTEM_ACCOUNT = StorageNamespace("System", "Account", key_arity=1)
STAKE_TO = StorageNamespace("SubspaceModule", "StakeTo", key_arity=2)
MODULES = StorageNamespace("Modules", "Modules", key_arity=1)


@dataclass(frozen=True, slots=True)
class StorageEntry:
    """One ``(key, value)`` pair as returned by the node client.

    Conversion to value trees happens on access so that a malformed entry
    only fails the decoder handling it.
    """

    raw_keys: tuple[Any, ...]
    raw_value: Any

    @property
    def keys(self) -> tuple[ValueTree, ...]:
        return tuple(from_python(key, f"key[{index}]") for index, key in enumerate(self.raw_keys))

    def key(self, index: int) -> ValueTree:
        return from_python(self.raw_keys[index], f"key[{index}]")

    @property
    def value(self) -> ValueTree:
        return from_python(self.raw_value, "value")


class LedgerReader(Protocol):
    async def resolve_block_hash(self, block_hash: Optional[str] = None) -> str:
        ...

    def iterate(
        self,
        namespace: StorageNamespace,
        key_prefix: Sequence[Any] = (),
        *,
        block_hash: Optional[str] = None,
    ) -> AsyncIterator[StorageEntry]:
        ...

    async def fetch(
        self,
        namespace: StorageNamespace,
        params: Sequence[Any],
        *,
        block_hash: Optional[str] = None,
    ) -> Optional[ValueTree]:
        ...


__all__ = [
    "LedgerReader",
    "MODULES",
    "STAKE_TO",
    "SYSTEM_ACCOUNT",
    "StorageEntry",
    "StorageNamespace",
]

"""Paginated storage iteration against the ledger node."""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Optional, Sequence

from ledgerlens.domain.common.exceptions import TransportError
from ledgerlens.domain.common.repository import StorageEntry, StorageNamespace
from ledgerlens.domain.common.value_tree import ValueTree, from_python

from .session import TRANSPORT_ERRORS, LedgerSession

logger = logging.getLogger(__name__)


def _payload(obj: Any) -> Any:
    if obj is None or isinstance(obj, (dict, list, tuple, str, bytes, int)):
        return obj
    return getattr(obj, "value", obj)


def _split_keys(raw_key: Any, remaining: int) -> tuple[Any, ...]:
    key = _payload(raw_key)
    if remaining <= 1:
        return (key,)
    if isinstance(key, (list, tuple)) and len(key) == remaining:
        return tuple(key)
    # Leave the shape mismatch to the decoder so only this entry is dropped.
    return (key,)


class SubstrateLedgerReader:
    """LedgerReader backed by ``async-substrate-interface``."""

    def __init__(self, session: LedgerSession, page_size: Optional[int] = None) -> None:
        self._session = session
        self._page_size = page_size or session.settings.page_size

    async def resolve_block_hash(self, block_hash: Optional[str] = None) -> str:
        return await self._session.resolve_block_hash(block_hash)

    async def iterate(
        self,
        namespace: StorageNamespace,
        key_prefix: Sequence[Any] = (),
        *,
        block_hash: Optional[str] = None,
    ) -> AsyncIterator[StorageEntry]:
        interface = await self._session.interface()
        block_hash = await self._session.resolve_block_hash(block_hash)
        remaining = namespace.key_arity - len(key_prefix)
        logger.info("Iterating %s at block %s (page size %d)", namespace, block_hash, self._page_size)
        try:
            result = await interface.query_map(
                namespace.module,
                namespace.storage,
                params=list(key_prefix) or None,
                block_hash=block_hash,
                page_size=self._page_size,
            )
            count = 0
            async for raw_key, raw_value in result:
                count += 1
                yield StorageEntry(raw_keys=_split_keys(raw_key, remaining), raw_value=_payload(raw_value))
        except TRANSPORT_ERRORS as exc:
            raise TransportError(f"failed to iterate {namespace}") from exc
        logger.info("Read %d entries from %s", count, namespace)

    async def fetch(
        self,
        namespace: StorageNamespace,
        params: Sequence[Any],
        *,
        block_hash: Optional[str] = None,
    ) -> Optional[ValueTree]:
        interface = await self._session.interface()
        block_hash = await self._session.resolve_block_hash(block_hash)
        try:
            result = await interface.query(
                namespace.module,
                namespace.storage,
                list(params),
                block_hash=block_hash,
            )
        except TRANSPORT_ERRORS as exc:
            raise TransportError(f"failed to fetch {namespace}{list(params)}") from exc
        value = _payload(result)
        if value is None:
            return None
        return from_python(value, "value")


__all__ = ["SubstrateLedgerReader"]

"""Shared connection to the ledger node.

One ``LedgerSession`` is created per process and handed to the readers that
need it. The underlying websocket client is opened lazily on first use.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from async_substrate_interface import AsyncSubstrateInterface
from async_substrate_interface.errors import SubstrateRequestException
from websockets.exceptions import WebSocketException

from ledgerlens.core.config import ChainSettings
from ledgerlens.domain.common.exceptions import TransportError

logger = logging.getLogger(__name__)

TRANSPORT_ERRORS = (
    SubstrateRequestException,
    WebSocketException,
    ConnectionError,
    OSError,
    asyncio.TimeoutError,
)


class LedgerSession:
    def __init__(self, settings: ChainSettings) -> None:
        self._settings = settings
        self._interface: Optional[AsyncSubstrateInterface] = None
        self._lock = asyncio.Lock()

    @property
    def settings(self) -> ChainSettings:
        return self._settings

    @property
    def connected(self) -> bool:
        return self._interface is not None

    def _build_interface(self) -> AsyncSubstrateInterface:
        return AsyncSubstrateInterface(
            self._settings.url,
            ss58_format=self._settings.ss58_format,
            max_retries=self._settings.max_retries,
            retry_timeout=self._settings.retry_timeout,
        )

    async def interface(self) -> AsyncSubstrateInterface:
        if self._interface is not None:
            return self._interface
        async with self._lock:
            if self._interface is None:
                interface = self._build_interface()
                try:
                    await interface.initialize()
                except TRANSPORT_ERRORS as exc:
                    raise TransportError(f"cannot connect to ledger node at {self._settings.url}") from exc
                logger.info("Connected to ledger node %s", self._settings.url)
                self._interface = interface
        return self._interface

    async def resolve_block_hash(self, block_hash: Optional[str] = None) -> str:
        """Pin one block for a whole read: explicit hash, configured hash, finalized or best head."""
        explicit = block_hash or self._settings.block_hash
        if explicit:
            return explicit
        interface = await self.interface()
        try:
            if self._settings.finalized:
                return await interface.get_chain_finalised_head()
            return await interface.get_chain_head()
        except TRANSPORT_ERRORS as exc:
            raise TransportError("failed to resolve chain head") from exc

    async def close(self) -> None:
        async with self._lock:
            if self._interface is None:
                return
            interface, self._interface = self._interface, None
            try:
                await interface.close()
            except TRANSPORT_ERRORS as exc:
                logger.warning("Error while closing ledger connection: %s", exc)
            logger.info("Closed ledger connection %s", self._settings.url)


__all__ = ["LedgerSession", "TRANSPORT_ERRORS"]

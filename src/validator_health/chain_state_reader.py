#!/usr/bin/env python3
"""Chain state reading for the validator health monitor.

This module fetches the latest and finalized block heights from a
Substrate-style node using the ``chain_getHeader`` and
``chain_getFinalizedHead`` RPC methods.
"""

import logging
from typing import TYPE_CHECKING, Any

from .errors import MissingFieldError
from .utils.hex_decoder import decode_block_number

if TYPE_CHECKING:
    from .utils.rpc_client import RpcClient

logger = logging.getLogger(__name__)


class ChainStateReader:
    """Reads block heights from the node over JSON-RPC.

    The latest and finalized heights are fetched by independent,
    sequential round-trips. The node may import or finalize blocks in
    between, so the resulting gap can be momentarily too small or even
    negative.
    """

    def __init__(self, rpc_client: "RpcClient") -> None:
        """
        Initialize the reader.

        Args:
            rpc_client: Client for the node's RPC endpoint
        """
        self.rpc_client: RpcClient = rpc_client

    @staticmethod
    def _extract_result(response: Any, what: str) -> Any:
        """Return a non-empty ``result`` field or raise MissingFieldError."""
        result = response.get("result") if isinstance(response, dict) else None
        if result is None or result == "" or result is False:
            raise MissingFieldError(f"Failed to get {what}: response has no result")
        return result

    @classmethod
    def _extract_block_number(cls, response: Any, what: str) -> int:
        """Decode ``result.number`` from a ``chain_getHeader`` response."""
        header = cls._extract_result(response, what)
        number = header.get("number") if isinstance(header, dict) else None
        if number is None or number == "":
            raise MissingFieldError(f"Failed to get {what}: header has no number")
        return decode_block_number(number)

    async def get_latest_block(self) -> int:
        """
        Fetch the height of the node's latest block header.

        Returns:
            Latest block number

        Raises:
            HealthCheckError: On transport, protocol, missing field or format errors
        """
        response = await self.rpc_client.call("chain_getHeader", [])
        latest = self._extract_block_number(response, "latest block number")
        logger.debug(f"Latest block: {latest}")
        return latest

    async def get_finalized_block(self) -> int:
        """
        Fetch the height of the node's finalized head.

        Resolves the finalized head hash first, then fetches that header.

        Returns:
            Finalized block number

        Raises:
            HealthCheckError: On transport, protocol, missing field or format errors
        """
        head_response = await self.rpc_client.call("chain_getFinalizedHead", [])
        finalized_hash = self._extract_result(head_response, "finalized head hash")
        logger.debug(f"Finalized head hash: {finalized_hash}")

        response = await self.rpc_client.call("chain_getHeader", [finalized_hash])
        finalized = self._extract_block_number(response, "finalized block number")
        logger.debug(f"Finalized block: {finalized}")
        return finalized

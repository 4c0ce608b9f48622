#!/usr/bin/env python3
"""Status reporting to the dead-man's-switch monitoring service.

This module formats the plaintext status report and delivers it as an
HTTP ping either to the success endpoint or to its ``/fail`` variant.
"""

import logging
from datetime import datetime, timezone

import httpx

from .errors import DeliveryError
from .models import ChainSnapshot, HealthVerdict

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT: str = "%Y-%m-%d %H:%M:%S UTC"


def format_status_message(
    node_id: str,
    snapshot: ChainSnapshot,
    verdict: HealthVerdict,
    timestamp: datetime | None = None
) -> str:
    """
    Render the multi-line status report sent with every ping.

    Args:
        node_id: Identifier of the monitored node
        snapshot: Block heights read from the node
        verdict: Health verdict for the snapshot
        timestamp: Report time (defaults to now); naive values are taken as UTC

    Returns:
        The report text, without a trailing newline
    """
    if timestamp is None:
        timestamp = datetime.now(timezone.utc)
    elif timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(timezone.utc)

    return "\n".join([
        f"Node: {node_id}",
        f"Timestamp: {timestamp.strftime(TIMESTAMP_FORMAT)}",
        f"Latest Block: {snapshot.latest_block}",
        f"Finalized Block: {snapshot.finalized_block}",
        f"Sync Percentage: {verdict.sync_percentage:.2f}%",
        f"Block Lag: {verdict.gap} blocks",
        f"Status: {verdict.status}",
    ])


class Reporter:
    """Sends status pings to the monitoring service."""

    FAILURE_SUFFIX: str = "/fail"

    def __init__(
        self,
        ping_url: str,
        node_id: str,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None
    ) -> None:
        """
        Initialize the reporter.

        Args:
            ping_url: Base ping URL, used as-is for success pings
            node_id: Node identifier, sent as the User-Agent header
            timeout: Timeout in seconds for each ping
            transport: Optional httpx transport (used by tests)
        """
        self.ping_url: str = ping_url.rstrip("/")
        self.node_id: str = node_id
        self.timeout: float = timeout
        self.transport: httpx.AsyncBaseTransport | None = transport

    @property
    def success_url(self) -> str:
        return self.ping_url

    @property
    def failure_url(self) -> str:
        return self.ping_url + self.FAILURE_SUFFIX

    async def _send_ping(self, endpoint: str, message: str) -> None:
        """
        POST the message to a ping endpoint.

        Raises:
            DeliveryError: On transport failure or a non-2xx response
        """
        headers = {
            "User-Agent": self.node_id,
            "Content-Type": "text/plain; charset=utf-8"
        }

        try:
            async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
                response: httpx.Response = await client.post(
                    endpoint,
                    content=message.encode("utf-8"),
                    headers=headers
                )
        except httpx.HTTPError as e:
            logger.error(f"Failed to send ping to {endpoint}: {e}")
            raise DeliveryError(f"Failed to send ping to {endpoint}: {e}", endpoint) from e

        if not response.is_success:
            logger.error(f"Failed to send ping to {endpoint}: HTTP {response.status_code}")
            raise DeliveryError(
                f"Failed to send ping to {endpoint}: HTTP {response.status_code}",
                endpoint,
                status_code=response.status_code
            )

        logger.debug(f"Ping delivered to {endpoint} (HTTP {response.status_code})")

    async def report_success(self, message: str) -> None:
        """Send a success ping; raises DeliveryError if it is not delivered."""
        await self._send_ping(self.success_url, message)

    async def report_failure(self, message: str) -> None:
        """Send a failure ping; raises DeliveryError if it is not delivered."""
        await self._send_ping(self.failure_url, message)

import json
import logging
from typing import Any

import httpx

from ..errors import RpcProtocolError, TransportError

logger = logging.getLogger(__name__)


class RpcClient:
    """Minimal JSON-RPC 2.0 client for a node's HTTP endpoint.

    Every call is a single attempt bounded by the configured timeout.
    Transport failures and JSON-RPC error objects are raised as distinct
    exception types so callers can tell an unreachable node from a node
    that refused the request.
    """

    REQUEST_ID: int = 1

    def __init__(
        self,
        rpc_url: str,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None
    ) -> None:
        """
        Initialize the RPC client.

        Args:
            rpc_url: HTTP(S) endpoint of the node
            timeout: Timeout in seconds applied to the whole request
            transport: Optional httpx transport (used by tests)
        """
        self.rpc_url: str = rpc_url
        self.timeout: float = timeout
        self.transport: httpx.AsyncBaseTransport | None = transport

    def build_request(self, method: str, params: list[Any] | None = None) -> dict[str, Any]:
        """Build the JSON-RPC envelope for a method call."""
        return {
            "jsonrpc": "2.0",
            "id": self.REQUEST_ID,
            "method": method,
            "params": params if params is not None else []
        }

    async def call(self, method: str, params: list[Any] | None = None) -> dict[str, Any]:
        """
        Call a JSON-RPC method on the node.

        Args:
            method: RPC method name, e.g. ``chain_getHeader``
            params: Positional parameters (defaults to an empty list)

        Returns:
            The full decoded JSON response body

        Raises:
            TransportError: If the endpoint is unreachable or the timeout elapses
            RpcProtocolError: If the body is not JSON or carries an error message
        """
        payload = self.build_request(method, params)
        logger.debug(f"RPC request to {self.rpc_url}: {json.dumps(payload)}")

        try:
            async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
                response: httpx.Response = await client.post(self.rpc_url, json=payload)
        except httpx.TimeoutException as e:
            raise TransportError(
                f"RPC request {method} to {self.rpc_url} timed out after {self.timeout}s"
            ) from e
        except httpx.TransportError as e:
            raise TransportError(f"Failed to connect to RPC endpoint: {self.rpc_url} ({e})") from e
        except httpx.RequestError as e:
            raise TransportError(
                f"RPC request {method} to {self.rpc_url} failed: {type(e).__name__} ({e})"
            ) from e

        try:
            body: Any = response.json()
        except ValueError as e:
            raise RpcProtocolError(
                f"Invalid JSON in response to {method} (HTTP {response.status_code})"
            ) from e

        # A JSON-RPC error wins over the HTTP status code
        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            if error_message := body["error"].get("message"):
                raise RpcProtocolError(f"RPC Error: {error_message}")

        logger.debug(f"RPC response for {method}: {body}")
        return body

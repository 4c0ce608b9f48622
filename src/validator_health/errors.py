#!/usr/bin/env python3
"""Error taxonomy for the validator health monitor.

Every failure the monitor knows how to classify derives from
HealthCheckError, so the orchestrator can turn any of them into a failed
health check without catching unrelated exceptions.
"""


class HealthCheckError(Exception):
    """Base class for all classified health check failures."""


class DependencyMissingError(HealthCheckError):
    """A required library is not available in the running interpreter."""


class TransportError(HealthCheckError):
    """The RPC endpoint could not be reached or the request timed out."""


class RpcProtocolError(HealthCheckError):
    """The node answered with a JSON-RPC error object or an unreadable body."""


class MissingFieldError(HealthCheckError):
    """An expected field is absent or empty in an RPC response."""


class InvalidFormatError(HealthCheckError, ValueError):
    """A value returned by the node is not a valid hexadecimal number."""


class DeliveryError(HealthCheckError):
    """A monitoring ping could not be delivered.

    Attributes:
        endpoint: Ping URL the delivery was attempted against
        status_code: HTTP status returned, or None for transport failures
    """

    def __init__(self, message: str, endpoint: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.endpoint: str = endpoint
        self.status_code: int | None = status_code

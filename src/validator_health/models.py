#!/usr/bin/env python3
"""Data models for the validator health monitor.

This module provides immutable data classes for the chain state read from
the node and the health verdict derived from it. Both live only for a
single monitoring run.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any


@dataclass(frozen=True, slots=True)
class ChainSnapshot:
    """Latest and finalized block heights read from the node.

    The two heights come from separate RPC round-trips, so the chain may
    have advanced in between. No ordering between them is enforced.

    Attributes:
        latest_block: Height of the most recent block header on the node
        finalized_block: Height of the most recent finalized block
    """

    latest_block: int
    finalized_block: int

    def __str__(self) -> str:
        """Human-readable string representation."""
        return f"ChainSnapshot(latest={self.latest_block}, finalized={self.finalized_block})"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "latest_block": self.latest_block,
            "finalized_block": self.finalized_block
        }


@dataclass(frozen=True, slots=True)
class HealthVerdict:
    """Outcome of evaluating a ChainSnapshot against the lag threshold.

    Attributes:
        gap: latest_block - finalized_block, may be negative
        sync_percentage: finalized/latest as a percentage with 2 decimals
        is_healthy: True when 0 <= gap <= max_allowed_gap
        max_allowed_gap: Threshold the verdict was judged against
    """

    gap: int
    sync_percentage: Decimal
    is_healthy: bool
    max_allowed_gap: int

    @property
    def status(self) -> str:
        """Status label used in reports."""
        return "HEALTHY" if self.is_healthy else "UNHEALTHY"

    def __str__(self) -> str:
        """Human-readable string representation."""
        return (
            f"HealthVerdict({self.status}, gap={self.gap}/{self.max_allowed_gap}, "
            f"sync={self.sync_percentage:.2f}%)"
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "gap": self.gap,
            "sync_percentage": f"{self.sync_percentage:.2f}",
            "is_healthy": self.is_healthy,
            "max_allowed_gap": self.max_allowed_gap,
            "status": self.status
        }

#!/usr/bin/env python3
"""Configuration management for the validator health monitor.

This module provides an immutable, validated configuration dataclass.
Configuration is loaded once from environment variables at process start
and passed explicitly to each component.
"""

import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar
from urllib.parse import urlparse

# Get logger for this module
logger = logging.getLogger(__name__)

# Check URL of the dead-man's-switch service; not configurable at runtime
DEFAULT_PING_URL: str = "https://hc-ping.com/b09f7514-98d1-4ee8-a58b-a9573d256854"

DEFAULT_RPC_URL: str = "http://127.0.0.1:9944"
DEFAULT_MAX_ALLOWED_GAP: int = 25
DEFAULT_NODE_ID: str = "midnight-validator-1"
DEFAULT_TIMEOUT: float = 10.0
DEFAULT_LOG_FILE: Path = Path(__file__).resolve().parents[2] / "healthchecks.log"


@dataclass(frozen=True, slots=True)
class MonitorConfig:
    """Configuration for a single health check run.

    Attributes:
        rpc_url: HTTP(S) JSON-RPC endpoint of the validator node
        max_allowed_gap: Largest latest-to-finalized lag still considered healthy
        node_id: Identifier sent with pings and shown in reports
        timeout: Timeout in seconds for every network operation
        log_file: Path of the append-only log file
        ping_url: Base URL of the monitoring check
    """

    rpc_url: str = DEFAULT_RPC_URL
    max_allowed_gap: int = DEFAULT_MAX_ALLOWED_GAP
    node_id: str = DEFAULT_NODE_ID
    timeout: float = DEFAULT_TIMEOUT
    log_file: str = str(DEFAULT_LOG_FILE)
    ping_url: str = DEFAULT_PING_URL

    ALLOWED_SCHEMES: ClassVar[set[str]] = {"http", "https"}

    def __post_init__(self) -> None:
        """Validate monitor configuration."""
        for name, url in (("RPC URL", self.rpc_url), ("Ping URL", self.ping_url)):
            if not url:
                raise ValueError(f"{name} is required")
            parsed = urlparse(url)
            if parsed.scheme not in self.ALLOWED_SCHEMES or not parsed.netloc:
                raise ValueError(
                    f"Invalid {name}: {url}. Expected an http or https URL"
                )

        if self.max_allowed_gap < 0:
            raise ValueError(
                f"Max allowed gap must be non-negative, got {self.max_allowed_gap}"
            )

        if not math.isfinite(self.timeout) or self.timeout <= 0:
            raise ValueError(f"Timeout must be a positive number of seconds, got {self.timeout}")

        if not self.node_id.strip():
            raise ValueError("Node ID must not be empty (NODE_ID)")

        if not self.log_file:
            raise ValueError("Log file path must not be empty (LOG_FILE)")

    @staticmethod
    def _int_from_env(name: str, default: int) -> int:
        raw = os.environ.get(name, str(default))
        try:
            return int(raw)
        except ValueError:
            raise ValueError(f"{name} must be an integer, got {raw!r}") from None

    @staticmethod
    def _float_from_env(name: str, default: float) -> float:
        raw = os.environ.get(name, str(default))
        try:
            return float(raw)
        except ValueError:
            raise ValueError(f"{name} must be a number, got {raw!r}") from None

    @classmethod
    def from_env(cls) -> "MonitorConfig":
        """
        Load configuration from environment variables.

        Returns:
            MonitorConfig instance with loaded values

        Raises:
            ValueError: If an environment variable is malformed or invalid
        """
        return cls(
            rpc_url=os.environ.get("RPC_URL", DEFAULT_RPC_URL),
            max_allowed_gap=cls._int_from_env("MAX_ALLOWED_GAP", DEFAULT_MAX_ALLOWED_GAP),
            node_id=os.environ.get("NODE_ID", DEFAULT_NODE_ID),
            timeout=cls._float_from_env("TIMEOUT", DEFAULT_TIMEOUT),
            log_file=os.environ.get("LOG_FILE", str(DEFAULT_LOG_FILE))
        )

    def with_log_file(self, log_file: str) -> "MonitorConfig":
        """Return a copy of this config writing to a different log file."""
        return MonitorConfig(
            rpc_url=self.rpc_url,
            max_allowed_gap=self.max_allowed_gap,
            node_id=self.node_id,
            timeout=self.timeout,
            log_file=log_file,
            ping_url=self.ping_url
        )

    def log_config(self) -> None:
        """Log the configuration in a readable format for debugging."""
        logger.info("=" * 60)
        logger.info("Validator Health Monitor Configuration")
        logger.info("=" * 60)
        logger.info(f"  Node ID: {self.node_id}")
        logger.info(f"  RPC URL: {self.rpc_url}")
        logger.info(f"  Max Allowed Gap: {self.max_allowed_gap} blocks")
        logger.info(f"  Timeout: {self.timeout} seconds")
        logger.info(f"  Log File: {self.log_file}")
        logger.info("=" * 60)

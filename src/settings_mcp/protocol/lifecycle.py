"""MCP initialize handling.

Builds the capability/version/identity payload returned for ``initialize``.
The handshake is informational only: no other method waits for it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

# Supported MCP protocol versions (newest first)
SUPPORTED_PROTOCOL_VERSIONS = ["2025-03-26", "2024-11-05"]
# Default version to advertise
MCP_PROTOCOL_VERSION = "2024-11-05"


def negotiate_protocol_version(requested: Any) -> str:
    """Pick the protocol version to answer with.

    Args:
        requested: Version sent by the client, if any.

    Returns:
        The requested version when supported, otherwise the default.
    """
    if isinstance(requested, str) and requested in SUPPORTED_PROTOCOL_VERSIONS:
        return requested
    return MCP_PROTOCOL_VERSION


@dataclass(frozen=True)
class InitializeHandler:
    """Answers ``initialize`` requests with a fixed server description."""

    server_info: dict[str, str] = field(
        default_factory=lambda: {"name": "system-settings-mcp", "version": "1.0.0"}
    )
    capabilities: dict[str, Any] = field(
        default_factory=lambda: {"tools": {}, "logging": {}}
    )

    def handle(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle initialize request.

        Args:
            params: Initialize request parameters.

        Returns:
            Initialize response result.
        """
        client_info = params.get("clientInfo") or {}
        if isinstance(client_info, dict):
            logger.info(
                "Client initializing MCP connection: %s %s",
                client_info.get("name", "unknown"),
                client_info.get("version", ""),
            )

        return {
            "protocolVersion": negotiate_protocol_version(params.get("protocolVersion")),
            "capabilities": self.capabilities,
            "serverInfo": self.server_info,
        }

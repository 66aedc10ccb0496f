"""MCP Protocol layer for JSON-RPC communication."""

from settings_mcp.protocol.jsonrpc import (
    JsonRpcError,
    JsonRpcNotification,
    JsonRpcRequest,
    format_error,
    format_response,
    parse_message,
)
from settings_mcp.protocol.lifecycle import (
    MCP_PROTOCOL_VERSION,
    SUPPORTED_PROTOCOL_VERSIONS,
    InitializeHandler,
    negotiate_protocol_version,
)
from settings_mcp.protocol.tools import ToolsCallResult, ToolsHandler, ToolsListResult
from settings_mcp.protocol.transport import StdioTransport

__all__ = [
    "InitializeHandler",
    "JsonRpcError",
    "JsonRpcNotification",
    "JsonRpcRequest",
    "MCP_PROTOCOL_VERSION",
    "SUPPORTED_PROTOCOL_VERSIONS",
    "StdioTransport",
    "ToolsCallResult",
    "ToolsHandler",
    "ToolsListResult",
    "format_error",
    "format_response",
    "negotiate_protocol_version",
    "parse_message",
]

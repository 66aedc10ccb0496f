"""Helpers for building raw JSON-RPC requests in tests."""

import json
from typing import Any

from settings_mcp.server import MCPServer


def request(method: str, params: Any = None, msg_id: Any = 1) -> str:
    """Build a raw JSON-RPC request line."""
    message: dict[str, Any] = {"jsonrpc": "2.0", "id": msg_id, "method": method}
    if params is not None:
        message["params"] = params
    return json.dumps(message)


def call_tool(server: MCPServer, name: str, arguments: Any = None, msg_id: Any = 1) -> dict:
    """Send a tools/call request and return the decoded response."""
    params: dict[str, Any] = {"name": name}
    if arguments is not None:
        params["arguments"] = arguments
    return json.loads(server.handle_message(request("tools/call", params, msg_id)))

"""MCP Server - request dispatcher.

Routes each parsed message to one of the fixed protocol methods and turns
every outcome, including unexpected failures, into exactly one response.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from types import MappingProxyType
from typing import Any

from settings_mcp.audit import AuditLogger
from settings_mcp.config import ServerConfig
from settings_mcp.protocol.jsonrpc import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    JsonRpcError,
    JsonRpcNotification,
    JsonRpcRequest,
    format_error,
    format_exception,
    format_response,
    parse_message,
)
from settings_mcp.protocol.lifecycle import InitializeHandler
from settings_mcp.protocol.tools import ToolsHandler
from settings_mcp.tools.registry import ToolNotFoundError, ToolRegistry

logger = logging.getLogger(__name__)

MethodHandler = Callable[[Any, Any], Any]


class MCPServer:
    """MCP Server implementation.

    Handles:
    - initialize (informational, never required before other methods)
    - tools/list and tools/call against a fixed tool registry
    - ping
    """

    def __init__(
        self,
        registry: ToolRegistry,
        config: ServerConfig | None = None,
        audit: AuditLogger | None = None,
    ) -> None:
        """Initialize the server.

        Args:
            registry: Tools available for the lifetime of the server.
            config: Server configuration (defaults when None).
            audit: Optional tool-call journal; closed by ``close()``.
        """
        self._config = config or ServerConfig()
        self._registry = registry
        self._audit = audit
        self._initialize = InitializeHandler(server_info=self._config.server_info)
        self._tools_handler = ToolsHandler(
            registry, timeout=self._config.tool_timeout, audit=audit
        )
        self._methods: MappingProxyType[str, MethodHandler] = MappingProxyType(
            {
                "initialize": self._handle_initialize,
                "tools/list": self._handle_tools_list,
                "tools/call": self._handle_tools_call,
                "ping": self._handle_ping,
            }
        )
        logger.info("MCP Server initialized with %d tools", len(registry))

    @property
    def methods(self) -> list[str]:
        """Supported method names."""
        return list(self._methods)

    def list_tools(self) -> list[dict[str, Any]]:
        """List all registered tools.

        Returns:
            List of tool definitions.
        """
        return self._registry.list_definitions()

    def handle_message(self, raw_message: str) -> str | None:
        """Handle an incoming JSON-RPC message.

        Args:
            raw_message: Raw JSON-RPC message string.

        Returns:
            Response string or None for notifications.
        """
        try:
            message = parse_message(raw_message)
        except JsonRpcError as e:
            logger.error("Rejected message (%s): %s", e.code, e.message)
            return format_exception(e.msg_id, e)

        if isinstance(message, JsonRpcNotification):
            self._handle_notification(message)
            return None
        return self._handle_request(message)

    def _handle_notification(self, notification: JsonRpcNotification) -> None:
        """Handle a notification (no response)."""
        logger.debug("Received notification: %s", notification.method)

    def _handle_request(self, request: JsonRpcRequest) -> str:
        """Handle a request and return response.

        Args:
            request: The request to handle.

        Returns:
            JSON-RPC response string.
        """
        logger.debug("Handling request: %s", request.method)

        handler = self._methods.get(request.method)
        if handler is None:
            logger.warning("Unknown method: %s", request.method)
            return format_error(
                request.id, METHOD_NOT_FOUND, f"Method not found: {request.method}"
            )

        try:
            result = handler(request.params, request.id)
            return format_response(request.id, result)
        except JsonRpcError as e:
            return format_exception(request.id, e)
        except Exception as e:
            logger.exception("Error handling request: %s", request.method)
            return format_error(request.id, INTERNAL_ERROR, f"Internal error: {e}")

    def _handle_initialize(self, params: Any, msg_id: Any) -> dict[str, Any]:
        return self._initialize.handle(params if isinstance(params, dict) else {})

    def _handle_tools_list(self, params: Any, msg_id: Any) -> dict[str, Any]:
        return self._tools_handler.handle_list().to_dict()

    def _handle_tools_call(self, params: Any, msg_id: Any) -> dict[str, Any]:
        if not isinstance(params, dict):
            raise JsonRpcError(
                INVALID_PARAMS, "Invalid params: params are required for tool calls"
            )

        name = params.get("name")
        if not isinstance(name, str) or not name:
            raise JsonRpcError(INVALID_PARAMS, "Invalid params: tool name is required")

        arguments = params.get("arguments")
        if arguments is not None and not isinstance(arguments, dict):
            raise JsonRpcError(INVALID_PARAMS, "Invalid params: arguments must be an object")

        try:
            result = self._tools_handler.handle_call(name, arguments, request_id=msg_id)
        except ToolNotFoundError as e:
            logger.warning("Unknown tool: %s", name)
            raise JsonRpcError(METHOD_NOT_FOUND, str(e)) from e
        return result.to_dict()

    def _handle_ping(self, params: Any, msg_id: Any) -> dict[str, Any]:
        return {}

    def close(self) -> None:
        """Close the server and clean up resources."""
        if self._audit is not None:
            self._audit.close()

    def __enter__(self) -> MCPServer:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit."""
        self.close()

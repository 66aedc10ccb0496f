"""MCP tools/list and tools/call handlers.

Routes tool requests through the registry and formats results according
to the MCP specification.
"""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from settings_mcp.tools.base import ToolBase, ToolResult
from settings_mcp.tools.registry import ToolRegistry

if TYPE_CHECKING:
    from settings_mcp.audit import AuditLogger

logger = logging.getLogger(__name__)


@dataclass
class ToolsListResult:
    """Result of tools/list request."""

    tools: list[dict[str, Any]]

    def to_dict(self) -> dict[str, Any]:
        """Convert to MCP result format.

        Returns:
            Dictionary in MCP tools/list result format.
        """
        return {"tools": self.tools}


@dataclass
class ToolsCallResult:
    """Result of tools/call request."""

    content: list[dict[str, Any]]
    is_error: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to MCP result format.

        Returns:
            Dictionary in MCP tools/call result format.
        """
        return {
            "content": self.content,
            "isError": self.is_error,
        }


class ToolsHandler:
    """Handles tools/list and tools/call MCP requests."""

    def __init__(
        self,
        registry: ToolRegistry,
        timeout: float | None = None,
        audit: AuditLogger | None = None,
    ) -> None:
        """Initialize the handler.

        Args:
            registry: Registry holding the available tools.
            timeout: Seconds before a tool call is abandoned (None or 0 waits forever).
            audit: Optional journal for tool calls.
        """
        self._registry = registry
        self._timeout = timeout if timeout and timeout > 0 else None
        self._audit = audit

    def handle_list(self) -> ToolsListResult:
        """Handle tools/list request.

        Returns:
            ToolsListResult with all available tools.
        """
        return ToolsListResult(tools=self._registry.list_definitions())

    def handle_call(
        self,
        name: str,
        arguments: dict[str, Any] | None,
        request_id: Any = None,
    ) -> ToolsCallResult:
        """Handle tools/call request.

        Args:
            name: Name of the tool to call.
            arguments: Tool arguments.
            request_id: JSON-RPC id, used to correlate audit entries.

        Returns:
            ToolsCallResult with execution result.

        Raises:
            ToolNotFoundError: If the tool is not registered.
        """
        tool = self._registry.get(name)
        arguments = arguments or {}

        logger.info("Executing tool: %s", name)
        if self._audit is not None:
            self._audit.log_request(str(request_id), name, arguments)

        started = time.perf_counter()
        result = self._execute(tool, arguments)
        duration_ms = (time.perf_counter() - started) * 1000

        if self._audit is not None:
            status = "error" if result.is_error else "success"
            self._audit.log_response(str(request_id), status, round(duration_ms, 3))

        return ToolsCallResult(content=result.content, is_error=result.is_error)

    def _execute(self, tool: ToolBase, arguments: dict[str, Any]) -> ToolResult:
        if self._timeout is None:
            return tool.execute(arguments)

        # Daemon worker: a call that never returns must not keep the process
        # alive after the message loop ends
        outcome: list[ToolResult] = []
        worker = threading.Thread(
            target=lambda: outcome.append(tool.execute(arguments)),
            name=f"tool-{tool.name}",
            daemon=True,
        )
        worker.start()
        worker.join(self._timeout)

        if worker.is_alive():
            logger.error("Tool %s timed out after %s seconds", tool.name, self._timeout)
            return ToolResult.error(
                f"Tool '{tool.name}' timed out after {self._timeout:g} seconds"
            )
        if not outcome:
            return ToolResult.error(f"Error executing {tool.name}: worker exited without a result")
        return outcome[0]

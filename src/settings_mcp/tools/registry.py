"""Tool registry - the static name -> tool table.

The registry is filled once from the tools given to its constructor and is
read-only afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from types import MappingProxyType
from typing import Any

from jsonschema.exceptions import SchemaError

from settings_mcp.tools.base import ToolBase
from settings_mcp.tools.validation import check_schema

logger = logging.getLogger(__name__)


class RegistryError(Exception):
    """Raised when the tool set cannot be registered."""

    pass


class ToolNotFoundError(Exception):
    """Raised when a tool is not found."""

    pass


class ToolRegistry:
    """Immutable mapping from tool name to tool, in registration order."""

    def __init__(self, tools: Iterable[ToolBase]) -> None:
        """Register every tool.

        Args:
            tools: Tools to register, in the order tools/list reports them.

        Raises:
            RegistryError: If two tools share a name or a schema is invalid.
        """
        table: dict[str, ToolBase] = {}
        for tool in tools:
            if tool.name in table:
                raise RegistryError(f"Duplicate tool name: {tool.name}")
            try:
                check_schema(tool.input_schema)
            except SchemaError as e:
                raise RegistryError(f"Invalid input schema for {tool.name}: {e.message}") from e
            table[tool.name] = tool

        self._tools = MappingProxyType(table)
        logger.info("Tool registry initialized with %d tools", len(table))

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def __iter__(self) -> Iterator[ToolBase]:
        return iter(self._tools.values())

    @property
    def names(self) -> list[str]:
        """Tool names in registration order."""
        return list(self._tools)

    def get(self, name: str) -> ToolBase:
        """Look up a tool by name.

        Raises:
            ToolNotFoundError: If the tool is not registered.
        """
        tool = self._tools.get(name)
        if tool is None:
            raise ToolNotFoundError(f"Unknown tool: {name}")
        return tool

    def list_definitions(self) -> list[dict[str, Any]]:
        """List all tools in MCP format.

        Returns:
            List of tool definitions in MCP format.
        """
        return [tool.definition.to_dict() for tool in self._tools.values()]

"""Tool base class and data structures.

Defines the interface every tool implements and the execution contract:
``execute`` always returns a ``ToolResult`` and never raises.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from settings_mcp.tools.validation import ArgumentError, validate_arguments

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolDefinition:
    """Definition of a tool as advertised by tools/list."""

    name: str
    description: str
    input_schema: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        """Convert to MCP tool format.

        Returns:
            Dictionary in MCP tools/list format.
        """
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


@dataclass
class ToolResult:
    """Result of a tool execution."""

    content: list[dict[str, Any]]
    is_error: bool = False

    @classmethod
    def text(cls, message: str) -> ToolResult:
        """Build a successful single-text result."""
        return cls(content=[{"type": "text", "text": message}])

    @classmethod
    def error(cls, message: str) -> ToolResult:
        """Build a failed single-text result."""
        return cls(content=[{"type": "text", "text": message}], is_error=True)

    def to_dict(self) -> dict[str, Any]:
        """Convert to MCP result format.

        Returns:
            Dictionary in MCP tools/call result format.
        """
        return {
            "content": self.content,
            "isError": self.is_error,
        }


class ToolBase(ABC):
    """Abstract base class for all tools.

    Subclasses describe themselves through ``name``, ``description`` and
    ``input_schema`` and implement ``run``. Arguments reaching ``run`` have
    already been checked against ``input_schema``.
    """

    # Enumerated argument matched case-insensitively
    selector: str = "action"
    # Word used for the numeric value in range error messages
    value_label: str = "Value"

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the tool name."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Return the human-readable tool description."""

    @property
    @abstractmethod
    def input_schema(self) -> dict[str, Any]:
        """Return the JSON Schema for the tool arguments."""

    @property
    def definition(self) -> ToolDefinition:
        """Return the tools/list descriptor for this tool."""
        return ToolDefinition(
            name=self.name,
            description=self.description,
            input_schema=self.input_schema,
        )

    def execute(self, arguments: dict[str, Any] | None) -> ToolResult:
        """Validate arguments and run the tool.

        Args:
            arguments: Tool arguments (None is treated as empty).

        Returns:
            ToolResult with content and error status.
        """
        arguments = self._normalize(arguments or {})
        try:
            validate_arguments(self.input_schema, arguments, self.value_label)
        except ArgumentError as e:
            return ToolResult.error(str(e))

        logger.info("Executing %s with %s=%s", self.name, self.selector, arguments[self.selector])
        try:
            return self.run(arguments)
        except Exception as e:
            logger.exception("Error executing %s", self.name)
            return ToolResult.error(f"Error executing {self.name}: {e}")

    @abstractmethod
    def run(self, arguments: dict[str, Any]) -> ToolResult:
        """Run the tool with validated arguments.

        Args:
            arguments: Arguments that satisfy ``input_schema``.

        Returns:
            ToolResult with content and error status.
        """

    def _normalize(self, arguments: dict[str, Any]) -> dict[str, Any]:
        if not isinstance(arguments, dict):
            return arguments
        normalized = dict(arguments)
        selected = normalized.get(self.selector)
        if isinstance(selected, str):
            normalized[self.selector] = selected.strip().lower()
        return normalized

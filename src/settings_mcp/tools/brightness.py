"""Display brightness tool."""

from __future__ import annotations

from typing import Any

from settings_mcp.providers.base import BrightnessProvider
from settings_mcp.tools.base import ToolBase, ToolResult

BRIGHTNESS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "action": {
            "type": "string",
            "enum": ["get", "set"],
            "description": "Whether to get current brightness or set new brightness",
        },
        "value": {
            "type": "integer",
            "minimum": 0,
            "maximum": 100,
            "description": "Brightness level (0-100%). Required when action is 'set'",
        },
    },
    "required": ["action"],
    "if": {"properties": {"action": {"const": "set"}}},
    "then": {"required": ["value"]},
}


class BrightnessTool(ToolBase):
    """Gets or sets the display brightness through a BrightnessProvider."""

    value_label = "Brightness"

    def __init__(self, provider: BrightnessProvider) -> None:
        self._provider = provider

    @property
    def name(self) -> str:
        return "adjust_brightness"

    @property
    def description(self) -> str:
        return (
            "Get or set the display brightness level. Use 'get' to retrieve current "
            "brightness or 'set' to change brightness (0-100%)."
        )

    @property
    def input_schema(self) -> dict[str, Any]:
        return BRIGHTNESS_SCHEMA

    def run(self, arguments: dict[str, Any]) -> ToolResult:
        if arguments["action"] == "get":
            return self._get()
        return self._set(int(arguments["value"]))

    def _get(self) -> ToolResult:
        result = self._provider.get()
        if not result.ok:
            return ToolResult.error(f"Failed to retrieve brightness level. {result.error}")
        return ToolResult.text(f"Current display brightness: {result.value}%")

    def _set(self, value: int) -> ToolResult:
        result = self._provider.set(value)
        if not result.ok:
            return ToolResult.error(f"Failed to set brightness to {value}%. {result.error}")
        return ToolResult.text(f"Successfully set display brightness to {value}%")
